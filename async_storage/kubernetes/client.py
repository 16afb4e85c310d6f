"""
Kubernetes Client for the Async Storage Sidecar

This module provides the resource store used by the provisioners: a get and
a create operation per resource kind (PVC, ConfigMap, Pod, Service), scoped by
namespace and name.

Reads return ``None`` for 404. Creates treat 409 (AlreadyExists) as success,
which makes the get-then-create sequence safe when two workspace starts race
for the same namespace. Any other API failure, and any transport failure
(connection refused, DNS, TLS), is raised as ``ClusterApiError``.
"""

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError
import logging
from typing import Any, Callable, Optional

from ..config import get_settings
from ..errors import ClusterApiError
from . import helpers
from .descriptors import ConfigSpec, PodSpec, ServiceSpec, VolumeClaimSpec

logger = logging.getLogger(__name__)


class KubernetesClient:
    """
    Namespaced get/create access to the resources backing async storage.

    Pass ``core_v1`` explicitly to skip configuration loading (tests, or a
    caller that already owns an API client).
    """

    def __init__(self, core_v1: Optional[client.CoreV1Api] = None):
        """Initialize Kubernetes client with in-cluster or kubeconfig."""
        if core_v1 is not None:
            self.core_v1 = core_v1
            return

        settings = get_settings()

        try:
            # Try in-cluster config first (for production)
            config.load_incluster_config()
            logger.info("Loaded in-cluster Kubernetes configuration")
        except config.ConfigException:
            try:
                # Fall back to kubeconfig (for development)
                config.load_kube_config(context=settings.kubeconfig_context or None)
                logger.info("Loaded kubeconfig for development")
            except config.ConfigException as e:
                logger.error(f"Failed to load Kubernetes config: {e}")
                raise RuntimeError("Cannot load Kubernetes configuration") from e

        self.core_v1 = client.CoreV1Api()

    # =========================================================================
    # GENERIC GET / CREATE
    # =========================================================================

    def _read(self, kind: str, reader: Callable[..., Any], namespace: str, name: str) -> Optional[Any]:
        try:
            return reader(name=name, namespace=namespace)
        except ApiException as e:
            if e.status == 404:
                return None
            logger.error(f"[K8S] Failed to read {kind} {name} in {namespace}: {e.reason}")
            raise ClusterApiError(
                f"Failed to read {kind} {name} in {namespace}: {e.reason}",
                status=e.status,
                reason=e.reason
            ) from e
        except HTTPError as e:
            logger.error(f"[K8S] Cannot reach API server reading {kind} {name} in {namespace}: {e}")
            raise ClusterApiError(f"Failed to read {kind} {name} in {namespace}: {e}") from e

    def _create(self, kind: str, creator: Callable[..., Any], namespace: str, body: Any) -> Optional[Any]:
        name = body.metadata.name
        try:
            created = creator(namespace=namespace, body=body)
            logger.info(f"[K8S] ✅ Created {kind}: {name} in {namespace}")
            return created
        except ApiException as e:
            if e.status == 409:
                logger.info(f"[K8S] {kind} {name} already exists in {namespace}, skipping")
                return None
            logger.error(f"[K8S] Failed to create {kind} {name} in {namespace}: {e.reason}")
            raise ClusterApiError(
                f"Failed to create {kind} {name} in {namespace}: {e.reason}",
                status=e.status,
                reason=e.reason
            ) from e
        except HTTPError as e:
            logger.error(f"[K8S] Cannot reach API server creating {kind} {name} in {namespace}: {e}")
            raise ClusterApiError(f"Failed to create {kind} {name} in {namespace}: {e}") from e

    # =========================================================================
    # PVC MANAGEMENT
    # =========================================================================

    def get_pvc(self, namespace: str, name: str) -> Optional[client.V1PersistentVolumeClaim]:
        """Get a PVC, or None if it does not exist."""
        return self._read("PVC", self.core_v1.read_namespaced_persistent_volume_claim, namespace, name)

    def create_pvc(self, namespace: str, spec: VolumeClaimSpec) -> Optional[client.V1PersistentVolumeClaim]:
        """Create a PVC if it doesn't exist (PVCs are immutable)."""
        return self._create(
            "PVC",
            self.core_v1.create_namespaced_persistent_volume_claim,
            namespace,
            helpers.create_pvc_manifest(spec)
        )

    # =========================================================================
    # CONFIGMAP MANAGEMENT
    # =========================================================================

    def get_config_map(self, namespace: str, name: str) -> Optional[client.V1ConfigMap]:
        """Get a ConfigMap, or None if it does not exist."""
        return self._read("ConfigMap", self.core_v1.read_namespaced_config_map, namespace, name)

    def create_config_map(self, namespace: str, spec: ConfigSpec) -> Optional[client.V1ConfigMap]:
        """Create a ConfigMap; an existing one with the same name is left as is."""
        return self._create(
            "ConfigMap",
            self.core_v1.create_namespaced_config_map,
            namespace,
            helpers.create_config_map_manifest(spec)
        )

    # =========================================================================
    # POD MANAGEMENT
    # =========================================================================

    def get_pod(self, namespace: str, name: str) -> Optional[client.V1Pod]:
        """Get a Pod, or None if it does not exist."""
        return self._read("Pod", self.core_v1.read_namespaced_pod, namespace, name)

    def create_pod(self, namespace: str, spec: PodSpec) -> Optional[client.V1Pod]:
        """Create a Pod; an existing one with the same name is left as is."""
        return self._create(
            "Pod",
            self.core_v1.create_namespaced_pod,
            namespace,
            helpers.create_pod_manifest(spec)
        )

    # =========================================================================
    # SERVICE MANAGEMENT
    # =========================================================================

    def get_service(self, namespace: str, name: str) -> Optional[client.V1Service]:
        """Get a Service, or None if it does not exist."""
        return self._read("Service", self.core_v1.read_namespaced_service, namespace, name)

    def create_service(self, namespace: str, spec: ServiceSpec) -> Optional[client.V1Service]:
        """Create a Service; an existing one with the same name is left as is."""
        return self._create(
            "Service",
            self.core_v1.create_namespaced_service,
            namespace,
            helpers.create_service_manifest(spec)
        )


# Global instance - lazily initialized
_k8s_client_instance: Optional[KubernetesClient] = None


def get_k8s_client() -> KubernetesClient:
    """Get or create the global Kubernetes client instance."""
    global _k8s_client_instance
    if _k8s_client_instance is None:
        _k8s_client_instance = KubernetesClient()
    return _k8s_client_instance
