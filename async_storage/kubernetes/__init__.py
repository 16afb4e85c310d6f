"""
Kubernetes access for async storage.

- KubernetesClient: namespaced get/create for PVCs, ConfigMaps, Pods, Services
- descriptors: plain values describing the sidecar resources
- helpers: translation of descriptors into kubernetes.client manifests
"""

from .client import KubernetesClient, get_k8s_client
from .descriptors import (
    ConfigSpec,
    ContainerSpec,
    PodSpec,
    ServicePortSpec,
    ServiceSpec,
    VolumeClaimSpec,
    VolumeMountSpec,
    VolumeSpec,
)
from .helpers import (
    create_config_map_manifest,
    create_pod_manifest,
    create_pvc_manifest,
    create_service_manifest,
)

__all__ = [
    # Client
    "KubernetesClient",
    "get_k8s_client",
    # Descriptors
    "ConfigSpec",
    "ContainerSpec",
    "PodSpec",
    "ServicePortSpec",
    "ServiceSpec",
    "VolumeClaimSpec",
    "VolumeMountSpec",
    "VolumeSpec",
    # Manifest Helpers
    "create_config_map_manifest",
    "create_pod_manifest",
    "create_pvc_manifest",
    "create_service_manifest",
]
