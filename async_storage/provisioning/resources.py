"""
Resource provisioners for the async storage sidecar.

Each provisioner is a get-or-create over one resource kind:
1. ``get`` the resource by name; return if it exists
2. build the descriptor and ``create`` it

There is no cluster-side lock between the two steps. Two concurrent starts in
the same namespace may both see the resource missing and both create it; the
client treats the losing create's 409 as success, so either order converges on
one resource.
"""

import logging
from typing import Optional

from ..constants import (
    APP_LABEL,
    ASYNC_STORAGE,
    ASYNC_STORAGE_DATA_PATH,
    AUTHORIZED_KEYS,
    CONFIG_MAP_VOLUME_NAME,
    MEMORY_LIMIT,
    MEMORY_REQUEST,
    PROTOCOL,
    SERVICE_PORT,
    SERVICE_PORT_NAME,
    SSH_KEY_FILE_MODE,
    SSH_KEY_PATH,
    STORAGE_VOLUME_NAME,
    USER_ID_LABEL,
)
from ..kubernetes.client import KubernetesClient
from ..kubernetes.descriptors import (
    ConfigSpec,
    ContainerSpec,
    PodSpec,
    ServicePortSpec,
    ServiceSpec,
    VolumeClaimSpec,
    VolumeMountSpec,
    VolumeSpec,
)
from ..schemas import WorkspaceEnvironment
from ..utils.resource_naming import generate_name
from .ssh_keys import SshKeyProvisioner

logger = logging.getLogger(__name__)


# =============================================================================
# PVC
# =============================================================================

class VolumeClaimProvisioner:
    """Creates the claim that stores workspace backups."""

    def __init__(self, k8s: KubernetesClient):
        self.k8s = k8s

    def ensure(
        self,
        namespace: str,
        name: str,
        access_mode: str,
        quantity: str,
        storage_class_name: Optional[str],
        owner_id: str
    ) -> None:
        if self.k8s.get_pvc(namespace, name) is not None:
            logger.debug(f"[ASYNC-STORAGE] PVC {name} already exists in {namespace}")
            return

        spec = VolumeClaimSpec(
            name=name,
            namespace=namespace,
            access_mode=access_mode,
            quantity=quantity,
            storage_class_name=storage_class_name,
            labels={USER_ID_LABEL: owner_id}
        )
        self.k8s.create_pvc(namespace, spec)


# =============================================================================
# ConfigMap
# =============================================================================

class ConfigMapProvisioner:
    """Creates the ConfigMap holding the public SSH key as authorized_keys."""

    def __init__(self, k8s: KubernetesClient, ssh_keys: SshKeyProvisioner):
        self.k8s = k8s
        self.ssh_keys = ssh_keys

    def ensure(self, namespace: str, name: str, owner_id: str, environment: WorkspaceEnvironment) -> None:
        """
        Create the ConfigMap unless it already exists.

        An existing ConfigMap is trusted as is: the SSH store is not consulted
        and the key it carries is not checked against the owner's current pair.

        Raises:
            SshProvisioningError: If the key pair cannot be obtained
            ClusterApiError: If the Kubernetes API call fails
        """
        if self.k8s.get_config_map(namespace, name) is not None:
            logger.debug(f"[ASYNC-STORAGE] ConfigMap {name} already exists in {namespace}")
            return

        ssh_pair = self.ssh_keys.get_or_create(owner_id, environment)

        spec = ConfigSpec(
            name=name,
            namespace=namespace,
            labels={USER_ID_LABEL: owner_id},
            data={AUTHORIZED_KEYS: ssh_pair.public_key + "\n"}
        )
        self.k8s.create_config_map(namespace, spec)


# =============================================================================
# Pod
# =============================================================================

class StoragePodProvisioner:
    """
    Creates the sidecar Pod running sshd and rsync.

    The Pod mounts the backup claim at /async-storage and the authorized_keys
    entry of the ConfigMap at /.ssh/authorized_keys.
    """

    def __init__(self, k8s: KubernetesClient, image: str, image_pull_policy: str, pvc_name: str):
        self.k8s = k8s
        self.image = image
        self.image_pull_policy = image_pull_policy
        self.pvc_name = pvc_name

    def build_spec(self, namespace: str, config_map_name: str, owner_id: str) -> PodSpec:
        storage_volume = VolumeSpec(
            name=STORAGE_VOLUME_NAME,
            claim_name=self.pvc_name,
            read_only=False
        )
        ssh_key_volume = VolumeSpec(
            name=CONFIG_MAP_VOLUME_NAME,
            config_map_name=config_map_name,
            default_mode=SSH_KEY_FILE_MODE
        )

        container = ContainerSpec(
            name=generate_name(ASYNC_STORAGE),
            image=self.image,
            image_pull_policy=self.image_pull_policy,
            ports=(SERVICE_PORT,),
            protocol=PROTOCOL,
            memory_request=MEMORY_REQUEST,
            memory_limit=MEMORY_LIMIT,
            volume_mounts=(
                VolumeMountSpec(
                    name=STORAGE_VOLUME_NAME,
                    mount_path=ASYNC_STORAGE_DATA_PATH,
                    read_only=False
                ),
                # Only the authorized_keys entry, not the whole ConfigMap
                VolumeMountSpec(
                    name=CONFIG_MAP_VOLUME_NAME,
                    mount_path=SSH_KEY_PATH,
                    sub_path=AUTHORIZED_KEYS,
                    read_only=True
                ),
            )
        )

        return PodSpec(
            name=ASYNC_STORAGE,
            namespace=namespace,
            labels={APP_LABEL: ASYNC_STORAGE, USER_ID_LABEL: owner_id},
            containers=(container,),
            volumes=(storage_volume, ssh_key_volume)
        )

    def ensure(self, namespace: str, config_map_name: str, owner_id: str) -> None:
        if self.k8s.get_pod(namespace, ASYNC_STORAGE) is not None:
            logger.debug(f"[ASYNC-STORAGE] Pod {ASYNC_STORAGE} already exists in {namespace}")
            return

        self.k8s.create_pod(namespace, self.build_spec(namespace, config_map_name, owner_id))


# =============================================================================
# Service
# =============================================================================

class StorageServiceProvisioner:
    """Creates the Service that rsync uses to reach the sidecar (async-storage:2222)."""

    def __init__(self, k8s: KubernetesClient):
        self.k8s = k8s

    def ensure(self, namespace: str, owner_id: str) -> None:
        if self.k8s.get_service(namespace, ASYNC_STORAGE) is not None:
            logger.debug(f"[ASYNC-STORAGE] Service {ASYNC_STORAGE} already exists in {namespace}")
            return

        spec = ServiceSpec(
            name=ASYNC_STORAGE,
            namespace=namespace,
            labels={USER_ID_LABEL: owner_id},
            ports=(
                ServicePortSpec(
                    name=SERVICE_PORT_NAME,
                    port=SERVICE_PORT,
                    target_port=SERVICE_PORT,
                    protocol=PROTOCOL
                ),
            ),
            selector={APP_LABEL: ASYNC_STORAGE}
        )
        self.k8s.create_service(namespace, spec)
