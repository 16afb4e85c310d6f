"""
Async Storage Provisioner

Configures a namespace so an ephemeral workspace can back up its projects on
stop and restore them on start. For workspaces with ``asyncPersist: true`` and
``persistVolumes: false`` it creates, once per namespace:
- a PVC for storing backups
- a ConfigMap with the public part of the owner's SSH key
- the storage Pod running sshd + rsync
- a Service for rsync connections over SSH

Every step is an idempotent get-or-create, so this runs on each workspace
start. A failing step stops the sequence without rolling back earlier steps;
the next start picks up where it left off.
"""

import logging
from typing import Optional

from ..config import Settings
from ..constants import INVALID_CONFIGURATION_WARNING_CODE
from ..errors import ConfigurationError
from ..kubernetes.client import KubernetesClient
from ..schemas import RuntimeIdentity, WorkspaceEnvironment
from ..ssh.manager import SshManager
from ..utils.resource_naming import get_config_map_name
from .resources import (
    ConfigMapProvisioner,
    StoragePodProvisioner,
    StorageServiceProvisioner,
    VolumeClaimProvisioner,
)
from .ssh_keys import SshKeyProvisioner
from .validator import AttributeValidator, DecisionKind

logger = logging.getLogger(__name__)


class AsyncStorageProvisioner:
    """Entry point of async storage provisioning."""

    def __init__(self, settings: Settings, k8s: KubernetesClient, ssh_manager: SshManager):
        """
        Args:
            settings: Provisioning options (image, pull policy, PVC settings)
            k8s: Kubernetes resource store
            ssh_manager: SSH credential store
        """
        self.settings = settings
        self.validator = AttributeValidator(settings.pvc_strategy)
        self.ssh_keys = SshKeyProvisioner(ssh_manager)

        self.claims = VolumeClaimProvisioner(k8s)
        self.config_maps = ConfigMapProvisioner(k8s, self.ssh_keys)
        self.pods = StoragePodProvisioner(
            k8s,
            image=settings.async_storage_image,
            image_pull_policy=settings.sidecar_image_pull_policy,
            pvc_name=settings.pvc_name
        )
        self.services = StorageServiceProvisioner(k8s)

    def provision(self, environment: WorkspaceEnvironment, identity: RuntimeIdentity) -> None:
        """
        Provision async storage for a workspace start.

        Args:
            environment: Workspace environment; warnings are appended to it
            identity: Runtime identity supplying namespace and owner

        Raises:
            ConfigurationError: If the attributes are incompatible with async storage
            SshProvisioningError: If the SSH key pair cannot be obtained
            ClusterApiError: If a Kubernetes API call fails
        """
        decision = self.validator.validate(environment.attributes)
        if decision.kind == DecisionKind.SKIP:
            return
        if decision.kind == DecisionKind.REJECT:
            self._reject(environment, decision.reason)

        namespace = identity.namespace
        owner_id = identity.owner_id
        config_map_name = get_config_map_name(namespace)

        logger.info(
            f"[ASYNC-STORAGE] Provisioning async storage in {namespace} "
            f"for workspace {identity.workspace_id}"
        )

        self.claims.ensure(
            namespace,
            self.settings.pvc_name,
            self.settings.pvc_access_mode,
            self.settings.pvc_quantity,
            self.settings.storage_class_name,
            owner_id
        )
        self.config_maps.ensure(namespace, config_map_name, owner_id, environment)
        self.pods.ensure(namespace, config_map_name, owner_id)
        self.services.ensure(namespace, owner_id)

        logger.info(f"[ASYNC-STORAGE] ✅ Async storage ready in {namespace}")

    def _reject(self, environment: WorkspaceEnvironment, reason: Optional[str]) -> None:
        logger.warning(reason)
        environment.add_warning(INVALID_CONFIGURATION_WARNING_CODE, reason)
        raise ConfigurationError(reason)
