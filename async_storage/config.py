from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Dict, Optional

class Settings(BaseSettings):
    # ==========================================================================
    # Async Storage Sidecar
    # ==========================================================================
    # Image running sshd + rsync for workspace backups
    async_storage_image: str = "quay.io/eclipse/che-workspace-data-sync-storage:latest"
    # Always, IfNotPresent or Never - passed to the pod verbatim
    sidecar_image_pull_policy: str = "Always"

    # ==========================================================================
    # Kubernetes Storage Settings
    # ==========================================================================
    pvc_quantity: str = "10Gi"  # Capacity requested by the backup claim
    pvc_access_mode: str = "ReadWriteOnce"
    # Async storage only works with the "common" strategy (one claim per namespace)
    pvc_strategy: str = "common"
    pvc_name: str = "claim-che-workspace"
    # Empty string means "use the cluster default StorageClass"
    pvc_storage_class_name: str = ""

    # ==========================================================================
    # Kubernetes Client Settings
    # ==========================================================================
    # Context to use when falling back to kubeconfig (empty = current context)
    kubeconfig_context: str = ""

    # Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = "INFO"

    @property
    def storage_class_name(self) -> Optional[str]:
        """Storage class for the claim, or None for the cluster default."""
        return self.pvc_storage_class_name or None

    def provisioning_options(self) -> Dict[str, str]:
        """
        Get the options consumed by the provisioner.

        Returns:
            Dict with the seven provisioning inputs, keyed by field name
        """
        return {
            "async_storage_image": self.async_storage_image,
            "sidecar_image_pull_policy": self.sidecar_image_pull_policy,
            "pvc_quantity": self.pvc_quantity,
            "pvc_access_mode": self.pvc_access_mode,
            "pvc_strategy": self.pvc_strategy,
            "pvc_name": self.pvc_name,
            "pvc_storage_class_name": self.pvc_storage_class_name,
        }

    class Config:
        # Environment variables look like ASYNC_STORAGE_PVC_STRATEGY=common
        env_prefix = "ASYNC_STORAGE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields from .env file
        case_sensitive = False  # Allow lowercase env vars to match uppercase field names

@lru_cache()
def get_settings():
    return Settings()
