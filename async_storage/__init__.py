"""
Async storage sidecar provisioning for ephemeral workspaces.
"""

from .errors import (
    ClusterApiError,
    ConfigurationError,
    InfrastructureError,
    SshConflictError,
    SshManagerError,
    SshProvisioningError,
)
from .provisioning import AsyncStorageProvisioner
from .schemas import RuntimeIdentity, SshKeyPair, WorkspaceEnvironment, WorkspaceWarning

__all__ = [
    "AsyncStorageProvisioner",
    "ClusterApiError",
    "ConfigurationError",
    "InfrastructureError",
    "RuntimeIdentity",
    "SshConflictError",
    "SshKeyPair",
    "SshManagerError",
    "SshProvisioningError",
    "WorkspaceEnvironment",
    "WorkspaceWarning",
]
