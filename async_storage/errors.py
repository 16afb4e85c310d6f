"""
Exceptions raised while provisioning async storage.

Everything that aborts ``AsyncStorageProvisioner.provision`` derives from
``InfrastructureError`` so callers can fail the workspace start with a single
``except`` clause.
"""

from typing import Optional


class InfrastructureError(Exception):
    """Base exception for provisioning failures."""
    pass


class ConfigurationError(InfrastructureError):
    """Workspace attributes are incompatible with async storage."""
    pass


class SshProvisioningError(InfrastructureError):
    """SSH key lookup or generation failed."""
    pass


class ClusterApiError(InfrastructureError):
    """
    A Kubernetes API call failed.

    Attributes:
        status: HTTP status returned by the API server, if any
        reason: Reason phrase returned by the API server, if any
    """

    def __init__(self, message: str, status: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.reason = reason


class SshManagerError(Exception):
    """Raised by SSH credential stores when a pair cannot be read or generated."""
    pass


class SshConflictError(SshManagerError):
    """A key pair with the requested name already exists."""
    pass
