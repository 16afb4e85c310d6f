"""
Async storage provisioning.

- AttributeValidator: decides whether a workspace gets async storage
- SshKeyProvisioner: owner's SSH key pair for the rsync channel
- Volume claim, ConfigMap, Pod and Service provisioners
- AsyncStorageProvisioner: runs the steps above in order
"""

from .provisioner import AsyncStorageProvisioner
from .resources import (
    ConfigMapProvisioner,
    StoragePodProvisioner,
    StorageServiceProvisioner,
    VolumeClaimProvisioner,
)
from .ssh_keys import SshKeyProvisioner
from .validator import AttributeValidator, Decision, DecisionKind

__all__ = [
    "AsyncStorageProvisioner",
    "AttributeValidator",
    "ConfigMapProvisioner",
    "Decision",
    "DecisionKind",
    "SshKeyProvisioner",
    "StoragePodProvisioner",
    "StorageServiceProvisioner",
    "VolumeClaimProvisioner",
]
