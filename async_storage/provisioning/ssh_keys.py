"""
SSH key provisioning for the rsync channel.

The pair lives in the owner's ``internal`` scope and is generated once; every
later provisioning reuses it.
"""

import logging

from ..constants import (
    NOT_ABLE_TO_PROVISION_SSH_KEYS,
    NOT_ABLE_TO_PROVISION_SSH_KEYS_MESSAGE,
    SSH_KEY_NAME,
    SSH_SCOPE,
)
from ..errors import SshManagerError, SshProvisioningError
from ..schemas import SshKeyPair, WorkspaceEnvironment
from ..ssh.manager import SshManager

logger = logging.getLogger(__name__)


class SshKeyProvisioner:
    """Gets or lazily creates the SSH key pair used to secure rsync."""

    def __init__(self, ssh_manager: SshManager):
        self.ssh_manager = ssh_manager

    def get_or_create(
        self,
        owner_id: str,
        environment: WorkspaceEnvironment,
        scope: str = SSH_SCOPE,
        name: str = SSH_KEY_NAME
    ) -> SshKeyPair:
        """
        Get the owner's key pair, generating it if the scope is empty.

        A pair named ``name`` is preferred; otherwise the first pair of the
        scope is used. A freshly generated pair is returned directly rather
        than re-read from the store.

        Args:
            owner_id: Workspace owner
            environment: Receives a warning if provisioning fails
            scope: Credential scope
            name: Name of the pair to generate

        Returns:
            The SSH key pair

        Raises:
            SshProvisioningError: If the store cannot be read or generation fails
        """
        try:
            pairs = self.ssh_manager.get_pairs(owner_id, scope)
        except SshManagerError as e:
            self._record_failure(environment, f"Unable to get SSH Keys. Cause: {e}")
            raise SshProvisioningError(f"Unable to get SSH keys for owner {owner_id}: {e}") from e

        for pair in pairs:
            if pair.name == name:
                return pair
        if pairs:
            return pairs[0]

        try:
            return self.ssh_manager.generate_pair(owner_id, scope, name)
        except SshManagerError as e:
            self._record_failure(
                environment,
                f"Unable to generate the SSH key for async storage service. Cause: {e}"
            )
            raise SshProvisioningError(f"Unable to generate SSH key '{name}' for owner {owner_id}: {e}") from e

    def _record_failure(self, environment: WorkspaceEnvironment, message: str) -> None:
        logger.warning(f"[SSH] {message}")
        environment.add_warning(
            NOT_ABLE_TO_PROVISION_SSH_KEYS,
            NOT_ABLE_TO_PROVISION_SSH_KEYS_MESSAGE.format(message)
        )
