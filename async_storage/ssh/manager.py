"""
SSH Credential Managers

Stores SSH key pairs per owner and scope. The provisioner only depends on the
``SshManager`` interface; ``LocalSshManager`` keeps pairs in process memory and
generates them with ``cryptography``.
"""

from abc import ABC, abstractmethod
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from typing import Dict, List, Tuple
import logging
import threading

from ..errors import SshConflictError, SshManagerError
from ..schemas import SshKeyPair

logger = logging.getLogger(__name__)


class SshManager(ABC):
    """Interface of an SSH credential store."""

    @abstractmethod
    def get_pairs(self, owner_id: str, scope: str) -> List[SshKeyPair]:
        """
        Get all key pairs of an owner within a scope.

        Raises:
            SshManagerError: If the store cannot be read
        """
        pass

    @abstractmethod
    def generate_pair(self, owner_id: str, scope: str, name: str) -> SshKeyPair:
        """
        Generate and store a new key pair.

        Raises:
            SshConflictError: If a pair with this name already exists
            SshManagerError: If generation or storage fails
        """
        pass


class LocalSshManager(SshManager):
    """In-memory SSH credential store generating RSA key pairs in OpenSSH format."""

    def __init__(self, key_size: int = 4096):
        self.key_size = key_size
        self._pairs: Dict[Tuple[str, str], List[SshKeyPair]] = {}
        self._lock = threading.Lock()

    def get_pairs(self, owner_id: str, scope: str) -> List[SshKeyPair]:
        with self._lock:
            return list(self._pairs.get((owner_id, scope), []))

    def generate_pair(self, owner_id: str, scope: str, name: str) -> SshKeyPair:
        with self._lock:
            pairs = self._pairs.setdefault((owner_id, scope), [])
            if any(pair.name == name for pair in pairs):
                raise SshConflictError(
                    f"SSH pair with name '{name}' already exists for owner '{owner_id}' in scope '{scope}'"
                )

            try:
                public_key, private_key = self._generate_keys()
            except (ValueError, TypeError) as e:
                raise SshManagerError(f"Failed to generate SSH key pair: {e}") from e

            pair = SshKeyPair(
                owner_id=owner_id,
                scope=scope,
                name=name,
                public_key=public_key,
                private_key=private_key
            )
            pairs.append(pair)

        logger.info(f"[SSH] Generated key pair '{name}' for owner {owner_id} (scope: {scope})")
        return pair

    def _generate_keys(self) -> Tuple[str, str]:
        key = rsa.generate_private_key(public_exponent=65537, key_size=self.key_size)
        private_key = key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.OpenSSH,
            encryption_algorithm=serialization.NoEncryption()
        ).decode()
        public_key = key.public_key().public_bytes(
            encoding=serialization.Encoding.OpenSSH,
            format=serialization.PublicFormat.OpenSSH
        ).decode()
        return public_key, private_key
