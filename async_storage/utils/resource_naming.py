"""
Resource naming utilities for the async storage sidecar.

Names must be DNS-1123 compliant (lowercase alphanumeric + '-', max 63 chars
for container names), so generated suffixes use a lowercase alphabet.
"""

from nanoid import generate

from ..constants import ASYNC_STORAGE_CONFIG

GENERATED_PART_SIZE = 8


def generate_short_hash(length: int = GENERATED_PART_SIZE) -> str:
    """
    Generate a short, DNS-safe random hash.

    Args:
        length: Length of hash (default 8)

    Returns:
        Random hash string (e.g., "k3x8n2ab")
    """
    alphabet = '0123456789abcdefghijklmnopqrstuvwxyz'
    return generate(alphabet, length)


def generate_name(prefix: str) -> str:
    """
    Generate a unique resource name from a prefix.

    Examples:
        >>> generate_name("async-storage")
        "async-storage-k3x8n2ab"
    """
    return f"{prefix}-{generate_short_hash()}"


def get_config_map_name(namespace: str) -> str:
    """
    Get the name of the ConfigMap carrying authorized_keys for a namespace.

    Examples:
        >>> get_config_map_name("ns1")
        "ns1async-storage-config"
    """
    return f"{namespace}{ASYNC_STORAGE_CONFIG}"
