"""
Utility modules for async storage.
"""

from .resource_naming import generate_name, generate_short_hash, get_config_map_name

__all__ = [
    "generate_name",
    "generate_short_hash",
    "get_config_map_name",
]
