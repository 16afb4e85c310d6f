from .manager import LocalSshManager, SshManager

__all__ = ["LocalSshManager", "SshManager"]
