#!/usr/bin/env python3
"""
Provision async storage for a workspace from the command line.

Usage:
    python -m async_storage provision --namespace <ns> --owner-id <user> \\
        --workspace-id <workspace> --attribute asyncPersist=true \\
        --attribute persistVolumes=false [--private-key-out <path>]

Options are read from ASYNC_STORAGE_* environment variables (see config.py).

SSH pairs are held by an in-memory LocalSshManager and are discarded when the
command exits. Only the public key reaches the cluster (in the ConfigMap); pass
--private-key-out to save the generated private key (mode 0600), otherwise the
sidecar cannot be reached over rsync/SSH.
"""
import argparse
import logging
import os
import sys
from typing import Dict, List, Optional

from .config import get_settings
from .constants import SSH_KEY_FILE_MODE, SSH_KEY_NAME, SSH_SCOPE
from .errors import InfrastructureError
from .kubernetes.client import get_k8s_client
from .logging_config import configure_logging
from .provisioning import AsyncStorageProvisioner
from .schemas import RuntimeIdentity, SshKeyPair, WorkspaceEnvironment
from .ssh.manager import LocalSshManager, SshManager

logger = logging.getLogger(__name__)


def parse_attributes(pairs: List[str]) -> Dict[str, str]:
    """Turn ["key=value", ...] into a dict; raises ValueError on a missing '='."""
    attributes = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Attribute must look like key=value, got '{pair}'")
        attributes[key] = value
    return attributes


def find_storage_pair(ssh_manager: SshManager, owner_id: str) -> Optional[SshKeyPair]:
    """The pair the sidecar authorizes: the rsync pair if present, else the first one."""
    pairs = ssh_manager.get_pairs(owner_id, SSH_SCOPE)
    for pair in pairs:
        if pair.name == SSH_KEY_NAME:
            return pair
    return pairs[0] if pairs else None


def write_private_key(path: str, pair: SshKeyPair) -> None:
    """Write the private key readable by the current user only."""
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, SSH_KEY_FILE_MODE)
    with os.fdopen(fd, "w") as f:
        f.write(pair.private_key)
    os.chmod(path, SSH_KEY_FILE_MODE)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="async-storage", description=__doc__.strip().splitlines()[0])
    subparsers = parser.add_subparsers(dest="command", required=True)

    provision = subparsers.add_parser("provision", help="Provision async storage in a namespace")
    provision.add_argument("--namespace", required=True)
    provision.add_argument("--owner-id", required=True)
    provision.add_argument("--workspace-id", required=True)
    provision.add_argument(
        "--attribute",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Workspace attribute (repeatable)"
    )
    provision.add_argument(
        "--private-key-out",
        metavar="PATH",
        help="Save the SSH private key generated by this run (mode 0600). "
             "Keys live in memory only and are lost when the command exits."
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    try:
        attributes = parse_attributes(args.attribute)
    except ValueError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 2

    environment = WorkspaceEnvironment(attributes=attributes)
    identity = RuntimeIdentity(
        namespace=args.namespace,
        owner_id=args.owner_id,
        workspace_id=args.workspace_id
    )

    try:
        k8s = get_k8s_client()
    except RuntimeError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    ssh_manager = LocalSshManager()
    provisioner = AsyncStorageProvisioner(settings, k8s, ssh_manager)

    try:
        provisioner.provision(environment, identity)
    except InfrastructureError as e:
        logger.error(f"Async storage provisioning failed: {e}")
        exit_code = 1
    else:
        exit_code = 0

    for warning in environment.warnings:
        print(f"⚠️  [{warning.code}] {warning.message}")

    if exit_code == 0 and args.private_key_out:
        pair = find_storage_pair(ssh_manager, identity.owner_id)
        if pair is None:
            print("⚠️  No SSH key was generated (ConfigMap already present or storage not requested); "
                  f"nothing written to {args.private_key_out}")
        else:
            try:
                write_private_key(args.private_key_out, pair)
            except OSError as e:
                print(f"❌ Error: Cannot write private key to {args.private_key_out}: {e}", file=sys.stderr)
                return 1
            print(f"✅ Private key written to {args.private_key_out}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
