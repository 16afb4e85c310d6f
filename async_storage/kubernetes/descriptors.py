"""
Resource descriptors for the async storage sidecar.

Plain values describing what should exist in the cluster. They carry no
Kubernetes client types; ``helpers`` translates them into ``V1*`` manifests.
A descriptor is identified by ``(namespace, name)``.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class VolumeClaimSpec:
    name: str
    namespace: str
    access_mode: str
    quantity: str
    storage_class_name: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ConfigSpec:
    name: str
    namespace: str
    labels: Dict[str, str] = field(default_factory=dict)
    data: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class VolumeMountSpec:
    name: str
    mount_path: str
    read_only: bool = False
    sub_path: Optional[str] = None


@dataclass(frozen=True)
class VolumeSpec:
    """A pod volume backed by either a claim or a ConfigMap (exactly one is set)."""
    name: str
    claim_name: Optional[str] = None
    config_map_name: Optional[str] = None
    default_mode: Optional[int] = None
    read_only: bool = False


@dataclass(frozen=True)
class ContainerSpec:
    name: str
    image: str
    image_pull_policy: str
    ports: Tuple[int, ...] = ()
    protocol: str = "TCP"
    memory_request: Optional[str] = None
    memory_limit: Optional[str] = None
    volume_mounts: Tuple[VolumeMountSpec, ...] = ()


@dataclass(frozen=True)
class PodSpec:
    name: str
    namespace: str
    labels: Dict[str, str] = field(default_factory=dict)
    containers: Tuple[ContainerSpec, ...] = ()
    volumes: Tuple[VolumeSpec, ...] = ()


@dataclass(frozen=True)
class ServicePortSpec:
    name: str
    port: int
    target_port: int
    protocol: str = "TCP"


@dataclass(frozen=True)
class ServiceSpec:
    name: str
    namespace: str
    labels: Dict[str, str] = field(default_factory=dict)
    ports: Tuple[ServicePortSpec, ...] = ()
    selector: Dict[str, str] = field(default_factory=dict)
