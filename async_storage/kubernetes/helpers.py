"""
Kubernetes Manifest Helpers for the Async Storage Sidecar

This module is the only place that knows the Kubernetes wire format. It turns
the plain descriptors from ``descriptors`` into ``kubernetes.client`` models:
- PersistentVolumeClaim: backup storage shared by the namespace
- ConfigMap: authorized_keys for the rsync SSH channel
- Pod: sshd + rsync sidecar
- Service: stable ``async-storage`` address for rsync
"""

from kubernetes import client
from typing import Dict, List

from .descriptors import (
    ConfigSpec,
    ContainerSpec,
    PodSpec,
    ServiceSpec,
    VolumeClaimSpec,
    VolumeSpec,
)


# =============================================================================
# PVC Manifest
# =============================================================================

def create_pvc_manifest(spec: VolumeClaimSpec) -> client.V1PersistentVolumeClaim:
    """
    Create PVC manifest for async storage backups.

    Args:
        spec: Claim descriptor

    Returns:
        V1PersistentVolumeClaim manifest
    """
    return client.V1PersistentVolumeClaim(
        api_version="v1",
        kind="PersistentVolumeClaim",
        metadata=client.V1ObjectMeta(
            name=spec.name,
            namespace=spec.namespace,
            labels=dict(spec.labels)
        ),
        spec=client.V1PersistentVolumeClaimSpec(
            storage_class_name=spec.storage_class_name,
            access_modes=[spec.access_mode],
            resources=client.V1VolumeResourceRequirements(
                requests={"storage": spec.quantity}
            )
        )
    )


# =============================================================================
# ConfigMap Manifest
# =============================================================================

def create_config_map_manifest(spec: ConfigSpec) -> client.V1ConfigMap:
    """Create ConfigMap manifest holding the SSH authorized_keys entry."""
    return client.V1ConfigMap(
        api_version="v1",
        kind="ConfigMap",
        metadata=client.V1ObjectMeta(
            name=spec.name,
            namespace=spec.namespace,
            labels=dict(spec.labels)
        ),
        data=dict(spec.data)
    )


# =============================================================================
# Pod Manifest
# =============================================================================

def _create_volume(spec: VolumeSpec) -> client.V1Volume:
    if spec.claim_name:
        return client.V1Volume(
            name=spec.name,
            persistent_volume_claim=client.V1PersistentVolumeClaimVolumeSource(
                claim_name=spec.claim_name,
                read_only=spec.read_only
            )
        )
    if spec.config_map_name:
        return client.V1Volume(
            name=spec.name,
            config_map=client.V1ConfigMapVolumeSource(
                name=spec.config_map_name,
                default_mode=spec.default_mode
            )
        )
    raise ValueError(f"Volume {spec.name} has neither a claim nor a ConfigMap source")


def _create_container(spec: ContainerSpec) -> client.V1Container:
    requests: Dict[str, str] = {}
    limits: Dict[str, str] = {}
    if spec.memory_request:
        requests["memory"] = spec.memory_request
    if spec.memory_limit:
        limits["memory"] = spec.memory_limit

    return client.V1Container(
        name=spec.name,
        image=spec.image,
        image_pull_policy=spec.image_pull_policy,
        ports=[
            client.V1ContainerPort(container_port=port, protocol=spec.protocol)
            for port in spec.ports
        ],
        volume_mounts=[
            client.V1VolumeMount(
                name=mount.name,
                mount_path=mount.mount_path,
                read_only=mount.read_only,
                sub_path=mount.sub_path
            )
            for mount in spec.volume_mounts
        ],
        resources=client.V1ResourceRequirements(
            requests=requests or None,
            limits=limits or None
        )
    )


def create_pod_manifest(spec: PodSpec) -> client.V1Pod:
    """
    Create the async storage Pod manifest.

    Args:
        spec: Pod descriptor with containers and volumes

    Returns:
        V1Pod manifest
    """
    containers: List[client.V1Container] = [_create_container(c) for c in spec.containers]
    volumes: List[client.V1Volume] = [_create_volume(v) for v in spec.volumes]

    return client.V1Pod(
        api_version="v1",
        kind="Pod",
        metadata=client.V1ObjectMeta(
            name=spec.name,
            namespace=spec.namespace,
            labels=dict(spec.labels)
        ),
        spec=client.V1PodSpec(
            containers=containers,
            volumes=volumes
        )
    )


# =============================================================================
# Service Manifest
# =============================================================================

def create_service_manifest(spec: ServiceSpec) -> client.V1Service:
    """
    Create Service manifest exposing the rsync port.

    Args:
        spec: Service descriptor

    Returns:
        V1Service manifest
    """
    return client.V1Service(
        api_version="v1",
        kind="Service",
        metadata=client.V1ObjectMeta(
            name=spec.name,
            namespace=spec.namespace,
            labels=dict(spec.labels)
        ),
        spec=client.V1ServiceSpec(
            selector=dict(spec.selector),
            ports=[
                client.V1ServicePort(
                    name=port.name,
                    port=port.port,
                    target_port=port.target_port,
                    protocol=port.protocol
                )
                for port in spec.ports
            ]
        )
    )
