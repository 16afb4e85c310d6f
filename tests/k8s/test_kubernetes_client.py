"""
Unit tests for KubernetesClient get/create semantics.

Tests:
- 404 on read maps to None
- 409 on create is treated as success
- Other API errors are raised as ClusterApiError
- Configuration loading falls back from in-cluster to kubeconfig
"""

import pytest
from unittest.mock import Mock, patch

pytest.importorskip("kubernetes")

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import MaxRetryError, NewConnectionError

from async_storage.errors import ClusterApiError
from async_storage.kubernetes.client import KubernetesClient
from async_storage.kubernetes.descriptors import ConfigSpec, PodSpec, ServicePortSpec, ServiceSpec, VolumeClaimSpec


@pytest.fixture
def core_v1():
    return Mock()


@pytest.fixture
def k8s_client(core_v1):
    return KubernetesClient(core_v1=core_v1)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestReads:
    """Test get_* methods."""

    def test_get_returns_existing_object(self, k8s_client, core_v1):
        existing = Mock()
        core_v1.read_namespaced_pod.return_value = existing

        assert k8s_client.get_pod("ns1", "async-storage") is existing
        core_v1.read_namespaced_pod.assert_called_once_with(name="async-storage", namespace="ns1")

    def test_get_returns_none_when_missing(self, k8s_client, core_v1):
        core_v1.read_namespaced_config_map.side_effect = ApiException(status=404)

        assert k8s_client.get_config_map("ns1", "ns1async-storage-config") is None

    def test_get_raises_on_other_errors(self, k8s_client, core_v1):
        core_v1.read_namespaced_service.side_effect = ApiException(status=500, reason="Internal Server Error")

        with pytest.raises(ClusterApiError) as exc_info:
            k8s_client.get_service("ns1", "async-storage")

        assert exc_info.value.status == 500
        assert exc_info.value.reason == "Internal Server Error"
        assert isinstance(exc_info.value.__cause__, ApiException)

    def test_get_wraps_transport_errors(self, k8s_client, core_v1):
        core_v1.read_namespaced_persistent_volume_claim.side_effect = MaxRetryError(
            None, "/api/v1", "Connection refused"
        )

        with pytest.raises(ClusterApiError) as exc_info:
            k8s_client.get_pvc("ns1", "claim-test")

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, MaxRetryError)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestCreates:
    """Test create_* methods."""

    def test_create_pvc_sends_manifest(self, k8s_client, core_v1):
        spec = VolumeClaimSpec(
            name="claim-test",
            namespace="ns1",
            access_mode="ReadWriteOnce",
            quantity="1Gi",
            labels={"che.user_id": "u1"}
        )

        k8s_client.create_pvc("ns1", spec)

        call_args = core_v1.create_namespaced_persistent_volume_claim.call_args
        assert call_args.kwargs["namespace"] == "ns1"
        body = call_args.kwargs["body"]
        assert isinstance(body, client.V1PersistentVolumeClaim)
        assert body.metadata.name == "claim-test"

    def test_create_conflict_is_ignored(self, k8s_client, core_v1):
        core_v1.create_namespaced_config_map.side_effect = ApiException(status=409, reason="AlreadyExists")

        result = k8s_client.create_config_map("ns1", ConfigSpec(name="cm", namespace="ns1"))

        assert result is None

    def test_create_raises_on_other_errors(self, k8s_client, core_v1):
        core_v1.create_namespaced_service.side_effect = ApiException(status=422, reason="Unprocessable Entity")
        spec = ServiceSpec(
            name="async-storage",
            namespace="ns1",
            ports=(ServicePortSpec(name="rsync-port", port=2222, target_port=2222),)
        )

        with pytest.raises(ClusterApiError) as exc_info:
            k8s_client.create_service("ns1", spec)

        assert exc_info.value.status == 422
        assert "async-storage" in str(exc_info.value)

    def test_create_wraps_transport_errors(self, k8s_client, core_v1):
        core_v1.create_namespaced_pod.side_effect = NewConnectionError(None, "Name or service not known")
        spec = PodSpec(name="async-storage", namespace="ns1")

        with pytest.raises(ClusterApiError) as exc_info:
            k8s_client.create_pod("ns1", spec)

        assert exc_info.value.status is None
        assert "async-storage" in str(exc_info.value)


@pytest.mark.unit
@pytest.mark.kubernetes
class TestConfigurationLoading:
    """Test in-cluster / kubeconfig fallback."""

    def test_prefers_in_cluster_config(self):
        with patch('async_storage.kubernetes.client.config') as mock_config, \
                patch('async_storage.kubernetes.client.client') as mock_client:
            KubernetesClient()

        mock_config.load_incluster_config.assert_called_once()
        mock_config.load_kube_config.assert_not_called()
        mock_client.CoreV1Api.assert_called_once()

    def test_falls_back_to_kubeconfig(self):
        with patch.object(config, 'load_incluster_config', side_effect=config.ConfigException("no sa")), \
                patch.object(config, 'load_kube_config') as load_kube_config, \
                patch('async_storage.kubernetes.client.client') as mock_client:
            KubernetesClient()

        load_kube_config.assert_called_once_with(context=None)
        mock_client.CoreV1Api.assert_called_once()

    def test_raises_when_no_configuration_loads(self):
        with patch.object(config, 'load_incluster_config', side_effect=config.ConfigException("no sa")), \
                patch.object(config, 'load_kube_config', side_effect=config.ConfigException("no file")):
            with pytest.raises(RuntimeError, match="Cannot load Kubernetes configuration"):
                KubernetesClient()
