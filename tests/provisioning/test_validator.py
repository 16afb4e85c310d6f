"""
Unit tests for workspace attribute validation.
"""

import pytest

from async_storage.provisioning.validator import (
    AttributeValidator,
    DecisionKind,
    is_ephemeral,
    parse_bool,
)


@pytest.mark.unit
class TestAttributeValidator:
    """Test AttributeValidator.validate."""

    @pytest.mark.parametrize("attributes", [
        {},
        {"asyncPersist": "false"},
        {"asyncPersist": "yes"},
        {"persistVolumes": "false"},
    ])
    def test_skips_when_async_persist_not_requested(self, attributes):
        decision = AttributeValidator("common").validate(attributes)
        assert decision.kind == DecisionKind.SKIP
        assert decision.reason is None

    def test_skip_ignores_strategy(self):
        """An unrelated workspace is never rejected because of the PVC strategy."""
        decision = AttributeValidator("per-workspace").validate({"persistVolumes": "true"})
        assert decision.kind == DecisionKind.SKIP

    def test_rejects_non_common_strategy(self):
        decision = AttributeValidator("per-workspace").validate(
            {"asyncPersist": "true", "persistVolumes": "false"}
        )
        assert decision.kind == DecisionKind.REJECT
        assert "'common' PVC strategy" in decision.reason
        assert "per-workspace" in decision.reason

    @pytest.mark.parametrize("attributes", [
        {"asyncPersist": "true"},
        {"asyncPersist": "true", "persistVolumes": "true"},
    ])
    def test_rejects_non_ephemeral_workspace(self, attributes):
        decision = AttributeValidator("common").validate(attributes)
        assert decision.kind == DecisionKind.REJECT
        assert "'persistVolumes' attribute set to false" in decision.reason

    def test_strategy_checked_before_ephemeral(self):
        decision = AttributeValidator("unique").validate({"asyncPersist": "true"})
        assert decision.kind == DecisionKind.REJECT
        assert "'common' PVC strategy" in decision.reason

    def test_proceeds_for_ephemeral_common_workspace(self):
        decision = AttributeValidator("common").validate(
            {"asyncPersist": "TRUE", "persistVolumes": "false"}
        )
        assert decision.kind == DecisionKind.PROCEED


@pytest.mark.unit
def test_parse_bool():
    assert parse_bool("true")
    assert parse_bool("True")
    assert not parse_bool(" true ")
    assert not parse_bool(None)
    assert not parse_bool("1")


@pytest.mark.unit
def test_is_ephemeral():
    assert is_ephemeral({"persistVolumes": "false"})
    assert not is_ephemeral({})
    assert not is_ephemeral({"persistVolumes": "true"})
    assert not is_ephemeral({"persistVolumes": "False"})
    assert not is_ephemeral({"persistVolumes": " false"})


@pytest.mark.unit
def test_mixed_case_persist_volumes_is_rejected():
    decision = AttributeValidator("common").validate({"asyncPersist": "true", "persistVolumes": "False"})
    assert decision.kind == DecisionKind.REJECT
