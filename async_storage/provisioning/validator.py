"""
Workspace attribute validation for async storage.

Async storage is opt-in (``asyncPersist: true``) and only makes sense for an
ephemeral workspace (``persistVolumes: false``) running with the ``common``
PVC strategy, where one claim is shared by the whole namespace.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from ..constants import ASYNC_PERSIST_ATTRIBUTE, COMMON_STRATEGY, PERSIST_VOLUMES_ATTRIBUTE


class DecisionKind(str, Enum):
    SKIP = "skip"
    PROCEED = "proceed"
    REJECT = "reject"


@dataclass(frozen=True)
class Decision:
    kind: DecisionKind
    reason: Optional[str] = None

    @classmethod
    def skip(cls) -> "Decision":
        return cls(DecisionKind.SKIP)

    @classmethod
    def proceed(cls) -> "Decision":
        return cls(DecisionKind.PROCEED)

    @classmethod
    def reject(cls, reason: str) -> "Decision":
        return cls(DecisionKind.REJECT, reason)


def parse_bool(value: Optional[str]) -> bool:
    """True only for the string "true" in any case; surrounding whitespace is not trimmed."""
    return value is not None and value.lower() == "true"


def is_ephemeral(attributes: Mapping[str, str]) -> bool:
    """A workspace is ephemeral when persistVolumes is exactly "false" (case-sensitive)."""
    return attributes.get(PERSIST_VOLUMES_ATTRIBUTE) == "false"


class AttributeValidator:
    """Decides whether async storage applies to a workspace."""

    def __init__(self, pvc_strategy: str):
        self.pvc_strategy = pvc_strategy

    def validate(self, attributes: Mapping[str, str]) -> Decision:
        """
        Check workspace attributes against the configured PVC strategy.

        Args:
            attributes: Workspace configuration attributes

        Returns:
            SKIP if async storage was not requested, REJECT with a reason if
            the request is inconsistent, PROCEED otherwise
        """
        if not parse_bool(attributes.get(ASYNC_PERSIST_ATTRIBUTE)):
            return Decision.skip()

        if self.pvc_strategy != COMMON_STRATEGY:
            return Decision.reject(
                "Workspace configuration not valid: Asynchronous storage available only "
                f"for '{COMMON_STRATEGY}' PVC strategy, but got {self.pvc_strategy}"
            )

        if not is_ephemeral(attributes):
            return Decision.reject(
                "Workspace configuration not valid: Asynchronous storage available only "
                f"if '{PERSIST_VOLUMES_ATTRIBUTE}' attribute set to false"
            )

        return Decision.proceed()
