from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List


class RuntimeIdentity(BaseModel):
    """Identity of the workspace runtime being started."""
    model_config = ConfigDict(frozen=True)

    namespace: str
    owner_id: str
    workspace_id: str


class WorkspaceWarning(BaseModel):
    code: int
    message: str


class WorkspaceEnvironment(BaseModel):
    """
    Workspace environment handed to the provisioner.

    The provisioner reads ``attributes`` and appends to ``warnings``; it never
    replaces either collection.
    """
    attributes: Dict[str, str] = Field(default_factory=dict)
    warnings: List[WorkspaceWarning] = Field(default_factory=list)

    def add_warning(self, code: int, message: str) -> None:
        self.warnings.append(WorkspaceWarning(code=code, message=message))


class SshKeyPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner_id: str
    scope: str
    name: str
    public_key: str
    private_key: str
