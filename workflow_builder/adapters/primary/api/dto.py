from pydantic import BaseModel, Field

from workflow_builder.domain.workflow.value_objects.node_type import NodeType


class SessionCreateRequest(BaseModel):
    name: str | None = Field(None, max_length=255)


class SessionResponse(BaseModel):
    session_id: str
    name: str
    workflow: dict
    warnings: list[str]
    can_undo: bool
    can_redo: bool
    undo_depth: int
    redo_depth: int


class NodeAddRequest(BaseModel):
    parent_id: str = Field(..., min_length=1)
    type: NodeType
    slot_index: int | None = Field(None, ge=0)


class NodeAddResponse(SessionResponse):
    node_id: str


class NodeFieldUpdateRequest(BaseModel):
    field: str
    value: str


class NodeDeleteResponse(SessionResponse):
    removed_ids: list[str]
    dangling: bool = False


class HistoryNavigationResponse(SessionResponse):
    applied: bool


class SessionRenameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class WorkflowImportRequest(BaseModel):
    record: dict


class SnapshotLoadRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class ExportFileResponse(BaseModel):
    location: str
    message: str = "Workflow exported successfully"


class WarningsResponse(BaseModel):
    session_id: str
    warnings: list[str]


class ErrorDetail(BaseModel):
    message: str
    error_code: str
    context: dict = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    error: ErrorDetail
