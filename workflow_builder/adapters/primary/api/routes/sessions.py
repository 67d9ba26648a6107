from fastapi import APIRouter, Depends, status
from workflow_builder.adapters.primary.api.dto import (
    ErrorResponse,
    ExportFileResponse,
    HistoryNavigationResponse,
    NodeAddRequest,
    NodeAddResponse,
    NodeDeleteResponse,
    NodeFieldUpdateRequest,
    SessionCreateRequest,
    SessionRenameRequest,
    SessionResponse,
    SnapshotLoadRequest,
    WarningsResponse,
    WorkflowImportRequest,
)
from workflow_builder.adapters.primary.api.dependencies import (
    bind_session_log_context,
    get_add_node_use_case,
    get_close_session_use_case,
    get_create_session_use_case,
    get_delete_node_use_case,
    get_export_workflow_use_case,
    get_import_workflow_use_case,
    get_redo_use_case,
    get_rename_session_use_case,
    get_session_repository,
    get_undo_use_case,
    get_update_field_use_case,
    get_workflow_use_case,
)
from workflow_builder.application.workflow.use_cases.add_node import AddNodeUseCase
from workflow_builder.application.workflow.use_cases.create_session import CreateSessionUseCase
from workflow_builder.application.workflow.use_cases.delete_node import DeleteNodeUseCase
from workflow_builder.application.workflow.use_cases.export_workflow import ExportWorkflowUseCase
from workflow_builder.application.workflow.use_cases.get_workflow import GetWorkflowUseCase
from workflow_builder.application.workflow.use_cases.import_workflow import ImportWorkflowUseCase
from workflow_builder.application.workflow.use_cases.manage_session import (
    CloseSessionUseCase,
    RenameSessionUseCase,
)
from workflow_builder.application.workflow.use_cases.navigate_history import RedoUseCase, UndoUseCase
from workflow_builder.application.workflow.use_cases.update_field import UpdateFieldUseCase
from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.shared.metrics import metrics_registry
from workflow_builder.shared.logger import get_logger

logger = get_logger(__name__)

# Handlers are coroutines calling the synchronous core with no await in between,
# so commands for a session are applied one at a time on the event loop.

API_VERSION = "v1"
router = APIRouter(
    prefix=f"/api/{API_VERSION}/sessions",
    tags=["Sessions"],
    dependencies=[Depends(bind_session_log_context)],
)


def _session_view(use_case: GetWorkflowUseCase, session_id: str) -> dict:
    view = use_case.execute(session_id)
    metrics_registry.observe_warnings(len(view["warnings"]))
    return view


@router.post(
    "",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Open an editing session",
    description="Create a workflow containing a single start node.",
)
async def create_session(
    request: SessionCreateRequest = SessionCreateRequest(),
    use_case: CreateSessionUseCase = Depends(get_create_session_use_case),
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
    repository: ISessionRepository = Depends(get_session_repository),
) -> SessionResponse:
    session = use_case.execute(name=request.name)
    metrics_registry.record_command("create_session", "applied")
    metrics_registry.set_active_sessions(len(repository.list_ids()))
    return SessionResponse(**_session_view(reader, session.id))


@router.get(
    "/{session_id}",
    response_model=SessionResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get the present workflow",
)
async def get_session(
    session_id: str,
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
) -> SessionResponse:
    return SessionResponse(**_session_view(reader, session_id))


@router.delete(
    "/{session_id}",
    responses={404: {"model": ErrorResponse}},
    summary="Close an editing session",
)
async def close_session(
    session_id: str,
    use_case: CloseSessionUseCase = Depends(get_close_session_use_case),
    repository: ISessionRepository = Depends(get_session_repository),
):
    use_case.execute(session_id)
    metrics_registry.set_active_sessions(len(repository.list_ids()))
    return {"status": "success", "message": f"Session {session_id} closed"}


@router.post(
    "/{session_id}/nodes",
    response_model=NodeAddResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED,
    summary="Add a node",
    description="Attach a new node under a parent. Branch parents take an optional slot index (0 = True, 1 = False).",
)
async def add_node(
    session_id: str,
    request: NodeAddRequest,
    use_case: AddNodeUseCase = Depends(get_add_node_use_case),
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
) -> NodeAddResponse:
    node_id, _ = use_case.execute(
        session_id=session_id,
        parent_id=request.parent_id,
        node_type=request.type,
        slot_index=request.slot_index,
    )
    metrics_registry.record_command("add_node", "applied")
    return NodeAddResponse(node_id=node_id, **_session_view(reader, session_id))


@router.patch(
    "/{session_id}/nodes/{node_id}",
    response_model=SessionResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Edit a node's label or notes",
)
async def update_node_field(
    session_id: str,
    node_id: str,
    request: NodeFieldUpdateRequest,
    use_case: UpdateFieldUseCase = Depends(get_update_field_use_case),
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
) -> SessionResponse:
    use_case.execute(session_id, node_id, request.field, request.value)
    metrics_registry.record_command("update_field", "applied")
    return SessionResponse(**_session_view(reader, session_id))


@router.delete(
    "/{session_id}/nodes/{node_id}",
    response_model=NodeDeleteResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Delete a node and its subtree",
)
async def delete_node(
    session_id: str,
    node_id: str,
    use_case: DeleteNodeUseCase = Depends(get_delete_node_use_case),
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
) -> NodeDeleteResponse:
    result = use_case.execute(session_id, node_id)
    metrics_registry.record_command("delete_node", "dangling" if result.dangling else "applied")
    return NodeDeleteResponse(
        removed_ids=list(result.removed_ids),
        dangling=result.dangling,
        **_session_view(reader, session_id),
    )


@router.post(
    "/{session_id}/undo",
    response_model=HistoryNavigationResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Undo the last change",
    description="Steps back one snapshot. Returns applied=false when there is nothing to undo.",
)
async def undo(
    session_id: str,
    use_case: UndoUseCase = Depends(get_undo_use_case),
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
) -> HistoryNavigationResponse:
    applied, _ = use_case.execute(session_id)
    metrics_registry.record_history_navigation("undo", applied)
    return HistoryNavigationResponse(applied=applied, **_session_view(reader, session_id))


@router.post(
    "/{session_id}/redo",
    response_model=HistoryNavigationResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Redo the last undone change",
)
async def redo(
    session_id: str,
    use_case: RedoUseCase = Depends(get_redo_use_case),
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
) -> HistoryNavigationResponse:
    applied, _ = use_case.execute(session_id)
    metrics_registry.record_history_navigation("redo", applied)
    return HistoryNavigationResponse(applied=applied, **_session_view(reader, session_id))


@router.put(
    "/{session_id}/name",
    response_model=SessionResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Rename the workflow",
)
async def rename_session(
    session_id: str,
    request: SessionRenameRequest,
    use_case: RenameSessionUseCase = Depends(get_rename_session_use_case),
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
) -> SessionResponse:
    use_case.execute(session_id, request.name)
    return SessionResponse(**_session_view(reader, session_id))


@router.get(
    "/{session_id}/warnings",
    response_model=WarningsResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Validate the present workflow",
)
async def get_warnings(
    session_id: str,
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
) -> WarningsResponse:
    warnings = reader.warnings(session_id)
    metrics_registry.observe_warnings(len(warnings))
    return WarningsResponse(session_id=session_id, warnings=warnings)


@router.get(
    "/{session_id}/export",
    responses={404: {"model": ErrorResponse}},
    summary="Export the present workflow",
    description="Returns {name, workflow} where workflow is {rootId, nodes}.",
)
async def export_workflow(
    session_id: str,
    use_case: ExportWorkflowUseCase = Depends(get_export_workflow_use_case),
) -> dict:
    return use_case.execute(session_id)


@router.post(
    "/{session_id}/export/file",
    response_model=ExportFileResponse,
    responses={404: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED,
    summary="Write the present workflow to the export directory",
)
async def export_workflow_file(
    session_id: str,
    use_case: ExportWorkflowUseCase = Depends(get_export_workflow_use_case),
) -> ExportFileResponse:
    location = use_case.write(session_id)
    return ExportFileResponse(location=location)


@router.post(
    "/{session_id}/import",
    response_model=SessionResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Load a workflow snapshot",
    description=(
        "Accepts an export record or a bare {rootId, nodes} snapshot. The import is undoable. "
        "A name in the record renames the session; renames are not part of history, "
        "so undoing the import keeps the imported name."
    ),
)
async def import_workflow(
    session_id: str,
    request: WorkflowImportRequest,
    use_case: ImportWorkflowUseCase = Depends(get_import_workflow_use_case),
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
) -> SessionResponse:
    use_case.execute(session_id, request.record)
    metrics_registry.record_command("import_workflow", "applied")
    return SessionResponse(**_session_view(reader, session_id))


@router.post(
    "/{session_id}/import/file",
    response_model=SessionResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Load a workflow from the export directory",
)
async def import_workflow_file(
    session_id: str,
    request: SnapshotLoadRequest,
    use_case: ImportWorkflowUseCase = Depends(get_import_workflow_use_case),
    reader: GetWorkflowUseCase = Depends(get_workflow_use_case),
) -> SessionResponse:
    use_case.execute_from_store(session_id, request.name)
    metrics_registry.record_command("import_workflow", "applied")
    return SessionResponse(**_session_view(reader, session_id))
