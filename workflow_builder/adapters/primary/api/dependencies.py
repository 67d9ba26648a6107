from fastapi import Depends, Request

from workflow_builder.adapters.secondary.filesystem.json_snapshot_store import JsonFileSnapshotStore
from workflow_builder.adapters.secondary.memory.in_memory_session_repository import InMemorySessionRepository
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
from workflow_builder.ports.secondary.snapshot_store import ISnapshotStore
from workflow_builder.shared.config import settings
from workflow_builder.shared.logger import bind_context, clear_context

session_repository = InMemorySessionRepository()


async def bind_session_log_context(request: Request):
    """Tags every log line emitted while handling the request with its session id."""
    session_id = request.path_params.get("session_id")
    if session_id:
        bind_context({"session_id": session_id})
    try:
        yield
    finally:
        clear_context()


def get_session_repository() -> ISessionRepository:
    return session_repository


def get_snapshot_store() -> ISnapshotStore:
    return JsonFileSnapshotStore(settings.EXPORT_DIR)


def get_create_session_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
) -> CreateSessionUseCase:
    return CreateSessionUseCase(
        session_repository=repository,
        history_max_depth=settings.HISTORY_MAX_DEPTH,
        default_name=settings.DEFAULT_WORKFLOW_NAME,
        root_id=settings.ROOT_NODE_ID,
        root_label=settings.ROOT_NODE_LABEL,
    )


def get_workflow_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
) -> GetWorkflowUseCase:
    return GetWorkflowUseCase(session_repository=repository)


def get_add_node_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
) -> AddNodeUseCase:
    return AddNodeUseCase(session_repository=repository, node_label=settings.NEW_NODE_LABEL)


def get_update_field_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
) -> UpdateFieldUseCase:
    return UpdateFieldUseCase(session_repository=repository)


def get_delete_node_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
) -> DeleteNodeUseCase:
    return DeleteNodeUseCase(session_repository=repository)


def get_undo_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
) -> UndoUseCase:
    return UndoUseCase(session_repository=repository)


def get_redo_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
) -> RedoUseCase:
    return RedoUseCase(session_repository=repository)


def get_rename_session_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
) -> RenameSessionUseCase:
    return RenameSessionUseCase(session_repository=repository)


def get_close_session_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
) -> CloseSessionUseCase:
    return CloseSessionUseCase(session_repository=repository)


def get_export_workflow_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
    snapshot_store: ISnapshotStore = Depends(get_snapshot_store),
) -> ExportWorkflowUseCase:
    return ExportWorkflowUseCase(session_repository=repository, snapshot_store=snapshot_store)


def get_import_workflow_use_case(
    repository: ISessionRepository = Depends(get_session_repository),
    snapshot_store: ISnapshotStore = Depends(get_snapshot_store),
) -> ImportWorkflowUseCase:
    return ImportWorkflowUseCase(session_repository=repository, snapshot_store=snapshot_store)
