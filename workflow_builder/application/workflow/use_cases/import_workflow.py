from workflow_builder.domain.workflow.entities.workflow import Workflow
from workflow_builder.domain.workflow.exceptions import InvalidWorkflowError
from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.ports.secondary.snapshot_store import ISnapshotStore
from workflow_builder.shared.logger import get_logger

logger = get_logger(__name__)


class ImportWorkflowUseCase:
    """
    Use case for loading a saved snapshot into an open session.

    The loaded workflow is committed like any other edit, so the import itself
    can be undone.
    """
    def __init__(
        self,
        session_repository: ISessionRepository,
        snapshot_store: ISnapshotStore | None = None,
    ):
        self._session_repository = session_repository
        self._snapshot_store = snapshot_store

    def execute(self, session_id: str, record: dict) -> Workflow:
        """
        Accepts either an export record (``{"name", "workflow"}``) or a bare
        workflow snapshot (``{"rootId", "nodes"}``).

        Raises:
            InvalidWorkflowError: If the payload is malformed or breaks a tree invariant.
        """
        if not isinstance(record, dict):
            raise InvalidWorkflowError("Import payload must be an object")

        session = self._session_repository.get_or_raise(session_id)
        payload = record.get("workflow", record)
        workflow = Workflow.from_dict(payload)

        session.apply(workflow)
        name = record.get("name")
        if isinstance(name, str) and name.strip():
            session.rename(name)
        self._session_repository.save(session)

        logger.info(
            "workflow_imported",
            session_id=session_id,
            node_count=len(workflow.nodes),
            workflow_name=session.name,
        )
        return workflow

    def execute_from_store(self, session_id: str, name: str) -> Workflow:
        if self._snapshot_store is None:
            raise RuntimeError("ImportWorkflowUseCase was built without a snapshot store")
        return self.execute(session_id, self._snapshot_store.load(name))
