from workflow_builder.domain.workflow.entities.session import DEFAULT_WORKFLOW_NAME, WorkflowSession
from workflow_builder.domain.workflow.entities.workflow import ROOT_NODE_ID, ROOT_NODE_LABEL
from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.shared.logger import get_logger

logger = get_logger(__name__)


class CreateSessionUseCase:
    """
    Use case for opening a new editing session.

    The session starts with a single start node and empty undo/redo stacks.
    """
    def __init__(
        self,
        session_repository: ISessionRepository,
        history_max_depth: int | None = None,
        default_name: str = DEFAULT_WORKFLOW_NAME,
        root_id: str = ROOT_NODE_ID,
        root_label: str = ROOT_NODE_LABEL,
    ):
        self._session_repository = session_repository
        self._history_max_depth = history_max_depth
        self._default_name = default_name
        self._root_id = root_id
        self._root_label = root_label

    def execute(self, name: str | None = None) -> WorkflowSession:
        session = WorkflowSession.start(
            name=(name or "").strip() or self._default_name,
            max_depth=self._history_max_depth,
            root_id=self._root_id,
            root_label=self._root_label,
        )
        self._session_repository.save(session)

        logger.info("session_created", session_id=session.id, workflow_name=session.name)
        return session
