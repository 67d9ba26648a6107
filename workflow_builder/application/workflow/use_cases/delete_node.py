from workflow_builder.domain.workflow.services.node_store import DeleteResult, delete_node
from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.shared.logger import get_logger

logger = get_logger(__name__)


class DeleteNodeUseCase:
    def __init__(self, session_repository: ISessionRepository):
        self._session_repository = session_repository

    def execute(self, session_id: str, node_id: str) -> DeleteResult:
        """
        Deletes a node together with its subtree.

        Root deletion raises CannotDeleteRootError and is never committed. A node no
        parent referenced is still removed; the repair is reported as a warning.
        """
        session = self._session_repository.get_or_raise(session_id)
        result = delete_node(session.present, node_id)

        session.apply(result.workflow)
        self._session_repository.save(session)

        if result.dangling:
            logger.warning("dangling_node_detected", session_id=session_id, node_id=node_id)

        logger.info(
            "node_deleted",
            session_id=session_id,
            node_id=node_id,
            removed_count=len(result.removed_ids),
        )
        return result
