from workflow_builder.domain.workflow.entities.workflow import Workflow
from workflow_builder.domain.workflow.services.node_store import update_field
from workflow_builder.ports.secondary.session_repository import ISessionRepository
from workflow_builder.shared.logger import get_logger

logger = get_logger(__name__)


class UpdateFieldUseCase:
    def __init__(self, session_repository: ISessionRepository):
        self._session_repository = session_repository

    def execute(self, session_id: str, node_id: str, field: str, value: str) -> Workflow:
        """
        Edits the label or notes of a node.

        Writing the value a node already has is not recorded in history.
        """
        session = self._session_repository.get_or_raise(session_id)
        workflow = update_field(session.present, node_id, field, value)

        if session.apply(workflow):
            self._session_repository.save(session)
            logger.info("node_field_updated", session_id=session_id, node_id=node_id, field=field)
        else:
            logger.debug("node_field_unchanged", session_id=session_id, node_id=node_id, field=field)

        return session.present
