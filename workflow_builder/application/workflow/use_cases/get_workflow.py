from workflow_builder.domain.workflow.entities.session import WorkflowSession
from workflow_builder.domain.workflow.services.validator import validate
from workflow_builder.ports.secondary.session_repository import ISessionRepository


def describe_session(session: WorkflowSession) -> dict:
    """Read view of a session: present snapshot, warnings and history availability."""
    history = session.history
    return {
        "session_id": session.id,
        "name": session.name,
        "workflow": session.present.to_dict(),
        "warnings": validate(session.present),
        "can_undo": history.can_undo,
        "can_redo": history.can_redo,
        "undo_depth": len(history.past),
        "redo_depth": len(history.future),
    }


class GetWorkflowUseCase:
    def __init__(self, session_repository: ISessionRepository):
        self._session_repository = session_repository

    def execute(self, session_id: str) -> dict:
        """Returns the present snapshot of a session along with its validation warnings."""
        session = self._session_repository.get_or_raise(session_id)
        return describe_session(session)

    def warnings(self, session_id: str) -> list[str]:
        session = self._session_repository.get_or_raise(session_id)
        return validate(session.present)
