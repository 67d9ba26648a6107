from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from workflow_builder.domain.workflow.entities.workflow import ROOT_NODE_ID, ROOT_NODE_LABEL, Workflow
from workflow_builder.domain.workflow.exceptions import InvalidWorkflowError
from workflow_builder.domain.workflow.value_objects.history import History

DEFAULT_WORKFLOW_NAME = "My Workflow"


@dataclass
class WorkflowSession:
    """
    Aggregate Root for one editing session.

    Owns the undo/redo history of a single workflow. Only successful edits reach
    ``apply``; a snapshot identical to the present one is not recorded.
    """
    history: History
    name: str = DEFAULT_WORKFLOW_NAME
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def start(
        cls,
        name: str = DEFAULT_WORKFLOW_NAME,
        max_depth: int | None = None,
        root_id: str = ROOT_NODE_ID,
        root_label: str = ROOT_NODE_LABEL,
    ) -> "WorkflowSession":
        workflow = Workflow.initial(root_id=root_id, root_label=root_label)
        return cls(history=History(present=workflow, max_depth=max_depth), name=name)

    @property
    def present(self) -> Workflow:
        return self.history.present

    def apply(self, workflow: Workflow) -> bool:
        if workflow is self.history.present:
            return False
        self.history = self.history.commit(workflow)
        self._touch()
        return True

    def undo(self) -> bool:
        before = self.history
        self.history = before.undo()
        if self.history is before:
            return False
        self._touch()
        return True

    def redo(self) -> bool:
        before = self.history
        self.history = before.redo()
        if self.history is before:
            return False
        self._touch()
        return True

    def rename(self, name: str) -> None:
        name = name.strip()
        if not name:
            raise InvalidWorkflowError("Workflow name must not be empty")
        self.name = name
        self._touch()

    def to_export(self) -> dict:
        """Record handed to file export: the name plus the present snapshot."""
        return {"name": self.name, "workflow": self.present.to_dict()}

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
