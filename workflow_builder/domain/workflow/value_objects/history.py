from dataclasses import dataclass, replace

from workflow_builder.domain.workflow.entities.workflow import Workflow


@dataclass(frozen=True)
class History:
    """
    Linear undo/redo history over immutable workflow snapshots.

    ``past`` runs oldest to newest, ``future`` nearest to farthest. Every
    transition returns a new History; snapshots are never modified once stored.

    With ``max_depth`` set, a commit evicts the oldest entries of ``past`` until
    at most ``max_depth`` remain. Undo and redo never evict.
    """

    present: Workflow
    past: tuple[Workflow, ...] = ()
    future: tuple[Workflow, ...] = ()
    max_depth: int | None = None

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 1:
            raise ValueError("max_depth must be a positive integer or None")

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def commit(self, workflow: Workflow) -> "History":
        past = self.past + (self.present,)
        if self.max_depth is not None and len(past) > self.max_depth:
            past = past[len(past) - self.max_depth:]
        return replace(self, past=past, present=workflow, future=())

    def undo(self) -> "History":
        if not self.past:
            return self
        return replace(
            self,
            past=self.past[:-1],
            present=self.past[-1],
            future=(self.present,) + self.future,
        )

    def redo(self) -> "History":
        if not self.future:
            return self
        return replace(
            self,
            past=self.past + (self.present,),
            present=self.future[0],
            future=self.future[1:],
        )
