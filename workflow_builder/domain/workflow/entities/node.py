from dataclasses import dataclass, replace

from workflow_builder.domain.workflow.exceptions import InvalidNodeError, InvalidNodeTypeError
from workflow_builder.domain.workflow.value_objects.node_type import NodeType


@dataclass(frozen=True)
class Node:
    """
    A single typed step of a workflow tree.

    Attributes:
        id (str): Identifier, unique within the workflow and never reassigned.
        type (NodeType): Kind of node, fixed at creation.
        label (str): User-editable display text.
        notes (str): User-editable annotation, independent of the label.
        children (tuple[str | None, ...]): Child slots. Branches always own exactly
            two positional slots (True, False), either of which may be empty.
            Start and action nodes own at most one child, end nodes none.
        parent_id (str | None): Back-reference to the node holding this one in its
            children. ``None`` for the root. Non-owning; used for O(1) detach.
    """

    id: str
    type: NodeType
    label: str = ""
    notes: str = ""
    children: tuple[str | None, ...] = ()
    parent_id: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, NodeType):
            try:
                object.__setattr__(self, "type", NodeType(self.type))
            except ValueError:
                raise InvalidNodeTypeError(str(self.type), "unknown node type") from None
        object.__setattr__(self, "children", tuple(self.children))
        self._validate_slots()

    def _validate_slots(self) -> None:
        if self.type == NodeType.BRANCH:
            if len(self.children) != 2:
                raise InvalidNodeError(
                    self.id, f"branch nodes need exactly 2 slots, got {len(self.children)}"
                )
            return

        if len(self.children) > self.type.capacity:
            raise InvalidNodeError(
                self.id,
                f"{self.type.value} nodes hold at most {self.type.capacity} child(ren)",
            )
        if any(child is None for child in self.children):
            raise InvalidNodeError(self.id, "only branch nodes may hold empty slots")

    @property
    def child_ids(self) -> tuple[str, ...]:
        return tuple(child for child in self.children if child is not None)

    @property
    def is_incomplete_branch(self) -> bool:
        return self.type == NodeType.BRANCH and len(self.child_ids) < 2

    def slot_of(self, child_id: str | None) -> int | None:
        for index, child in enumerate(self.children):
            if child == child_id:
                return index
        return None

    def evolve(self, **changes) -> "Node":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "label": self.label,
            "notes": self.notes,
            "children": list(self.children),
        }
