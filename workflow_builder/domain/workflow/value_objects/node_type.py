from enum import Enum, IntEnum


class NodeType(str, Enum):
    """
    Enumeration of the node kinds a workflow can contain.

    Types:
        START: The unique entry node. Holds one successor.
        ACTION: A single step. Holds one successor.
        BRANCH: A two-way decision with fixed True/False slots.
        END: Terminal node. Holds no children.
    """

    START = "start"
    ACTION = "action"
    BRANCH = "branch"
    END = "end"

    @property
    def capacity(self) -> int:
        """Number of child slots a node of this type owns."""
        return {
            NodeType.START: 1,
            NodeType.ACTION: 1,
            NodeType.BRANCH: 2,
            NodeType.END: 0,
        }[self]

    @property
    def is_terminal(self) -> bool:
        return self.capacity == 0

    def empty_children(self) -> tuple[str | None, ...]:
        """Initial children for a freshly created node of this type."""
        if self == NodeType.BRANCH:
            return (None, None)
        return ()


class BranchSlot(IntEnum):
    """Positional slots of a branch node."""

    TRUE = 0
    FALSE = 1

    @property
    def label(self) -> str:
        return self.name.capitalize()
