"""
Pure transformations over workflow snapshots.

Each operation takes a Workflow and returns a new one, or raises a
WorkflowException without touching its input. Callers commit the result to
history only when the call succeeds.
"""

from dataclasses import dataclass

from workflow_builder.domain.workflow.entities.node import Node
from workflow_builder.domain.workflow.entities.workflow import Workflow
from workflow_builder.domain.workflow.exceptions import (
    CannotDeleteRootError,
    InvalidFieldError,
    InvalidNodeError,
    InvalidNodeTypeError,
    InvalidSlotError,
    NoAvailableSlotError,
    TerminalNodeError,
)
from workflow_builder.domain.workflow.services.identifiers import IdFactory, new_node_id
from workflow_builder.domain.workflow.value_objects.node_type import NodeType

DEFAULT_NODE_LABEL = "..."
EDITABLE_FIELDS = frozenset({"label", "notes"})


@dataclass(frozen=True)
class DeleteResult:
    """
    Outcome of a subtree deletion.

    Attributes:
        workflow (Workflow): The snapshot without the subtree.
        removed_ids (tuple[str, ...]): Every identifier dropped, target first.
        dangling (bool): True when no parent referenced the target. The node is
            still removed; the flag only reports the repaired inconsistency.
    """

    workflow: Workflow
    removed_ids: tuple[str, ...]
    dangling: bool = False


def _coerce_type(node_type: NodeType | str) -> NodeType:
    try:
        return NodeType(node_type)
    except ValueError:
        raise InvalidNodeTypeError(str(node_type), "unknown node type") from None


def _resolve_slot(parent: Node, slot_index: int | None) -> int:
    if parent.type == NodeType.BRANCH:
        if slot_index is None:
            free = parent.slot_of(None)
            if free is None:
                raise NoAvailableSlotError(parent.id)
            return free
        if not 0 <= slot_index < len(parent.children):
            raise InvalidSlotError(parent.id, slot_index, len(parent.children))
        return slot_index

    if slot_index not in (None, 0):
        raise InvalidSlotError(parent.id, slot_index, parent.type.capacity)
    return 0


def add_node(
    workflow: Workflow,
    parent_id: str,
    node_type: NodeType | str,
    slot_index: int | None = None,
    *,
    label: str = DEFAULT_NODE_LABEL,
    id_factory: IdFactory = new_node_id,
) -> Workflow:
    """
    Attach a new node of ``node_type`` under ``parent_id``.

    For branch parents ``slot_index`` picks the True (0) or False (1) slot; when it
    is omitted the first empty slot is used. Start and action parents hold a single
    child. Filling an occupied slot replaces the link and drops the displaced
    subtree in the same snapshot, so no node is ever left unreachable.

    Raises:
        NodeNotFoundError: ``parent_id`` is absent.
        TerminalNodeError: The parent is an end node.
        InvalidNodeTypeError: Unknown type, or a second start node.
        NoAvailableSlotError: Branch parent is full and no slot was given.
        InvalidSlotError: ``slot_index`` outside the parent's slots.
    """
    node_type = _coerce_type(node_type)
    if node_type == NodeType.START:
        raise InvalidNodeTypeError(node_type.value, "a workflow has exactly one start node")

    parent = workflow.get(parent_id)
    if parent.type.is_terminal:
        raise TerminalNodeError(parent_id)

    slot = _resolve_slot(parent, slot_index)
    displaced = parent.children[slot] if slot < len(parent.children) else None

    node_id = id_factory()
    if workflow.has_node(node_id):
        raise InvalidNodeError(node_id, "identifier already in use")

    node = Node(
        id=node_id,
        type=node_type,
        label=label,
        notes="",
        children=node_type.empty_children(),
        parent_id=parent_id,
    )

    if parent.type == NodeType.BRANCH:
        children = list(parent.children)
        children[slot] = node_id
    else:
        children = [node_id]

    removals = workflow.subtree_ids(displaced) if displaced is not None else ()
    return workflow.evolve(
        updates={node_id: node, parent_id: parent.evolve(children=tuple(children))},
        removals=removals,
    )


def update_field(workflow: Workflow, node_id: str, field: str, value: str) -> Workflow:
    """
    Replace the ``label`` or ``notes`` of one node.

    Returns ``workflow`` itself when the value is unchanged.
    """
    if field not in EDITABLE_FIELDS:
        raise InvalidFieldError(field)

    node = workflow.get(node_id)
    if getattr(node, field) == value:
        return workflow
    return workflow.evolve(updates={node_id: node.evolve(**{field: value})})


def _find_parent(workflow: Workflow, node: Node) -> Node | None:
    if node.parent_id is not None:
        parent = workflow.nodes.get(node.parent_id)
        if parent is not None and node.id in parent.children:
            return parent

    # Stale back-reference: fall back to a full scan.
    for candidate in workflow.nodes.values():
        if node.id in candidate.children:
            return candidate
    return None


def delete_node(workflow: Workflow, node_id: str) -> DeleteResult:
    """
    Remove ``node_id`` and its whole subtree.

    The reference is cleared from the parent: branch slots become empty, single
    successors are dropped.

    Raises:
        CannotDeleteRootError: ``node_id`` is the root. Checked first.
        NodeNotFoundError: ``node_id`` is absent.
    """
    if node_id == workflow.root_id:
        raise CannotDeleteRootError(node_id)

    node = workflow.get(node_id)
    parent = _find_parent(workflow, node)
    removed = workflow.subtree_ids(node_id)

    updates = {}
    if parent is not None and parent.id not in removed:
        if parent.type == NodeType.BRANCH:
            children = tuple(None if child == node_id else child for child in parent.children)
        else:
            children = tuple(child for child in parent.children if child != node_id)
        updates[parent.id] = parent.evolve(children=children)

    return DeleteResult(
        workflow=workflow.evolve(updates=updates, removals=removed),
        removed_ids=removed,
        dangling=parent is None,
    )
