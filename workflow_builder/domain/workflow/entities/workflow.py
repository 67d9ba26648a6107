from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from workflow_builder.domain.workflow.entities.node import Node
from workflow_builder.domain.workflow.exceptions import (
    InvalidWorkflowError,
    NodeNotFoundError,
    WorkflowException,
)
from workflow_builder.domain.workflow.value_objects.node_type import NodeType

ROOT_NODE_ID = "start"
ROOT_NODE_LABEL = "Start"


@dataclass(frozen=True)
class Workflow:
    """
    Immutable snapshot of a workflow tree.

    Every edit produces a new Workflow; unchanged Node objects are shared between
    consecutive snapshots, so keeping a long history is cheap.

    Attributes:
        root_id (str): Identifier of the unique start node.
        nodes (Mapping[str, Node]): Read-only mapping of identifier to node. This is
            the single source of truth; iteration order is insertion order.
    """

    root_id: str
    nodes: Mapping[str, Node]

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", MappingProxyType(dict(self.nodes)))

    @classmethod
    def initial(cls, root_id: str = ROOT_NODE_ID, root_label: str = ROOT_NODE_LABEL) -> "Workflow":
        """The session-start snapshot: a lone start node."""
        root = Node(id=root_id, type=NodeType.START, label=root_label)
        return cls(root_id=root_id, nodes={root_id: root})

    @property
    def root(self) -> Node:
        return self.get(self.root_id)

    def get(self, node_id: str) -> Node:
        try:
            return self.nodes[node_id]
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    def has_node(self, node_id: str) -> bool:
        return node_id in self.nodes

    def evolve(
        self,
        updates: Mapping[str, Node] | None = None,
        removals: Iterable[str] = (),
    ) -> "Workflow":
        """Return a new snapshot with ``updates`` applied and ``removals`` dropped."""
        nodes = dict(self.nodes)
        if updates:
            nodes.update(updates)
        for node_id in removals:
            nodes.pop(node_id, None)
        return Workflow(root_id=self.root_id, nodes=nodes)

    def subtree_ids(self, node_id: str) -> tuple[str, ...]:
        """Identifiers of ``node_id`` and all of its descendants, in pre-order."""
        if node_id not in self.nodes:
            return ()

        result: list[str] = []
        seen: set[str] = set()
        stack = [node_id]
        while stack:
            current = stack.pop()
            if current in seen or current not in self.nodes:
                continue
            seen.add(current)
            result.append(current)
            stack.extend(reversed(self.nodes[current].child_ids))
        return tuple(result)

    def reachable_ids(self) -> tuple[str, ...]:
        return self.subtree_ids(self.root_id)

    def count_by_type(self) -> dict[str, int]:
        counts = {node_type.value: 0 for node_type in NodeType}
        for node in self.nodes.values():
            counts[node.type.value] += 1
        return counts

    def to_dict(self) -> dict:
        return {
            "rootId": self.root_id,
            "nodes": {node_id: node.to_dict() for node_id, node in self.nodes.items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workflow":
        """
        Load a snapshot from its exported record and check the tree invariants.

        Parent back-references are not part of the record; they are rebuilt from
        the children lists.

        Raises:
            InvalidWorkflowError: If the payload is malformed or breaks an invariant.
        """
        from workflow_builder.domain.workflow.services.validator import find_invariant_violations

        if not isinstance(data, dict):
            raise InvalidWorkflowError("Workflow payload must be an object")

        root_id = data.get("rootId")
        raw_nodes = data.get("nodes")
        if not isinstance(root_id, str) or not isinstance(raw_nodes, dict):
            raise InvalidWorkflowError(
                "Workflow payload needs a string 'rootId' and a 'nodes' object",
                {"keys": sorted(data.keys())},
            )

        for node_id, raw in raw_nodes.items():
            _check_raw_node(node_id, raw)

        parents: dict[str, str] = {}
        for node_id, raw in raw_nodes.items():
            for child in raw.get("children") or []:
                if child is not None:
                    parents.setdefault(child, node_id)

        nodes: dict[str, Node] = {}
        for node_id, raw in raw_nodes.items():
            if raw.get("id", node_id) != node_id:
                raise InvalidWorkflowError(
                    f"Node key '{node_id}' does not match its id '{raw.get('id')}'",
                    {"node_id": node_id},
                )
            children = tuple(raw.get("children") or ())
            if raw.get("type") == NodeType.BRANCH.value and not children:
                children = NodeType.BRANCH.empty_children()
            try:
                nodes[node_id] = Node(
                    id=node_id,
                    type=raw.get("type"),
                    label=raw.get("label") or "",
                    notes=raw.get("notes") or "",
                    children=children,
                    parent_id=parents.get(node_id),
                )
            except WorkflowException as e:
                raise InvalidWorkflowError(e.message, e.context) from e

        workflow = cls(root_id=root_id, nodes=nodes)
        violations = find_invariant_violations(workflow)
        if violations:
            raise InvalidWorkflowError(
                "Workflow violates tree invariants", {"violations": violations}
            )
        return workflow


def _check_raw_node(node_id: str, raw) -> None:
    if not isinstance(raw, dict):
        raise InvalidWorkflowError(f"Node '{node_id}' must be an object", {"node_id": node_id})

    if not isinstance(raw.get("type"), str):
        raise InvalidWorkflowError(f"Node '{node_id}' needs a string 'type'", {"node_id": node_id})

    for field in ("label", "notes"):
        value = raw.get(field)
        if value is not None and not isinstance(value, str):
            raise InvalidWorkflowError(
                f"Node '{node_id}' field '{field}' must be a string",
                {"node_id": node_id, "field": field},
            )

    children = raw.get("children")
    if children is None:
        return
    if not isinstance(children, (list, tuple)):
        raise InvalidWorkflowError(f"Node '{node_id}' children must be a list", {"node_id": node_id})
    for child in children:
        if child is not None and not isinstance(child, str):
            raise InvalidWorkflowError(
                f"Node '{node_id}' children must be node ids or null",
                {"node_id": node_id},
            )
