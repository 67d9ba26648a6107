from collections import Counter

from workflow_builder.domain.workflow.entities.workflow import Workflow
from workflow_builder.domain.workflow.value_objects.node_type import NodeType

NO_END_NODE_WARNING = "Workflow has no End node"
INCOMPLETE_BRANCH_WARNING = "This workflow has an incomplete branch"


def validate(workflow: Workflow) -> list[str]:
    """
    Advisory warnings for a snapshot, in node insertion order.

    The End-node check scans every node, not only those reachable from the root.
    One incomplete-branch warning is emitted per offending branch.
    """
    warnings = []
    if not any(node.type == NodeType.END for node in workflow.nodes.values()):
        warnings.append(NO_END_NODE_WARNING)

    for node in workflow.nodes.values():
        if node.is_incomplete_branch:
            warnings.append(INCOMPLETE_BRANCH_WARNING)

    return warnings


def find_invariant_violations(workflow: Workflow) -> list[str]:
    """Describe every broken tree invariant of ``workflow``; empty when it is sound."""
    violations = []
    nodes = workflow.nodes

    root = nodes.get(workflow.root_id)
    if root is None:
        violations.append(f"root '{workflow.root_id}' is missing")
    elif root.type != NodeType.START:
        violations.append(f"root '{workflow.root_id}' has type '{root.type.value}', expected 'start'")
    elif root.parent_id is not None:
        violations.append(f"root '{workflow.root_id}' has a parent reference")

    references: Counter[str] = Counter()
    for node_id, node in nodes.items():
        if node.type == NodeType.BRANCH and len(node.children) != 2:
            violations.append(f"branch '{node_id}' has {len(node.children)} slots")
        for child in node.child_ids:
            references[child] += 1
            if child not in nodes:
                violations.append(f"node '{node_id}' references missing child '{child}'")
            elif nodes[child].parent_id != node_id:
                violations.append(f"node '{child}' does not point back to parent '{node_id}'")

    for child, count in references.items():
        if count > 1:
            violations.append(f"node '{child}' has {count} parents")
        if child == workflow.root_id:
            violations.append(f"root '{child}' is referenced as a child")

    if root is not None:
        reachable = set(workflow.reachable_ids())
        for node_id in nodes:
            if node_id not in reachable:
                violations.append(f"node '{node_id}' is not reachable from the root")

    return violations
