from dataclasses import FrozenInstanceError

import pytest

from workflow_builder.domain.workflow.entities.node import Node
from workflow_builder.domain.workflow.exceptions import InvalidNodeError, InvalidNodeTypeError
from workflow_builder.domain.workflow.value_objects.node_type import BranchSlot, NodeType


class TestNodeType:
    def test_capacities(self):
        assert NodeType.START.capacity == 1
        assert NodeType.ACTION.capacity == 1
        assert NodeType.BRANCH.capacity == 2
        assert NodeType.END.capacity == 0

    def test_only_end_is_terminal(self):
        assert NodeType.END.is_terminal
        assert not NodeType.START.is_terminal
        assert not NodeType.BRANCH.is_terminal

    def test_branch_starts_with_two_empty_slots(self):
        assert NodeType.BRANCH.empty_children() == (None, None)
        assert NodeType.ACTION.empty_children() == ()

    def test_branch_slot_labels(self):
        assert BranchSlot.TRUE == 0
        assert BranchSlot(1) is BranchSlot.FALSE
        assert [slot.label for slot in BranchSlot] == ["True", "False"]


class TestNode:
    def test_type_is_coerced_from_string(self):
        node = Node(id="a", type="action")
        assert node.type is NodeType.ACTION

    def test_unknown_type_is_rejected(self):
        with pytest.raises(InvalidNodeTypeError):
            Node(id="a", type="loop")

    def test_children_are_stored_as_tuple(self):
        node = Node(id="a", type=NodeType.ACTION, children=["b"])
        assert node.children == ("b",)

    def test_branch_requires_exactly_two_slots(self):
        with pytest.raises(InvalidNodeError):
            Node(id="b", type=NodeType.BRANCH, children=(None,))
        with pytest.raises(InvalidNodeError):
            Node(id="b", type=NodeType.BRANCH, children=("x", "y", "z"))

    def test_action_holds_a_single_child(self):
        with pytest.raises(InvalidNodeError):
            Node(id="a", type=NodeType.ACTION, children=("x", "y"))

    def test_end_holds_no_children(self):
        with pytest.raises(InvalidNodeError):
            Node(id="e", type=NodeType.END, children=("x",))

    def test_empty_slots_only_on_branches(self):
        with pytest.raises(InvalidNodeError):
            Node(id="a", type=NodeType.ACTION, children=(None,))

    def test_incomplete_branch(self):
        assert Node(id="b", type=NodeType.BRANCH, children=("x", None)).is_incomplete_branch
        assert not Node(id="b", type=NodeType.BRANCH, children=("x", "y")).is_incomplete_branch
        assert not Node(id="a", type=NodeType.ACTION).is_incomplete_branch

    def test_slot_of(self):
        node = Node(id="b", type=NodeType.BRANCH, children=(None, "y"))
        assert node.slot_of("y") == BranchSlot.FALSE
        assert node.slot_of(None) == BranchSlot.TRUE
        assert node.slot_of("missing") is None

    def test_to_dict_omits_parent_reference(self):
        node = Node(id="b", type=NodeType.BRANCH, label="Ok?", children=("x", None), parent_id="a")
        assert node.to_dict() == {
            "id": "b",
            "type": "branch",
            "label": "Ok?",
            "notes": "",
            "children": ["x", None],
        }

    def test_node_is_immutable(self):
        node = Node(id="a", type=NodeType.ACTION)
        with pytest.raises(FrozenInstanceError):
            node.label = "changed"

    def test_evolve_returns_new_node(self):
        node = Node(id="a", type=NodeType.ACTION, label="old")
        changed = node.evolve(label="new")
        assert changed.label == "new"
        assert node.label == "old"
