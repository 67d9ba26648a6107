import pytest

from workflow_builder.domain.workflow.entities.node import Node
from workflow_builder.domain.workflow.entities.workflow import Workflow
from workflow_builder.domain.workflow.exceptions import (
    CannotDeleteRootError,
    InvalidFieldError,
    InvalidNodeError,
    InvalidNodeTypeError,
    InvalidSlotError,
    NoAvailableSlotError,
    NodeNotFoundError,
    TerminalNodeError,
)
from workflow_builder.domain.workflow.services.identifiers import sequential_ids
from workflow_builder.domain.workflow.services.node_store import add_node, delete_node, update_field
from workflow_builder.domain.workflow.services.validator import find_invariant_violations
from workflow_builder.domain.workflow.value_objects.node_type import BranchSlot, NodeType


@pytest.fixture
def ids():
    return sequential_ids()


@pytest.fixture
def branching(ids):
    """start -> n1 (action) -> n2 (branch: True=n3 action, False=n4 end)."""
    workflow = Workflow.initial()
    workflow = add_node(workflow, "start", NodeType.ACTION, id_factory=ids)
    workflow = add_node(workflow, "n1", NodeType.BRANCH, id_factory=ids)
    workflow = add_node(workflow, "n2", NodeType.ACTION, BranchSlot.TRUE, id_factory=ids)
    return add_node(workflow, "n2", NodeType.END, BranchSlot.FALSE, id_factory=ids)


class TestAddNode:
    def test_add_under_start(self, ids):
        initial = Workflow.initial()

        workflow = add_node(initial, "start", "action", id_factory=ids)

        assert workflow.get("start").children == ("n1",)
        node = workflow.get("n1")
        assert node.type == NodeType.ACTION
        assert node.label == "..."
        assert node.notes == ""
        assert node.children == ()
        assert node.parent_id == "start"
        assert len(initial.nodes) == 1

    def test_new_branch_has_two_empty_slots(self, ids):
        workflow = add_node(Workflow.initial(), "start", "branch", id_factory=ids)
        assert workflow.get("n1").children == (None, None)

    def test_branch_fills_first_empty_slot(self, ids):
        workflow = add_node(Workflow.initial(), "start", "branch", id_factory=ids)
        workflow = add_node(workflow, "n1", "action", id_factory=ids)
        assert workflow.get("n1").children == ("n2", None)

        workflow = add_node(workflow, "n1", "end", id_factory=ids)
        assert workflow.get("n1").children == ("n2", "n3")

    def test_branch_scan_skips_occupied_true_slot(self, ids):
        workflow = add_node(Workflow.initial(), "start", "branch", id_factory=ids)
        workflow = add_node(workflow, "n1", "action", 1, id_factory=ids)
        workflow = add_node(workflow, "n1", "end", id_factory=ids)
        assert workflow.get("n1").children == ("n3", "n2")

    def test_full_branch_without_index_fails(self, branching, ids):
        with pytest.raises(NoAvailableSlotError):
            add_node(branching, "n2", "action", id_factory=ids)
        assert branching.get("n2").children == ("n3", "n4")

    def test_explicit_slot_overwrites_and_drops_displaced_subtree(self, branching, ids):
        workflow = add_node(branching, "n3", "end", id_factory=ids)  # n5 under n3
        workflow = add_node(workflow, "n2", "action", 0, id_factory=ids)  # n6 replaces n3

        assert workflow.get("n2").children == ("n6", "n4")
        assert "n3" not in workflow.nodes
        assert "n5" not in workflow.nodes
        assert find_invariant_violations(workflow) == []

    def test_occupied_single_slot_is_replaced_without_orphans(self, branching, ids):
        workflow = add_node(branching, "start", "end", id_factory=ids)

        assert workflow.get("start").children == ("n5",)
        assert set(workflow.nodes) == {"start", "n5"}
        assert find_invariant_violations(workflow) == []

    def test_end_parent_is_rejected(self, branching, ids):
        with pytest.raises(TerminalNodeError):
            add_node(branching, "n4", "action", id_factory=ids)

    def test_second_start_node_is_rejected(self, ids):
        with pytest.raises(InvalidNodeTypeError):
            add_node(Workflow.initial(), "start", NodeType.START, id_factory=ids)

    def test_unknown_type_is_rejected(self, ids):
        with pytest.raises(InvalidNodeTypeError):
            add_node(Workflow.initial(), "start", "loop", id_factory=ids)

    def test_missing_parent_is_rejected(self, ids):
        with pytest.raises(NodeNotFoundError):
            add_node(Workflow.initial(), "ghost", "action", id_factory=ids)

    @pytest.mark.parametrize("parent_id,slot", [("n2", 2), ("n2", -1), ("n1", 1)])
    def test_out_of_range_slot_is_rejected(self, branching, ids, parent_id, slot):
        with pytest.raises(InvalidSlotError):
            add_node(branching, parent_id, "action", slot, id_factory=ids)

    def test_identifier_collision_is_rejected(self):
        with pytest.raises(InvalidNodeError):
            add_node(Workflow.initial(), "start", "action", id_factory=lambda: "start")

    def test_custom_label(self, ids):
        workflow = add_node(Workflow.initial(), "start", "action", label="Send mail", id_factory=ids)
        assert workflow.get("n1").label == "Send mail"

    def test_untouched_nodes_are_shared(self, branching, ids):
        workflow = add_node(branching, "n3", "end", id_factory=ids)
        assert workflow.nodes["n4"] is branching.nodes["n4"]
        assert workflow.nodes["start"] is branching.nodes["start"]

    def test_default_ids_are_unique(self):
        workflow = Workflow.initial()
        workflow = add_node(workflow, "start", "branch")
        (branch_id,) = workflow.root.children
        workflow = add_node(workflow, branch_id, "end")
        workflow = add_node(workflow, branch_id, "end")
        assert len(set(workflow.get(branch_id).children)) == 2


class TestUpdateField:
    def test_update_label(self, branching):
        workflow = update_field(branching, "n2", "label", "Approved?")

        assert workflow.get("n2").label == "Approved?"
        assert workflow.get("n2").notes == ""
        assert branching.get("n2").label == "..."

    def test_update_notes_leaves_label(self, branching):
        workflow = update_field(branching, "n1", "notes", "calls the CRM")
        assert workflow.get("n1").notes == "calls the CRM"
        assert workflow.get("n1").label == "..."

    def test_other_nodes_are_shared(self, branching):
        workflow = update_field(branching, "n1", "label", "x")
        for node_id in ("start", "n2", "n3", "n4"):
            assert workflow.nodes[node_id] is branching.nodes[node_id]

    def test_unchanged_value_returns_same_snapshot(self, branching):
        assert update_field(branching, "n1", "label", "...") is branching

    def test_unknown_field_is_rejected(self, branching):
        with pytest.raises(InvalidFieldError):
            update_field(branching, "n1", "type", "end")

    def test_missing_node_is_rejected(self, branching):
        with pytest.raises(NodeNotFoundError):
            update_field(branching, "ghost", "label", "x")


class TestDeleteNode:
    def test_root_cannot_be_deleted(self, branching):
        with pytest.raises(CannotDeleteRootError):
            delete_node(branching, "start")

    def test_root_check_comes_before_lookup(self):
        workflow = Workflow(root_id="gone", nodes={})
        with pytest.raises(CannotDeleteRootError):
            delete_node(workflow, "gone")

    def test_missing_node_is_rejected(self, branching):
        with pytest.raises(NodeNotFoundError):
            delete_node(branching, "ghost")

    def test_delete_leaf_from_action_parent(self, ids):
        workflow = add_node(Workflow.initial(), "start", "action", id_factory=ids)

        result = delete_node(workflow, "n1")

        assert result.workflow.get("start").children == ()
        assert result.removed_ids == ("n1",)
        assert not result.dangling

    def test_delete_branch_child_empties_its_slot(self, branching):
        result = delete_node(branching, "n3")

        assert result.workflow.get("n2").children == (None, "n4")
        assert "n3" not in result.workflow.nodes

    def test_delete_cascades_over_subtree(self, branching):
        result = delete_node(branching, "n2")

        assert set(result.removed_ids) == {"n2", "n3", "n4"}
        assert len(result.workflow.nodes) == len(branching.nodes) - len(branching.subtree_ids("n2"))
        assert result.workflow.get("n1").children == ()
        assert find_invariant_violations(result.workflow) == []

    def test_input_snapshot_is_not_modified(self, branching):
        delete_node(branching, "n2")
        assert set(branching.nodes) == {"start", "n1", "n2", "n3", "n4"}
        assert branching.get("n1").children == ("n2",)

    def test_unreferenced_node_is_removed_and_reported(self):
        workflow = Workflow(
            root_id="start",
            nodes={
                "start": Node(id="start", type=NodeType.START),
                "stray": Node(id="stray", type=NodeType.ACTION, parent_id="start"),
            },
        )

        result = delete_node(workflow, "stray")

        assert result.dangling
        assert set(result.workflow.nodes) == {"start"}

    def test_stale_parent_reference_falls_back_to_scan(self):
        workflow = Workflow(
            root_id="start",
            nodes={
                "start": Node(id="start", type=NodeType.START, children=("a",)),
                "a": Node(id="a", type=NodeType.ACTION, parent_id="elsewhere"),
            },
        )

        result = delete_node(workflow, "a")

        assert not result.dangling
        assert result.workflow.get("start").children == ()
