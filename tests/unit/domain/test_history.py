import pytest

from workflow_builder.domain.workflow.entities.workflow import Workflow
from workflow_builder.domain.workflow.services.identifiers import sequential_ids
from workflow_builder.domain.workflow.services.node_store import add_node
from workflow_builder.domain.workflow.value_objects.history import History


@pytest.fixture
def snapshots():
    """Four successive snapshots: start, +action, +action, +end."""
    ids = sequential_ids()
    first = Workflow.initial()
    second = add_node(first, "start", "action", id_factory=ids)
    third = add_node(second, "n1", "action", id_factory=ids)
    fourth = add_node(third, "n2", "end", id_factory=ids)
    return [first, second, third, fourth]


def history_of(snapshots, max_depth=None) -> History:
    history = History(present=snapshots[0], max_depth=max_depth)
    for snapshot in snapshots[1:]:
        history = history.commit(snapshot)
    return history


class TestHistory:
    def test_fresh_history_has_nothing_to_undo_or_redo(self, snapshots):
        history = History(present=snapshots[0])
        assert not history.can_undo
        assert not history.can_redo

    def test_commit_pushes_present_onto_past(self, snapshots):
        history = History(present=snapshots[0]).commit(snapshots[1])

        assert history.present is snapshots[1]
        assert history.past == (snapshots[0],)
        assert history.future == ()

    def test_undo_on_empty_past_is_noop(self, snapshots):
        history = History(present=snapshots[0])
        assert history.undo() is history

    def test_redo_on_empty_future_is_noop(self, snapshots):
        history = history_of(snapshots)
        assert history.redo() is history

    def test_undo_moves_present_to_future(self, snapshots):
        history = history_of(snapshots).undo()

        assert history.present is snapshots[2]
        assert history.past == tuple(snapshots[:2])
        assert history.future == (snapshots[3],)

    def test_repeated_undo_orders_future_nearest_first(self, snapshots):
        history = history_of(snapshots).undo().undo()

        assert history.present is snapshots[1]
        assert history.future == (snapshots[2], snapshots[3])

    def test_undo_then_redo_round_trips(self, snapshots):
        history = history_of(snapshots).undo()
        restored = history.undo().redo()

        assert restored == history
        assert restored.present is history.present
        assert len(restored.past) == len(history.past)
        assert len(restored.future) == len(history.future)

    def test_commit_discards_redo_chain(self, snapshots):
        history = history_of(snapshots).undo().undo()
        branch = add_node(history.present, "n1", "end", id_factory=lambda: "alt")

        history = history.commit(branch)

        assert history.future == ()
        assert not history.can_redo
        assert history.past[-1] is snapshots[1]

    def test_bounded_history_evicts_oldest_first(self, snapshots):
        history = history_of(snapshots, max_depth=2)

        assert history.past == (snapshots[1], snapshots[2])
        assert history.present is snapshots[3]

    def test_bounded_history_round_trip_keeps_depth(self, snapshots):
        history = history_of(snapshots, max_depth=2)
        assert history.undo().redo() == history

    def test_invalid_depth_is_rejected(self, snapshots):
        with pytest.raises(ValueError):
            History(present=snapshots[0], max_depth=0)

    def test_past_snapshots_are_not_affected_by_later_edits(self, snapshots):
        history = history_of(snapshots)
        oldest = history.past[0]

        history.commit(add_node(history.present, "start", "end", id_factory=lambda: "x"))

        assert oldest is snapshots[0]
        assert list(oldest.nodes) == ["start"]
