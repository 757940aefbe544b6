from auto_renumber.models import (
    Change,
    PendingChanges,
    ReorderContext,
    ReorderState,
    ScopeBounds,
)


def test_reorder_state_members():
    assert list(ReorderState) == [
        ReorderState.IDLE,
        ReorderState.SCOPE_LOCATED,
        ReorderState.BOUNDARY_COMPUTED,
        ReorderState.NO_OP,
        ReorderState.RELOCATED,
    ]


def test_reorder_context_defaults():
    ctx = ReorderContext(trigger=3)

    assert ctx.state is ReorderState.IDLE
    assert ctx.scope is None
    assert ctx.destination is None


def test_scope_bounds_length():
    bounds = ScopeBounds(1, 4)

    assert len(bounds) == 3


def test_pending_changes_truthiness():
    assert not PendingChanges()
    assert PendingChanges(changes=[Change(0, "1. a")], end_index=0)
