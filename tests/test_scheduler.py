import pytest

from mazeswipe.services.scheduler import TaskGroup


def test_call_later_fires_once_when_due(scheduler):
    fired = []
    scheduler.call_later(2.0, lambda: fired.append(scheduler.now))
    assert scheduler.advance(1.5) == 0
    assert scheduler.advance(0.5) == 1
    assert fired == [2.0]
    assert scheduler.advance(10) == 0


def test_call_every_repeats_with_fixed_cadence(scheduler):
    ticks = []
    task = scheduler.call_every(1.0, lambda: ticks.append(scheduler.now))
    scheduler.advance(3.5)
    assert ticks == [1.0, 2.0, 3.0]
    task.cancel()
    scheduler.advance(5)
    assert len(ticks) == 3
    assert not task.active


def test_first_delay_overrides_interval(scheduler):
    ticks = []
    scheduler.call_every(1.0, lambda: ticks.append(scheduler.now), first_delay=0.25)
    scheduler.advance(2.0)
    assert ticks == [0.25, 1.25]


def test_callbacks_fire_in_due_order(scheduler):
    order = []
    scheduler.call_later(3, lambda: order.append("c"))
    scheduler.call_later(1, lambda: order.append("a"))
    scheduler.call_later(2, lambda: order.append("b"))
    scheduler.call_later(2, lambda: order.append("b2"))
    scheduler.advance(5)
    assert order == ["a", "b", "b2", "c"]


def test_tasks_scheduled_by_callbacks_run_in_same_window(scheduler):
    seen = []

    def first():
        seen.append("first")
        scheduler.call_later(0.5, lambda: seen.append("second"))

    scheduler.call_later(1, first)
    scheduler.advance(2)
    assert seen == ["first", "second"]
    assert scheduler.now == 2


def test_cancelled_task_never_fires(scheduler):
    fired = []
    task = scheduler.call_later(1, lambda: fired.append(1))
    task.cancel()
    task.cancel()
    scheduler.advance(2)
    assert fired == []
    assert scheduler.pending() == 0


def test_invalid_arguments(scheduler):
    with pytest.raises(ValueError):
        scheduler.call_later(-1, lambda: None)
    with pytest.raises(ValueError):
        scheduler.call_every(0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-0.1)


def test_next_due_tracks_earliest_pending(scheduler):
    assert scheduler.next_due() is None
    hits = []
    scheduler.call_later(4, lambda: hits.append(4))
    scheduler.call_later(2, lambda: hits.append(2))
    assert scheduler.next_due() == 2
    assert scheduler.advance(2) == 1
    assert scheduler.next_due() == 4
    assert scheduler.advance(2) == 1
    assert hits == [2, 4]
    assert scheduler.next_due() is None


def test_task_group_cancels_together(scheduler):
    group = TaskGroup(scheduler)
    fired = []
    group.call_every(1, lambda: fired.append("tick"))
    group.call_later(5, lambda: fired.append("reveal"))
    scheduler.advance(2)
    assert group.cancel_all() == 2
    scheduler.advance(10)
    assert fired == ["tick", "tick"]
    assert scheduler.pending() == 0
    assert group.cancel_all() == 0


def test_fired_one_shot_not_counted_as_active(scheduler):
    group = TaskGroup(scheduler)
    group.call_later(1, lambda: None)
    scheduler.advance(1)
    assert group.cancel_all() == 0
