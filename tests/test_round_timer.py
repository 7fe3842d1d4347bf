import pytest

from round_timer import RoundTimer
from scheduler import ManualScheduler


class Recorder:
    def __init__(self):
        self.ticks = []
        self.expired = 0

    def on_tick(self, remaining):
        self.ticks.append(remaining)

    def on_expire(self):
        self.expired += 1


@pytest.fixture()
def recorder():
    return Recorder()


def test_ticks_down_to_zero_then_expires_once(scheduler, recorder):
    timer = RoundTimer(scheduler)
    timer.start(5, recorder.on_tick, recorder.on_expire)

    scheduler.advance(5)

    assert recorder.ticks == [4, 3, 2, 1, 0]
    assert recorder.expired == 1
    assert not timer.running
    assert timer.expired


def test_no_ticks_after_expiry(scheduler, recorder):
    timer = RoundTimer(scheduler)
    timer.start(3, recorder.on_tick, recorder.on_expire)

    scheduler.advance(30)

    assert len(recorder.ticks) == 3
    assert recorder.expired == 1
    assert scheduler.pending == 0


def test_one_tick_per_second(scheduler, recorder):
    timer = RoundTimer(scheduler)
    timer.start(10, recorder.on_tick, recorder.on_expire)

    scheduler.advance(0.5)
    assert recorder.ticks == []
    scheduler.advance(0.5)
    assert recorder.ticks == [9]
    scheduler.advance(2)
    assert recorder.ticks == [9, 8, 7]


def test_stop_before_expiry_suppresses_expire(scheduler, recorder):
    timer = RoundTimer(scheduler)
    timer.start(10, recorder.on_tick, recorder.on_expire)

    scheduler.advance(4)
    timer.stop()
    scheduler.advance(20)

    assert recorder.ticks == [9, 8, 7, 6]
    assert recorder.expired == 0
    assert timer.remaining == 6


def test_stop_is_idempotent(scheduler, recorder):
    timer = RoundTimer(scheduler)
    timer.stop()
    timer.start(2, recorder.on_tick, recorder.on_expire)
    timer.stop()
    timer.stop()
    scheduler.advance(5)
    assert recorder.ticks == []


def test_stop_after_expiry_is_a_no_op(scheduler, recorder):
    timer = RoundTimer(scheduler)
    timer.start(1, recorder.on_tick, recorder.on_expire)
    scheduler.advance(1)

    timer.stop()

    assert recorder.expired == 1
    assert timer.expired


def test_restart_replaces_previous_countdown(scheduler, recorder):
    timer = RoundTimer(scheduler)
    timer.start(3, recorder.on_tick, recorder.on_expire)
    scheduler.advance(1)

    timer.start(2, recorder.on_tick, recorder.on_expire)
    scheduler.advance(10)

    assert recorder.ticks == [2, 1, 0]
    assert recorder.expired == 1


def test_stop_from_inside_tick(scheduler, recorder):
    timer = RoundTimer(scheduler)

    def on_tick(remaining):
        recorder.on_tick(remaining)
        if remaining == 0:
            timer.stop()

    timer.start(2, on_tick, recorder.on_expire)
    scheduler.advance(5)

    assert recorder.ticks == [1, 0]
    assert recorder.expired == 0


def test_rejects_non_positive_duration(scheduler, recorder):
    timer = RoundTimer(scheduler)
    with pytest.raises(ValueError):
        timer.start(0, recorder.on_tick, recorder.on_expire)


def test_manual_scheduler_runs_in_due_order():
    scheduler = ManualScheduler()
    fired = []
    scheduler.call_later(2, lambda: fired.append('b'))
    scheduler.call_later(1, lambda: fired.append('a'))
    cancelled = scheduler.call_later(1.5, lambda: fired.append('x'))
    cancelled.cancel()

    assert scheduler.advance(3) == 2
    assert fired == ['a', 'b']
    assert scheduler.now == 3


def test_manual_scheduler_rejects_going_backwards():
    with pytest.raises(ValueError):
        ManualScheduler().advance(-1)


def test_run_until_idle_drains_a_countdown(recorder):
    scheduler = ManualScheduler()
    timer = RoundTimer(scheduler)
    timer.start(4, recorder.on_tick, recorder.on_expire)

    assert scheduler.run_until_idle() == 4
    assert scheduler.now == 4
    assert recorder.expired == 1
