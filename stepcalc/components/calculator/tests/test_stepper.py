import asyncio

import pytest

from stepcalc.components.calculator.stepper import Stepper, triangular, triangular_prefix


def test_triangular_closed_form():
    assert [triangular(i) for i in range(1, 8)] == [1, 3, 6, 10, 15, 21, 28]
    assert triangular(99) == sum(range(1, 100))


def test_triangular_prefix_is_built_fresh_each_call():
    first = triangular_prefix(3)
    first.append(-1)
    assert triangular_prefix(3) == [1, 3, 6]
    assert triangular_prefix(0) == []


class Target:
    """Mutable live target shared between a test and its runs."""

    def __init__(self, value):
        self.value = value

    def __call__(self):
        return self.value


def test_emits_growing_arrays_with_growing_delays(recording_sleep):
    emitted = []
    stepper = Stepper(time_unit_seconds=0.001, sleep=recording_sleep)

    async def scenario():
        task = stepper.start(3, emitted.append, Target(3))
        await task

    asyncio.run(scenario())

    assert emitted == [[1], [1, 3], [1, 3, 6]]
    assert recording_sleep.calls == pytest.approx([0.1, 0.2, 0.3])


def test_zero_emits_nothing_and_never_waits(recording_sleep):
    emitted = []
    stepper = Stepper(sleep=recording_sleep)

    async def scenario():
        await stepper.start(0, emitted.append, Target(0))

    asyncio.run(scenario())

    assert emitted == []
    assert recording_sleep.calls == []


def test_run_stops_once_target_moves_on(recording_sleep):
    emitted = []
    target = Target(4)
    stepper = Stepper(sleep=recording_sleep)

    def on_step(series):
        emitted.append(series)
        if len(series) == 2:
            target.value = 9

    async def scenario():
        await stepper.start(4, on_step, target)

    asyncio.run(scenario())

    assert emitted == [[1], [1, 3]]
    # The third wait is still consumed before the run notices it was superseded
    assert len(recording_sleep.calls) == 3


def test_same_target_while_running_is_a_noop(recording_sleep):
    emitted = []
    stepper = Stepper(sleep=recording_sleep)
    target = Target(3)

    async def scenario():
        first = stepper.start(3, emitted.append, target)
        second = stepper.start(3, emitted.append, target)
        assert second is None
        assert stepper.pending == 1
        await first

    asyncio.run(scenario())

    assert emitted == [[1], [1, 3], [1, 3, 6]]


def test_restarting_same_target_after_switching_away_drops_older_run(recording_sleep):
    emitted = []
    stepper = Stepper(sleep=recording_sleep)
    target = Target(3)

    async def scenario():
        stepper.start(3, lambda s: emitted.append(("old", s)), target)
        target.value = 1
        stepper.start(1, lambda s: emitted.append(("one", s)), target)
        target.value = 3
        latest = stepper.start(3, lambda s: emitted.append(("new", s)), target)
        assert latest is not None
        await latest
        await asyncio.sleep(0)

    asyncio.run(scenario())

    assert emitted == [("new", [1]), ("new", [1, 3]), ("new", [1, 3, 6])]


def test_real_delays_grow_step_by_step():
    unit = 0.0005
    stepper = Stepper(time_unit_seconds=unit)
    stamps = []

    async def scenario():
        loop = asyncio.get_running_loop()
        started = loop.time()
        await stepper.start(3, lambda s: stamps.append(loop.time() - started), Target(3))

    asyncio.run(scenario())

    tolerance = 0.005
    assert len(stamps) == 3
    assert stamps[0] >= 100 * unit - tolerance
    assert stamps[1] - stamps[0] >= 200 * unit - tolerance
    assert stamps[2] - stamps[1] >= 300 * unit - tolerance


def test_shutdown_cancels_pending_runs():
    emitted = []
    stepper = Stepper(time_unit_seconds=1.0)

    async def scenario():
        task = stepper.start(5, emitted.append, Target(5))
        await asyncio.sleep(0)
        await stepper.shutdown()
        assert task.cancelled()
        assert stepper.pending == 0
        assert stepper.live_target is None

    asyncio.run(scenario())

    assert emitted == []
