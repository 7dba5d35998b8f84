import asyncio

import pytest

from version_gate.tasks.single_flight import SingleFlightGate


class _Producer:
    """Producer that counts invocations and resolves when released."""

    def __init__(self, result="done", error: BaseException | None = None):
        self.calls = 0
        self.result = result
        self.error = error
        self.release = asyncio.Event()

    def __call__(self):
        self.calls += 1
        return self._run(self.calls)

    async def _run(self, n):
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return f"{self.result}-{n}"


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_producer_call():
    gate: SingleFlightGate[str] = SingleFlightGate()
    producer = _Producer()

    handles = [gate.run_or_join(producer) for _ in range(5)]
    assert producer.calls == 1
    assert all(h is handles[0] for h in handles)
    assert gate.has_in_flight

    producer.release.set()
    results = await asyncio.gather(*handles)
    assert results == ["done-1"] * 5


@pytest.mark.asyncio
async def test_slot_released_after_completion_and_next_call_starts_fresh():
    gate: SingleFlightGate[str] = SingleFlightGate()
    producer = _Producer()
    producer.release.set()

    assert await gate.run_or_join(producer) == "done-1"
    assert gate.has_in_flight is False

    assert await gate.run_or_join(producer) == "done-2"
    assert producer.calls == 2


@pytest.mark.asyncio
async def test_slot_released_after_failure():
    gate: SingleFlightGate[str] = SingleFlightGate()
    producer = _Producer(error=RuntimeError("boom"))
    producer.release.set()

    first = gate.run_or_join(producer)
    second = gate.run_or_join(producer)
    with pytest.raises(RuntimeError):
        await first
    with pytest.raises(RuntimeError):
        await second
    assert producer.calls == 1
    assert gate.has_in_flight is False


@pytest.mark.asyncio
async def test_has_in_flight_is_side_effect_free():
    gate: SingleFlightGate[str] = SingleFlightGate()
    assert gate.has_in_flight is False
    assert gate.has_in_flight is False
    producer = _Producer()
    handle = gate.run_or_join(producer)
    assert gate.has_in_flight is True
    assert producer.calls == 1
    producer.release.set()
    await handle


@pytest.mark.asyncio
async def test_clear_does_not_cancel_and_allows_independent_work():
    gate: SingleFlightGate[str] = SingleFlightGate()
    old_producer = _Producer(result="old")
    new_producer = _Producer(result="new")

    old = gate.run_or_join(old_producer)
    gate.clear()
    assert gate.has_in_flight is False

    new = gate.run_or_join(new_producer)
    assert new is not old
    assert new_producer.calls == 1

    # Old operation finishes first; it must not release the new one's slot.
    old_producer.release.set()
    assert await old == "old-1"
    assert not old.cancelled()
    assert gate.has_in_flight is True
    assert gate.run_or_join(new_producer) is new

    new_producer.release.set()
    assert await new == "new-1"
    assert gate.has_in_flight is False


@pytest.mark.asyncio
async def test_cancelled_task_releases_slot():
    gate: SingleFlightGate[str] = SingleFlightGate()
    producer = _Producer()
    handle = gate.run_or_join(producer)
    handle.cancel()
    with pytest.raises(asyncio.CancelledError):
        await handle
    assert gate.has_in_flight is False
