import pytest

from qbash_stream.dispatch.slot_pool import SlotPool
from qbash_stream.exceptions import SlotStateError


class FakeHandle:
    def __init__(self, finished: bool = False) -> None:
        self.finished = finished

    def done(self) -> bool:
        return self.finished


def test_find_free_slot_scans_from_lowest_index() -> None:
    pool = SlotPool(3)

    assert pool.find_free_slot() == 0
    pool.mark_occupied(0, FakeHandle())
    assert pool.find_free_slot() == 1
    pool.mark_occupied(1, FakeHandle())
    pool.mark_occupied(2, FakeHandle())

    assert pool.find_free_slot() is None
    assert pool.occupied_count == 3


def test_poll_and_release_leaves_running_slot_untouched() -> None:
    pool = SlotPool(2)
    handle = FakeHandle()
    pool.mark_occupied(1, handle)

    assert pool.poll_and_release(1) is False
    assert pool.is_occupied(1)
    assert pool.occupied_count == 1

    handle.finished = True
    assert pool.poll_and_release(1) is True
    assert not pool.is_occupied(1)
    assert pool.is_drained()


def test_poll_and_release_on_free_slot_reports_false() -> None:
    pool = SlotPool(1)

    assert pool.poll_and_release(0) is False


def test_released_slot_is_reused_first() -> None:
    pool = SlotPool(3)
    first = FakeHandle()
    pool.mark_occupied(0, first)
    pool.mark_occupied(1, FakeHandle())

    first.finished = True
    pool.poll_and_release(0)

    assert pool.find_free_slot() == 0


def test_mark_occupied_rejects_busy_slot() -> None:
    pool = SlotPool(2)
    pool.mark_occupied(0, FakeHandle())

    with pytest.raises(SlotStateError, match="slot=0"):
        pool.mark_occupied(0, FakeHandle())


def test_peak_occupied_tracks_high_water_mark() -> None:
    pool = SlotPool(4)
    handles = [FakeHandle() for _ in range(3)]
    for index, handle in enumerate(handles):
        pool.mark_occupied(index, handle)
    for handle in handles:
        handle.finished = True
    for index in pool.occupied_slots():
        pool.poll_and_release(index)

    assert pool.occupied_count == 0
    assert pool.peak_occupied == 3


def test_pool_requires_at_least_one_slot() -> None:
    with pytest.raises(ValueError):
        SlotPool(0)


def test_slot_index_outside_range_is_caller_error() -> None:
    pool = SlotPool(2)

    with pytest.raises(IndexError):
        pool.mark_occupied(2, FakeHandle())
