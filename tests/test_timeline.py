import math

import pytest

from lrckit.models import CaptionEntry
from lrckit.timeline import NO_ACTIVE_INDEX, CaptionTimeline


def _timeline(*timestamps):
    return CaptionTimeline(
        CaptionEntry(timestamp=t, text=f"line {i}") for i, t in enumerate(timestamps)
    )


def test_last_at_or_before_resolution():
    timeline = _timeline(0, 5, 5, 10)
    assert timeline.update(4) == 0
    assert timeline.update(5) == 2
    assert timeline.update(7) == 2
    assert timeline.update(10) == 3
    assert timeline.update(-1) == NO_ACTIVE_INDEX


def test_non_monotonic_samples():
    timeline = _timeline(0, 5, 5, 10)
    assert timeline.update(10) == 3
    assert timeline.update(2) == 0
    assert timeline.update(9.99) == 2


def test_between_timestamps_stays_on_earlier_line():
    timeline = _timeline(1.0, 2.0)
    assert timeline.update(1.999) == 0
    assert timeline.update(2.0) == 1
    assert timeline.update(1000.0) == 1


def test_empty_timeline_always_reports_sentinel():
    timeline = CaptionTimeline()
    for position in (-5.0, 0.0, 3.0, 1e9):
        assert timeline.update(position) == NO_ACTIVE_INDEX
    assert timeline.is_empty
    assert timeline.current_entry is None
    assert not timeline.changed


def test_repeated_position_does_not_notify_twice():
    timeline = _timeline(0, 5, 10)
    events = []
    timeline.subscribe(events.append)

    assert timeline.update(6) == 1
    assert timeline.changed
    assert timeline.update(6) == 1
    assert not timeline.changed
    assert events == [1]


def test_notifications_follow_index_changes():
    timeline = _timeline(0, 5, 10)
    events = []
    timeline.subscribe(events.append)

    for position in (0.0, 0.1, 0.2, 5.0, 5.1, 2.0, -1.0):
        timeline.update(position)
    assert events == [0, 1, 0, NO_ACTIVE_INDEX]


def test_unsubscribe_stops_notifications():
    timeline = _timeline(0, 5)
    events = []
    timeline.subscribe(events.append)
    timeline.update(0)
    timeline.unsubscribe(events.append)
    timeline.update(5)
    assert events == [0]


def test_nan_position_reports_sentinel():
    timeline = _timeline(0, 5)
    timeline.update(3)
    assert timeline.update(math.nan) == NO_ACTIVE_INDEX


def test_load_and_reset_return_to_sentinel():
    timeline = _timeline(0, 5)
    events = []
    timeline.subscribe(events.append)
    timeline.update(6)

    timeline.load([CaptionEntry(timestamp=1.0, text="new track")])
    assert timeline.active_index == NO_ACTIVE_INDEX
    assert len(timeline) == 1
    assert timeline.update(0.5) == NO_ACTIVE_INDEX
    assert timeline.update(1.0) == 0

    timeline.reset()
    assert timeline.is_empty
    assert timeline.active_index == NO_ACTIVE_INDEX
    assert events == [1, NO_ACTIVE_INDEX, 0, NO_ACTIVE_INDEX]


def test_from_text_and_current_entry():
    timeline = CaptionTimeline.from_text("[00:03]second\n[00:01]first\n[00:05]")
    assert [e.text for e in timeline.entries] == ["first", "second", ""]
    timeline.update(3.5)
    assert timeline.current_entry == CaptionEntry(timestamp=3.0, text="second")
    timeline.update(5.0)
    assert timeline.current_entry.text == ""


def test_entries_are_read_only():
    timeline = _timeline(0, 1)
    assert isinstance(timeline.entries, tuple)


def test_listener_errors_propagate_after_index_is_recorded():
    timeline = _timeline(0, 5)

    def failing_listener(index):
        raise RuntimeError(f"listener failed at {index}")

    timeline.subscribe(failing_listener)
    with pytest.raises(RuntimeError):
        timeline.update(6)
    assert timeline.active_index == 1
    assert timeline.changed
