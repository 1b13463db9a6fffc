"""Tests for the slice builder."""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from timepie.core.events import EventType, HardEvent, AnchorEvent, event_from_dict
from timepie.core.slices import (
    NEUTRAL_COLOR,
    Slice,
    build_slices,
    event_to_slice,
    find_current_slice,
    mid_angle,
    slice_hour,
)


@pytest.fixture
def today():
    return date(2024, 1, 1)


@pytest.fixture
def make_event(today):
    """Factory for creating hard events from HH:MM strings."""
    def _make(title: str, start: str, end: str, color: str = "#FF0000", end_day_offset: int = 0) -> HardEvent:
        start_at = datetime.combine(today, time.fromisoformat(start))
        end_at = datetime.combine(today + timedelta(days=end_day_offset), time.fromisoformat(end))
        return HardEvent(id=title.lower(), title=title, start_at=start_at, end_at=end_at, color=color)
    return _make


def _spans(slices: list[Slice]) -> list[tuple[float, float, bool]]:
    return [(s.start_angle, s.end_angle, s.is_empty) for s in slices]


def _assert_full_cover(slices: list[Slice]) -> None:
    assert slices[0].start_angle == 0
    assert slices[-1].end_angle == 360
    for current, following in zip(slices, slices[1:]):
        assert current.end_angle == following.start_angle


class TestBuildSlicesEmpty:
    def test_single_full_circle_slice(self):
        slices = build_slices([])
        assert len(slices) == 1
        assert slices[0].start_angle == 0
        assert slices[0].end_angle == 360
        assert slices[0].is_empty is True
        assert slices[0].event is None
        assert slices[0].color == NEUTRAL_COLOR

    def test_custom_empty_color(self):
        assert build_slices([], empty_color="#000000")[0].color == "#000000"


class TestBuildSlices:
    def test_single_event(self):
        event = event_from_dict({
            "id": "1",
            "title": "Focus",
            "start_at": "2024-01-01T09:00:00",
            "end_at": "2024-01-01T10:00:00",
            "color": "#FF0000",
        })
        slices = build_slices([event])

        assert _spans(slices) == [(0, 135, True), (135, 150, False), (150, 360, True)]
        assert slices[1].color == "#FF0000"
        assert slices[1].event.title == "Focus"
        assert slices[1].event_type == EventType.HARD
        assert slices[0].color == NEUTRAL_COLOR

    def test_adjacent_events_have_no_gap_slice(self, make_event):
        slices = build_slices([make_event("A", "09:00", "10:00"), make_event("B", "10:00", "11:00")])

        assert _spans(slices) == [
            (0, 135, True),
            (135, 150, False),
            (150, 165, False),
            (165, 360, True),
        ]
        _assert_full_cover(slices)

    def test_gaps_between_events_are_filled(self, make_event):
        slices = build_slices([
            make_event("Breakfast", "07:30", "08:00"),
            make_event("Work", "09:00", "12:00"),
            make_event("Gym", "18:00", "19:30"),
        ])

        assert [s.is_empty for s in slices] == [True, False, True, False, True, False, True]
        _assert_full_cover(slices)

    def test_sorted_by_start(self, make_event):
        slices = build_slices([make_event("Late", "15:00", "16:00"), make_event("Early", "08:00", "09:00")])
        titles = [s.event.title for s in slices if s.event]
        assert titles == ["Early", "Late"]

    def test_sorts_on_full_timestamp(self, make_event):
        late_night = make_event("Late night", "23:00", "23:30")
        next_day = make_event("Next day", "01:00", "02:00")
        next_day.start_at += timedelta(days=1)
        next_day.end_at += timedelta(days=1)

        slices = build_slices([next_day, late_night])
        titles = [s.event.title for s in slices if s.event]
        assert titles == ["Late night", "Next day"]

    def test_event_from_midnight_has_no_leading_gap(self, make_event):
        slices = build_slices([make_event("Sleep", "00:00", "07:00")])
        assert _spans(slices) == [(0, 105, False), (105, 360, True)]

    def test_event_until_last_minute(self, make_event):
        slices = build_slices([make_event("Late", "22:00", "23:59")])
        assert _spans(slices)[-1] == (359.75, 360, True)

    def test_event_carries_normalized_record(self, today):
        event = AnchorEvent(
            id="sleep",
            title="Sleep",
            start_at=datetime.combine(today, time(0, 0)),
            end_at=datetime.combine(today, time(6, 0)),
            purpose="sleep",
        )
        occupied = build_slices([event])[0]
        assert occupied.event.id == "sleep"
        assert occupied.color == "#34495E"
        assert occupied.event_type == EventType.ANCHOR


class TestBuildSlicesEdgeCases:
    def test_overlapping_events_are_not_merged(self, make_event):
        slices = build_slices([make_event("A", "09:00", "11:00"), make_event("B", "10:00", "12:00")])

        assert _spans(slices) == [
            (0, 135, True),
            (135, 165, False),
            (150, 180, False),
            (180, 360, True),
        ]
        first, second = slices[1], slices[2]
        assert second.start_angle < first.end_angle

    def test_duplicate_events_are_kept(self, make_event):
        slices = build_slices([make_event("A", "09:00", "10:00"), make_event("A", "09:00", "10:00")])
        assert len([s for s in slices if not s.is_empty]) == 2

    def test_overnight_event_keeps_backwards_angles(self, make_event):
        slices = build_slices([make_event("Party", "23:00", "01:00", end_day_offset=1)])

        assert _spans(slices) == [(0, 345, True), (345, 15, False), (15, 360, True)]

    def test_zero_duration_event_is_kept(self, make_event):
        slices = build_slices([make_event("Ping", "12:00", "12:00")])

        assert _spans(slices) == [(0, 180, True), (180, 180, False), (180, 360, True)]
        assert slices[1].event.title == "Ping"

    def test_mixed_aware_and_string_events_do_not_raise(self):
        aware = event_from_dict({
            "id": "call",
            "title": "Call",
            "start_at": datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
            "end_at": datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc),
        })
        parsed = event_from_dict({
            "id": "run",
            "title": "Run",
            "start_at": "2024-01-01T08:00:00+02:00",
            "end_at": "2024-01-01T08:30:00+02:00",
        })

        slices = build_slices([aware, parsed])

        assert [s.event.title for s in slices if s.event] == ["Run", "Call"]
        assert _spans(slices)[-1] == (150, 360, True)

    def test_aware_event_objects_are_read_as_wall_clock(self, make_event):
        tz = timezone(timedelta(hours=-5))
        aware = HardEvent(
            id="late",
            title="Late",
            start_at=datetime(2024, 1, 1, 20, 0, tzinfo=tz),
            end_at=datetime(2024, 1, 1, 21, 0, tzinfo=tz),
        )
        slices = build_slices([aware, make_event("Early", "07:00", "08:00")])
        assert [(s.start_angle, s.end_angle) for s in slices if s.event] == [(105, 120), (300, 315)]

    def test_contained_event_does_not_raise(self, make_event):
        slices = build_slices([make_event("Day", "08:00", "18:00"), make_event("Lunch", "12:00", "13:00")])
        # Cursor moves back to 13:00 after the contained event.
        assert _spans(slices)[-1] == (195, 360, True)


class TestEventToSlice:
    def test_angles(self, make_event):
        s = event_to_slice(make_event("A", "06:00", "12:00"))
        assert (s.start_angle, s.end_angle) == (90, 180)
        assert s.is_empty is False


class TestSliceHour:
    def test_empty_slice_hour(self):
        s = Slice(start_angle=0, end_angle=135, color=NEUTRAL_COLOR, is_empty=True)
        assert mid_angle(s) == 67.5
        assert slice_hour(s) == 4

    def test_event_slice_hour(self, make_event):
        assert slice_hour(event_to_slice(make_event("A", "09:00", "10:00"))) == 9

    def test_trailing_slice_hour(self):
        s = Slice(start_angle=150, end_angle=360, color=NEUTRAL_COLOR, is_empty=True)
        assert slice_hour(s) == 17


class TestFindCurrentSlice:
    def test_running_event(self, make_event, today):
        slices = build_slices([make_event("A", "09:00", "10:00")])
        current = find_current_slice(slices, datetime.combine(today, time(9, 30)))
        assert current is slices[1]

    def test_end_is_exclusive(self, make_event, today):
        slices = build_slices([make_event("A", "09:00", "10:00")])
        assert find_current_slice(slices, datetime.combine(today, time(10, 0))) is None

    def test_free_time(self, make_event, today):
        slices = build_slices([make_event("A", "09:00", "10:00")])
        assert find_current_slice(slices, datetime.combine(today, time(14, 0))) is None

    def test_end_before_start_wraps_to_next_day(self, make_event, today):
        slices = build_slices([make_event("Night shift", "23:00", "01:00")])

        assert find_current_slice(slices, datetime.combine(today, time(23, 30))).event.title == "Night shift"
        assert find_current_slice(slices, datetime.combine(today, time(0, 30))).event.title == "Night shift"
        assert find_current_slice(slices, datetime.combine(today, time(12, 0))) is None

    def test_aware_now_against_local_events(self, make_event, today):
        slices = build_slices([make_event("A", "09:00", "10:00")])
        now = datetime.combine(today, time(9, 30), tzinfo=timezone.utc)
        assert find_current_slice(slices, now) is slices[1]
