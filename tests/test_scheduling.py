"""Tests for interview slots, invite tokens and calendar files."""

from datetime import UTC, datetime, timedelta

import pytest
from icalendar import Calendar

from app.core.calendar_ics import LINK_LABEL, CalendarError, generate_ics
from app.core.scheduling import generate_time_slots, generate_token, parse_datetime

START = datetime(2026, 3, 2, 9, 0, tzinfo=UTC)


def _event(text: str):
    return Calendar.from_ical(text).walk("VEVENT")[0]


class TestSlots:
    def test_window_is_half_open(self):
        slots = generate_time_slots("2026-03-02T09:00:00Z", "2026-03-02T10:00:00Z", 15)
        assert slots == [START + timedelta(minutes=15 * i) for i in range(4)]

    def test_last_slot_may_overrun_end(self):
        slots = generate_time_slots(START, START + timedelta(hours=1), 25)
        assert [s.minute for s in slots] == [0, 25, 50]

    def test_empty_window(self):
        assert generate_time_slots(START, START) == []

    def test_duration_must_be_positive(self):
        with pytest.raises(ValueError):
            generate_time_slots(START, START + timedelta(hours=1), 0)

    def test_parse_datetime_accepts_offsets(self):
        assert parse_datetime("2026-03-02T10:00:00+01:00") == START
        assert parse_datetime(START) is START


def test_tokens_are_unique_hex():
    tokens = {generate_token() for _ in range(20)}
    assert len(tokens) == 20
    assert all(len(t) == 32 and int(t, 16) >= 0 for t in tokens)


class TestCalendar:
    def test_event_fields(self):
        text = generate_ics(
            title="AI Mediator Interview: CRM",
            description="Ihr Interview",
            start_time=datetime(2026, 3, 2, 10, 0, tzinfo=UTC),
            duration_minutes=30,
            url="https://mediator.test/stakeholder/abc/call",
            attendee=("Anna Muster", "anna@example.com"),
        )

        assert text.startswith("BEGIN:VCALENDAR")
        assert "METHOD:PUBLISH" in text
        event = _event(text)
        assert str(event["SUMMARY"]) == "AI Mediator Interview: CRM"
        assert event.decoded("dtstart") == datetime(2026, 3, 2, 10, 0, tzinfo=UTC)
        assert event.decoded("duration") == timedelta(minutes=30)
        assert str(event["STATUS"]) == "CONFIRMED"
        assert str(event["X-MICROSOFT-CDO-BUSYSTATUS"]) == "BUSY"
        assert f"{LINK_LABEL}: https://mediator.test/stakeholder/abc/call" in str(
            event["DESCRIPTION"]
        )

        attendee = event["ATTENDEE"]
        assert str(attendee) == "mailto:anna@example.com"
        assert attendee.params["RSVP"] == "TRUE"
        assert attendee.params["CN"] == "Anna Muster"

    def test_aware_start_is_written_in_utc(self):
        start = datetime.fromisoformat("2026-03-02T11:00:00+01:00")
        event = _event(generate_ics("t", "d", start))
        assert event.decoded("dtstart") == datetime(2026, 3, 2, 10, 0, tzinfo=UTC)
        assert "DTSTART:20260302T100000Z" in generate_ics("t", "d", start)

    def test_defaults_to_fifteen_minutes_without_attendee_email(self):
        event = _event(generate_ics("t", "d", START, duration_minutes=None, attendee=("Bob", None)))
        assert event.decoded("duration") == timedelta(minutes=15)
        assert "ATTENDEE" not in event
        assert "URL" not in event

    def test_title_required(self):
        with pytest.raises(CalendarError):
            generate_ics("", "d", START)
