"""iCalendar attachments for booked interview slots."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from icalendar import Calendar, Event, vCalAddress, vText

from app.core.logging import get_logger
from app.core.scheduling import DEFAULT_SLOT_MINUTES

logger = get_logger(__name__)

PRODID = "-//AI Mediator//Interview Scheduling//DE"
LINK_LABEL = "Link zum Interview"


class CalendarError(Exception):
    """Raised when an event cannot be encoded."""


def _address(name: str | None, email: str) -> vCalAddress:
    address = vCalAddress(f"mailto:{email}")
    if name:
        address.params["cn"] = vText(name)
    return address


def generate_ics(
    title: str,
    description: str,
    start_time: datetime,
    duration_minutes: int | None = DEFAULT_SLOT_MINUTES,
    url: str | None = None,
    organizer: tuple[str, str] | None = None,
    attendee: tuple[str | None, str | None] | None = None,
) -> str:
    """
    Encode a single confirmed, busy event as an .ics document.

    Args:
        title: Event summary
        description: Event description; the url is appended when given
        start_time: Slot start (aware datetimes are written in UTC)
        duration_minutes: Event length, 15 minutes when not given
        url: Link to the interview page
        organizer: (name, email) of the organizer
        attendee: (name, email) of the invited stakeholder; RSVP is requested

    Returns:
        iCalendar text

    Raises:
        CalendarError: If the inputs cannot be encoded
    """
    if not title:
        raise CalendarError("Event title is required")

    minutes = duration_minutes or DEFAULT_SLOT_MINUTES
    if minutes <= 0:
        raise CalendarError("Event duration must be positive")

    if start_time.tzinfo is not None:
        start_time = start_time.astimezone(timezone.utc)

    calendar = Calendar()
    calendar.add("prodid", PRODID)
    calendar.add("version", "2.0")
    calendar.add("calscale", "GREGORIAN")
    calendar.add("method", "PUBLISH")

    event = Event()
    event.add("uid", f"{uuid4()}@ai-mediator")
    event.add("dtstamp", datetime.now(timezone.utc))
    event.add("dtstart", start_time)
    event.add("duration", timedelta(minutes=minutes))
    event.add("summary", title)
    event.add("description", f"{description}\n\n{LINK_LABEL}: {url}" if url else description)
    if url:
        event.add("url", url)
    event.add("status", "CONFIRMED")
    event.add("transp", "OPAQUE")
    event.add("x-microsoft-cdo-busystatus", "BUSY")

    if organizer and organizer[1]:
        event["organizer"] = _address(organizer[0], organizer[1])

    if attendee and attendee[1]:
        address = _address(attendee[0], attendee[1])
        address.params["rsvp"] = vText("TRUE")
        event.add("attendee", address, encode=0)

    calendar.add_component(event)

    try:
        return calendar.to_ical().decode("utf-8")
    except Exception as e:
        logger.error(f"Failed to generate calendar: {e}")
        raise CalendarError("Failed to generate calendar") from e
