"""API endpoint for standalone calendar (.ics) generation."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response

from app.core.calendar_ics import generate_ics
from app.core.logging import get_logger
from app.core.scheduling import parse_datetime
from app.core.schemas_mediator import CalendarRequest

logger = get_logger(__name__)

router = APIRouter()

ICS_MEDIA_TYPE = "text/calendar; charset=utf-8"


def ics_response(content: str, filename: str = "interview.ics") -> Response:
    return Response(
        content=content,
        media_type=ICS_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/calendar", response_model=None)
async def create_calendar(body: CalendarRequest) -> Response:
    """
    Encode one interview event as an .ics attachment.

    Failures come back as 500 with {"error": ...} so the browser download
    handler can show the message.
    """
    try:
        content = generate_ics(
            title=body.title,
            description=body.description,
            start_time=parse_datetime(body.start_time),
            duration_minutes=body.duration_minutes,
            url=body.url,
            attendee=(body.attendee_name, body.attendee_email) if body.attendee_name else None,
        )
    except Exception as e:
        logger.error(f"Calendar generation failed: {e}")
        return JSONResponse(
            content={"error": str(e) or "Failed to generate calendar"},
            status_code=500,
        )

    return ics_response(content)
