"""Database operations for interviews table."""

from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.stakeholders import update_stakeholder_status
from app.db.supabase_client import INTERVIEWS, get_supabase

logger = get_logger(__name__)


def create_interview(
    stakeholder_id: UUID,
    project_id: UUID,
    goals: str,
    no_gos: str,
    concerns: str,
    conditions: str,
    additional_notes: str | None = None,
    call_duration_seconds: int | None = None,
    transcript: str | None = None,
) -> dict[str, Any]:
    """
    Store an interview summary and mark the stakeholder as interviewed.

    Args:
        stakeholder_id: Interviewed stakeholder
        project_id: Project UUID
        goals: What the stakeholder wants to achieve
        no_gos: Hard limits
        concerns: Worries and risks
        conditions: Conditions for agreement
        additional_notes: Free text
        call_duration_seconds: Length of the voice call
        transcript: Full "role: content" transcript

    Returns:
        Created interview row
    """
    supabase = get_supabase()

    data = {
        "stakeholder_id": str(stakeholder_id),
        "project_id": str(project_id),
        "goals": goals,
        "no_gos": no_gos,
        "concerns": concerns,
        "conditions": conditions,
        "additional_notes": additional_notes,
        "call_duration_seconds": call_duration_seconds,
        "transcript": transcript,
    }

    response = supabase.table(INTERVIEWS).insert(data).execute()

    if not response.data:
        raise ValueError("No data returned from create_interview")

    update_stakeholder_status(stakeholder_id, "interviewed")

    logger.info(
        f"Saved interview for stakeholder {stakeholder_id}",
        extra={"project_id": str(project_id), "duration": call_duration_seconds},
    )

    return response.data[0]


def list_interviews(project_id: UUID, with_stakeholder: bool = False) -> list[dict[str, Any]]:
    """
    List interviews of a project.

    Args:
        project_id: Project UUID
        with_stakeholder: Embed the stakeholder's name and role under "stakeholders"

    Returns:
        Interview rows
    """
    supabase = get_supabase()

    columns = "*, stakeholders(name, role)" if with_stakeholder else "*"
    response = (
        supabase.table(INTERVIEWS)
        .select(columns)
        .eq("project_id", str(project_id))
        .execute()
    )

    return response.data or []
