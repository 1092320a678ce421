"""Database operations for stakeholders table."""

from datetime import datetime, timezone
from uuid import UUID

from app.core.logging import get_logger
from app.core.scheduling import generate_token
from app.db.supabase_client import STAKEHOLDERS, get_supabase

logger = get_logger(__name__)


def list_stakeholders(project_id: UUID) -> list[dict]:
    """
    List all stakeholders for a project.

    Args:
        project_id: Project UUID

    Returns:
        List of stakeholder dicts, oldest first
    """
    supabase = get_supabase()

    response = (
        supabase.table(STAKEHOLDERS)
        .select("*")
        .eq("project_id", str(project_id))
        .order("created_at", desc=False)
        .execute()
    )

    return response.data or []


def get_stakeholder(stakeholder_id: UUID) -> dict | None:
    """
    Get a single stakeholder by ID.

    Returns:
        Stakeholder dict or None if not found
    """
    supabase = get_supabase()

    response = (
        supabase.table(STAKEHOLDERS)
        .select("*")
        .eq("id", str(stakeholder_id))
        .limit(1)
        .execute()
    )

    return response.data[0] if response.data else None


def get_stakeholder_by_token(token: str) -> dict | None:
    """
    Resolve a stakeholder from an invite token.

    Args:
        token: 32-character invite token

    Returns:
        Stakeholder dict or None if the token is unknown
    """
    supabase = get_supabase()

    response = (
        supabase.table(STAKEHOLDERS)
        .select("*")
        .eq("token", token)
        .limit(1)
        .execute()
    )

    return response.data[0] if response.data else None


def create_stakeholder(
    project_id: UUID,
    name: str,
    email: str,
    role: str = "",
) -> dict:
    """
    Invite a stakeholder to a project.

    A fresh invite token is generated and the stakeholder starts as "invited".

    Args:
        project_id: Project UUID
        name: Stakeholder name
        email: Contact email
        role: Job title/role

    Returns:
        Created stakeholder dict
    """
    supabase = get_supabase()

    stakeholder_data = {
        "project_id": str(project_id),
        "name": name,
        "email": email,
        "role": role,
        "token": generate_token(),
        "status": "invited",
    }

    response = supabase.table(STAKEHOLDERS).insert(stakeholder_data).execute()

    if not response.data:
        raise ValueError("No data returned from create_stakeholder")

    logger.info(
        f"Invited stakeholder '{name}' to project {project_id}",
        extra={"project_id": str(project_id)},
    )

    return response.data[0]


def update_stakeholder(stakeholder_id: UUID, updates: dict) -> dict:
    """
    Update a stakeholder.

    Args:
        stakeholder_id: Stakeholder UUID
        updates: Dict of fields to update

    Returns:
        Updated stakeholder dict

    Raises:
        ValueError: If stakeholder not found
    """
    supabase = get_supabase()

    updates = {**updates, "updated_at": datetime.now(timezone.utc).isoformat()}

    response = (
        supabase.table(STAKEHOLDERS)
        .update(updates)
        .eq("id", str(stakeholder_id))
        .execute()
    )

    if not response.data:
        raise ValueError(f"Stakeholder not found: {stakeholder_id}")

    logger.info(
        f"Updated stakeholder {stakeholder_id}",
        extra={"stakeholder_id": str(stakeholder_id), "fields": list(updates.keys())},
    )

    return response.data[0]


def update_stakeholder_status(stakeholder_id: UUID, status: str) -> dict:
    return update_stakeholder(stakeholder_id, {"status": status})


def schedule_stakeholder(stakeholder_id: UUID, scheduled_time: str) -> dict:
    """Book an interview slot and mark the stakeholder as scheduled."""
    return update_stakeholder(
        stakeholder_id,
        {"scheduled_time": scheduled_time, "status": "scheduled"},
    )


def delete_stakeholder(stakeholder_id: UUID) -> None:
    """
    Delete a stakeholder.

    Args:
        stakeholder_id: Stakeholder UUID
    """
    supabase = get_supabase()

    supabase.table(STAKEHOLDERS).delete().eq("id", str(stakeholder_id)).execute()

    logger.info(f"Deleted stakeholder {stakeholder_id}")
