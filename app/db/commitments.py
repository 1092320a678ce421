"""Database operations for commitments table."""

from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.stakeholders import update_stakeholder_status
from app.db.supabase_client import COMMITMENTS, get_supabase

logger = get_logger(__name__)


def get_commitment_for_stakeholder(stakeholder_id: UUID) -> dict[str, Any] | None:
    supabase = get_supabase()

    response = (
        supabase.table(COMMITMENTS)
        .select("*")
        .eq("stakeholder_id", str(stakeholder_id))
        .limit(1)
        .execute()
    )

    return response.data[0] if response.data else None


def list_commitments(project_id: UUID) -> list[dict[str, Any]]:
    supabase = get_supabase()

    response = (
        supabase.table(COMMITMENTS)
        .select("*")
        .eq("project_id", str(project_id))
        .execute()
    )

    return response.data or []


def save_commitment(
    stakeholder_id: UUID,
    project_id: UUID,
    decision: str,
    comment: str | None = None,
) -> dict[str, Any]:
    """
    Record a stakeholder's decision on the memo.

    One commitment per stakeholder: an existing one is overwritten. The
    stakeholder is marked as committed either way.

    Args:
        stakeholder_id: Stakeholder UUID
        project_id: Project UUID
        decision: agree, block or need_change
        comment: Optional explanation (expected for block / need_change)

    Returns:
        Stored commitment row
    """
    supabase = get_supabase()

    existing = get_commitment_for_stakeholder(stakeholder_id)

    if existing:
        response = (
            supabase.table(COMMITMENTS)
            .update({"decision": decision, "comment": comment})
            .eq("id", existing["id"])
            .execute()
        )
    else:
        response = (
            supabase.table(COMMITMENTS)
            .insert(
                {
                    "stakeholder_id": str(stakeholder_id),
                    "project_id": str(project_id),
                    "decision": decision,
                    "comment": comment,
                }
            )
            .execute()
        )

    if not response.data:
        raise ValueError(f"Failed to save commitment for stakeholder {stakeholder_id}")

    update_stakeholder_status(stakeholder_id, "committed")

    logger.info(
        f"Stakeholder {stakeholder_id} committed: {decision}",
        extra={"project_id": str(project_id), "decision": decision, "updated": bool(existing)},
    )

    return response.data[0]
