"""Database operations for decision_memos table."""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import DECISION_MEMOS, get_supabase

logger = get_logger(__name__)


def get_memo_for_project(project_id: UUID) -> dict[str, Any] | None:
    """
    Get the decision memo of a project.

    Returns:
        Memo row or None if no memo was generated yet
    """
    supabase = get_supabase()

    response = (
        supabase.table(DECISION_MEMOS)
        .select("*")
        .eq("project_id", str(project_id))
        .limit(1)
        .execute()
    )

    return response.data[0] if response.data else None


def upsert_memo(project_id: UUID, memo: dict[str, Any]) -> dict[str, Any]:
    """
    Store the memo of a project, replacing the content of an existing one.

    Args:
        project_id: Project UUID
        memo: options, recommendation, recommendation_rationale, tradeoffs,
            open_questions

    Returns:
        Stored memo row
    """
    supabase = get_supabase()

    fields = {
        "options": memo["options"],
        "recommendation": memo["recommendation"],
        "recommendation_rationale": memo["recommendation_rationale"],
        "tradeoffs": memo["tradeoffs"],
        "open_questions": memo["open_questions"],
    }

    existing = get_memo_for_project(project_id)

    if existing:
        fields["updated_at"] = datetime.now(timezone.utc).isoformat()
        response = (
            supabase.table(DECISION_MEMOS)
            .update(fields)
            .eq("id", existing["id"])
            .execute()
        )
    else:
        response = (
            supabase.table(DECISION_MEMOS)
            .insert({"project_id": str(project_id), **fields})
            .execute()
        )

    if not response.data:
        raise ValueError(f"Failed to store memo for project {project_id}")

    logger.info(
        f"{'Updated' if existing else 'Created'} decision memo for project {project_id}",
        extra={"project_id": str(project_id)},
    )

    return response.data[0]
