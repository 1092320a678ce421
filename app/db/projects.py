"""Projects database operations."""

from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from app.core.logging import get_logger
from app.db.supabase_client import COMMITMENTS, INTERVIEWS, PROJECTS, STAKEHOLDERS, get_supabase

logger = get_logger(__name__)


def create_project(
    title: str,
    decision_question: str,
    deadline: str,
    interview_start: str,
    interview_end: str,
    admin_email: str,
    description: str = "",
) -> dict[str, Any]:
    """
    Create a new mediation project in draft status.

    Args:
        title: Project title
        decision_question: The decision stakeholders are interviewed about
        deadline: Decision deadline
        interview_start: Start of the bookable interview window
        interview_end: End of the bookable interview window
        admin_email: Contact of the project admin
        description: Background text shown to stakeholders

    Returns:
        Created project row as dict

    Raises:
        ValueError: If no row comes back from the insert
    """
    supabase = get_supabase()

    data = {
        "title": title,
        "description": description,
        "decision_question": decision_question,
        "deadline": deadline,
        "interview_start": interview_start,
        "interview_end": interview_end,
        "admin_email": admin_email,
        "status": "draft",
    }

    try:
        response = supabase.table(PROJECTS).insert(data).execute()

        if not response.data:
            raise ValueError("No data returned from create_project")

        project = response.data[0]
        logger.info(
            f"Created project {project['id']}: {title}",
            extra={"project_id": project["id"]},
        )
        return project

    except Exception as e:
        logger.error(f"Failed to create project {title}: {e}")
        raise


def get_project(project_id: UUID) -> dict[str, Any] | None:
    """
    Get a project by ID.

    Returns:
        Project row or None if not found
    """
    supabase = get_supabase()

    response = (
        supabase.table(PROJECTS)
        .select("*")
        .eq("id", str(project_id))
        .limit(1)
        .execute()
    )

    return response.data[0] if response.data else None


def list_projects() -> list[dict[str, Any]]:
    """List all projects, newest first."""
    supabase = get_supabase()

    response = (
        supabase.table(PROJECTS)
        .select("*")
        .order("created_at", desc=True)
        .execute()
    )

    return response.data or []


def count_project_rows(table: str, project_id: UUID) -> int:
    """Exact row count of a project-scoped table."""
    supabase = get_supabase()

    response = (
        supabase.table(table)
        .select("*", count="exact", head=True)
        .eq("project_id", str(project_id))
        .execute()
    )

    return response.count or 0


def list_projects_with_stats() -> list[dict[str, Any]]:
    """
    List projects with stakeholder, interview and commitment counts.

    Returns:
        Project rows extended with stakeholder_count, interviews_count and
        commitments_count
    """
    projects = list_projects()

    results = []
    for project in projects:
        project_id = project["id"]
        results.append(
            {
                **project,
                "stakeholder_count": count_project_rows(STAKEHOLDERS, project_id),
                "interviews_count": count_project_rows(INTERVIEWS, project_id),
                "commitments_count": count_project_rows(COMMITMENTS, project_id),
            }
        )

    return results


def update_project_status(project_id: UUID, status: str) -> dict[str, Any]:
    """
    Set the workflow status of a project.

    Raises:
        ValueError: If project not found
    """
    supabase = get_supabase()

    response = (
        supabase.table(PROJECTS)
        .update({"status": status, "updated_at": datetime.now(timezone.utc).isoformat()})
        .eq("id", str(project_id))
        .execute()
    )

    if not response.data:
        raise ValueError(f"Project not found: {project_id}")

    logger.info(
        f"Project {project_id} moved to {status}",
        extra={"project_id": str(project_id), "status": status},
    )

    return response.data[0]
