"""Project workflow progression.

Stages:  draft → collecting → memo_ready → commitments → completed

The status is a plain column on the project row. Transitions only move one
step forward; the guards mirror what the admin screen offers at each stage.
A project reaches memo_ready once its decision memo exists.
"""

from dataclasses import dataclass

from app.core.schemas_mediator import ProjectStatus, get_status_label

# =============================================================================
# Stage definitions
# =============================================================================

STAGES: list[ProjectStatus] = [
    ProjectStatus.DRAFT,
    ProjectStatus.COLLECTING,
    ProjectStatus.MEMO_READY,
    ProjectStatus.COMMITMENTS,
    ProjectStatus.COMPLETED,
]


@dataclass(frozen=True)
class WorkflowFacts:
    """What the guards need to know about a project."""

    stakeholder_count: int = 0
    interview_count: int = 0
    memo_exists: bool = False


# =============================================================================
# Transition validation
# =============================================================================


class WorkflowTransitionError(Exception):
    """Raised when a status transition is invalid."""


def next_status(current: ProjectStatus) -> ProjectStatus | None:
    """Status that follows ``current``, or None at the end of the workflow."""
    idx = STAGES.index(current)
    return STAGES[idx + 1] if idx + 1 < len(STAGES) else None


def validate_transition(
    current: ProjectStatus | str,
    target: ProjectStatus | str,
    facts: WorkflowFacts,
) -> None:
    """
    Check that ``current → target`` is a legal move.

    Raises:
        WorkflowTransitionError: If the move skips a stage, goes backwards,
            or its guard is not satisfied
    """
    try:
        current = ProjectStatus(current)
        target = ProjectStatus(target)
    except ValueError as e:
        raise WorkflowTransitionError(str(e)) from e

    if current == target:
        raise WorkflowTransitionError(f"Project is already {get_status_label(current.value)}")

    if next_status(current) != target:
        raise WorkflowTransitionError(
            f"Cannot move from {get_status_label(current.value)} "
            f"to {get_status_label(target.value)}"
        )

    if target == ProjectStatus.COLLECTING and facts.stakeholder_count == 0:
        raise WorkflowTransitionError("Add at least one stakeholder before starting interviews")

    if target == ProjectStatus.MEMO_READY and facts.interview_count == 0:
        raise WorkflowTransitionError("No interviews completed yet")

    if target == ProjectStatus.MEMO_READY and not facts.memo_exists:
        raise WorkflowTransitionError("Generate the decision memo first")
