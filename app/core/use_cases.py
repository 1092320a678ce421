"""Use case portfolio helpers for the prioritizer."""

import time

from app.core.schemas_prioritizer import UseCaseInput

DEFAULT_DEPARTMENT = "General"

DEPARTMENTS = [
    "Marketing",
    "Sales",
    "Operations",
    "HR",
    "IT",
    "Customer Service",
    "Finance",
    "Other",
]

DEMO_USE_CASES: list[UseCaseInput] = [
    UseCaseInput(
        id="demo-1",
        title="Automated Customer Support Agent",
        department="Customer Service",
        description="Implement a GenAI chatbot to handle Tier 1 support queries and ticket routing.",
    ),
    UseCaseInput(
        id="demo-2",
        title="Supply Chain Demand Forecasting",
        department="Operations",
        description="Use predictive analytics to optimize inventory levels based on seasonal trends.",
    ),
    UseCaseInput(
        id="demo-3",
        title="Personalized Marketing Content",
        department="Marketing",
        description="Generate hyper-personalized email copy for different customer segments at scale.",
    ),
]


def timestamp_id() -> str:
    """Millisecond timestamp used as a client-side record id."""
    return str(int(time.time() * 1000))


def new_use_case(title: str, description: str, department: str | None = None) -> UseCaseInput:
    """
    Build a use case from form input.

    Raises:
        ValueError: If title or description is blank
    """
    if not title or not description:
        raise ValueError("Title and description are required")

    return UseCaseInput(
        id=timestamp_id(),
        title=title,
        department=department or DEFAULT_DEPARTMENT,
        description=description,
    )


def remove_use_case(use_cases: list[UseCaseInput], use_case_id: str) -> list[UseCaseInput]:
    return [uc for uc in use_cases if uc.id != use_case_id]
