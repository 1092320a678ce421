"""Tests for status display labels."""

import pytest

from app.core.schemas_mediator import (
    CommitmentType,
    ProjectStatus,
    StakeholderStatus,
    get_status_label,
)


@pytest.mark.parametrize(
    "status, label",
    [
        (ProjectStatus.MEMO_READY.value, "Memo bereit"),
        (StakeholderStatus.SCHEDULED.value, "Termin gewählt"),
        (CommitmentType.NEED_CHANGE.value, "Änderung nötig"),
    ],
)
def test_known_labels(status, label):
    assert get_status_label(status) == label


def test_every_status_has_a_label():
    for enum in (ProjectStatus, StakeholderStatus, CommitmentType):
        for member in enum:
            assert get_status_label(member.value) != member.value


def test_unknown_status_falls_back_to_raw_value():
    assert get_status_label("archived") == "archived"
