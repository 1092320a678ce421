"""Tests for maturity quiz scoring."""

import pytest

from app.core.maturity import (
    MATURITY_BANDS,
    QUESTIONS,
    normalize_score,
    profile_for_score,
    score_assessment,
)
from app.core.schemas_prioritizer import MaturityLevel


def test_quiz_has_five_questions_with_four_scored_options():
    assert len(QUESTIONS) == 5
    assert [q.category for q in QUESTIONS] == [
        "Strategy",
        "Data",
        "Technology",
        "People",
        "Governance",
    ]
    for question in QUESTIONS:
        assert [o.score for o in question.options] == [1, 2, 3, 4]


@pytest.mark.parametrize(
    "answers, score, level",
    [
        ([1, 1, 1, 1, 1], 25, MaturityLevel.NOVICE),
        ([2, 1, 1, 1, 1], 30, MaturityLevel.EXPLORER),
        ([2, 2, 3, 1, 2], 50, MaturityLevel.EXPLORER),
        ([3, 3, 2, 2, 2], 60, MaturityLevel.EXPLORER),
        ([3, 3, 3, 2, 2], 65, MaturityLevel.PRACTITIONER),
        ([4, 4, 3, 3, 3], 85, MaturityLevel.PRACTITIONER),
        ([4, 4, 4, 3, 3], 90, MaturityLevel.EXPERT),
        ([4, 4, 4, 4, 4], 100, MaturityLevel.EXPERT),
    ],
)
def test_score_assessment_bands(answers, score, level):
    profile = score_assessment(answers)
    assert profile.score == score
    assert profile.level == level
    assert profile.summary


def test_summary_matches_band():
    summaries = {level: summary for _, level, summary in MATURITY_BANDS}
    profile = score_assessment([1, 1, 1, 1, 1])
    assert profile.summary == summaries[MaturityLevel.NOVICE]
    assert "beginning" in profile.summary


def test_normalize_score_rounds_half_up():
    # 1 / 8 questions * 4 = 3.125 -> 3; 1 / 50 * 4 = 0.5 -> 1
    assert normalize_score(1, question_count=8) == 3
    assert normalize_score(1, question_count=50) == 1
    assert normalize_score(20) == 100


def test_profile_for_score_band_edges():
    assert profile_for_score(0).level == MaturityLevel.NOVICE
    assert profile_for_score(26).level == MaturityLevel.EXPLORER
    assert profile_for_score(61).level == MaturityLevel.PRACTITIONER
    assert profile_for_score(86).level == MaturityLevel.EXPERT


def test_wrong_answer_count_rejected():
    with pytest.raises(ValueError, match="Expected 5 answers"):
        score_assessment([1, 2, 3])


def test_answer_outside_options_rejected():
    with pytest.raises(ValueError, match="question 3"):
        score_assessment([1, 2, 5, 1, 2])
