"""AI maturity quiz and scoring.

Five questions, four options each scored 1-4. The summed score is normalized
to 0-100 and mapped onto four fixed bands:

    0-25 Novice | 26-60 Explorer | 61-85 Practitioner | 86-100 Expert
"""

import math

from app.core.schemas_prioritizer import MaturityLevel, MaturityProfile, Question, QuestionOption

MAX_OPTION_SCORE = 4


def _question(qid: int, category: str, text: str, options: list[str]) -> Question:
    return Question(
        id=qid,
        category=category,
        text=text,
        options=[QuestionOption(text=o, score=i + 1) for i, o in enumerate(options)],
    )


QUESTIONS: list[Question] = [
    _question(
        1,
        "Strategy",
        "How defined is your AI strategy?",
        [
            "No formal strategy exists.",
            "We have some ad-hoc pilots.",
            "Defined strategy for specific departments.",
            "AI is central to our corporate strategy.",
        ],
    ),
    _question(
        2,
        "Data",
        "What is the state of your data infrastructure?",
        [
            "Data is siloed and mostly manual.",
            "Some digital records, but inconsistent.",
            "Centralized data warehouse available.",
            "Real-time, governed data lakehouse.",
        ],
    ),
    _question(
        3,
        "Technology",
        "How modern is your technology stack?",
        [
            "Legacy on-premise systems.",
            "Transitioning to cloud.",
            "Cloud-native with API integrations.",
            "Modern MLOps and scalable compute.",
        ],
    ),
    _question(
        4,
        "People",
        "What is your team's AI literacy?",
        [
            "Limited understanding or skepticism.",
            "Curious, but skill gaps exist.",
            "Dedicated data science team.",
            "AI literacy across all business units.",
        ],
    ),
    _question(
        5,
        "Governance",
        "How do you manage AI risk and ethics?",
        [
            "No governance structure.",
            "Ad-hoc reviews when issues arise.",
            "Established policies and guidelines.",
            "Automated compliance and monitoring.",
        ],
    ),
]

# (upper bound inclusive, level, summary), evaluated in order
MATURITY_BANDS: list[tuple[int, MaturityLevel, str]] = [
    (
        25,
        MaturityLevel.NOVICE,
        "Your organization is just beginning its AI journey. "
        "Focus on education and pilot projects.",
    ),
    (
        60,
        MaturityLevel.EXPLORER,
        "You have run some experiments. It is time to standardize data and infrastructure.",
    ),
    (
        85,
        MaturityLevel.PRACTITIONER,
        "You have functional AI capabilities. Focus on scaling and governance.",
    ),
    (
        100,
        MaturityLevel.EXPERT,
        "You are an AI-first organization. Focus on cutting-edge innovation and ethics.",
    ),
]


def normalize_score(total: int, question_count: int = len(QUESTIONS)) -> int:
    """Normalize a raw quiz total to 0-100, rounding halves up."""
    max_score = question_count * MAX_OPTION_SCORE
    return math.floor(total / max_score * 100 + 0.5)


def profile_for_score(score: int) -> MaturityProfile:
    """Map a normalized score onto its maturity band."""
    for upper, level, summary in MATURITY_BANDS:
        if score <= upper:
            return MaturityProfile(score=score, level=level, summary=summary)
    # Scores above 100 cannot come out of normalize_score
    raise ValueError(f"Score out of range: {score}")


def score_assessment(answers: list[int]) -> MaturityProfile:
    """
    Score a completed maturity quiz.

    Args:
        answers: Selected option score for each question, in question order

    Returns:
        MaturityProfile with normalized score, level and summary

    Raises:
        ValueError: If the answer count is wrong or an answer is not an offered score
    """
    if len(answers) != len(QUESTIONS):
        raise ValueError(f"Expected {len(QUESTIONS)} answers, got {len(answers)}")

    for question, answer in zip(QUESTIONS, answers):
        allowed = {option.score for option in question.options}
        if answer not in allowed:
            raise ValueError(
                f"Invalid answer {answer} for question {question.id} ({question.category})"
            )

    return profile_for_score(normalize_score(sum(answers)))
