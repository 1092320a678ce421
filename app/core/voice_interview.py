"""Voice interview helpers around the ElevenLabs conversation widget.

The widget itself runs in the stakeholder's browser; the service hands out its
configuration and turns the role-tagged transcript it produces into the four
interview sections.
"""

import re

from app.core.schemas_mediator import InterviewSummary, TranscriptMessage

NO_DETAILS = "Keine spezifischen Angaben erfasst."

# Keywords are German, matching the language of the interviews
SECTION_KEYWORDS: dict[str, list[str]] = {
    "goals": ["ziel", "erreichen", "wichtig"],
    "no_gos": ["no-go", "nicht", "niemals", "ablehnen"],
    "concerns": ["bedenken", "sorge", "risiko", "problem"],
    "conditions": ["bedingung", "wenn", "voraussetzung", "nur falls"],
}

_SENTENCE_SPLIT = re.compile(r"[.!?]+")


def build_context_message(
    title: str,
    decision_question: str,
    stakeholder_name: str,
    stakeholder_role: str,
) -> str:
    """First message sent to the agent once the conversation is connected."""
    return (
        f'Kontext: Projekt "{title}", Entscheidung: "{decision_question}". '
        f"Stakeholder: {stakeholder_name} ({stakeholder_role})."
    )


def format_transcript(messages: list[TranscriptMessage]) -> str:
    return "\n".join(f"{m.role}: {m.content}" for m in messages)


def extract_section(text: str, keywords: list[str]) -> str:
    """Keep the sentences of ``text`` that mention any keyword."""
    sentences = _SENTENCE_SPLIT.split(text)
    relevant = [s for s in sentences if any(k in s.lower() for k in keywords)]
    return ". ".join(relevant).strip() or NO_DETAILS


def extract_summary(messages: list[TranscriptMessage]) -> InterviewSummary:
    """
    Derive a draft interview summary from what the stakeholder said.

    Only user turns are considered; the stakeholder reviews and edits the
    draft before it is saved.
    """
    user_text = " ".join(m.content for m in messages if m.role == "user")
    return InterviewSummary(
        **{
            section: extract_section(user_text, keywords)
            for section, keywords in SECTION_KEYWORDS.items()
        }
    )
