"""
pollen/llm/prompt.py

Builds the employer feedback narrative prompt from a FeedbackSummary.

Constraints:
- System prompt stays short and forbids invented detail
- Only aggregated, anonymous feedback goes into the prompt (no candidate data)
- Output constraint: 60-120 words
"""
from __future__ import annotations

from typing import Optional

from pollen.feedback import FeedbackSummary

_SYSTEM_PROMPT = """\
You are a hiring-experience advisor at Pollen, a skills-first recruitment platform \
for early-career job seekers.
You write short, constructive feedback notes to employers based on anonymous candidate ratings.
Be warm, specific and practical. Acknowledge what went well before what needs work.
CRITICAL: Only use the strengths, improvement areas and actions provided. \
Do NOT invent incidents, numbers, names, or candidate quotes.
Write in second person ("your team"), 60-120 words, plain prose, no bullet points.\
"""


def _bulleted(items: list[str]) -> str:
    return "\n".join(f"- {i}" for i in items) if items else "- (none)"


def build_feedback_prompt(summary: FeedbackSummary, *, employer_name: Optional[str] = None) -> str:
    """User-turn prompt for one employer feedback note."""
    employer = (employer_name or "").strip() or "the employer"

    return f"""\
Write a feedback note to {employer} about their recent hiring process.

CANDIDATE EXPERIENCE SCORE: {summary.overall_score}/100

STRENGTHS:
{_bulleted(summary.strengths)}

AREAS TO IMPROVE:
{_bulleted(summary.improvement_areas)}

RECOMMENDED ACTIONS:
{_bulleted(summary.recommended_actions)}

REQUIREMENTS:
- Mention the score once
- Cover every strength and every recommended action listed above, and nothing else
- 60-120 words, no subject line, no sign-off\
"""


def deterministic_narrative(summary: FeedbackSummary, *, employer_name: Optional[str] = None) -> str:
    """Template narrative used when no LLM is configured or the call fails."""
    employer = (employer_name or "").strip() or "Your team"
    parts = [f"{employer} scored {summary.overall_score}/100 for candidate experience."]
    if summary.strengths:
        parts.append("Candidates highlighted: " + "; ".join(s.lower() for s in summary.strengths) + ".")
    if summary.improvement_areas:
        parts.append("Areas to work on: " + "; ".join(a.lower() for a in summary.improvement_areas) + ".")
    if summary.recommended_actions:
        parts.append("Suggested next steps: " + " ".join(a.rstrip(".") + "." for a in summary.recommended_actions))
    return " ".join(parts)


def estimate_token_count(text: str) -> int:
    """
    Rough token estimate: ~4 chars per token.
    Used for budget checks in tests; not used at runtime.
    """
    return len(text) // 4
