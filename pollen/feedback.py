from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pollen.core.numeric import round_half_up
from pollen.models import EmployerRatings

HIGH_THRESHOLD = 4
LOW_THRESHOLD = 2

# (field, high threshold, low threshold, strength, improvement area, recommended action)
# Evaluated independently per field. A 3 lands in neither list.
FeedbackRule = Tuple[str, float, float, str, Optional[str], Optional[str]]

FEEDBACK_RULES: Tuple[FeedbackRule, ...] = (
    (
        "response_time_rating",
        HIGH_THRESHOLD,
        LOW_THRESHOLD,
        "Excellent communication timing and responsiveness",
        "Response time to candidates",
        "Set up automated acknowledgment emails and commit to response timeframes",
    ),
    (
        "interview_style_rating",
        HIGH_THRESHOLD,
        LOW_THRESHOLD,
        "Positive and engaging interview experience",
        "Interview process and candidate experience",
        "Consider interview training for hiring managers and structured interview processes",
    ),
    (
        "communication_rating",
        HIGH_THRESHOLD,
        LOW_THRESHOLD,
        "Clear and professional communication throughout process",
        "Communication clarity and frequency",
        "Implement regular candidate updates and feedback checkpoints",
    ),
    (
        "process_transparency_rating",
        HIGH_THRESHOLD,
        LOW_THRESHOLD,
        "Transparent hiring process with clear expectations",
        "Process transparency and setting expectations",
        "Create clear hiring process documentation and share timelines with candidates",
    ),
    (
        # Overall experience is praise-only: a low overall rating is already
        # explained by the process fields above.
        "overall_experience_rating",
        HIGH_THRESHOLD,
        LOW_THRESHOLD,
        "Great overall candidate experience",
        None,
        None,
    ),
)


@dataclass(frozen=True)
class FeedbackSummary:
    overall_score: int
    strengths: List[str]
    improvement_areas: List[str]
    recommended_actions: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "strengths": list(self.strengths),
            "improvementAreas": list(self.improvement_areas),
            "recommendedActions": list(self.recommended_actions),
        }


def generate_feedback_for_employer(
        ratings: Union[EmployerRatings, Mapping[str, Any]],
) -> FeedbackSummary:
    """
    Turn five 1-5 ratings into a 0-100 score plus fixed praise and
    improvement text. Static lookup, no model.
    """
    if not isinstance(ratings, EmployerRatings):
        ratings = EmployerRatings.from_dict(ratings)

    values = ratings.values()
    overall = round_half_up(sum(values) / len(values) * 20)

    strengths: List[str] = []
    improvement_areas: List[str] = []
    recommended_actions: List[str] = []

    for field_name, high, low, strength, improvement, action in FEEDBACK_RULES:
        value = getattr(ratings, field_name)
        if value >= high:
            strengths.append(strength)
        elif value <= low and improvement is not None:
            improvement_areas.append(improvement)
            if action is not None:
                recommended_actions.append(action)

    return FeedbackSummary(
        overall_score=overall,
        strengths=strengths,
        improvement_areas=improvement_areas,
        recommended_actions=recommended_actions,
    )
