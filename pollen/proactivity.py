"""
Proactivity: the 0-10 engagement composite stored on a candidate profile and
consumed by the compatibility scorer (rescaled to 0-100 there).

Everything here is pure. Callers load the counters, apply activities, and
persist the results themselves.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, asdict, replace
from enum import Enum
from typing import Any, Dict, Optional, Union

from pollen.core.numeric import round_half_up_places


class ActivityType(str, Enum):
    INTRODUCTION = "introduction"
    QUESTION = "question"
    COMMENT = "comment"
    RESOURCE_SHARE = "resource_share"
    EVENT = "event"
    MASTERCLASS = "masterclass"
    BOOTCAMP = "bootcamp"
    MENTORSHIP_SEEKING = "mentorship_seeking"


BASE_POINTS: Dict[ActivityType, int] = {
    ActivityType.INTRODUCTION: 25,
    ActivityType.QUESTION: 5,
    ActivityType.COMMENT: 5,
    ActivityType.RESOURCE_SHARE: 10,
    ActivityType.EVENT: 30,
    ActivityType.MASTERCLASS: 50,
    ActivityType.BOOTCAMP: 200,
    ActivityType.MENTORSHIP_SEEKING: 20,
}

# Quality (1-5, from community response) only scales conversational posts
_QUALITY_SCALED = {ActivityType.QUESTION, ActivityType.COMMENT}

NEWCOMER_DAYS = 30
NEWCOMER_FLOOR = 6.0
INACTIVE_QUALITY_SCORE = 6.0
MAX_SCORE = 10.0


@dataclass(frozen=True)
class EngagementCounters:
    community_points: int = 0
    learning_points: int = 0
    total_points: int = 0
    questions_asked: int = 0
    comments_posted: int = 0
    events_attended: int = 0
    masterclasses_completed: int = 0
    bootcamp_participation: bool = False
    community_upvotes: int = 0
    helpful_contributions: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce_type(activity_type: Union[ActivityType, str]) -> Optional[ActivityType]:
    if isinstance(activity_type, ActivityType):
        return activity_type
    try:
        return ActivityType(str(activity_type).strip().lower())
    except ValueError:
        return None


def activity_points(activity_type: Union[ActivityType, str], quality_score: Optional[float] = None) -> int:
    """Points for one activity. Unknown types earn nothing."""
    kind = _coerce_type(activity_type)
    if kind is None:
        return 0
    points = BASE_POINTS[kind]
    if quality_score and kind in _QUALITY_SCALED:
        points = math.floor(points * (quality_score / 3))
    return points


def record_activity(
        counters: EngagementCounters,
        activity_type: Union[ActivityType, str],
        quality_score: Optional[float] = None,
) -> EngagementCounters:
    """Return new counters with one activity applied."""
    kind = _coerce_type(activity_type)
    points = activity_points(activity_type, quality_score)

    updated = replace(
        counters,
        community_points=counters.community_points + points,
        total_points=counters.total_points + points,
    )

    if kind is ActivityType.QUESTION:
        updated = replace(updated, questions_asked=updated.questions_asked + 1)
    elif kind is ActivityType.COMMENT:
        updated = replace(updated, comments_posted=updated.comments_posted + 1)
    elif kind is ActivityType.EVENT:
        updated = replace(
            updated,
            events_attended=updated.events_attended + 1,
            learning_points=updated.learning_points + points,
        )
    elif kind is ActivityType.MASTERCLASS:
        updated = replace(
            updated,
            masterclasses_completed=updated.masterclasses_completed + 1,
            learning_points=updated.learning_points + points,
        )
    elif kind is ActivityType.BOOTCAMP:
        updated = replace(
            updated,
            bootcamp_participation=True,
            learning_points=updated.learning_points + points,
        )

    return updated


def record_upvote(counters: EngagementCounters) -> EngagementCounters:
    # An upvote also marks the contribution as helpful
    return replace(
        counters,
        community_upvotes=counters.community_upvotes + 1,
        helpful_contributions=counters.helpful_contributions + 1,
    )


def community_engagement_component(c: EngagementCounters) -> float:
    activity = min(5.0, c.questions_asked * 0.5 + c.comments_posted * 0.3)
    quality = min(5.0, c.community_upvotes * 0.2)
    return activity + quality


def learning_commitment_component(c: EngagementCounters) -> float:
    score = min(4.0, c.events_attended * 0.5)
    score += min(4.0, c.masterclasses_completed * 0.8)
    if c.bootcamp_participation:
        score += 2.0
    return min(MAX_SCORE, score)


def quality_contributions_component(c: EngagementCounters) -> float:
    total_activity = c.questions_asked + c.comments_posted
    if total_activity == 0:
        return INACTIVE_QUALITY_SCORE
    helpful_ratio = c.helpful_contributions / total_activity
    upvote_ratio = c.community_upvotes / total_activity
    return min(MAX_SCORE, helpful_ratio * 6 + upvote_ratio * 4)


def calculate_proactivity_score(
        counters: EngagementCounters,
        account_age_days: Optional[int] = None,
) -> float:
    """
    0-10 composite: community 40%, learning 40%, quality 20%.
    Accounts younger than 30 days never drop below 6.0. An unknown account
    age is treated as brand new.
    """
    raw = (
            community_engagement_component(counters) * 0.4
            + learning_commitment_component(counters) * 0.4
            + quality_contributions_component(counters) * 0.2
    )
    age = account_age_days if account_age_days is not None else 0
    if age < NEWCOMER_DAYS:
        raw = max(NEWCOMER_FLOOR, raw)
    return round_half_up_places(min(MAX_SCORE, raw), 2)
