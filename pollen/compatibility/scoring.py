from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from pollen.core.numeric import clamp, clamp_score, round_half_up
from pollen.core.text_processing import DISC_COLOURS, any_mutual_match, contains, mentions_colour
from pollen.models import CandidateProfile, JobRequirements

from .types import BehavioralMatch, ProactivityMatch, SkillsMatch

# Neutral scores: used when one side has nothing to compare against
NEUTRAL_SKILLS_SCORE = 75
NEUTRAL_BEHAVIORAL_SCORE = 75
DEFAULT_PROACTIVITY_INPUT = 6.0

REQUIRED_SKILLS_POINTS = 70
PREFERRED_SKILLS_POINTS = 30

PRIMARY_PROFILE_POINTS = 60
SECONDARY_PROFILE_POINTS = 25
WORK_STYLE_WEIGHT = 0.15

DISC_THRESHOLD = 30
DISC_POINTS_PER_COLOUR = 25

# Extension points: work style and team dynamics are accepted on the job but
# not evaluated yet.
WORK_STYLE_ALIGNMENT = 80
WORK_STYLE_COMPATIBILITY = 80
TEAM_FIT_SCORE = 85


def _coverage(wanted: Sequence[str], have: Sequence[str], points: float) -> float:
    # Empty requirement list => requirement trivially satisfied
    if not wanted:
        return points
    hits = [w for w in wanted if any_mutual_match(w, have)]
    return (len(hits) / len(wanted)) * points


def skills_compatibility_score(candidate: CandidateProfile, job: JobRequirements) -> int:
    """
    0-100:
    - no candidate skills => neutral 75 (entry-level candidates often haven't logged any)
    - required coverage scaled to 70, preferred coverage scaled to 30
    """
    skills = candidate.skills or []
    if not skills:
        return NEUTRAL_SKILLS_SCORE

    required = _coverage(job.required_skills or [], skills, REQUIRED_SKILLS_POINTS)
    preferred = _coverage(job.preferred_skills or [], skills, PREFERRED_SKILLS_POINTS)
    return clamp_score(required + preferred)


def disc_alignment_score(candidate: CandidateProfile, preferred_profiles: Sequence[str]) -> int:
    """
    Coarse threshold check, not a distance: +25 for every preferred label that
    names a colour the candidate scores above 30 on. Clamped to 100.
    """
    magnitudes = {
        "Red": candidate.disc_red_score or 0.0,
        "Yellow": candidate.disc_yellow_score or 0.0,
        "Green": candidate.disc_green_score or 0.0,
        "Blue": candidate.disc_blue_score or 0.0,
    }
    total = 0
    for label in preferred_profiles:
        for colour in DISC_COLOURS:
            if mentions_colour(label, colour) and magnitudes[colour] > DISC_THRESHOLD:
                total += DISC_POINTS_PER_COLOUR
    return min(100, total)


def work_style_alignment_score(candidate: CandidateProfile, job: JobRequirements) -> int:
    # Placeholder until work_style_preferences are evaluated
    return WORK_STYLE_ALIGNMENT


def behavioral_compatibility_score(candidate: CandidateProfile, job: JobRequirements) -> int:
    preferred = job.preferred_disc_profiles or []
    if not preferred:
        return NEUTRAL_BEHAVIORAL_SCORE

    score = 0.0
    if candidate.primary_profile in preferred:
        score += PRIMARY_PROFILE_POINTS
    else:
        score += disc_alignment_score(candidate, preferred) * (PRIMARY_PROFILE_POINTS / 100)

    if candidate.secondary_profile in preferred:
        score += SECONDARY_PROFILE_POINTS

    score += work_style_alignment_score(candidate, job) * WORK_STYLE_WEIGHT
    return clamp_score(score)


def proactivity_display_score(proactivity_input: Optional[float]) -> int:
    """0-10 input rescaled to 0-100. Missing input counts as 6.0."""
    value = DEFAULT_PROACTIVITY_INPUT if proactivity_input is None else proactivity_input
    return clamp_score(value * 10)


def overall_compatibility_score(skills_score: int, behavioral_score: int) -> int:
    # Fixed 70/30 split. Proactivity is reported but not blended in.
    return clamp_score(skills_score * 0.7 + behavioral_score * 0.3)


# --- Breakdown (explanations only) --------------------------------------------

def _percent_covered(wanted: Sequence[str], have: Sequence[str]) -> Tuple[int, List[str]]:
    """
    Breakdown matching is one-directional (candidate skill contains the
    requirement), stricter than the scoring match.
    Returns (percent covered, missing items in job order).
    """
    if not wanted:
        return 100, []
    missing = [w for w in wanted if not any(contains(h, w) for h in have)]
    covered = len(wanted) - len(missing)
    return round_half_up((covered / len(wanted)) * 100), missing


def skills_breakdown(candidate: CandidateProfile, job: JobRequirements) -> SkillsMatch:
    have = candidate.skills or []
    required_pct, gap = _percent_covered(job.required_skills or [], have)
    preferred_pct, _ = _percent_covered(job.preferred_skills or [], have)
    return SkillsMatch(
        required_skills_covered=required_pct,
        preferred_skills_bonus=preferred_pct,
        skills_gap=gap,
    )


def behavioral_breakdown(candidate: CandidateProfile, job: JobRequirements) -> BehavioralMatch:
    preferred = job.preferred_disc_profiles or []
    return BehavioralMatch(
        primary_profile_alignment=100 if candidate.primary_profile in preferred else 60,
        secondary_profile_alignment=100 if candidate.secondary_profile in preferred else 40,
        work_style_compatibility=WORK_STYLE_COMPATIBILITY,
        team_fit_score=TEAM_FIT_SCORE,
    )


def proactivity_breakdown(candidate: CandidateProfile) -> ProactivityMatch:
    """
    Derived from raw activity counters, so it can disagree with the top-level
    proactivity score (which comes from the stored 0-10 composite).
    """
    community_points = candidate.community_points or 0
    learning_points = candidate.learning_points or 0
    events = candidate.events_attended or 0
    masterclasses = candidate.masterclasses_completed or 0

    community = int(clamp(round_half_up((community_points / 200) * 70 + events * 5)))
    learning = int(clamp(round_half_up((learning_points / 500) * 60 + masterclasses * 20)))
    overall = round_half_up(community * 0.4 + learning * 0.6)
    return ProactivityMatch(
        community_engagement=community,
        learning_commitment=learning,
        overall_proactivity=overall,
    )
