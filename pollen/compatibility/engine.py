from __future__ import annotations

from typing import Any, Mapping, Union

from pollen.models import CandidateProfile, JobRequirements

from .scoring import (
    behavioral_breakdown,
    behavioral_compatibility_score,
    overall_compatibility_score,
    proactivity_breakdown,
    proactivity_display_score,
    skills_breakdown,
    skills_compatibility_score,
)
from .types import CompatibilityBreakdown, CompatibilityScore


CandidateInput = Union[CandidateProfile, Mapping[str, Any]]
JobInput = Union[JobRequirements, Mapping[str, Any]]


def _as_candidate(candidate: CandidateInput) -> CandidateProfile:
    if isinstance(candidate, CandidateProfile):
        return candidate
    return CandidateProfile.from_dict(candidate)


def _as_job(job: JobInput) -> JobRequirements:
    if isinstance(job, JobRequirements):
        return job
    return JobRequirements.from_dict(job)


def calculate_job_compatibility(candidate: CandidateInput, job: JobInput) -> CompatibilityScore:
    """
    Score one (candidate, job) pair.

    Stateless and total: empty skill lists, empty requirement lists and
    missing optional fields all fall back to documented neutral values.
    Accepts either the dataclasses or their camelCase JSON dicts.
    """
    candidate = _as_candidate(candidate)
    job = _as_job(job)

    skills = skills_compatibility_score(candidate, job)
    behavioral = behavioral_compatibility_score(candidate, job)
    proactivity = proactivity_display_score(candidate.proactivity_score)
    overall = overall_compatibility_score(skills, behavioral)

    return CompatibilityScore(
        skills_score=skills,
        behavioral_score=behavioral,
        proactivity_score=proactivity,
        overall_compatibility=overall,
        breakdown=CompatibilityBreakdown(
            skills_match=skills_breakdown(candidate, job),
            behavioral_match=behavioral_breakdown(candidate, job),
            proactivity_match=proactivity_breakdown(candidate),
        ),
    )
