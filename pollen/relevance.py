from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from pollen.core.text_processing import any_mutual_match
from pollen.models import CandidateProfile, JobRequirements

INTEREST_REASON = "Matches your expressed career interests"
WORK_STYLE_REASON = "Your work style aligns well with this role"


@dataclass(frozen=True)
class JobRelevance:
    """
    Relevance hints for a job seeker browsing roles. No quantified score:
    a role that is not flagged relevant is still open for exploration.
    """
    is_relevant: bool
    reasons: List[str]
    practical_fit: bool
    failures: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isRelevant": self.is_relevant,
            "reasons": list(self.reasons),
            "practicalFilter": {
                "passes": self.practical_fit,
                "failures": list(self.failures),
            },
        }


def practical_filter_failures(candidate: CandidateProfile, job: JobRequirements) -> List[str]:
    """
    Pass/fail checks; every check must pass. Missing data on either side
    never fails a check.

    Deliberately departs from the web platform, whose location check fails
    on an empty preference array: blank labels are dropped on load, and an
    empty or all-blank location_preferences list skips the check.
    """
    failures: List[str] = []

    if job.visa_sponsorship is False and candidate.work_authorization != "authorized":
        failures.append("work_authorization")

    if job.location and candidate.location_preferences:
        if not any_mutual_match(job.location, candidate.location_preferences):
            failures.append("location")

    if job.employment_type and candidate.job_type_preference:
        if job.employment_type != candidate.job_type_preference:
            failures.append("employment_type")

    if job.work_arrangement and candidate.work_arrangement_preference:
        if job.work_arrangement != candidate.work_arrangement_preference:
            failures.append("work_arrangement")

    if job.driving_license_required and not candidate.has_drivers_license:
        failures.append("driving_license")

    if job.salary_range and candidate.salary_expectations:
        if not candidate.salary_expectations.overlaps(job.salary_range):
            failures.append("salary")

    return failures


def assess_job_relevance(candidate: CandidateProfile, job: JobRequirements) -> JobRelevance:
    failures = practical_filter_failures(candidate, job)
    reasons: List[str] = []

    interests = candidate.career_interests or []
    categories = job.categories or []
    if any(any_mutual_match(c, interests) for c in categories):
        reasons.append(INTEREST_REASON)

    preferred = job.preferred_disc_profiles or []
    if preferred:
        own = [p for p in (candidate.primary_profile, candidate.secondary_profile) if p]
        if any(p in preferred for p in own):
            reasons.append(WORK_STYLE_REASON)

    return JobRelevance(
        is_relevant=bool(reasons),
        reasons=reasons,
        practical_fit=not failures,
        failures=failures,
    )
