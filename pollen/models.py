from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional

from pollen.core.text_processing import clean_labels, normalize_whitespace


class ProfileFormatError(ValueError):
    """Raised at the JSON boundary when a record has the wrong shape."""


# --- JSON boundary helpers ---------------------------------------------------
# The web platform stores DISC magnitudes and proactivity as decimal strings
# ("42.50", "6.00"), so numeric strings are accepted alongside numbers.
# NaN and infinities are rejected here; the scorers downstream assume finite input.

def _opt_float(data: Mapping[str, Any], key: str) -> Optional[float]:
    raw = data.get(key)
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise ProfileFormatError(f"{key}: expected a number, got a boolean")
    if not isinstance(raw, (int, float, str)):
        raise ProfileFormatError(f"{key}: expected a number, got {type(raw).__name__}")
    try:
        value = float(raw)
    except (ValueError, OverflowError):
        raise ProfileFormatError(f"{key}: expected a number, got {raw!r}") from None
    if not math.isfinite(value):
        raise ProfileFormatError(f"{key}: expected a finite number, got {raw!r}")
    return value


def _opt_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    v = _opt_float(data, key)
    return int(v) if v is not None else None


def _str_list(data: Mapping[str, Any], key: str) -> List[str]:
    raw = data.get(key)
    if raw is None:
        return []
    if not isinstance(raw, (list, tuple)):
        raise ProfileFormatError(f"{key}: expected a list of strings")
    return [str(x) for x in raw if x is not None]


def _opt_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    raw = data.get(key)
    if raw is None:
        return None
    return str(raw)


def _opt_bool(data: Mapping[str, Any], key: str) -> Optional[bool]:
    raw = data.get(key)
    if raw is None:
        return None
    return bool(raw)


@dataclass(frozen=True)
class SalaryRange:
    min: float
    max: float

    @classmethod
    def from_dict(cls, data: Any, key: str = "salaryRange") -> Optional["SalaryRange"]:
        if data is None:
            return None
        if not isinstance(data, Mapping):
            raise ProfileFormatError(f"{key}: expected an object with min/max")
        lo = _opt_float(data, "min")
        hi = _opt_float(data, "max")
        if lo is None or hi is None:
            return None
        return cls(min=lo, max=hi)

    def overlaps(self, other: "SalaryRange") -> bool:
        return self.min <= other.max and self.max >= other.min


@dataclass(frozen=True)
class CandidateProfile:
    """
    Job seeker inputs to matching. Owned by the profile store; the match
    core only reads it.
    """
    skills: List[str] = field(default_factory=list)
    disc_red_score: float = 0.0
    disc_yellow_score: float = 0.0
    disc_green_score: float = 0.0
    disc_blue_score: float = 0.0
    primary_profile: str = ""
    secondary_profile: str = ""

    # 0-10 engagement composite; None means "not computed yet"
    proactivity_score: Optional[float] = None
    community_points: Optional[int] = None
    learning_points: Optional[int] = None
    events_attended: Optional[int] = None
    masterclasses_completed: Optional[int] = None

    # Relevance-only fields (practical filter)
    career_interests: List[str] = field(default_factory=list)
    work_authorization: Optional[str] = None
    location_preferences: List[str] = field(default_factory=list)
    job_type_preference: Optional[str] = None
    work_arrangement_preference: Optional[str] = None
    has_drivers_license: Optional[bool] = None
    salary_expectations: Optional[SalaryRange] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "skills", clean_labels(self.skills))
        object.__setattr__(self, "career_interests", clean_labels(self.career_interests))
        object.__setattr__(self, "location_preferences", clean_labels(self.location_preferences))
        object.__setattr__(self, "primary_profile", normalize_whitespace(self.primary_profile))
        object.__setattr__(self, "secondary_profile", normalize_whitespace(self.secondary_profile))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CandidateProfile":
        if not isinstance(data, Mapping):
            raise ProfileFormatError("candidate profile must be a JSON object")
        return cls(
            skills=_str_list(data, "skills"),
            disc_red_score=_opt_float(data, "discRedScore") or 0.0,
            disc_yellow_score=_opt_float(data, "discYellowScore") or 0.0,
            disc_green_score=_opt_float(data, "discGreenScore") or 0.0,
            disc_blue_score=_opt_float(data, "discBlueScore") or 0.0,
            primary_profile=_opt_str(data, "primaryProfile") or "",
            secondary_profile=_opt_str(data, "secondaryProfile") or "",
            proactivity_score=_opt_float(data, "proactivityScore"),
            community_points=_opt_int(data, "communityPoints"),
            learning_points=_opt_int(data, "learningPoints"),
            events_attended=_opt_int(data, "eventsAttended"),
            masterclasses_completed=_opt_int(data, "masterclassesCompleted"),
            career_interests=_str_list(data, "careerInterests"),
            work_authorization=_opt_str(data, "workAuthorization"),
            location_preferences=_str_list(data, "locationPreferences"),
            job_type_preference=_opt_str(data, "jobTypePreference"),
            work_arrangement_preference=_opt_str(data, "workArrangementPreference"),
            has_drivers_license=_opt_bool(data, "hasDriversLicense"),
            salary_expectations=SalaryRange.from_dict(data.get("salaryExpectations"), "salaryExpectations"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class JobRequirements:
    """
    What an employer asks for on a posting.

    work_style_preferences / team_dynamics_requirements are carried through
    but not scored yet; proactivity_weight is accepted and not applied.
    """
    required_skills: List[str] = field(default_factory=list)
    preferred_skills: List[str] = field(default_factory=list)
    preferred_disc_profiles: List[str] = field(default_factory=list)
    work_style_preferences: Any = None
    team_dynamics_requirements: Any = None
    proactivity_weight: Optional[float] = None

    # Relevance-only fields (practical filter)
    visa_sponsorship: Optional[bool] = None
    location: Optional[str] = None
    employment_type: Optional[str] = None
    work_arrangement: Optional[str] = None
    driving_license_required: Optional[bool] = None
    salary_range: Optional[SalaryRange] = None
    categories: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        object.__setattr__(self, "required_skills", clean_labels(self.required_skills))
        object.__setattr__(self, "preferred_skills", clean_labels(self.preferred_skills))
        object.__setattr__(
            self,
            "preferred_disc_profiles",
            [normalize_whitespace(p) for p in clean_labels(self.preferred_disc_profiles)],
        )
        object.__setattr__(self, "categories", clean_labels(self.categories))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JobRequirements":
        if not isinstance(data, Mapping):
            raise ProfileFormatError("job requirements must be a JSON object")
        return cls(
            required_skills=_str_list(data, "requiredSkills"),
            preferred_skills=_str_list(data, "preferredSkills"),
            preferred_disc_profiles=_str_list(data, "preferredDiscProfiles"),
            work_style_preferences=data.get("workStylePreferences"),
            team_dynamics_requirements=data.get("teamDynamicsRequirements"),
            proactivity_weight=_opt_float(data, "proactivityWeight"),
            visa_sponsorship=_opt_bool(data, "visaSponsorship"),
            location=_opt_str(data, "location"),
            employment_type=_opt_str(data, "employmentType"),
            work_arrangement=_opt_str(data, "workArrangement"),
            driving_license_required=_opt_bool(data, "drivingLicenseRequired"),
            salary_range=SalaryRange.from_dict(data.get("salaryRange"), "salaryRange"),
            categories=_str_list(data, "categories"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class EmployerRatings:
    """Five 1-5 star ratings a candidate leaves after a hiring process."""
    response_time_rating: float
    interview_style_rating: float
    communication_rating: float
    process_transparency_rating: float
    overall_experience_rating: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EmployerRatings":
        if not isinstance(data, Mapping):
            raise ProfileFormatError("ratings must be a JSON object")
        values = {}
        for key in (
                "responseTimeRating",
                "interviewStyleRating",
                "communicationRating",
                "processTransparencyRating",
                "overallExperienceRating",
        ):
            v = _opt_float(data, key)
            if v is None:
                raise ProfileFormatError(f"{key}: rating is required")
            values[key] = v
        return cls(
            response_time_rating=values["responseTimeRating"],
            interview_style_rating=values["interviewStyleRating"],
            communication_rating=values["communicationRating"],
            process_transparency_rating=values["processTransparencyRating"],
            overall_experience_rating=values["overallExperienceRating"],
        )

    def values(self) -> List[float]:
        return [
            self.response_time_rating,
            self.interview_style_rating,
            self.communication_rating,
            self.process_transparency_rating,
            self.overall_experience_rating,
        ]
