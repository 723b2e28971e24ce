from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class SkillsMatch:
    required_skills_covered: int  # percent
    preferred_skills_bonus: int   # percent
    skills_gap: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "requiredSkillsCovered": self.required_skills_covered,
            "preferredSkillsBonus": self.preferred_skills_bonus,
            "skillsGap": list(self.skills_gap),
        }


@dataclass(frozen=True)
class BehavioralMatch:
    primary_profile_alignment: int
    secondary_profile_alignment: int
    work_style_compatibility: int
    team_fit_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primaryProfileAlignment": self.primary_profile_alignment,
            "secondaryProfileAlignment": self.secondary_profile_alignment,
            "workStyleCompatibility": self.work_style_compatibility,
            "teamFitScore": self.team_fit_score,
        }


@dataclass(frozen=True)
class ProactivityMatch:
    community_engagement: int
    learning_commitment: int
    overall_proactivity: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "communityEngagement": self.community_engagement,
            "learningCommitment": self.learning_commitment,
            "overallProactivity": self.overall_proactivity,
        }


@dataclass(frozen=True)
class CompatibilityBreakdown:
    # Explanation payload only; never feeds the headline score
    skills_match: SkillsMatch
    behavioral_match: BehavioralMatch
    proactivity_match: ProactivityMatch

    def to_dict(self) -> Dict[str, Any]:
        return {
            "skillsMatch": self.skills_match.to_dict(),
            "behavioralMatch": self.behavioral_match.to_dict(),
            "proactivityMatch": self.proactivity_match.to_dict(),
        }


@dataclass(frozen=True)
class CompatibilityScore:
    skills_score: int
    behavioral_score: int
    proactivity_score: int
    overall_compatibility: int
    breakdown: CompatibilityBreakdown

    def to_dict(self) -> Dict[str, Any]:
        return {
            "skillsScore": self.skills_score,
            "behavioralScore": self.behavioral_score,
            "proactivityScore": self.proactivity_score,
            "overallCompatibility": self.overall_compatibility,
            "breakdown": self.breakdown.to_dict(),
        }
