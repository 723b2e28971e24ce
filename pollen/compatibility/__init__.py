from .engine import calculate_job_compatibility
from .types import (
    BehavioralMatch,
    CompatibilityBreakdown,
    CompatibilityScore,
    ProactivityMatch,
    SkillsMatch,
)

__all__ = [
    "calculate_job_compatibility",
    "CompatibilityScore",
    "CompatibilityBreakdown",
    "SkillsMatch",
    "BehavioralMatch",
    "ProactivityMatch",
]
