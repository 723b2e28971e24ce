from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pollen import config
from pollen.compatibility import CompatibilityScore, calculate_job_compatibility
from pollen.models import CandidateProfile, JobRequirements, ProfileFormatError
from pollen.relevance import JobRelevance, assess_job_relevance


@dataclass(frozen=True)
class RankedCandidate:
    candidate: CandidateProfile
    score: CompatibilityScore
    relevance: JobRelevance
    candidate_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidateId": self.candidate_id,
            "compatibility": self.score.to_dict(),
            "relevance": self.relevance.to_dict(),
        }


def rank_candidates(
        job: JobRequirements,
        candidates: Sequence[CandidateProfile],
        *,
        top_n: Optional[int] = None,
        require_practical_fit: Optional[bool] = None,
        candidate_ids: Optional[Sequence[Optional[str]]] = None,
) -> List[RankedCandidate]:
    """
    Score every candidate against one job, best first.
    Ties keep input order (stable sort). top_n / require_practical_fit fall
    back to POLLEN_RANK_TOP_N / POLLEN_REQUIRE_PRACTICAL_FIT.
    """
    cfg = config.load_ranking_config()
    limit = cfg.top_n if top_n is None else top_n
    strict = cfg.require_practical_fit if require_practical_fit is None else require_practical_fit

    ids = list(candidate_ids) if candidate_ids is not None else [None] * len(candidates)
    if len(ids) != len(candidates):
        raise ValueError(
            f"candidate_ids has {len(ids)} entries for {len(candidates)} candidates"
        )

    ranked: List[RankedCandidate] = []
    for cand, cid in zip(candidates, ids):
        relevance = assess_job_relevance(cand, job)
        if strict and not relevance.practical_fit:
            continue
        ranked.append(
            RankedCandidate(
                candidate=cand,
                score=calculate_job_compatibility(cand, job),
                relevance=relevance,
                candidate_id=cid,
            )
        )

    ranked.sort(key=lambda r: r.score.overall_compatibility, reverse=True)
    return ranked[: max(0, limit)]


def rank_candidate_records(
        job_record: Mapping[str, Any],
        candidate_records: Sequence[Mapping[str, Any]],
        *,
        top_n: Optional[int] = None,
        require_practical_fit: Optional[bool] = None,
) -> List[RankedCandidate]:
    """
    JSON-boundary variant. A bad job record raises ProfileFormatError; bad
    candidate records are skipped with a warning so one broken profile does
    not sink the whole list.
    """
    job = JobRequirements.from_dict(job_record)

    candidates: List[CandidateProfile] = []
    ids: List[Optional[str]] = []
    for idx, record in enumerate(candidate_records):
        try:
            candidates.append(CandidateProfile.from_dict(record))
        except ProfileFormatError as exc:
            print(f"[Pollen] WARNING: skipping candidate #{idx}: {exc}", file=sys.stderr)
            continue
        raw_id = record.get("id") if isinstance(record, Mapping) else None
        ids.append(str(raw_id) if raw_id is not None else None)

    return rank_candidates(
        job,
        candidates,
        top_n=top_n,
        require_practical_fit=require_practical_fit,
        candidate_ids=ids,
    )
