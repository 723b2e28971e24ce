import itertools

from pollen.compatibility import calculate_job_compatibility
from pollen.core.numeric import round_half_up
from pollen.models import CandidateProfile, JobRequirements


def _analyst() -> CandidateProfile:
    return CandidateProfile(
        skills=["Excel", "Data Analysis"],
        disc_red_score=40,
        disc_yellow_score=20,
        disc_green_score=20,
        disc_blue_score=20,
        primary_profile="Red - Dominant",
        secondary_profile="Blue - Analytical",
        proactivity_score=7,
    )


def _analyst_job() -> JobRequirements:
    return JobRequirements(
        required_skills=["excel"],
        preferred_skills=["SQL"],
        preferred_disc_profiles=["Red - Dominant"],
    )


def test_end_to_end_example():
    score = calculate_job_compatibility(_analyst(), _analyst_job())
    assert score.skills_score == 70
    assert score.behavioral_score == 72
    assert score.proactivity_score == 70
    assert score.overall_compatibility == 71
    assert score.breakdown.skills_match.skills_gap == []
    assert score.breakdown.skills_match.preferred_skills_bonus == 0


def test_accepts_json_dicts(load_json):
    candidate = load_json("candidates.json")[0]
    job = load_json("job_data_analyst.json")
    score = calculate_job_compatibility(candidate, job)
    assert score.overall_compatibility == 71


def test_to_dict_shape():
    d = calculate_job_compatibility(_analyst(), _analyst_job()).to_dict()
    assert set(d) == {"skillsScore", "behavioralScore", "proactivityScore", "overallCompatibility", "breakdown"}
    assert set(d["breakdown"]) == {"skillsMatch", "behavioralMatch", "proactivityMatch"}
    assert set(d["breakdown"]["skillsMatch"]) == {"requiredSkillsCovered", "preferredSkillsBonus", "skillsGap"}
    assert set(d["breakdown"]["behavioralMatch"]) == {
        "primaryProfileAlignment",
        "secondaryProfileAlignment",
        "workStyleCompatibility",
        "teamFitScore",
    }
    assert set(d["breakdown"]["proactivityMatch"]) == {
        "communityEngagement",
        "learningCommitment",
        "overallProactivity",
    }


def test_empty_inputs_never_fail():
    score = calculate_job_compatibility(CandidateProfile(), JobRequirements())
    assert score.skills_score == 75
    assert score.behavioral_score == 75
    assert score.proactivity_score == 60
    assert score.overall_compatibility == 75
    assert score.breakdown.skills_match.required_skills_covered == 100
    assert score.breakdown.skills_match.skills_gap == []


def test_empty_dicts_never_fail():
    score = calculate_job_compatibility({}, {})
    assert score.overall_compatibility == 75


def test_proactivity_weight_is_not_applied():
    base = calculate_job_compatibility(_analyst(), _analyst_job())
    weighted = calculate_job_compatibility(
        _analyst(),
        JobRequirements(
            required_skills=["excel"],
            preferred_skills=["SQL"],
            preferred_disc_profiles=["Red - Dominant"],
            proactivity_weight=1.0,
        ),
    )
    assert weighted == base


def test_proactivity_does_not_move_overall():
    low = CandidateProfile(skills=["Excel"], proactivity_score=0)
    high = CandidateProfile(skills=["Excel"], proactivity_score=10)
    a = calculate_job_compatibility(low, _analyst_job())
    b = calculate_job_compatibility(high, _analyst_job())
    assert a.proactivity_score == 0
    assert b.proactivity_score == 100
    assert a.overall_compatibility == b.overall_compatibility


def test_inputs_are_not_mutated_and_results_repeat():
    cand, job = _analyst(), _analyst_job()
    before = (cand.to_dict(), job.to_dict())
    first = calculate_job_compatibility(cand, job)
    second = calculate_job_compatibility(cand, job)
    assert first == second
    assert (cand.to_dict(), job.to_dict()) == before


def test_scores_bounded_and_overall_formula_holds():
    skill_sets = [[], ["Excel"], ["python", "SQL", "Docker"]]
    required_sets = [[], ["excel"], ["python", "sql", "kotlin"]]
    preferred_profile_sets = [[], ["Red - Dominant"], ["Blue - Analytical", "Green - Steady"]]
    primaries = ["Red - Dominant", "Green - Steady"]
    proactivity = [None, 0, 4.5, 15]

    for skills, required, preferred, primary, pro in itertools.product(
            skill_sets, required_sets, preferred_profile_sets, primaries, proactivity
    ):
        cand = CandidateProfile(
            skills=skills,
            disc_red_score=55,
            disc_blue_score=35,
            disc_green_score=5,
            primary_profile=primary,
            secondary_profile="Blue - Analytical",
            proactivity_score=pro,
        )
        job = JobRequirements(required_skills=required, preferred_disc_profiles=preferred)
        s = calculate_job_compatibility(cand, job)
        for value in (s.skills_score, s.behavioral_score, s.proactivity_score, s.overall_compatibility):
            assert isinstance(value, int)
            assert 0 <= value <= 100
        assert s.overall_compatibility == round_half_up(s.skills_score * 0.7 + s.behavioral_score * 0.3)
