"""
Tests for the recommendation scorer (app/services/scoring.py).
"""

import pytest

from app.models.recommendation import (
    InterestDetails, JobPosting, RequiredSkill, ScoringPolicy, SkillDetails, StudentProfile
)
from app.services.scoring import (
    FALLBACK_EXPLANATION,
    build_explanation,
    cgpa_component,
    combine,
    format_number,
    interest_component,
    round_half_up,
    score,
    score_job,
    skill_match_component,
)


def required(*skill_ids):
    return [
        RequiredSkill(skill_id=sid, skill=SkillDetails(id=sid, name=sid.upper()))
        for sid in skill_ids
    ]


def job(job_id="job-1", min_cgpa=0, interest_id=None, skills=(), interest_name=None):
    return JobPosting(
        id=job_id,
        title=f"Role {job_id}",
        min_cgpa=min_cgpa,
        interest_id=interest_id,
        interest=InterestDetails(id=interest_id, name=interest_name) if interest_id else None,
        required_skills=required(*skills),
    )


class TestSkillComponent:

    def test_no_required_skills_no_possessed_skills(self):
        assert skill_match_component([], set()) == 25

    def test_no_required_skills_with_possessed_skills(self):
        assert skill_match_component([], {"python"}) == 50

    def test_partial_match(self):
        value = skill_match_component(["a", "b", "c"], {"a", "b"})
        assert round_half_up(value) == 67

    def test_full_and_zero_match(self):
        assert skill_match_component(["a", "b"], {"a", "b", "z"}) == 100
        assert skill_match_component(["a", "b"], {"z"}) == 0

    def test_policy_overrides_cold_start(self):
        policy = ScoringPolicy(
            cold_start_skill_score_with_skills=60,
            cold_start_skill_score_without_skills=10,
        )
        assert skill_match_component([], {"a"}, policy) == 60
        assert skill_match_component([], set(), policy) == 10


class TestCgpaComponent:

    @pytest.mark.parametrize("student_cgpa", [0, 4.2, 9.9])
    def test_no_threshold(self, student_cgpa):
        assert cgpa_component(student_cgpa, 0) == 100

    def test_exactly_at_threshold(self):
        assert cgpa_component(7, 7) == 50

    def test_perfect_cgpa(self):
        assert cgpa_component(10, 7) == 100

    def test_below_threshold(self):
        assert cgpa_component(4, 8) == 25

    def test_above_threshold_partial(self):
        assert round_half_up(cgpa_component(8, 7)) == 67

    def test_threshold_of_ten_met(self):
        assert cgpa_component(10, 10) == 100

    def test_threshold_of_ten_missed(self):
        assert cgpa_component(9, 10) == 45

    def test_missing_cgpa_scores_zero_against_threshold(self):
        assert cgpa_component(0, 6) == 0


class TestInterestComponent:

    def test_matched_interest(self):
        assert interest_component("web", {"web", "data"}) == 100

    def test_unmatched_interest(self):
        assert interest_component("web", {"data"}) == 25

    def test_job_without_interest(self):
        assert interest_component(None, {"data"}) == 25

    def test_cold_start_no_interests(self):
        assert interest_component("web", set()) == 50
        assert interest_component(None, set()) == 50


class TestCombine:

    def test_weights(self):
        assert combine(100, 0, 0) == 50
        assert combine(0, 100, 0) == 25
        assert combine(0, 0, 100) == 25

    def test_components_clamped_before_combining(self):
        assert combine(150, -20, 100) == 75

    def test_half_rounds_up(self):
        assert combine(25, 2, 0) == 13
        assert combine(25, 100, 50) == 50
        # 62.5 rounds to 63, not to the even 62
        assert combine(75, 50, 50) == 63


class TestExplanation:

    def test_all_clauses(self):
        text = build_explanation(1, 2, 8, 7, "Web Development")
        assert text == (
            "You have 1 of 2 required skills. "
            "Your CGPA (8) meets the minimum requirement (7). "
            "This role aligns with your interest in Web Development."
        )

    def test_below_threshold_clause(self):
        text = build_explanation(0, 3, 6.5, 7.5)
        assert text == "Your CGPA (6.5) is below the preferred 7.5, but you may still be considered."

    def test_no_skill_clause_when_nothing_matched(self):
        assert "required skills" not in build_explanation(0, 2, 8, 7)

    @pytest.mark.parametrize("value,text", [(8, "8"), (8.0, "8"), (7.5, "7.5"), (7.1234567, "7.1234567"), (0, "0")])
    def test_number_rendering(self, value, text):
        assert format_number(value) == text

    def test_cgpa_keeps_full_precision(self):
        assert build_explanation(0, 0, 7.1234567, 7) == (
            "Your CGPA (7.1234567) meets the minimum requirement (7)."
        )

    def test_fallback(self):
        assert build_explanation(0, 0, -1, 0) == FALLBACK_EXPLANATION


class TestScoreJob:

    def test_end_to_end_example(self):
        match = score_job(
            StudentProfile(cgpa=8),
            job(min_cgpa=7, interest_id="x", skills=("a", "b"), interest_name="AI"),
            {"a"},
            {"x"},
        )
        assert match.skill_match_score == 50
        assert match.cgpa_score == 67
        assert match.interest_score == 100
        assert match.total_score == 67
        assert [s.id for s in match.matched_skills] == ["a"]
        assert [s.id for s in match.missing_skills] == ["b"]
        assert match.explanation.endswith("This role aligns with your interest in AI.")

    def test_interest_match_total(self):
        match = score_job(StudentProfile(cgpa=9), job(interest_id="x"), set(), {"x"})
        assert match.interest_score == 100
        assert match.total_score == round_half_up(25 * 0.5 + 100 * 0.25 + 100 * 0.25)

    def test_missing_fields_default(self):
        posting = JobPosting(id="bare", min_cgpa=None, interest_id=None, required_skills=None)
        match = score_job(StudentProfile(cgpa=None), posting, set(), set())
        assert match.skill_match_score == 25
        assert match.cgpa_score == 100
        assert match.interest_score == 50
        assert match.total_score == 50
        assert match.matched_skills == [] and match.missing_skills == []

    def test_skill_details_fall_back_to_id(self):
        posting = JobPosting(id="j", required_skills=[RequiredSkill(skill_id="s1")])
        match = score_job(StudentProfile(), posting, {"s1"}, set())
        assert match.matched_skills[0].id == "s1"
        assert match.matched_skills[0].name is None


class TestScore:

    def test_sorted_descending(self):
        jobs = [
            job("low", min_cgpa=9, skills=("a", "b", "c")),
            job("high", skills=("a",), interest_id="x"),
            job("mid", skills=("a", "b")),
        ]
        matches = score(StudentProfile(cgpa=7), jobs, {"a"}, {"x"})
        totals = [m.total_score for m in matches]
        assert totals == sorted(totals, reverse=True)
        assert matches[0].job_id == "high"

    def test_equal_scores_keep_input_order(self):
        jobs = [job("first"), job("second"), job("third")]
        matches = score(StudentProfile(cgpa=8), jobs, set(), set())
        assert [m.job_id for m in matches] == ["first", "second", "third"]

    def test_matched_and_missing_partition_required(self):
        jobs = [job("j1", skills=("a", "b", "c")), job("j2", skills=("d",)), job("j3")]
        for match in score(StudentProfile(cgpa=5), jobs, {"a", "c", "d"}, set()):
            required_ids = [rs.skill_id for rs in match.job.required_skills]
            matched = {s.id for s in match.matched_skills}
            missing = {s.id for s in match.missing_skills}
            assert matched | missing == set(required_ids)
            assert not matched & missing

    def test_scores_stay_in_range(self):
        jobs = [job(f"j{i}", min_cgpa=m, skills=("a",)) for i, m in enumerate([0, 5, 9.5, 10])]
        for match in score(StudentProfile(cgpa=9.7), jobs, {"a"}, set()):
            for value in (match.total_score, match.skill_match_score, match.cgpa_score, match.interest_score):
                assert 0 <= value <= 100

    def test_empty_inputs(self):
        assert score(None, [], [], []) == []

    def test_accepts_lists_for_possessed_ids(self):
        matches = score(StudentProfile(cgpa=8), [job(skills=("a",))], ["a"], ["x"])
        assert matches[0].skill_match_score == 100

    def test_idempotent(self):
        jobs = [job("j1", min_cgpa=7, skills=("a", "b")), job("j2", interest_id="x")]
        first = score(StudentProfile(cgpa=8), jobs, {"a"}, {"x"})
        second = score(StudentProfile(cgpa=8), jobs, {"a"}, {"x"})
        assert [m.model_dump() for m in first] == [m.model_dump() for m in second]
