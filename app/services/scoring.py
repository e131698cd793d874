"""
Recommendation Scorer

PURPOSE:
Rank job postings for a student with a deterministic weighted score.

HOW IT WORKS:
1. Skill match (50%)   - share of the job's required skills the student has
2. CGPA (25%)          - how the student's CGPA compares to the job minimum
3. Interest (25%)      - whether the job's domain is one the student picked
4. Combine, round, sort descending

Each component is clamped to 0-100 before combining. Students who have not
added skills or interests yet get cold-start priors (see ScoringPolicy).

This is a pure function: no I/O, no shared state. The recommendation
service and the /recommendations/score endpoint both call score().
"""

import math
from typing import Iterable, List, Optional, Set

from app.models.recommendation import (
    JobPosting, ScoredMatch, ScoringPolicy, StudentProfile
)


SKILL_WEIGHT = 0.5
CGPA_WEIGHT = 0.25
INTEREST_WEIGHT = 0.25

MAX_CGPA = 10.0
MAX_SCORE = 100.0

DEFAULT_POLICY = ScoringPolicy()

FALLBACK_EXPLANATION = "Based on your profile and interests."


# ============================================================
# HELPERS
# ============================================================

def round_half_up(value: float) -> int:
    """Round to nearest integer, .5 rounds up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> float:
    return max(0.0, min(MAX_SCORE, value))


def format_number(value: float) -> str:
    """Render 8.0 as '8' and 7.5 as '7.5', keeping every digit otherwise."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


# ============================================================
# COMPONENT SCORES
# ============================================================

def skill_match_component(
    required_skill_ids: List[str],
    possessed_skill_ids: Set[str],
    policy: ScoringPolicy = DEFAULT_POLICY
) -> float:
    """
    Percentage of required skills the student has.

    A job with no required skills says nothing about fit, so fall back
    to a prior that depends only on whether the student listed any skill.
    """
    if not required_skill_ids:
        if possessed_skill_ids:
            return policy.cold_start_skill_score_with_skills
        return policy.cold_start_skill_score_without_skills

    matched = sum(1 for skill_id in required_skill_ids if skill_id in possessed_skill_ids)
    return MAX_SCORE * matched / len(required_skill_ids)


def cgpa_component(student_cgpa: float, min_cgpa: float) -> float:
    """
    Proximity of the student's CGPA to the job minimum.

    - no threshold               -> 100
    - meets threshold            -> 50..100, scaled by headroom up to 10
    - below threshold            -> 0..50, proportional to the gap

    A threshold of 10 leaves no headroom; meeting it scores 100.
    """
    if min_cgpa == 0:
        return MAX_SCORE

    if student_cgpa >= min_cgpa:
        if min_cgpa >= MAX_CGPA:
            return MAX_SCORE
        return min(MAX_SCORE, ((student_cgpa - min_cgpa) / (MAX_CGPA - min_cgpa)) * 50 + 50)

    return max(0.0, (student_cgpa / min_cgpa) * 50)


def interest_component(
    job_interest_id: Optional[str],
    possessed_interest_ids: Set[str],
    policy: ScoringPolicy = DEFAULT_POLICY
) -> float:
    if job_interest_id and job_interest_id in possessed_interest_ids:
        return MAX_SCORE
    if possessed_interest_ids:
        return policy.unmatched_interest_score
    return policy.cold_start_interest_score


def combine(skill_score: float, cgpa_score: float, interest_score: float) -> int:
    return round_half_up(
        clamp_score(skill_score) * SKILL_WEIGHT +
        clamp_score(cgpa_score) * CGPA_WEIGHT +
        clamp_score(interest_score) * INTEREST_WEIGHT
    )


# ============================================================
# EXPLANATION
# ============================================================

def build_explanation(
    matched_count: int,
    required_count: int,
    student_cgpa: float,
    min_cgpa: float,
    matched_interest_name: Optional[str] = None
) -> str:
    """Human-readable reason, only the clauses that apply."""
    clauses = []

    if matched_count > 0:
        clauses.append(f"You have {matched_count} of {required_count} required skills.")

    cgpa, minimum = format_number(student_cgpa), format_number(min_cgpa)
    if student_cgpa >= min_cgpa:
        clauses.append(f"Your CGPA ({cgpa}) meets the minimum requirement ({minimum}).")
    elif min_cgpa > 0:
        clauses.append(
            f"Your CGPA ({cgpa}) is below the preferred {minimum}, but you may still be considered."
        )

    if matched_interest_name:
        clauses.append(f"This role aligns with your interest in {matched_interest_name}.")

    return " ".join(clauses) or FALLBACK_EXPLANATION


# ============================================================
# SCORER
# ============================================================

def score_job(
    profile: StudentProfile,
    job: JobPosting,
    possessed_skill_ids: Set[str],
    possessed_interest_ids: Set[str],
    policy: ScoringPolicy = DEFAULT_POLICY
) -> ScoredMatch:
    """Score a single job. Missing fields default (cgpa 0, no skills, no interest)."""
    student_cgpa = (profile.cgpa if profile else None) or 0.0
    min_cgpa = job.min_cgpa or 0.0
    required = job.required_skills or []
    required_ids = [rs.skill_id for rs in required]

    matched = [rs.details() for rs in required if rs.skill_id in possessed_skill_ids]
    missing = [rs.details() for rs in required if rs.skill_id not in possessed_skill_ids]

    skill_score = clamp_score(skill_match_component(required_ids, possessed_skill_ids, policy))
    cgpa_score = clamp_score(cgpa_component(student_cgpa, min_cgpa))
    interest_score = clamp_score(interest_component(job.interest_id, possessed_interest_ids, policy))

    interest_matched = bool(job.interest_id) and job.interest_id in possessed_interest_ids
    interest_name = None
    if interest_matched:
        interest_name = (job.interest.name if job.interest else None) or job.interest_id

    return ScoredMatch(
        job_id=job.id,
        job=job,
        total_score=combine(skill_score, cgpa_score, interest_score),
        skill_match_score=round_half_up(skill_score),
        cgpa_score=round_half_up(cgpa_score),
        interest_score=round_half_up(interest_score),
        matched_skills=matched,
        missing_skills=missing,
        explanation=build_explanation(
            len(matched), len(required_ids), student_cgpa, min_cgpa, interest_name
        )
    )


def score(
    profile: Optional[StudentProfile],
    jobs: Iterable[JobPosting],
    possessed_skill_ids: Iterable[str],
    possessed_interest_ids: Iterable[str],
    policy: ScoringPolicy = DEFAULT_POLICY
) -> List[ScoredMatch]:
    """
    Score every job and return matches sorted by total score, highest first.

    The sort is stable: equal totals keep the order jobs were given in.
    """
    skill_ids = set(possessed_skill_ids or [])
    interest_ids = set(possessed_interest_ids or [])
    profile = profile or StudentProfile()

    matches = [
        score_job(profile, job, skill_ids, interest_ids, policy)
        for job in jobs or []
    ]
    return sorted(matches, key=lambda m: m.total_score, reverse=True)
