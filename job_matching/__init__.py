"""
Applicant-Job Matching Engine

Scores a parsed personal data sheet (PDS) against a job posting on four
weighted dimensions (education, experience, skills, eligibility) and ranks
jobs or candidates by the result.

Usage:
    from job_matching import calculate_match_score, rank_jobs_for_candidate

    result = calculate_match_score(profile, job)
    print(f"Match: {result.total_score}")
"""

from .config import DEFAULT_CONFIG, WEIGHTS, MatcherSettings, ScoringConfig
from .errors import DataUnavailable, InvalidArgument, MatchingError
from .matcher import rank_candidates_for_job, rank_jobs_for_candidate, score_pair
from .models import (
    Applicant,
    CandidateMatch,
    CandidateProfile,
    EducationLevel,
    JobMatch,
    JobRequirement,
    MatchResult,
)
from .recommendations import JobRecommender, RecommendationSettings
from .scoring_engine import calculate_match_score
from .service import JobMatcher, MatchDataSource

__all__ = [
    "Applicant",
    "CandidateMatch",
    "CandidateProfile",
    "DEFAULT_CONFIG",
    "DataUnavailable",
    "EducationLevel",
    "InvalidArgument",
    "JobMatch",
    "JobMatcher",
    "JobRecommender",
    "JobRequirement",
    "MatchDataSource",
    "MatchResult",
    "MatcherSettings",
    "MatchingError",
    "RecommendationSettings",
    "ScoringConfig",
    "WEIGHTS",
    "calculate_match_score",
    "rank_candidates_for_job",
    "rank_jobs_for_candidate",
    "score_pair",
]
__version__ = "1.0.0"
