"""
Main Matcher Module

Ranks jobs for a candidate, or candidates for a job:
1. Score every pair with the deterministic scoring engine
2. Drop pairs whose candidate has no parsed profile
3. Sort by total score (highest first) and keep the top ``limit``
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

from .config import DEFAULT_LIMIT, ScoringConfig
from .errors import DataUnavailable, InvalidArgument
from .models import CandidateMatch, JobMatch, MatchResult
from .normalize import to_naive_utc, utc_now
from .scoring_engine import (
    CandidateInput,
    JobInput,
    calculate_match_score,
    coerce_job,
    resolve_candidate,
    resolve_profile,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def validate_limit(limit: int) -> int:
    """
    Check that ``limit`` is a positive integer.

    Raises:
        InvalidArgument: If it is not
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidArgument(f"limit must be a positive integer, got {limit!r}")
    return limit


def _evaluate(fn: Callable[[T], R], items: Sequence[T], max_workers: Optional[int]) -> List[R]:
    # Results keep input order whether or not a pool is used
    if max_workers and max_workers > 1 and len(items) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(fn, items))
    return [fn(item) for item in items]


def score_pair(
    candidate: CandidateInput,
    job: JobInput,
    config: Optional[ScoringConfig] = None,
    now: Optional[datetime] = None
) -> MatchResult:
    """
    Score exactly one candidate against one job.

    Unlike the ranking helpers this does not swallow DataUnavailable: the
    caller must be able to tell "insufficient data" from a low score.

    Example:
        >>> result = score_pair(applicant, job)
        >>> print(f"Match: {result.total_score}")
    """
    result = calculate_match_score(candidate, job, config, now)
    logger.info(f"Pair score: {result.total_score}")
    return result


def rank_jobs_for_candidate(
    candidate: CandidateInput,
    jobs: Iterable[JobInput],
    limit: int = DEFAULT_LIMIT,
    config: Optional[ScoringConfig] = None,
    now: Optional[datetime] = None,
    max_workers: Optional[int] = None
) -> List[JobMatch]:
    """
    Rank jobs for one candidate.

    Args:
        candidate: Applicant, parsed profile, applicant dict or profile dict
        jobs: Job requirement records or dicts
        limit: Maximum number of matches to return (positive int)
        config: Scoring weights and tiers
        now: Reference time for current positions, shared by every pair
        max_workers: Score pairs on a thread pool of this size

    Returns:
        Matches sorted by match_score (highest first, ties in input order).
        Empty when the candidate has no parsed profile.

    Raises:
        InvalidArgument: If limit or a job record is invalid
    """
    validate_limit(limit)
    now = to_naive_utc(now) if now is not None else utc_now()
    requirements = [coerce_job(job) for job in jobs]

    try:
        profile = resolve_profile(candidate)
    except DataUnavailable as e:
        logger.warning(f"Skipping {len(requirements)} jobs: {e}")
        return []

    def score(job):
        details = calculate_match_score(profile, job, config, now)
        return JobMatch(job=job, match_score=details.total_score, match_details=details)

    matches = _evaluate(score, requirements, max_workers)
    matches.sort(key=lambda m: m.match_score, reverse=True)

    logger.info(f"Ranked {len(matches)} jobs, returning top {min(limit, len(matches))}")
    return matches[:limit]


def rank_candidates_for_job(
    job: JobInput,
    candidates: Iterable[CandidateInput],
    limit: int = DEFAULT_LIMIT,
    config: Optional[ScoringConfig] = None,
    now: Optional[datetime] = None,
    max_workers: Optional[int] = None
) -> List[CandidateMatch]:
    """
    Rank candidates for one job.

    Candidates may be Applicant models, applicant dicts ({"id", "name",
    "profile"}), or bare profiles (models or dicts). A candidate without a
    parsed profile is left out of the result instead of failing the whole
    ranking.

    Raises:
        InvalidArgument: If limit or the job record is invalid
    """
    validate_limit(limit)
    now = to_naive_utc(now) if now is not None else utc_now()
    requirement = coerce_job(job)

    def score(candidate) -> Optional[CandidateMatch]:
        try:
            applicant = resolve_candidate(candidate)
            details = calculate_match_score(applicant, requirement, config, now)
        except DataUnavailable as e:
            logger.warning(f"Skipping candidate for job {requirement.id}: {e}")
            return None
        return CandidateMatch(applicant=applicant, match_score=details.total_score, match_details=details)

    results = _evaluate(score, list(candidates), max_workers)
    matches = [match for match in results if match is not None]
    matches.sort(key=lambda m: m.match_score, reverse=True)

    logger.info(
        f"Ranked {len(matches)} of {len(results)} candidates for job {requirement.id}, "
        f"returning top {min(limit, len(matches))}"
    )
    return matches[:limit]
