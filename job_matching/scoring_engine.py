"""
Deterministic Scoring Engine

All scoring functions are deterministic - same inputs produce same outputs.
Component scorers never raise on missing data: they degrade to 0.
Only the composite scorer can fail, and only when the candidate has no
parsed profile at all or the job record is unreadable.
"""

import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Sequence, Union

from pydantic import ValidationError

from .config import DEFAULT_CONFIG, ScoringConfig
from .errors import DataUnavailable, InvalidArgument
from .models import (
    Applicant,
    CandidateProfile,
    EducationEntry,
    EducationLevel,
    JobRequirement,
    MatchResult,
    WorkExperienceEntry,
)
from .normalize import normalize_terms, round_half_up, terms_overlap, to_naive_utc, utc_now, years_between

logger = logging.getLogger(__name__)

CandidateInput = Union[Applicant, CandidateProfile, dict, None]
JobInput = Union[JobRequirement, dict]


def calculate_education_score(
    education: Optional[Sequence[Union[EducationEntry, dict]]],
    required_level: Union[EducationLevel, str, None],
    config: Optional[ScoringConfig] = None
) -> float:
    """
    Calculate education match score (0-1).

    The candidate's highest recognized degree is compared with the required
    level on the 5-level hierarchy:
    - At or above the requirement: 1.0
    - One level below: 0.7
    - Anything lower (including unrecognized degrees): 0.3

    Args:
        education: Candidate education entries
        required_level: Job's required education level

    Returns:
        Score from 0-1, or 0 when either side is missing
    """
    config = config or DEFAULT_CONFIG
    required = EducationLevel.parse(required_level)
    if not education or required is None:
        logger.debug("Education: missing education or required level, score = 0")
        return 0.0

    highest = max(EducationLevel.ordinal_of(_degree_of(entry)) for entry in education)
    tiers = config.education_tiers

    if highest >= required.ordinal:
        score = tiers.meets
        logger.debug(f"Education: highest level {highest} >= {required.value}, score = {score}")
    elif highest == required.ordinal - 1:
        score = tiers.one_below
        logger.debug(f"Education: highest level {highest} one below {required.value}, score = {score}")
    else:
        score = tiers.other
        logger.debug(f"Education: highest level {highest} well below {required.value}, score = {score}")
    return score


def _degree_of(entry: Union[EducationEntry, dict, None]) -> Any:
    if isinstance(entry, dict):
        return entry.get("degree")
    return getattr(entry, "degree", None)


def total_experience_years(
    work_experience: Optional[Iterable[Union[WorkExperienceEntry, dict]]],
    now: Optional[datetime] = None,
    config: Optional[ScoringConfig] = None
) -> float:
    """
    Sum the duration of every position in years.

    Overlapping positions are summed, not merged. Entries without a start,
    or closed entries without an end, contribute nothing.
    """
    config = config or DEFAULT_CONFIG
    now = to_naive_utc(now) if now is not None else utc_now()
    total = 0.0
    for raw in work_experience or []:
        entry = _as_work_entry(raw)
        if entry is None or entry.start_date is None:
            continue
        end = entry.effective_end(now)
        if end is None:
            continue
        total += years_between(entry.start_date, end, config.days_per_year)
    return total


def _as_work_entry(raw: Union[WorkExperienceEntry, dict, None]) -> Optional[WorkExperienceEntry]:
    if isinstance(raw, WorkExperienceEntry):
        return raw
    if isinstance(raw, dict):
        try:
            return WorkExperienceEntry.model_validate(raw)
        except ValidationError as e:
            logger.debug(f"Skipping unreadable work experience entry: {e}")
    return None


def calculate_experience_score(
    work_experience: Optional[Sequence[Union[WorkExperienceEntry, dict]]],
    min_years: Optional[float],
    max_years: Optional[float],
    now: Optional[datetime] = None,
    config: Optional[ScoringConfig] = None
) -> float:
    """
    Calculate experience match score (0-1).

    Formula:
    - total >= max_years: 1.0
    - total >= min_years: 0.8
    - otherwise: max(0.3, total / min_years)

    A missing max_years is treated as equal to min_years.

    Args:
        work_experience: Candidate work history
        min_years: Minimum years required
        max_years: Upper end of the desired range
        now: Effective end date of current positions (defaults to now, UTC)

    Returns:
        Score from 0-1, or 0 when history or min_years is missing
    """
    config = config or DEFAULT_CONFIG
    if not work_experience or min_years is None:
        logger.debug("Experience: missing history or minimum years, score = 0")
        return 0.0

    if max_years is None:
        max_years = min_years
    tiers = config.experience_tiers
    total_years = total_experience_years(work_experience, now, config)

    if total_years >= max_years:
        score = tiers.at_max
        logger.debug(f"Experience: {total_years:.2f} >= max {max_years} years, score = {score}")
    elif total_years >= min_years:
        score = tiers.within_range
        logger.debug(f"Experience: {total_years:.2f} within {min_years}-{max_years} years, score = {score}")
    elif min_years <= 0:
        # 0/0: nothing required, nothing present
        score = tiers.at_max
    else:
        score = max(tiers.floor, total_years / min_years)
        logger.debug(f"Experience: {total_years:.2f} < min {min_years} years, score = {score:.2f}")
    return min(score, 1.0)


def _overlap_ratio(candidate_terms: Optional[Iterable[str]], required_terms: Optional[Iterable[str]]) -> float:
    candidate = normalize_terms(candidate_terms)
    required = normalize_terms(required_terms)
    if not candidate or not required:
        return 0.0
    matched = [term for term in required if terms_overlap(term, candidate)]
    return len(matched) / len(required)


def calculate_skills_score(
    candidate_skills: Optional[Iterable[str]],
    required_skills: Optional[Iterable[str]]
) -> float:
    """
    Calculate skills match score (0-1).

    A required skill counts as matched when it contains, or is contained in,
    any candidate skill (case-insensitive). Score is matched / required.
    Extra candidate skills neither help nor hurt.
    """
    score = _overlap_ratio(candidate_skills, required_skills)
    logger.debug(f"Skills score: {score:.2f}")
    return score


def calculate_eligibility_score(
    candidate_eligibility: Optional[Iterable[str]],
    required_eligibility: Optional[Iterable[str]]
) -> float:
    """
    Calculate eligibility match score (0-1).

    Licenses and civil-service eligibilities are compared the same way as
    skills: bidirectional substring containment, matched / required.
    """
    score = _overlap_ratio(candidate_eligibility, required_eligibility)
    logger.debug(f"Eligibility score: {score:.2f}")
    return score


def resolve_candidate(candidate: CandidateInput) -> Applicant:
    """
    Read ``candidate`` as an Applicant.

    A dict with a "profile" key is an applicant record ({"id", "name",
    "profile"}); any other dict is a bare profile. The returned applicant's
    profile may still be None.

    Raises:
        DataUnavailable: If the candidate is missing or cannot be read
    """
    if isinstance(candidate, Applicant):
        return candidate
    if isinstance(candidate, CandidateProfile):
        return Applicant(profile=candidate)
    if isinstance(candidate, dict):
        try:
            if "profile" in candidate:
                return Applicant.model_validate(candidate)
            return Applicant(profile=CandidateProfile.model_validate(candidate))
        except ValidationError as e:
            raise DataUnavailable(f"Candidate record could not be read: {e}") from e
    raise DataUnavailable("Candidate has no parsed profile")


def resolve_profile(candidate: CandidateInput) -> CandidateProfile:
    """
    Return the parsed profile behind ``candidate``.

    Raises:
        DataUnavailable: If there is no parsed profile to score
    """
    applicant = resolve_candidate(candidate)
    if applicant.profile is None:
        raise DataUnavailable(f"Applicant {applicant.id} has no parsed profile")
    return applicant.profile


def coerce_job(job: JobInput) -> JobRequirement:
    """
    Return ``job`` as a JobRequirement.

    Raises:
        InvalidArgument: If the job record fails validation
    """
    if isinstance(job, JobRequirement):
        return job
    if isinstance(job, dict):
        try:
            return JobRequirement.model_validate(job)
        except ValidationError as e:
            raise InvalidArgument(f"Invalid job record: {e}") from e
    raise InvalidArgument(f"Expected a job record, got {type(job).__name__}")


def calculate_match_score(
    candidate: CandidateInput,
    job: JobInput,
    config: Optional[ScoringConfig] = None,
    now: Optional[datetime] = None
) -> MatchResult:
    """
    Calculate the composite match score for one candidate and one job.

    Args:
        candidate: Applicant, parsed profile, applicant dict or profile dict
        job: Job requirement record or dict
        config: Weights and tier constants (defaults to DEFAULT_CONFIG)
        now: Reference time for current positions

    Returns:
        MatchResult with the rounded total and the four component scores

    Raises:
        DataUnavailable: If the candidate has no parsed profile
        InvalidArgument: If the job record is invalid
    """
    config = config or DEFAULT_CONFIG
    profile = resolve_profile(candidate)
    requirement = coerce_job(job)

    education_score = calculate_education_score(
        profile.education, requirement.education_level, config
    )
    experience_score = calculate_experience_score(
        profile.work_experience,
        requirement.experience_years_min,
        requirement.experience_years_max,
        now,
        config
    )
    skills_score = calculate_skills_score(profile.skills, requirement.skills)
    eligibility_score = calculate_eligibility_score(profile.eligibility, requirement.eligibility)

    weights = config.weights
    total_score = (
        (weights["education"] * education_score) +
        (weights["experience"] * experience_score) +
        (weights["skills"] * skills_score) +
        (weights["eligibility"] * eligibility_score)
    )
    total_score = min(1.0, max(0.0, round_half_up(total_score, config.score_precision)))

    logger.debug(f"Match score for job {requirement.id}: {total_score}")
    return MatchResult(
        total_score=total_score,
        education_score=education_score,
        experience_score=experience_score,
        skills_score=skills_score,
        eligibility_score=eligibility_score,
    )
