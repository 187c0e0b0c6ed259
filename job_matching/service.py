"""
Data-supplier driven matching workflows.

The matcher never talks to a database itself. Callers hand in an object
implementing ``MatchDataSource``; JobMatcher loads what it needs through it
and delegates the scoring and ranking to the pure functions.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import List, Optional, Protocol, Sequence, Union

from .config import DEFAULT_CONFIG, MatcherSettings, ScoringConfig
from .errors import DataUnavailable
from .matcher import rank_candidates_for_job, rank_jobs_for_candidate, validate_limit
from .models import Applicant, CandidateMatch, JobMatch, JobRequirement, MatchResult
from .normalize import to_naive_utc, utc_now
from .scoring_engine import calculate_match_score

logger = logging.getLogger(__name__)

RecordId = Union[str, int]


class MatchDataSource(Protocol):
    async def get_applicant(self, applicant_id: RecordId) -> Optional[Applicant]:
        ...

    async def get_job(self, job_id: RecordId) -> Optional[JobRequirement]:
        ...

    async def list_jobs(self) -> Sequence[JobRequirement]:
        ...

    async def list_applicants(self) -> Sequence[Applicant]:
        ...


class JobMatcher:
    """Scores and ranks applicants and jobs fetched from a data source."""

    def __init__(
        self,
        source: MatchDataSource,
        config: Optional[ScoringConfig] = None,
        settings: Optional[MatcherSettings] = None,
    ) -> None:
        self.source = source
        self.config = config or DEFAULT_CONFIG
        self.settings = settings or MatcherSettings()

    def _limit(self, limit: Optional[int]) -> int:
        return validate_limit(self.settings.default_limit if limit is None else limit)

    async def load_applicant(self, applicant_id: RecordId) -> Applicant:
        """
        Fetch one applicant record.

        Raises:
            DataUnavailable: If the applicant does not exist
        """
        applicant = await self.source.get_applicant(applicant_id)
        if applicant is None:
            raise DataUnavailable(f"Applicant {applicant_id} not found")
        return applicant

    async def _job(self, job_id: RecordId) -> JobRequirement:
        job = await self.source.get_job(job_id)
        if job is None:
            raise DataUnavailable(f"Job {job_id} not found")
        return job

    async def score(
        self, applicant_id: RecordId, job_id: RecordId, now: Optional[datetime] = None
    ) -> MatchResult:
        """
        Score one applicant against one job.

        Raises:
            DataUnavailable: If either record is missing or the applicant
                has no parsed profile
        """
        applicant, job = await asyncio.gather(self.load_applicant(applicant_id), self._job(job_id))
        return calculate_match_score(applicant, job, self.config, now)

    async def find_matching_jobs(
        self, applicant_id: RecordId, limit: Optional[int] = None, now: Optional[datetime] = None
    ) -> List[JobMatch]:
        """Rank the open jobs for one applicant."""
        limit = self._limit(limit)
        applicant, jobs = await asyncio.gather(self.load_applicant(applicant_id), self.source.list_jobs())
        return self._rank_open_jobs(applicant, jobs, limit, now)

    async def match_jobs_for_applicant(
        self, applicant: Applicant, limit: Optional[int] = None, now: Optional[datetime] = None
    ) -> List[JobMatch]:
        """Rank the open jobs for an applicant record the caller already holds."""
        limit = self._limit(limit)
        jobs = await self.source.list_jobs()
        return self._rank_open_jobs(applicant, jobs, limit, now)

    def _rank_open_jobs(
        self, applicant: Applicant, jobs: Sequence[JobRequirement], limit: int, now: Optional[datetime]
    ) -> List[JobMatch]:
        now = to_naive_utc(now) if now is not None else utc_now()
        open_jobs = [job for job in jobs if job.is_open(now)]
        logger.info(f"Matching applicant {applicant.id} against {len(open_jobs)} open jobs")
        return rank_jobs_for_candidate(
            applicant,
            open_jobs,
            limit,
            self.config,
            now,
            self.settings.max_workers,
        )

    async def find_matching_applicants(
        self, job_id: RecordId, limit: Optional[int] = None, now: Optional[datetime] = None
    ) -> List[CandidateMatch]:
        """Rank every applicant for one job."""
        limit = self._limit(limit)
        job, applicants = await asyncio.gather(self._job(job_id), self.source.list_applicants())
        logger.info(f"Matching {len(applicants)} applicants against job {job_id}")
        return rank_candidates_for_job(
            job,
            applicants,
            limit,
            self.config,
            now,
            self.settings.max_workers,
        )
