"""
Job recommendations.

Picks the best-matching open jobs for an applicant, keeping only those at or
above a score threshold. Delivering the recommendations (email, push, ...)
is left to an optional async ``notify`` callback.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from .models import Applicant, JobMatch
from .service import JobMatcher, RecordId

logger = logging.getLogger(__name__)

Notifier = Callable[[Applicant, List[JobMatch]], Awaitable[Any]]


class RecommendationSettings(BaseModel):
    threshold: float = Field(default=0.7, ge=0.0, le=1.0)  # Minimum match score to recommend
    max_recommendations: int = Field(default=5, gt=0)  # Per applicant
    candidate_pool: int = Field(default=20, gt=0)  # Top matches considered before filtering


def select_recommendations(
    matches: Sequence[JobMatch], settings: Optional[RecommendationSettings] = None
) -> List[JobMatch]:
    """Keep ranked matches at or above the threshold, up to max_recommendations."""
    settings = settings or RecommendationSettings()
    selected = [m for m in matches if m.match_score >= settings.threshold]
    return selected[: settings.max_recommendations]


class JobRecommender:
    def __init__(
        self,
        matcher: JobMatcher,
        settings: Optional[RecommendationSettings] = None,
        notify: Optional[Notifier] = None,
    ) -> None:
        self.matcher = matcher
        self.settings = settings or RecommendationSettings()
        self.notify = notify

    def get_settings(self) -> RecommendationSettings:
        return self.settings

    def update_settings(self, **changes: Any) -> RecommendationSettings:
        """
        Update threshold, max_recommendations or candidate_pool.

        Raises:
            pydantic.ValidationError: If a new value is out of range
        """
        self.settings = RecommendationSettings(**{**self.settings.model_dump(), **changes})
        return self.settings

    async def recommend_for_applicant(self, applicant_id: RecordId) -> List[JobMatch]:
        """
        Recommend open jobs to one applicant.

        Raises:
            DataUnavailable: If the applicant does not exist
        """
        applicant = await self.matcher.load_applicant(applicant_id)
        return await self._recommend(applicant)

    async def _recommend(self, applicant: Applicant) -> List[JobMatch]:
        matches = await self.matcher.match_jobs_for_applicant(applicant, self.settings.candidate_pool)
        recommendations = select_recommendations(matches, self.settings)
        logger.info(f"{len(recommendations)} recommendations for applicant {applicant.id}")

        if recommendations and self.notify is not None:
            await self.notify(applicant, recommendations)
        return recommendations

    async def recommend_for_all(self) -> Dict[RecordId, List[JobMatch]]:
        """Generate recommendations for every active applicant."""
        applicants = await self.matcher.source.list_applicants()
        results = {}
        for applicant in applicants:
            if not applicant.is_active or applicant.id is None:
                continue
            results[applicant.id] = await self._recommend(applicant)
        return results
