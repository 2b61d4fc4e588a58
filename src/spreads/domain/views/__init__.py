"""View models for service outputs."""

from spreads.domain.views.batch import FetchOutcome, BatchReport
from spreads.domain.views.cached import CachedResult

__all__ = ["FetchOutcome", "BatchReport", "CachedResult"]
