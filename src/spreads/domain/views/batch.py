"""View models for batch upstream fetches."""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchOutcome(Generic[T]):
    """Result of fetching one item: either a value or an error message."""

    symbol: str
    success: bool
    value: Optional[T] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {"symbol": self.symbol, "success": self.success, "error": self.error}


@dataclass
class BatchReport(Generic[T]):
    """Per-item outcomes plus a failure tally for a whole batch run."""

    results: list[FetchOutcome[T]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def error_count(self) -> int:
        return self.total - self.success_count

    def values(self) -> dict[str, Any]:
        """Successful values keyed by symbol."""
        return {r.symbol: r.value for r in self.results if r.success}

    def stats(self) -> dict:
        return {
            "total": self.total,
            "success": self.success_count,
            "errors": self.error_count,
            "duration": f"{round(self.duration_seconds)}s",
        }
