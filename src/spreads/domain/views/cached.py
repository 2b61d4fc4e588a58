"""View model for values served through the cache layers."""

from dataclasses import dataclass
from typing import Any, Optional

from spreads.domain.models.enums import DataSource


@dataclass(frozen=True)
class CachedResult:
    """A payload plus the tier it was served from and how old it is."""

    payload: Any
    cached: bool
    source: DataSource
    cache_age: Optional[float] = None
    error: Optional[str] = None

    def body(self) -> dict:
        """
        Response body: the payload merged with cache metadata.

        A payload that carries its own ``source`` (e.g. ``estimated``) keeps it;
        the serving tier is always reported as ``servedFrom``.
        """
        body = {"source": self.source.value}
        if isinstance(self.payload, dict):
            body.update(self.payload)
        else:
            body["data"] = self.payload
        body["cached"] = self.cached
        body["servedFrom"] = self.source.value
        if self.cache_age is not None:
            body["cacheAge"] = round(self.cache_age)
        if self.error:
            body["error"] = self.error
        return body
