"""Shared httpx helpers for providers."""

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from spreads.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


async def get_json(
    client: httpx.AsyncClient,
    provider: str,
    url: str,
    params: Optional[dict[str, Any]] = None,
    timeout: Optional[float] = None,
    headers: Optional[dict[str, str]] = None,
) -> Any:
    """GET a JSON document, converting every failure mode to UpstreamError."""
    try:
        response = await client.get(url, params=params, timeout=timeout, headers=headers)
        response.raise_for_status()
        return response.json()
    except httpx.TimeoutException as e:
        raise UpstreamError(provider, f"timeout fetching {url}") from e
    except httpx.HTTPStatusError as e:
        raise UpstreamError(provider, f"HTTP {e.response.status_code}") from e
    except (httpx.HTTPError, ValueError) as e:
        raise UpstreamError(provider, str(e) or type(e).__name__) from e


def parse(provider: str, model: type[ModelT], payload: Any) -> ModelT:
    """Validate an upstream payload against its schema."""
    try:
        return model.model_validate(payload)
    except SchemaError as e:
        logger.warning("%s returned an unexpected payload: %s", provider, e.error_count())
        raise UpstreamError(provider, "unexpected response shape") from e
