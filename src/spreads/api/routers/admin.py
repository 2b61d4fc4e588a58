"""Administrative endpoints: user list and cache purge."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from spreads.api.deps import get_envelope, get_memory_cache, get_profile_service, require_cron
from spreads.api.schemas import PurgeResult, UsersResponse
from spreads.core.exceptions import ValidationError
from spreads.services import CacheEnvelope, MemoryCache, ProfileService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_cron)])


@router.get("/users", response_model=UsersResponse)
def list_users(profiles: ProfileService = Depends(get_profile_service)) -> dict:
    users = [u.to_dict() for u in profiles.list_users()]
    return {"users": users, "count": len(users)}


@router.delete("/cache/{key:path}", response_model=PurgeResult)
def delete_cache_key(
    key: str,
    envelope: CacheEnvelope = Depends(get_envelope),
    memory: MemoryCache = Depends(get_memory_cache),
) -> dict:
    removed = int(envelope.read(key).is_present)
    envelope.invalidate(key)
    return {"removed": removed, "memory_removed": int(memory.delete(key))}


@router.delete("/cache", response_model=PurgeResult)
def purge_cache(
    prefix: Optional[str] = Query(None),
    envelope: CacheEnvelope = Depends(get_envelope),
    memory: MemoryCache = Depends(get_memory_cache),
) -> dict:
    """Delete every cached entry whose key starts with prefix."""
    if not prefix:
        raise ValidationError("prefix is required")
    return {"removed": envelope.purge(prefix), "memory_removed": memory.clear(prefix)}
