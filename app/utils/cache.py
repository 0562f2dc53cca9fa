import hashlib
import json
import logging
from typing import Any, Optional

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


def cache_key(prefix: str, params: dict) -> str:
    digest = hashlib.md5(json.dumps(params, sort_keys=True, default=str).encode()).hexdigest()
    return f"{prefix}:{digest}"


async def cache_get(redis: Optional[Redis], key: str) -> Optional[Any]:
    """Best-effort read: a missing client or a Redis error is a cache miss."""
    if redis is None:
        return None
    try:
        if val := await redis.get(key):
            return json.loads(val)
    except Exception as e:
        logger.warning("cache get error key=%s err=%s", key, e)
    return None


async def cache_set(redis: Optional[Redis], key: str, value, ex: int = 60) -> None:
    if redis is None:
        return
    try:
        payload = json.dumps(value, default=str)
        await redis.set(key, payload, ex=ex)
        logger.debug("cache set key=%s ttl=%ds bytes=%s", key, ex, len(payload))
    except Exception as e:
        logger.warning("cache set error key=%s err=%s", key, e)
