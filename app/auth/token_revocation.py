"""Redis-backed JWT deny-list.

The identity provider writes ``token:deny:<jti>`` with a TTL matching the
token's remaining lifetime; this service only reads the list.
"""

from redis.asyncio import Redis

_DENY_PREFIX = "token:deny:"


async def is_token_revoked(redis: Redis, jti: str) -> bool:
    """Return ``True`` if *jti* has been revoked."""
    return await redis.exists(f"{_DENY_PREFIX}{jti}") > 0
