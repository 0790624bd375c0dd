# config/cache.py
from typing import Awaitable, Callable, Optional
from fastapi import Request
from fastapi_limiter import FastAPILimiter
from redis.asyncio import Redis, from_url
from config.settings import settings

_client: Optional[Redis] = None


async def init_rate_limiter(identifier: Callable[[Request], Awaitable[str]]) -> Redis:
    """
    Connect to REDIS_URL and hand the connection to fastapi-limiter.
    Only Redis consumer in the service: limiter counters, nothing else is cached.
    """
    global _client
    if not settings.REDIS_URL:
        raise RuntimeError("REDIS_URL is not configured")
    if _client is None:
        _client = from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_keepalive=True,
            health_check_interval=30,
        )
        # Fail fast on startup if Redis is unreachable.
        await _client.ping()
        await FastAPILimiter.init(_client, identifier=identifier)
    return _client


async def close_rate_limiter() -> None:
    global _client
    if _client is not None:
        await FastAPILimiter.close()
        _client = None
