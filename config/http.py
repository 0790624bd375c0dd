# config/http.py
from typing import Optional
import httpx
from config.settings import settings

_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """
    Process-wide AsyncClient shared by every APS client.
    Holds no business state, only the connection pool.
    """
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            base_url=settings.APS_BASE_URL,
            timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS, connect=5.0),
        )
    return _client


async def close_http_client() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
