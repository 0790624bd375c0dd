# core/aps_http.py
import logging
from typing import Any, Dict, Optional
import httpx
from util.errors import NotFoundError, UpstreamError
from util.timing import timed

logger = logging.getLogger(__name__)


def _safe_json(res: httpx.Response) -> Any:
    try:
        return res.json()
    except ValueError:
        return res.text or None


def _reason(payload: Any, res: httpx.Response) -> str:
    # APS error bodies use either "reason", "developerMessage" or "diagnostic".
    if isinstance(payload, dict):
        for key in ("reason", "developerMessage", "diagnostic", "errorMessage"):
            if payload.get(key):
                return str(payload[key])
    return res.reason_phrase or f"HTTP {res.status_code}"


class ApsHttp:
    """
    Thin request helper shared by the APS clients.
    - Attaches the bearer token when one is given.
    - Raises NotFoundError on 404 and UpstreamError on any other non-2xx,
      so callers branch on exception type instead of status codes.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def request(
        self,
        op: str,
        method: str,
        url: str,
        *,
        access_token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        hdrs: Dict[str, str] = dict(headers or {})
        if access_token:
            hdrs["Authorization"] = f"Bearer {access_token}"

        with timed(logger, op):
            res = await self._client.request(method, url, headers=hdrs, **kwargs)

        if res.status_code // 100 == 2:
            return res

        payload = _safe_json(res)
        message = _reason(payload, res)
        if res.status_code == 404:
            logger.debug("%s.not_found", op)
            raise NotFoundError(message, payload)

        logger.warning("%s.bad_status status=%d reason=%s", op, res.status_code, message)
        raise UpstreamError(message, res.status_code, payload)

    async def json(self, op: str, method: str, url: str, **kwargs: Any) -> Any:
        res = await self.request(op, method, url, **kwargs)
        return _safe_json(res)
