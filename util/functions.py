# util/functions.py
import base64
from typing import Optional
from urllib.parse import parse_qs, urlparse


def urnify(object_id: str) -> str:
    """
    - Standard base64 of the object id with the '=' padding stripped.
    - Used as the correlation key between OSS objects and Model Derivative jobs.
    """
    return base64.b64encode(object_id.encode("utf-8")).decode("ascii").rstrip("=")


def start_at_from_next(next_url: Optional[str]) -> Optional[str]:
    """
    Pull the `startAt` cursor out of an OSS `next` continuation URL.
    Returns None when there is no further page.
    """
    if not next_url:
        return None
    values = parse_qs(urlparse(next_url).query).get("startAt")
    return values[0] if values else None


def chunk_count(size: int, chunk_size: int) -> int:
    # Empty files still need one (empty) part.
    return max(1, -(-size // chunk_size))
