# controller/controller_dependencies.py
import asyncio
import os
import httpx
from fastapi import Depends, Request, UploadFile
from fastapi_limiter.depends import RateLimiter
from config.http import get_http_client
from config.settings import settings
from core.authentication_client import AuthenticationClient
from core.model_derivative_client import ModelDerivativeClient
from core.oss_client import OssClient
from service.bucket_service import BucketService
from service.conversion_service import ConversionService
from service.object_service import ObjectService
from service.status_service import StatusService
from service.token_service import TokenService
from util.enums import ErrorMessage
from util.errors import AppError

SPOOL_CHUNK = 1024 * 1024


def rate_limit_dependencies() -> list:
    # The limiter needs Redis; without REDIS_URL routes are left unthrottled.
    if not settings.rate_limit_enabled:
        return []
    return [
        Depends(
            RateLimiter(
                times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
            )
        )
    ]


def get_token_service(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> TokenService:
    return TokenService(
        AuthenticationClient(client), settings.APS_CLIENT_ID, settings.APS_CLIENT_SECRET
    )


def get_bucket_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    tokens: TokenService = Depends(get_token_service),
) -> BucketService:
    return BucketService(OssClient(client), tokens, settings.APS_REGION)


def get_object_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    tokens: TokenService = Depends(get_token_service),
    buckets: BucketService = Depends(get_bucket_service),
) -> ObjectService:
    return ObjectService(
        OssClient(client),
        tokens,
        buckets,
        bucket_key=settings.APS_BUCKET,
        page_size=settings.APS_PAGE_SIZE,
        chunk_size=settings.upload_chunk_bytes,
    )


def get_conversion_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    tokens: TokenService = Depends(get_token_service),
) -> ConversionService:
    return ConversionService(ModelDerivativeClient(client), tokens)


def get_status_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    tokens: TokenService = Depends(get_token_service),
) -> StatusService:
    return StatusService(ModelDerivativeClient(client), tokens)


def _too_large() -> AppError:
    return AppError(
        ErrorMessage.FILE_TOO_LARGE.value.message,
        ErrorMessage.FILE_TOO_LARGE.value.http_status,
    )


async def enforce_max_upload_size(request: Request) -> None:
    # Fast pre-check via Content-Length if present; 0 disables the cap.
    if settings.MAX_FILE_MB <= 0:
        return
    max_bytes = settings.MAX_FILE_MB * 1024 * 1024
    cl = request.headers.get("content-length")
    if cl and cl.isdigit() and int(cl) > max_bytes:
        raise _too_large()


async def spool_upload(file: UploadFile, directory: str) -> str:
    """
    Copy the multipart upload to `directory` under its original base name
    and return the local path. Enforces MAX_FILE_MB while copying.
    """
    max_bytes = settings.MAX_FILE_MB * 1024 * 1024
    name = os.path.basename(file.filename or "") or "model"
    path = os.path.join(directory, name)
    written = 0
    out = await asyncio.to_thread(open, path, "wb")
    try:
        while True:
            chunk = await file.read(SPOOL_CHUNK)
            if not chunk:
                break
            written += len(chunk)
            if max_bytes and written > max_bytes:
                raise _too_large()
            await asyncio.to_thread(out.write, chunk)
    finally:
        await asyncio.to_thread(out.close)
    return path
