# main.py
import logging
from contextlib import asynccontextmanager
import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
import routes
from config.cache import close_rate_limiter, init_rate_limiter
from config.http import close_http_client, get_http_client
from config.settings import settings
from util.constants import InternalURIs
from util.enums import Color, Environment, ErrorMessage
from util.errors import UpstreamError
from util.logger import init_logger

logger = logging.getLogger(__name__)


async def _real_ip(request: Request) -> str:
    if settings.TRUST_PROXY:
        fwd = request.headers.get("x-forwarded-for")
        if fwd:
            return fwd.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@asynccontextmanager
async def lifespan(fastApi: FastAPI):
    init_logger()
    print(f"{Color.GREEN}Initializing...{Color.RESET}")
    get_http_client()
    if settings.rate_limit_enabled:
        try:
            await init_rate_limiter(_real_ip)
        except Exception as e:
            print("Failed to connect to Redis:", e)
            raise
    print(f"{Color.BLUE}Server Started{Color.RESET} bucket={settings.APS_BUCKET}")

    try:
        yield
    finally:
        await close_http_client()
        if settings.rate_limit_enabled:
            try:
                await close_rate_limiter()
            except Exception as e:
                print("Error closing Redis:", e)

        print(f"{Color.RED}Server Shutdown{Color.RESET}")


app: FastAPI = FastAPI(title="APS Model Service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ALLOWED_ORIGIN],
    allow_credentials=settings.ALLOWED_ORIGIN != "*",
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)


@app.get(InternalURIs.HEALTHZ)
async def healthz():
    return {"ok": True}


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    logger.error(
        "upstream.error path=%s status=%d reason=%s",
        request.url.path,
        exc.status_code,
        exc.message,
    )
    info = ErrorMessage.UPSTREAM_ERROR.value
    return JSONResponse(
        status_code=info.http_status,
        content={
            "ok": False,
            "error": "upstream_error",
            "upstreamStatus": exc.status_code,
            "message": exc.message or info.message,
        },
    )


@app.exception_handler(httpx.RequestError)
async def upstream_unreachable_handler(request: Request, exc: httpx.RequestError):
    logger.error(
        "upstream.request_error path=%s err=%s", request.url.path, type(exc).__name__
    )
    info = ErrorMessage.UPSTREAM_UNREACHABLE.value
    return JSONResponse(
        status_code=info.http_status,
        content={"ok": False, "error": "upstream_unreachable", "message": info.message},
    )


@app.exception_handler(429)
async def ratelimit_handler(request: Request, exc):
    return JSONResponse(
        status_code=429,
        content={
            "ok": False,
            "error": "rate_limited",
            "message": f"Too many requests. Try again in {settings.RATE_LIMIT_SECONDS}s.",
        },
        headers={"Retry-After": str(settings.RATE_LIMIT_SECONDS)},
    )


routes.register_routes(app)

if __name__ == "__main__":
    import uvicorn

    reload = settings.APP_ENV == Environment.DEV
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=reload)
