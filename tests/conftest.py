# tests/conftest.py
import asyncio
import os

# Settings are read once at import; pin them before any app module loads.
os.environ["APP_ENV"] = "prod"
os.environ["APS_CLIENT_ID"] = "Test-Client"
os.environ["APS_CLIENT_SECRET"] = "test-secret"
os.environ["APS_BUCKET"] = "test-bucket"
os.environ["MAX_FILE_MB"] = "1"
os.environ.pop("REDIS_URL", None)

import httpx
import pytest
from fastapi.testclient import TestClient

from config.http import get_http_client
from core.authentication_client import AuthenticationClient
from core.model_derivative_client import ModelDerivativeClient
from core.oss_client import OssClient
from main import app
from service.bucket_service import BucketService
from service.conversion_service import ConversionService
from service.object_service import ObjectService
from service.status_service import StatusService
from service.token_service import TokenService
from tests.fake_aps import BASE_URL, BUCKET, FakeAps



@pytest.fixture()
def fake_aps() -> FakeAps:
    return FakeAps()


@pytest.fixture()
def http_client(fake_aps):
    client = httpx.AsyncClient(transport=fake_aps.transport(), base_url=BASE_URL)
    yield client
    asyncio.run(client.aclose())


@pytest.fixture()
def tokens(http_client) -> TokenService:
    return TokenService(AuthenticationClient(http_client), "Test-Client", "test-secret")


@pytest.fixture()
def buckets(http_client, tokens) -> BucketService:
    return BucketService(OssClient(http_client), tokens, "US")


@pytest.fixture()
def objects(http_client, tokens, buckets) -> ObjectService:
    return ObjectService(
        OssClient(http_client), tokens, buckets, bucket_key=BUCKET, page_size=64
    )


@pytest.fixture()
def conversions(http_client, tokens) -> ConversionService:
    return ConversionService(ModelDerivativeClient(http_client), tokens)


@pytest.fixture()
def statuses(http_client, tokens) -> StatusService:
    return StatusService(ModelDerivativeClient(http_client), tokens)


@pytest.fixture()
def api(http_client):
    app.dependency_overrides[get_http_client] = lambda: http_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
