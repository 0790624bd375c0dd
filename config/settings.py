# config/settings.py
import os
import sys
from dotenv import load_dotenv
from pydantic import ValidationError, Field, model_validator
from pydantic_settings import BaseSettings
from util.enums import Environment


if os.getenv("APP_ENV", Environment.DEV) == Environment.DEV:
    load_dotenv()


class Settings(BaseSettings):
    # App
    APP_ENV: str = Field(default=Environment.DEV.value, validation_alias="APP_ENV")
    HOST: str = Field(default="127.0.0.1", validation_alias="HOST")
    PORT: int = Field(default=8080, validation_alias="PORT")

    # APS credentials & storage
    APS_CLIENT_ID: str = Field(..., validation_alias="APS_CLIENT_ID")
    APS_CLIENT_SECRET: str = Field(..., validation_alias="APS_CLIENT_SECRET")
    APS_BUCKET: str = Field(default="", validation_alias="APS_BUCKET")
    APS_REGION: str = Field(default="US", validation_alias="APS_REGION")

    # External URLS:
    APS_BASE_URL: str = Field(
        default="https://developer.api.autodesk.com", validation_alias="APS_BASE_URL"
    )

    # Upstream call knobs
    APS_PAGE_SIZE: int = Field(default=64, validation_alias="APS_PAGE_SIZE")
    APS_UPLOAD_CHUNK_MB: int = Field(default=5, validation_alias="APS_UPLOAD_CHUNK_MB")
    HTTP_TIMEOUT_SECONDS: float = Field(
        default=30.0, validation_alias="HTTP_TIMEOUT_SECONDS"
    )

    # CORS & Limits
    ALLOWED_ORIGIN: str = Field(default="*", validation_alias="ALLOWED_ORIGIN")
    REDIS_URL: str | None = Field(default=None, validation_alias="REDIS_URL")
    RATE_LIMIT_TIMES: int = Field(default=30, validation_alias="RATE_LIMIT_TIMES")
    RATE_LIMIT_SECONDS: int = Field(default=60, validation_alias="RATE_LIMIT_SECONDS")
    MAX_FILE_MB: int = Field(default=0, validation_alias="MAX_FILE_MB")
    TRUST_PROXY: bool = Field(default=False, validation_alias="TRUST_PROXY")

    # Logging knobs
    LOGGER_NAME: str = "aps-model-service"
    LOG_LEVEL: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    LOG_TO_FILE: bool = Field(default=False, validation_alias="LOG_TO_FILE")
    LOG_DIR: str = Field(default="logs", validation_alias="LOG_DIR")
    LOG_FILE_NAME: str = Field(default="app.log", validation_alias="LOG_FILE_NAME")
    LOG_MAX_BYTES: int = Field(
        default=50 * 1024 * 1024, validation_alias="LOG_MAX_BYTES"
    )
    LOG_BACKUP_COUNT: int = Field(default=5, validation_alias="LOG_BACKUP_COUNT")

    @model_validator(mode="after")
    def _default_bucket(self) -> "Settings":
        # Bucket keys are global across APS, so derive one from the client id.
        if not self.APS_BUCKET:
            self.APS_BUCKET = f"{self.APS_CLIENT_ID.lower()}-basic-app"
        return self

    @property
    def rate_limit_enabled(self) -> bool:
        return bool(self.REDIS_URL)

    @property
    def upload_chunk_bytes(self) -> int:
        return self.APS_UPLOAD_CHUNK_MB * 1024 * 1024


try:
    settings = Settings()
except ValidationError as e:
    print("❌ Missing/invalid environment variables:", file=sys.stderr)
    for err in e.errors():
        loc = ".".join(str(x) for x in err.get("loc", []))
        msg = err.get("msg", "")
        print(f" - {loc}: {msg}", file=sys.stderr)
    sys.exit(1)
except Exception as e:
    print(f"❌ Settings initialization failed: {e}", file=sys.stderr)
    sys.exit(1)
