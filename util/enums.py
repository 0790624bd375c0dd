# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    BLUE = "\033[34m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class Scope(str, Enum):
    # Two-legged OAuth scopes understood by APS.
    DATA_READ = "data:read"
    DATA_WRITE = "data:write"
    DATA_CREATE = "data:create"
    BUCKET_CREATE = "bucket:create"
    BUCKET_READ = "bucket:read"
    VIEWABLES_READ = "viewables:read"


class PolicyKey(str, Enum):
    TRANSIENT = "transient"
    TEMPORARY = "temporary"
    PERSISTENT = "persistent"


class View(str, Enum):
    TWO_D = "2d"
    THREE_D = "3d"


class OutputType(str, Enum):
    SVF = "svf"
    SVF2 = "svf2"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    MISSING_MODEL_FILE = ErrorInfo(
        'The required field ("model-file") is missing.', status.HTTP_400_BAD_REQUEST
    )
    FILE_TOO_LARGE = ErrorInfo(
        "Uploaded file is too large", status.HTTP_413_CONTENT_TOO_LARGE
    )
    UPSTREAM_ERROR = ErrorInfo("Upstream service error", status.HTTP_502_BAD_GATEWAY)
    UPSTREAM_UNREACHABLE = ErrorInfo(
        "Upstream request failed", status.HTTP_502_BAD_GATEWAY
    )
