# model/api.py
from typing import Any
from pydantic import BaseModel


class ModelEntry(BaseModel):
    name: str
    urn: str
    o: dict[str, Any]


class UploadModelResponse(BaseModel):
    name: str
    urn: str


class ModelStatus(BaseModel):
    status: str
    progress: str | None = None
    messages: list[Any] | None = None

    def to_payload(self) -> dict[str, Any]:
        # "n/a" must serialize as exactly {"status": "n/a"}.
        return self.model_dump(exclude_none=True)


class DeleteDerivativesResponse(BaseModel):
    urn: str
    deleted: bool
