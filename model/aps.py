# model/aps.py
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Token(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int


class Bucket(BaseModel):
    model_config = ConfigDict(extra="allow")

    bucketKey: str
    policyKey: str | None = None


class StoredObject(BaseModel):
    """
    OSS object descriptor. Unknown upstream fields (size, sha1, location, ...)
    are kept so the raw object can be echoed back to API consumers.
    """

    model_config = ConfigDict(extra="allow")

    bucketKey: str
    objectKey: str
    objectId: str


class ObjectPage(BaseModel):
    items: list[StoredObject] = Field(default_factory=list)
    # Opaque continuation token; None on the last page.
    cursor: str | None = None


class SignedUpload(BaseModel):
    model_config = ConfigDict(extra="allow")

    uploadKey: str
    urls: list[str]


class JobAcceptance(BaseModel):
    model_config = ConfigDict(extra="allow")

    result: str
    urn: str | None = None
    acceptedJobs: dict[str, Any] | None = None


class DerivativeChild(BaseModel):
    model_config = ConfigDict(extra="allow")

    # APS sends {type, code, message} objects here; kept verbatim.
    messages: list[Any] = Field(default_factory=list)

    @field_validator("messages", mode="before")
    @classmethod
    def null_messages(cls, v: Any) -> Any:
        return [] if v is None else v


class Derivative(BaseModel):
    model_config = ConfigDict(extra="allow")

    messages: list[Any] = Field(default_factory=list)
    children: list[DerivativeChild] = Field(default_factory=list)

    @field_validator("messages", "children", mode="before")
    @classmethod
    def null_lists(cls, v: Any) -> Any:
        return [] if v is None else v


class Manifest(BaseModel):
    model_config = ConfigDict(extra="allow")

    status: str
    progress: str | None = None
    derivatives: list[Derivative] = Field(default_factory=list)

    @field_validator("derivatives", mode="before")
    @classmethod
    def null_derivatives(cls, v: Any) -> Any:
        return [] if v is None else v
