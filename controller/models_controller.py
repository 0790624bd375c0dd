# controller/models_controller.py
import logging
import tempfile
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import PlainTextResponse
from starlette.datastructures import UploadFile as StarletteUploadFile
from controller.controller_dependencies import (
    enforce_max_upload_size,
    get_conversion_service,
    get_object_service,
    get_status_service,
    rate_limit_dependencies,
    spool_upload,
)
from model.api import DeleteDerivativesResponse, ModelEntry, UploadModelResponse
from service.conversion_service import ConversionService
from service.object_service import ObjectService
from service.status_service import StatusService
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.functions import urnify

logger = logging.getLogger(__name__)

models_router = APIRouter(dependencies=rate_limit_dependencies())


@models_router.get(InternalURIs.MODELS, response_model=list[ModelEntry])
async def list_models(
    objects: ObjectService = Depends(get_object_service),
) -> list[ModelEntry]:
    return [
        ModelEntry(name=o.objectKey, urn=urnify(o.objectId), o=o.model_dump())
        for o in await objects.list()
    ]


@models_router.get(InternalURIs.MODEL_STATUS)
async def model_status(
    urn: str,
    service: StatusService = Depends(get_status_service),
) -> dict:
    result = await service.get_status(urn)
    return result.to_payload()


@models_router.post(
    InternalURIs.MODELS,
    response_model=UploadModelResponse,
    dependencies=[Depends(enforce_max_upload_size)],
)
async def upload_model(
    model_file: UploadFile | str | None = File(None, alias="model-file"),
    entrypoint: str | None = Form(None, alias="model-zip-entrypoint"),
    objects: ObjectService = Depends(get_object_service),
    conversions: ConversionService = Depends(get_conversion_service),
):
    # A text field named "model-file" carries no file either.
    if not isinstance(model_file, StarletteUploadFile):
        info = ErrorMessage.MISSING_MODEL_FILE.value
        return PlainTextResponse(info.message, status_code=info.http_status)

    name = model_file.filename or "model"
    with tempfile.TemporaryDirectory(prefix="aps-upload-") as tmp:
        local_path = await spool_upload(model_file, tmp)
        obj = await objects.upload(name, local_path)

    urn = urnify(obj.objectId)
    await conversions.start_job(urn, entrypoint or None)
    logger.info("models.upload.ok key=%s urn=%s", obj.objectKey, urn)
    return UploadModelResponse(name=obj.objectKey, urn=urn)


@models_router.delete(
    InternalURIs.MODEL_DERIVATIVES, response_model=DeleteDerivativesResponse
)
async def delete_derivatives(
    urn: str,
    conversions: ConversionService = Depends(get_conversion_service),
) -> DeleteDerivativesResponse:
    deleted = await conversions.delete_derivatives(urn)
    return DeleteDerivativesResponse(urn=urn, deleted=deleted)
