# service/conversion_service.py
import logging
from typing import Any, Dict, Optional
from core.model_derivative_client import ModelDerivativeClient
from model.aps import JobAcceptance
from service.token_service import TokenService
from util.enums import OutputType, View
from util.errors import NotFoundError

logger = logging.getLogger(__name__)


def build_job_payload(urn: str, entry_filename: Optional[str]) -> Dict[str, Any]:
    """
    Translation job body. A non-empty entry filename means the object is an
    archive and names its root design file.
    """
    compressed = bool(entry_filename)
    job_input: Dict[str, Any] = {"urn": urn, "compressedUrn": compressed}
    if compressed:
        job_input["rootFilename"] = entry_filename
    return {
        "input": job_input,
        "output": {
            "formats": [
                {
                    "type": OutputType.SVF2.value,
                    "views": [View.TWO_D.value, View.THREE_D.value],
                }
            ]
        },
    }


class ConversionService:
    def __init__(self, derivatives: ModelDerivativeClient, tokens: TokenService) -> None:
        self._derivatives = derivatives
        self._tokens = tokens

    async def start_job(self, urn: str, entry_filename: Optional[str] = None) -> JobAcceptance:
        # Fire-and-forget: completion is only observed through the manifest.
        access_token = await self._tokens.get_internal_token()
        job = await self._derivatives.start_job(
            build_job_payload(urn, entry_filename), access_token=access_token
        )
        logger.info(
            "conversion.started urn=%s compressed=%s result=%s",
            urn,
            bool(entry_filename),
            job.result,
        )
        return job

    async def delete_derivatives(self, urn: str) -> bool:
        access_token = await self._tokens.get_internal_token()
        try:
            await self._derivatives.delete_manifest(urn, access_token=access_token)
        except NotFoundError:
            logger.info("conversion.derivatives.absent urn=%s", urn)
            return False
        logger.info("conversion.derivatives.deleted urn=%s", urn)
        return True
