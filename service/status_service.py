# service/status_service.py
import logging
from typing import Any, List
from core.model_derivative_client import ModelDerivativeClient
from model.api import ModelStatus
from model.aps import Manifest
from service.token_service import TokenService
from util.constants import N_A_STATUS
from util.errors import NotFoundError

logger = logging.getLogger(__name__)


def flatten_messages(manifest: Manifest) -> List[Any]:
    """
    Derivative messages first, then each of its children's, in manifest order.
    No dedup and no severity filtering.
    """
    messages: List[Any] = []
    for derivative in manifest.derivatives:
        messages.extend(derivative.messages)
        for child in derivative.children:
            messages.extend(child.messages)
    return messages


class StatusService:
    def __init__(self, derivatives: ModelDerivativeClient, tokens: TokenService) -> None:
        self._derivatives = derivatives
        self._tokens = tokens

    async def get_status(self, urn: str) -> ModelStatus:
        access_token = await self._tokens.get_internal_token()
        try:
            manifest = await self._derivatives.get_manifest(urn, access_token=access_token)
        except NotFoundError:
            # No job has been dispatched for this URN yet.
            return ModelStatus(status=N_A_STATUS)

        messages = flatten_messages(manifest)
        logger.debug(
            "status.manifest urn=%s status=%s progress=%s messages=%d",
            urn,
            manifest.status,
            manifest.progress,
            len(messages),
        )
        return ModelStatus(
            status=manifest.status, progress=manifest.progress, messages=messages
        )
