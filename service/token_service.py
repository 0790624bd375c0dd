# service/token_service.py
import logging
from typing import Final
from core.authentication_client import AuthenticationClient
from model.aps import Token
from util.enums import Scope

logger = logging.getLogger(__name__)

# Read/write access to our bucket and its objects; never leaves the server.
INTERNAL_SCOPES: Final[tuple[Scope, ...]] = (
    Scope.DATA_READ,
    Scope.DATA_CREATE,
    Scope.DATA_WRITE,
    Scope.BUCKET_CREATE,
    Scope.BUCKET_READ,
)
# Handed to browsers: read-only access to translated viewables.
VIEWER_SCOPES: Final[tuple[Scope, ...]] = (Scope.VIEWABLES_READ,)


class TokenService:
    def __init__(
        self, auth: AuthenticationClient, client_id: str, client_secret: str
    ) -> None:
        self._auth = auth
        self._client_id = client_id
        self._client_secret = client_secret

    async def get_internal_token(self) -> str:
        token = await self._auth.get_two_legged_token(
            self._client_id, self._client_secret, INTERNAL_SCOPES
        )
        return token.access_token

    async def get_viewer_token(self) -> Token:
        token = await self._auth.get_two_legged_token(
            self._client_id, self._client_secret, VIEWER_SCOPES
        )
        logger.info("token.viewer.issued expires_in=%d", token.expires_in)
        return token
