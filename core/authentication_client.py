# core/authentication_client.py
from typing import Iterable
import httpx
from core.aps_http import ApsHttp
from model.aps import Token
from util.constants import ExternalURIs
from util.enums import Scope


class AuthenticationClient:
    """Two-legged (client credentials) OAuth against APS Authentication v2."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._http = ApsHttp(client)

    async def get_two_legged_token(
        self, client_id: str, client_secret: str, scopes: Iterable[Scope]
    ) -> Token:
        data = await self._http.json(
            "aps.auth.token",
            "POST",
            ExternalURIs.TOKEN,
            auth=(client_id, client_secret),
            headers={"Accept": "application/json"},
            data={
                "grant_type": "client_credentials",
                "scope": " ".join(s.value for s in scopes),
            },
        )
        return Token.model_validate(data)
