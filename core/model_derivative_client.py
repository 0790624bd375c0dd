# core/model_derivative_client.py
from typing import Any, Dict
from urllib.parse import quote
import httpx
from core.aps_http import ApsHttp
from model.aps import JobAcceptance, Manifest
from util.constants import ExternalURIs


class ModelDerivativeClient:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._http = ApsHttp(client)

    async def start_job(self, payload: Dict[str, Any], *, access_token: str) -> JobAcceptance:
        data = await self._http.json(
            "aps.md.job",
            "POST",
            ExternalURIs.DERIVATIVE_JOB,
            access_token=access_token,
            json=payload,
        )
        return JobAcceptance.model_validate(data)

    async def get_manifest(self, urn: str, *, access_token: str) -> Manifest:
        data = await self._http.json(
            "aps.md.manifest",
            "GET",
            ExternalURIs.MANIFEST.format(urn=quote(urn, safe="")),
            access_token=access_token,
        )
        return Manifest.model_validate(data)

    async def delete_manifest(self, urn: str, *, access_token: str) -> None:
        await self._http.request(
            "aps.md.manifest.delete",
            "DELETE",
            ExternalURIs.MANIFEST.format(urn=quote(urn, safe="")),
            access_token=access_token,
        )
