# core/oss_client.py
import asyncio
import logging
import os
from typing import Final, Optional
from urllib.parse import quote
import httpx
from fastapi import status
from core.aps_http import ApsHttp
from model.aps import Bucket, ObjectPage, SignedUpload, StoredObject
from util.constants import ExternalURIs
from util.enums import PolicyKey
from util.errors import UpstreamError
from util.functions import chunk_count, start_at_from_next

logger = logging.getLogger(__name__)

# OSS hands out at most 25 signed part URLs per request.
MAX_SIGNED_PARTS: Final[int] = 25


def _key(object_key: str) -> str:
    return quote(object_key, safe="")


class OssClient:
    def __init__(self, client: httpx.AsyncClient) -> None:
        self._http = ApsHttp(client)

    # ---------------- Buckets ----------------

    async def get_bucket_details(self, bucket_key: str, *, access_token: str) -> Bucket:
        data = await self._http.json(
            "aps.oss.bucket.details",
            "GET",
            ExternalURIs.BUCKET_DETAILS.format(bucket_key=bucket_key),
            access_token=access_token,
        )
        return Bucket.model_validate(data)

    async def create_bucket(
        self,
        bucket_key: str,
        *,
        region: str,
        policy_key: PolicyKey,
        access_token: str,
    ) -> Bucket:
        data = await self._http.json(
            "aps.oss.bucket.create",
            "POST",
            ExternalURIs.BUCKETS,
            access_token=access_token,
            headers={"x-ads-region": region},
            json={"bucketKey": bucket_key, "policyKey": policy_key.value},
        )
        return Bucket.model_validate(data)

    # ---------------- Objects ----------------

    async def get_objects(
        self,
        bucket_key: str,
        *,
        access_token: str,
        limit: int,
        cursor: Optional[str] = None,
    ) -> ObjectPage:
        params: dict[str, str | int] = {"limit": limit}
        if cursor:
            params["startAt"] = cursor
        data = await self._http.json(
            "aps.oss.objects",
            "GET",
            ExternalURIs.OBJECTS.format(bucket_key=bucket_key),
            access_token=access_token,
            params=params,
        )
        data = data or {}
        return ObjectPage(
            items=[StoredObject.model_validate(i) for i in data.get("items") or []],
            cursor=start_at_from_next(data.get("next")),
        )

    async def delete_object(
        self, bucket_key: str, object_key: str, *, access_token: str
    ) -> None:
        await self._http.request(
            "aps.oss.object.delete",
            "DELETE",
            ExternalURIs.OBJECT.format(bucket_key=bucket_key, object_key=_key(object_key)),
            access_token=access_token,
        )

    async def upload_object(
        self,
        bucket_key: str,
        object_key: str,
        file_path: str,
        *,
        access_token: str,
        chunk_size: int,
    ) -> StoredObject:
        """
        Signed S3 upload:
          1) ask OSS for signed part URLs (batches of up to 25),
          2) PUT each chunk straight to S3 (no APS bearer on these),
          3) complete the upload with the returned uploadKey.
        """
        size = os.path.getsize(file_path)
        total = chunk_count(size, chunk_size)
        url = ExternalURIs.SIGNED_UPLOAD.format(
            bucket_key=bucket_key, object_key=_key(object_key)
        )

        upload_key: Optional[str] = None
        part = 1
        with open(file_path, "rb") as fh:
            while part <= total:
                batch = min(MAX_SIGNED_PARTS, total - part + 1)
                params: dict[str, str | int] = {"parts": batch, "firstPart": part}
                if upload_key:
                    params["uploadKey"] = upload_key
                signed = SignedUpload.model_validate(
                    await self._http.json(
                        "aps.oss.upload.sign",
                        "GET",
                        url,
                        access_token=access_token,
                        params=params,
                    )
                )
                upload_key = signed.uploadKey
                if not signed.urls:
                    # Without URLs the part counter never advances.
                    raise UpstreamError(
                        "OSS returned no signed upload URLs",
                        status.HTTP_502_BAD_GATEWAY,
                        signed.model_dump(),
                    )
                for part_url in signed.urls:
                    chunk = await asyncio.to_thread(fh.read, chunk_size)
                    await self._http.request(
                        "aps.oss.upload.part", "PUT", part_url, content=chunk
                    )
                    part += 1

        data = await self._http.json(
            "aps.oss.upload.complete",
            "POST",
            url,
            access_token=access_token,
            json={"uploadKey": upload_key},
        )
        logger.info(
            "oss.upload.ok bucket=%s key=%s bytes=%d parts=%d",
            bucket_key,
            object_key,
            size,
            total,
        )
        return StoredObject.model_validate(data)
