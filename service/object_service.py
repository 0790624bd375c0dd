# service/object_service.py
import logging
from typing import List
from core.oss_client import OssClient
from model.aps import StoredObject
from service.bucket_service import BucketService
from service.token_service import TokenService
from util.errors import NotFoundError

logger = logging.getLogger(__name__)


class ObjectService:
    def __init__(
        self,
        oss: OssClient,
        tokens: TokenService,
        buckets: BucketService,
        *,
        bucket_key: str,
        page_size: int = 64,
        chunk_size: int = 5 * 1024 * 1024,
    ) -> None:
        self._oss = oss
        self._tokens = tokens
        self._buckets = buckets
        self._bucket = bucket_key
        self._page_size = page_size
        self._chunk_size = chunk_size

    async def list(self) -> List[StoredObject]:
        """
        All objects in the bucket, in store order.
        Not atomic across pages: objects added/removed mid-listing may be
        missed or repeated, and duplicates are left for the caller to handle.
        """
        await self._buckets.ensure_exists(self._bucket)
        access_token = await self._tokens.get_internal_token()

        page = await self._oss.get_objects(
            self._bucket, access_token=access_token, limit=self._page_size
        )
        objects = list(page.items)
        pages = 1
        while page.cursor:
            page = await self._oss.get_objects(
                self._bucket,
                access_token=access_token,
                limit=self._page_size,
                cursor=page.cursor,
            )
            objects.extend(page.items)
            pages += 1

        logger.info(
            "objects.list bucket=%s count=%d pages=%d", self._bucket, len(objects), pages
        )
        return objects

    async def delete(self, name: str) -> None:
        await self._buckets.ensure_exists(self._bucket)
        access_token = await self._tokens.get_internal_token()
        await self._oss.delete_object(self._bucket, name, access_token=access_token)
        logger.info("objects.deleted bucket=%s key=%s", self._bucket, name)

    async def upload(self, name: str, local_path: str) -> StoredObject:
        """
        Replace-by-key upload: drop any previous object under `name`, then put the file.
        A missing previous object is the normal first-upload case.
        """
        try:
            await self.delete(name)
        except NotFoundError:
            logger.debug("objects.delete.absent bucket=%s key=%s", self._bucket, name)

        access_token = await self._tokens.get_internal_token()
        obj = await self._oss.upload_object(
            self._bucket,
            name,
            local_path,
            access_token=access_token,
            chunk_size=self._chunk_size,
        )
        logger.info("objects.uploaded bucket=%s key=%s", self._bucket, obj.objectKey)
        return obj
