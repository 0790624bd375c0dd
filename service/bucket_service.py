# service/bucket_service.py
import logging
from core.oss_client import OssClient
from service.token_service import TokenService
from util.enums import PolicyKey
from util.errors import NotFoundError

logger = logging.getLogger(__name__)


class BucketService:
    """
    Makes sure a bucket exists before any object operation.
    Bucket keys are global across APS; only a 404 triggers creation,
    anything else (403 for a bucket owned by another app, network errors) propagates.
    """

    def __init__(self, oss: OssClient, tokens: TokenService, region: str) -> None:
        self._oss = oss
        self._tokens = tokens
        self._region = region

    async def ensure_exists(self, bucket_key: str) -> None:
        access_token = await self._tokens.get_internal_token()
        try:
            await self._oss.get_bucket_details(bucket_key, access_token=access_token)
            return
        except NotFoundError:
            logger.info("bucket.missing bucket=%s region=%s", bucket_key, self._region)

        await self._oss.create_bucket(
            bucket_key,
            region=self._region,
            policy_key=PolicyKey.PERSISTENT,
            access_token=access_token,
        )
        logger.info("bucket.created bucket=%s", bucket_key)
