import asyncio
import logging
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.storage.base import ObjectStorage, StorageError

logger = logging.getLogger(__name__)


class S3StorageConfig(Protocol):
    storage_bucket: str
    storage_endpoint_url: str
    storage_access_key_id: str
    storage_secret_access_key: str
    storage_region: str
    storage_public_base_url: str


class S3ObjectStorage(ObjectStorage):
    """S3 compatible storage (AWS S3, Cloudflare R2, MinIO)."""

    def __init__(self, config: S3StorageConfig, s3_client=None) -> None:
        self.bucket_name = config.storage_bucket
        self.public_base_url = config.storage_public_base_url
        self._config = config
        self._s3_client = s3_client

    @property
    def s3_client(self):
        if self._s3_client is None:
            self._s3_client = boto3.client(
                "s3",
                endpoint_url=self._config.storage_endpoint_url or None,
                aws_access_key_id=self._config.storage_access_key_id or None,
                aws_secret_access_key=self._config.storage_secret_access_key or None,
                region_name=self._config.storage_region,
            )
        return self._s3_client

    async def upload(self, path: str, content: bytes, content_type: str) -> None:
        try:
            # put_object overwrites, so re-uploading a key is an upsert
            await asyncio.to_thread(
                self.s3_client.put_object,
                Bucket=self.bucket_name,
                Key=path,
                Body=content,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading {path} to bucket {self.bucket_name}: {e}")
            raise StorageError(str(e)) from e

    def public_url(self, path: str) -> str | None:
        if not self.public_base_url:
            return None
        return f"{self.public_base_url.rstrip('/')}/{path}"
