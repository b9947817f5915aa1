"""S3-compatible storage backend (AWS S3, MinIO) on top of boto3."""
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from config.settings import StorageSettings

from ..storage import PDF_CONTENT_TYPE, ArtifactStore, StorageError, join_url

logger = logging.getLogger(__name__)


class S3ArtifactStore(ArtifactStore):
    backend = "s3"

    def __init__(self, settings: StorageSettings, client: Optional[Any] = None):
        self.bucket = settings.bucket
        self.prefix = settings.prefix.strip("/")
        self.signed_url_ttl = settings.signed_url_ttl
        self.public_base_url = settings.public_base_url
        self.endpoint_url = settings.endpoint_url
        if client is None:
            session = boto3.session.Session(
                aws_access_key_id=settings.access_key_id,
                aws_secret_access_key=settings.secret_access_key,
                region_name=settings.region,
            )
            client = session.client("s3", endpoint_url=settings.endpoint_url)
        self.client = client

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}/{key}" if self.prefix else key

    def store(self, key: str, data: bytes, content_type: str = PDF_CONTENT_TYPE) -> str:
        full_key = self._full_key(key)
        try:
            self.client.put_object(Bucket=self.bucket, Key=full_key, Body=data, ContentType=content_type)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to upload s3://{self.bucket}/{full_key}: {e}") from e
        logger.info(f"Stored {len(data)} bytes at s3://{self.bucket}/{full_key}")
        return full_key

    def resolve(self, locator: str) -> str:
        if self.signed_url_ttl:
            try:
                return self.client.generate_presigned_url(
                    "get_object",
                    Params={"Bucket": self.bucket, "Key": locator},
                    ExpiresIn=self.signed_url_ttl,
                )
            except (BotoCoreError, ClientError) as e:
                raise StorageError(f"Failed to presign s3://{self.bucket}/{locator}: {e}") from e

        if self.public_base_url:
            return join_url(self.public_base_url, locator)
        if self.endpoint_url:
            # Path-style URL, which is what MinIO serves for public buckets
            return join_url(join_url(self.endpoint_url, self.bucket), locator)
        return f"https://{self.bucket}.s3.amazonaws.com/{locator}"
