"""Amazon S3 object store using boto3."""

from typing import Any, BinaryIO

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from vidhost.adapters.storage.base import VIDEO_KEY_PREFIX, ObjectStore, StoredObject
from vidhost.domain.errors import StorageError
from vidhost.logging import get_logger

logger = get_logger(__name__)


class S3ObjectStore(ObjectStore):
    """Stores uploads in a single S3 bucket."""

    def __init__(
        self,
        bucket: str,
        region: str,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        client: Any | None = None,
    ) -> None:
        self._bucket = bucket
        self._client = client or boto3.client(
            "s3",
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def put(self, fileobj: BinaryIO, key: str, content_type: str) -> StoredObject:
        logger.info("s3_upload_started", bucket=self._bucket, key=key, content_type=content_type)
        try:
            self._client.upload_fileobj(
                fileobj,
                self._bucket,
                key,
                ExtraArgs={"ContentType": content_type},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("s3_upload_failed", bucket=self._bucket, key=key, error=str(e))
            raise StorageError(f"Failed to upload {key} to bucket {self._bucket}: {e}") from e

        logger.info("s3_upload_completed", bucket=self._bucket, key=key)
        return StoredObject(key=key, bucket=self._bucket, content_type=content_type)

    def exists(self, key: str) -> bool:
        try:
            self._client.head_object(Bucket=self._bucket, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("404", "NoSuchKey", "NotFound"):
                return False
            raise StorageError(f"Failed to look up {key}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"Failed to look up {key}: {e}") from e
        return True

    def list_keys(self, prefix: str = VIDEO_KEY_PREFIX) -> list[str]:
        keys: list[str] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self._bucket, Prefix=prefix):
                keys.extend(obj["Key"] for obj in page.get("Contents", []))
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to list bucket {self._bucket}: {e}") from e
        return keys

    def delete(self, key: str) -> None:
        try:
            self._client.delete_object(Bucket=self._bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e
        logger.info("s3_object_deleted", bucket=self._bucket, key=key)

    def health_check(self) -> bool:
        try:
            self._client.head_bucket(Bucket=self._bucket)
            return True
        except (BotoCoreError, ClientError) as e:
            logger.error("s3_health_check_failed", bucket=self._bucket, error=str(e))
            return False
