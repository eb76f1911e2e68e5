"""In-memory object store for testing and local runs."""

from typing import BinaryIO

from vidhost.adapters.storage.base import VIDEO_KEY_PREFIX, ObjectStore, StoredObject
from vidhost.domain.errors import StorageError
from vidhost.logging import get_logger

logger = get_logger(__name__)


class InMemoryObjectStore(ObjectStore):
    """Object store that keeps uploaded bytes in a dict."""

    def __init__(self, bucket: str = "local-bucket", fail_uploads: bool = False) -> None:
        self._bucket = bucket
        self.fail_uploads = fail_uploads
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}

    @property
    def bucket(self) -> str:
        return self._bucket

    def put(self, fileobj: BinaryIO, key: str, content_type: str) -> StoredObject:
        if self.fail_uploads:
            raise StorageError(f"Simulated upload failure for {key}")

        self.objects[key] = fileobj.read()
        self.content_types[key] = content_type
        logger.info("memory_upload_completed", key=key, size=len(self.objects[key]))
        return StoredObject(key=key, bucket=self._bucket, content_type=content_type)

    def exists(self, key: str) -> bool:
        return key in self.objects

    def list_keys(self, prefix: str = VIDEO_KEY_PREFIX) -> list[str]:
        return sorted(k for k in self.objects if k.startswith(prefix))

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)
        self.content_types.pop(key, None)
