"""Base interface for object storage adapters."""

import mimetypes
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import PurePath
from typing import BinaryIO
from uuid import uuid4

VIDEO_KEY_PREFIX = "videos/"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass
class StoredObject:
    """Location of an object accepted by the store."""

    key: str
    bucket: str
    content_type: str


def build_object_key(filename: str) -> str:
    """Build a fresh `videos/<uuid><ext>` key for an uploaded file."""
    extension = PurePath(filename).suffix.lower()
    return f"{VIDEO_KEY_PREFIX}{uuid4()}{extension}"


def guess_content_type(filename: str, declared: str | None = None) -> str:
    """Infer a content type from the file name, falling back to the declared one."""
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or declared or DEFAULT_CONTENT_TYPE


def object_url(bucket: str, key: str) -> str:
    """Public URL of an object.

    The bucket name is stripped because stored rows have been seen with
    stray whitespace around it.
    """
    return f"https://{bucket.strip()}.s3.amazonaws.com/{key}"


class ObjectStore(ABC):
    """Abstract base class for object stores.

    Implementations:
    - S3ObjectStore: Amazon S3 through boto3
    - InMemoryObjectStore: Keeps objects in a dict for tests and local runs
    """

    @property
    @abstractmethod
    def bucket(self) -> str:
        """Bucket that receives uploads."""
        ...

    @abstractmethod
    def put(self, fileobj: BinaryIO, key: str, content_type: str) -> StoredObject:
        """Write a file under the given key.

        Raises:
            StorageError: If the write fails
        """
        ...

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Check whether an object exists."""
        ...

    @abstractmethod
    def list_keys(self, prefix: str = VIDEO_KEY_PREFIX) -> list[str]:
        """List object keys under a prefix."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete an object."""
        ...

    def upload(
        self,
        fileobj: BinaryIO,
        filename: str,
        content_type: str | None = None,
    ) -> StoredObject:
        """Store an uploaded file under a freshly generated key."""
        key = build_object_key(filename)
        return self.put(fileobj, key, guess_content_type(filename, content_type))

    def health_check(self) -> bool:
        """Check if the store is reachable."""
        return True
