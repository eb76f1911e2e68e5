"""Object storage adapters."""

from vidhost.adapters.storage.base import (
    ObjectStore,
    StoredObject,
    build_object_key,
    guess_content_type,
    object_url,
)
from vidhost.adapters.storage.s3 import S3ObjectStore
from vidhost.adapters.storage.stub import InMemoryObjectStore

__all__ = [
    "InMemoryObjectStore",
    "ObjectStore",
    "S3ObjectStore",
    "StoredObject",
    "build_object_key",
    "guess_content_type",
    "object_url",
]
