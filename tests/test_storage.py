"""Tests for object storage adapters."""

import io
import re
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from vidhost.adapters.storage.base import build_object_key, guess_content_type, object_url
from vidhost.adapters.storage.s3 import S3ObjectStore
from vidhost.adapters.storage.stub import InMemoryObjectStore
from vidhost.domain.errors import StorageError

KEY_PATTERN = re.compile(r"^videos/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}")


def _client_error(code: str, operation: str = "HeadObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestObjectKeys:
    """Test key and URL helpers."""

    def test_key_keeps_extension(self) -> None:
        key = build_object_key("Holiday.MP4")

        assert KEY_PATTERN.match(key)
        assert key.endswith(".mp4")

    def test_key_without_extension(self) -> None:
        key = build_object_key("recording")

        assert KEY_PATTERN.match(key)
        assert len(key) == len("videos/") + 36

    def test_keys_are_unique(self) -> None:
        assert build_object_key("a.mp4") != build_object_key("a.mp4")

    def test_content_type_from_extension(self) -> None:
        assert guess_content_type("clip.mp4", "application/octet-stream") == "video/mp4"

    def test_content_type_falls_back_to_declared(self) -> None:
        assert guess_content_type("clip.unknownext", "video/x-custom") == "video/x-custom"

    def test_content_type_default(self) -> None:
        assert guess_content_type("clip") == "application/octet-stream"

    def test_object_url_strips_bucket(self) -> None:
        url = object_url(" my-bucket\n", "videos/abc.mp4")

        assert url == "https://my-bucket.s3.amazonaws.com/videos/abc.mp4"


class TestS3ObjectStore:
    """Test the S3 store against a mocked boto3 client."""

    @pytest.fixture
    def client(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture
    def store(self, client: MagicMock) -> S3ObjectStore:
        return S3ObjectStore(bucket="uploads", region="us-east-1", client=client)

    def test_upload(self, store: S3ObjectStore, client: MagicMock) -> None:
        fileobj = io.BytesIO(b"data")

        stored = store.upload(fileobj, "clip.mp4", "video/mp4")

        assert stored.bucket == "uploads"
        assert stored.content_type == "video/mp4"
        client.upload_fileobj.assert_called_once_with(
            fileobj,
            "uploads",
            stored.key,
            ExtraArgs={"ContentType": "video/mp4"},
        )

    def test_upload_failure(self, store: S3ObjectStore, client: MagicMock) -> None:
        client.upload_fileobj.side_effect = _client_error("AccessDenied", "PutObject")

        with pytest.raises(StorageError):
            store.upload(io.BytesIO(b"data"), "clip.mp4")

    def test_exists(self, store: S3ObjectStore, client: MagicMock) -> None:
        assert store.exists("videos/a.mp4") is True
        client.head_object.assert_called_once_with(Bucket="uploads", Key="videos/a.mp4")

    def test_exists_missing(self, store: S3ObjectStore, client: MagicMock) -> None:
        client.head_object.side_effect = _client_error("404")

        assert store.exists("videos/a.mp4") is False

    def test_exists_other_error(self, store: S3ObjectStore, client: MagicMock) -> None:
        client.head_object.side_effect = _client_error("AccessDenied")

        with pytest.raises(StorageError):
            store.exists("videos/a.mp4")

    def test_list_keys(self, store: S3ObjectStore, client: MagicMock) -> None:
        client.get_paginator.return_value.paginate.return_value = [
            {"Contents": [{"Key": "videos/a.mp4"}, {"Key": "videos/b.mp4"}]},
            {},
        ]

        assert store.list_keys() == ["videos/a.mp4", "videos/b.mp4"]
        client.get_paginator.return_value.paginate.assert_called_once_with(
            Bucket="uploads", Prefix="videos/"
        )

    def test_delete(self, store: S3ObjectStore, client: MagicMock) -> None:
        store.delete("videos/a.mp4")

        client.delete_object.assert_called_once_with(Bucket="uploads", Key="videos/a.mp4")

    def test_health_check(self, store: S3ObjectStore, client: MagicMock) -> None:
        assert store.health_check() is True

        client.head_bucket.side_effect = _client_error("403", "HeadBucket")
        assert store.health_check() is False


class TestInMemoryObjectStore:
    """Test the in-memory store."""

    def test_round_trip(self) -> None:
        store = InMemoryObjectStore(bucket="local")

        stored = store.upload(io.BytesIO(b"data"), "clip.webm")

        assert store.exists(stored.key)
        assert store.list_keys() == [stored.key]
        store.delete(stored.key)
        assert not store.exists(stored.key)

    def test_failing_uploads(self) -> None:
        store = InMemoryObjectStore(fail_uploads=True)

        with pytest.raises(StorageError):
            store.upload(io.BytesIO(b"data"), "clip.mp4")
        assert store.objects == {}
