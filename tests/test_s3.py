"""Tests for S3 media storage."""

from io import BytesIO
from unittest.mock import AsyncMock, patch

import pytest
from botocore.exceptions import ClientError

from core.config import StorageConfig
from core.exceptions import StorageError
from core.storage.s3 import S3Storage


def make_storage(**overrides) -> S3Storage:
    config = {
        "aws_access_key_id": "testing",
        "aws_secret_access_key": "testing",
        "region": "us-east-1",
        "bucket": "test-bucket",
    }
    config.update(overrides)
    return S3Storage(StorageConfig(**config))


def mock_s3_client():
    mock_client = AsyncMock()
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=None)
    return mock_client


def test_missing_bucket_rejected():
    with pytest.raises(ValueError, match="S3 bucket name not provided"):
        make_storage(bucket="")


def test_public_url_default():
    storage = make_storage()

    assert storage.public_url("talent_profiles/1/front.jpg") == (
        "https://test-bucket.s3.us-east-1.amazonaws.com/talent_profiles/1/front.jpg"
    )


def test_public_url_custom_base():
    storage = make_storage(public_base_url="https://cdn.example.com/")

    assert storage.public_url("a/b.png") == "https://cdn.example.com/a/b.png"


def test_build_key_unique_and_keeps_extension():
    first = S3Storage.build_key("talent_profiles/7", "front", "Photo.JPG")
    second = S3Storage.build_key("talent_profiles/7", "front", "Photo.JPG")

    assert first.startswith("talent_profiles/7/front-")
    assert first.endswith(".jpg")
    assert first != second


def test_build_key_without_extension():
    key = S3Storage.build_key("hirer_profiles/3", "profile_pic", "avatar")

    assert "." not in key.rsplit("/", 1)[-1]


@pytest.mark.asyncio
async def test_upload_puts_object():
    storage = make_storage()
    mock_client = mock_s3_client()

    with patch("core.storage.s3.aioboto3.Session") as mock_session:
        mock_session.return_value.client.return_value = mock_client
        stored = await storage.upload(b"image-bytes", "talent_profiles/1/front-x.jpg")

    mock_client.put_object.assert_awaited_once()
    kwargs = mock_client.put_object.call_args.kwargs
    assert kwargs["Bucket"] == "test-bucket"
    assert kwargs["Key"] == "talent_profiles/1/front-x.jpg"
    assert kwargs["Body"] == b"image-bytes"
    assert kwargs["ContentType"] == "image/jpeg"
    assert stored.key == "talent_profiles/1/front-x.jpg"
    assert stored.url.endswith("/talent_profiles/1/front-x.jpg")


@pytest.mark.asyncio
async def test_upload_file_object_with_content_type():
    storage = make_storage()
    mock_client = mock_s3_client()

    with patch("core.storage.s3.aioboto3.Session") as mock_session:
        mock_session.return_value.client.return_value = mock_client
        await storage.upload(BytesIO(b"video"), "talent_profiles/1/video-x", content_type="video/mp4")

    kwargs = mock_client.put_object.call_args.kwargs
    assert kwargs["Body"] == b"video"
    assert kwargs["ContentType"] == "video/mp4"


@pytest.mark.asyncio
async def test_upload_failure_raises_storage_error():
    storage = make_storage()
    mock_client = mock_s3_client()
    mock_client.put_object.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "PutObject"
    )

    with patch("core.storage.s3.aioboto3.Session") as mock_session:
        mock_session.return_value.client.return_value = mock_client
        with pytest.raises(StorageError):
            await storage.upload(b"x", "hirer_profiles/1/profile_pic-x.png")


@pytest.mark.asyncio
async def test_delete_object():
    storage = make_storage()
    mock_client = mock_s3_client()

    with patch("core.storage.s3.aioboto3.Session") as mock_session:
        mock_session.return_value.client.return_value = mock_client
        assert await storage.delete("talent_profiles/1/left-x.jpg") is True

    mock_client.delete_object.assert_awaited_once_with(
        Bucket="test-bucket", Key="talent_profiles/1/left-x.jpg"
    )


@pytest.mark.asyncio
async def test_delete_failure_raises_storage_error():
    storage = make_storage()
    mock_client = mock_s3_client()
    mock_client.delete_object.side_effect = ClientError(
        {"Error": {"Code": "InternalError", "Message": "boom"}}, "DeleteObject"
    )

    with patch("core.storage.s3.aioboto3.Session") as mock_session:
        mock_session.return_value.client.return_value = mock_client
        with pytest.raises(StorageError):
            await storage.delete("talent_profiles/1/left-x.jpg")
