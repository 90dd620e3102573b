"""S3 storage for profile media."""

import logging
import mimetypes
import uuid
from dataclasses import dataclass
from typing import BinaryIO, Optional

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from core.config import StorageConfig
from core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredObject:
    """Reference to an uploaded object."""
    key: str
    url: str


class S3Storage:
    """S3 storage handler for async operations."""

    def __init__(self, config: StorageConfig):
        """
        Initialize S3 storage.

        Args:
            config: Bucket, region and credentials
        """
        if not config.bucket:
            raise ValueError("S3 bucket name not provided")
        self.config = config
        self.bucket_name = config.bucket

    def _session(self) -> aioboto3.Session:
        return aioboto3.Session(
            aws_access_key_id=self.config.aws_access_key_id,
            aws_secret_access_key=self.config.aws_secret_access_key,
            region_name=self.config.region,
        )

    def _client(self):
        return self._session().client("s3", endpoint_url=self.config.endpoint_url)

    def public_url(self, key: str) -> str:
        """Build the public URL of an object."""
        if self.config.public_base_url:
            return f"{self.config.public_base_url.rstrip('/')}/{key}"
        return f"https://{self.bucket_name}.s3.{self.config.region}.amazonaws.com/{key}"

    @staticmethod
    def build_key(folder: str, field: str, filename: Optional[str] = None) -> str:
        """
        Build a unique object key under a folder.

        Args:
            folder: Prefix such as ``talent_profiles/42``
            field: Media slot name (front, video, ...)
            filename: Original filename, used only for its extension
        """
        extension = ""
        if filename and "." in filename:
            extension = "." + filename.rsplit(".", 1)[-1].lower()
        return f"{folder}/{field}-{uuid.uuid4().hex}{extension}"

    async def upload(
        self,
        file_data: bytes | BinaryIO,
        key: str,
        content_type: Optional[str] = None,
    ) -> StoredObject:
        """
        Upload file to S3.

        Args:
            file_data: File data (bytes or file-like object)
            key: S3 object key (path)
            content_type: MIME type of the file

        Returns:
            Key and public URL of the stored object
        """
        body = file_data if isinstance(file_data, bytes) else file_data.read()
        upload_args = {
            "Bucket": self.bucket_name,
            "Key": key,
            "Body": body,
            "ContentType": content_type
            or mimetypes.guess_type(key)[0]
            or "application/octet-stream",
        }

        try:
            async with self._client() as client:
                await client.put_object(**upload_args)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 upload failed for {self.bucket_name}/{key}: {e}")
            raise StorageError(f"Failed to upload {key.rsplit('/', 1)[-1]}") from e

        logger.info(f"Uploaded file to S3: {self.bucket_name}/{key}")
        return StoredObject(key=key, url=self.public_url(key))

    async def delete(self, key: str) -> bool:
        """
        Delete file from S3.

        Args:
            key: S3 object key

        Returns:
            True if deleted successfully
        """
        try:
            async with self._client() as client:
                await client.delete_object(Bucket=self.bucket_name, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"S3 delete failed for {self.bucket_name}/{key}: {e}")
            raise StorageError("Failed to delete previous media file") from e

        logger.info(f"Deleted file from S3: {self.bucket_name}/{key}")
        return True
