"""
Media storage backends.

Both backends expose the same two calls, ``save_file`` and
``is_file_type_allowed``; ``build_storage`` picks one from settings at
startup so callers never branch on the storage type themselves.
"""

from __future__ import annotations

import logging
import os
import random
import time
from pathlib import Path
from typing import Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cityfix.config import Settings, settings as default_settings
from cityfix.services.errors import (
    PayloadTooLargeError,
    StorageFailureError,
    UnsupportedMediaTypeError,
)

logger = logging.getLogger(__name__)


ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/jpg",
    "video/mp4",
    "video/quicktime",  # .mov
    "video/x-msvideo",  # .avi
})


def is_file_type_allowed(mime_type: Optional[str]) -> bool:
    return (mime_type or "").lower() in ALLOWED_MIME_TYPES


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def generate_filename(original_name: str) -> str:
    """``<epoch ms>-<random>`` plus the original extension."""
    ext = os.path.splitext(original_name or "")[1]
    return f"{_epoch_ms()}-{random.randint(0, 10**9)}{ext}"


def default_filename(mime_type: str) -> str:
    """Name used when the client sent the file without one."""
    if mime_type.startswith("image/"):
        return "file.jpg"
    if mime_type.startswith("video/"):
        return "file.mp4"
    return "file"


class StorageBackend(Protocol):
    def save_file(self, data: bytes, original_name: str, mime_type: str) -> str: ...

    def is_file_type_allowed(self, mime_type: str) -> bool: ...


class LocalStorage:
    def __init__(self, upload_dir: str, api_url: str):
        self.upload_dir = Path(upload_dir)
        self.api_url = api_url.rstrip("/")
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def is_file_type_allowed(self, mime_type: str) -> bool:
        return is_file_type_allowed(mime_type)

    def save_file(self, data: bytes, original_name: str, mime_type: str) -> str:
        filename = generate_filename(original_name)
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            with open(self.upload_dir / filename, "wb") as f:
                f.write(data)
        except OSError as exc:
            logger.error("Local upload failed (filename=%s): %s", filename, exc)
            raise StorageFailureError(f"Could not store file: {exc}") from exc

        logger.info("Stored upload %s (%s, %d bytes)", filename, mime_type, len(data))
        return f"{self.api_url}/uploads/{filename}"


class S3Storage:
    def __init__(self, bucket: str, client):
        if not bucket:
            raise ValueError("AWS_S3_BUCKET is required when STORAGE_TYPE=s3")
        self.bucket = bucket
        self.client = client

    @classmethod
    def from_settings(cls, config: Settings) -> "S3Storage":
        client = boto3.client(
            "s3",
            region_name=config.AWS_REGION,
            aws_access_key_id=config.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
        )
        return cls(bucket=config.AWS_S3_BUCKET, client=client)

    def is_file_type_allowed(self, mime_type: str) -> bool:
        return is_file_type_allowed(mime_type)

    def save_file(self, data: bytes, original_name: str, mime_type: str) -> str:
        key = f"{_epoch_ms()}-{os.path.basename(original_name or 'file')}"
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=mime_type,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("S3 upload failed (bucket=%s, key=%s): %s", self.bucket, key, exc)
            raise StorageFailureError(f"Could not upload file: {exc}") from exc

        logger.info("Uploaded %s to bucket %s", key, self.bucket)
        return f"https://{self.bucket}.s3.amazonaws.com/{key}"


def build_storage(config: Optional[Settings] = None) -> StorageBackend:
    config = config or default_settings
    storage_type = (config.STORAGE_TYPE or "local").lower()
    if storage_type == "s3":
        return S3Storage.from_settings(config)
    if storage_type == "local":
        return LocalStorage(upload_dir=config.UPLOAD_DIR, api_url=config.API_URL)
    raise ValueError(f"Unknown STORAGE_TYPE: {config.STORAGE_TYPE}")


def check_upload(size: int, mime_type: str, storage: StorageBackend, max_size: int) -> None:
    """Reject an upload before any bytes are written."""
    if size > max_size:
        raise PayloadTooLargeError(
            f"File too large. Max size: {max_size / 1024 / 1024:.1f}MB"
        )
    if not storage.is_file_type_allowed(mime_type):
        raise UnsupportedMediaTypeError("Only image and video files are allowed!")
