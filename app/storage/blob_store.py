from __future__ import annotations

import logging
import re
import shutil
import uuid
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings

logger = logging.getLogger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9]")


class BlobStoreError(RuntimeError):
    pass


@dataclass(frozen=True)
class StoredBlob:
    url: str
    blob_id: str


class BlobStore(Protocol):
    def upload(self, local_path: str) -> StoredBlob: ...

    def delete(self, blob_id: str) -> bool: ...


def safe_file_stem(name: str) -> str:
    stem = Path(name or "").stem
    return _UNSAFE_NAME_CHARS.sub("-", stem) or "file"


def _blob_name(local_path: Path) -> str:
    return f"{safe_file_stem(local_path.name)}-{uuid.uuid4().hex}{local_path.suffix.lower()}"


class LocalBlobStore:
    """Blobs kept as files in a single directory; the blob id is the file name."""

    def __init__(self, root: str | Path):
        self._root = Path(root)

    def upload(self, local_path: str) -> StoredBlob:
        source = Path(local_path)
        self._root.mkdir(parents=True, exist_ok=True)
        blob_id = _blob_name(source)
        target = self._root / blob_id
        try:
            shutil.copyfile(source, target)
        except OSError as exc:
            raise BlobStoreError(f"Failed to store file '{source.name}': {exc}") from exc
        logger.info("blob_uploaded backend=local blob_id=%s", blob_id)
        return StoredBlob(url=target.resolve().as_uri(), blob_id=blob_id)

    def delete(self, blob_id: str) -> bool:
        # blob ids are bare file names; anything else never came from this store
        if not blob_id or Path(blob_id).name != blob_id:
            return False
        target = self._root / blob_id
        if not target.exists():
            return False
        try:
            target.unlink()
        except OSError as exc:
            raise BlobStoreError(f"Failed to delete blob '{blob_id}': {exc}") from exc
        logger.info("blob_deleted backend=local blob_id=%s", blob_id)
        return True


class S3BlobStore:
    def __init__(self, bucket: str, *, prefix: str = "resumes", region: str | None = None, client: Any = None):
        self._bucket = bucket
        self._prefix = prefix.strip("/")
        self._region = region
        self._client = client or boto3.client("s3", region_name=region)

    def _url(self, key: str) -> str:
        if self._region:
            return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"
        return f"https://{self._bucket}.s3.amazonaws.com/{key}"

    def upload(self, local_path: str) -> StoredBlob:
        source = Path(local_path)
        key = f"{self._prefix}/{_blob_name(source)}" if self._prefix else _blob_name(source)
        try:
            self._client.upload_file(str(source), self._bucket, key)
        except (BotoCoreError, ClientError) as exc:
            raise BlobStoreError(f"Failed to upload '{source.name}' to S3: {exc}") from exc
        logger.info("blob_uploaded backend=s3 bucket=%s key=%s", self._bucket, key)
        return StoredBlob(url=self._url(key), blob_id=key)

    def delete(self, blob_id: str) -> bool:
        try:
            self._client.delete_object(Bucket=self._bucket, Key=blob_id)
        except (BotoCoreError, ClientError) as exc:
            raise BlobStoreError(f"Failed to delete '{blob_id}' from S3: {exc}") from exc
        logger.info("blob_deleted backend=s3 bucket=%s key=%s", self._bucket, blob_id)
        return True


@lru_cache(maxsize=1)
def get_blob_store() -> BlobStore:
    if settings.blob_store == "s3":
        return S3BlobStore(
            settings.blob_s3_bucket or "",
            prefix=settings.blob_s3_prefix,
            region=settings.blob_s3_region,
        )
    return LocalBlobStore(settings.blob_local_dir)
