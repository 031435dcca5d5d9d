import logging
import uuid
from pathlib import Path
from typing import Protocol
from urllib.parse import quote
import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from cloudspace.config import Settings
from cloudspace.core.errors import StorageError

logger = logging.getLogger(__name__)

def generate_storage_key(workspace_id: str, filename: str) -> str:
    """Unique blob key: {workspace_id}/{uuid}_{filename}"""
    return f"{workspace_id}/{uuid.uuid4()}_{filename}"

class StorageService(Protocol):
    def upload_bytes(self, data: bytes, storage_key: str, content_type: str | None = None) -> str: ...

    def delete_file(self, storage_key: str) -> None: ...

    def public_url(self, storage_key: str) -> str: ...

class B2StorageService:
    def __init__(self, settings: Settings, s3_client=None):
        self.bucket = settings.B2_BUCKET_NAME
        self.endpoint_url = settings.B2_ENDPOINT_URL
        self.public_base_url = settings.STORAGE_PUBLIC_BASE_URL

        if s3_client is None:
            if not settings.B2_KEY_ID or not settings.B2_APP_KEY:
                logger.warning("B2 credentials not set, storage calls may fail")

            # Endpoint format: https://s3.<region>.backblazeb2.com
            self.region_name = "us-west-004"
            if self.endpoint_url and "us-east-005" in self.endpoint_url:
                self.region_name = "us-east-005"

            s3_client = boto3.client(
                's3',
                endpoint_url=self.endpoint_url,
                aws_access_key_id=settings.B2_KEY_ID,
                aws_secret_access_key=settings.B2_APP_KEY,
                region_name=self.region_name,
                config=Config(signature_version='s3v4')
            )
        self.s3_client = s3_client

    def upload_bytes(self, data: bytes, storage_key: str, content_type: str | None = None) -> str:
        extra_args = {}
        if content_type:
            extra_args['ContentType'] = content_type

        try:
            self.s3_client.put_object(Bucket=self.bucket, Key=storage_key, Body=data, **extra_args)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to upload {storage_key}: {e}") from e
        return storage_key

    def delete_file(self, storage_key: str) -> None:
        try:
            self.s3_client.delete_object(Bucket=self.bucket, Key=storage_key)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to delete {storage_key}: {e}") from e

    def public_url(self, storage_key: str) -> str:
        """Public URL of a blob. Pure string work, no request is made."""
        if self.public_base_url:
            base = self.public_base_url.rstrip("/")
        else:
            base = f"{(self.endpoint_url or 'https://s3.amazonaws.com').rstrip('/')}/{self.bucket}"
        return f"{base}/{quote(storage_key)}"

class LocalStorageService:
    """Blobs on the local disk, served back by the app under LOCAL_STORAGE_URL_PATH"""

    def __init__(self, settings: Settings):
        self.root = Path(settings.LOCAL_STORAGE_DIR).resolve()
        self.url_path = settings.LOCAL_STORAGE_URL_PATH.rstrip("/")
        self.public_base_url = settings.STORAGE_PUBLIC_BASE_URL
        self.root.mkdir(parents=True, exist_ok=True)

    def _path_for(self, storage_key: str) -> Path:
        path = (self.root / storage_key).resolve()
        if not path.is_relative_to(self.root):
            raise StorageError(f"Storage key escapes storage root: {storage_key}")
        return path

    def upload_bytes(self, data: bytes, storage_key: str, content_type: str | None = None) -> str:
        path = self._path_for(storage_key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Failed to upload {storage_key}: {e}") from e
        return storage_key

    def delete_file(self, storage_key: str) -> None:
        try:
            self._path_for(storage_key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {storage_key}: {e}") from e

    def public_url(self, storage_key: str) -> str:
        base = self.public_base_url.rstrip("/") if self.public_base_url else self.url_path
        return f"{base}/{quote(storage_key)}"

def create_storage_service(settings: Settings) -> StorageService:
    if settings.STORAGE_BACKEND == "s3":
        return B2StorageService(settings)
    return LocalStorageService(settings)
