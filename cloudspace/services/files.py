import logging
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from cloudspace.config import Settings
from cloudspace.core.errors import InternalError, NotFoundError, StorageError, ValidationError
from cloudspace.models.file import FileRecord
from cloudspace.models.workspace import Workspace
from cloudspace.services.folders import resolve_folder_id
from cloudspace.services.storage import StorageService, generate_storage_key
from cloudspace.workers.tasks import schedule_storage_purge

logger = logging.getLogger(__name__)

class FileRecords:
    """Uploads go blob first, row second; deletes go row lookup, blob, row"""

    def __init__(self, db: AsyncSession, storage: StorageService, settings: Settings):
        self.db = db
        self.storage = storage
        self.max_size = settings.max_file_size_bytes

    async def upload_file(
        self,
        workspace_id: str,
        folder_id: str | None,
        file_name: str,
        data: bytes,
        mime_type: str | None = None,
        size: int | None = None,
    ) -> FileRecord:
        if not workspace_id or not file_name or not data:
            raise ValidationError("Missing required fields")
        if "/" in file_name or "\\" in file_name:
            raise ValidationError("File name must not contain path separators")
        if len(data) > self.max_size:
            raise ValidationError(f"File size exceeds {self.max_size // (1024 * 1024)}MB limit")

        if await self.db.get(Workspace, workspace_id) is None:
            raise NotFoundError("Workspace not found")
        folder_id = await resolve_folder_id(self.db, workspace_id, folder_id)

        storage_key = generate_storage_key(workspace_id, file_name)
        self.storage.upload_bytes(data, storage_key, mime_type)

        record = FileRecord(
            workspace_id=workspace_id,
            folder_id=folder_id,
            name=file_name,
            storage_path=storage_key,
            size=size or len(data),
            mime_type=mime_type,
        )
        self.db.add(record)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            # Blob is written but nothing references it
            logger.error(f"Orphaned storage object {storage_key}: metadata insert failed: {e}")
            schedule_storage_purge(storage_key)
            raise InternalError("Failed to save file metadata") from e

        await self.db.refresh(record)
        logger.info(f"File uploaded: {record.id} ({record.size} bytes)")
        return record

    async def delete_file(self, file_id: str) -> None:
        if not file_id:
            raise ValidationError("File ID required")

        record = await self.db.get(FileRecord, file_id)
        if record is None:
            raise NotFoundError("File not found")

        try:
            self.storage.delete_file(record.storage_path)
        except StorageError as e:
            # The row still goes, the blob is retried in the background
            logger.error(f"Storage delete error for {record.storage_path}: {e}")
            schedule_storage_purge(record.storage_path)

        await self.db.delete(record)
        await self.db.commit()
        logger.info(f"File deleted: {file_id}")

    def url_for(self, record: FileRecord) -> str:
        return self.storage.public_url(record.storage_path)
