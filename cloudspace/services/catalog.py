from dataclasses import dataclass, field
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from cloudspace.core.errors import ValidationError
from cloudspace.models.file import FileRecord
from cloudspace.models.folder import Folder
from cloudspace.models.text_record import TextRecord
from cloudspace.services.storage import StorageService

@dataclass
class ListedFile:
    record: FileRecord
    url: str

@dataclass
class WorkspaceContents:
    folders: list[Folder] = field(default_factory=list)
    text_records: list[TextRecord] = field(default_factory=list)
    files: list[ListedFile] = field(default_factory=list)

def _parent_matches(column, folder_id: str | None):
    # NULL never compares equal in SQL, root needs IS NULL
    return column.is_(None) if folder_id is None else column == folder_id

class ContentCatalog:
    """Everything directly inside one folder (or the root) of a workspace"""

    def __init__(self, db: AsyncSession, storage: StorageService):
        self.db = db
        self.storage = storage

    async def list_contents(self, workspace_id: str, folder_id: str | None = None) -> WorkspaceContents:
        if not workspace_id:
            raise ValidationError("Workspace ID required")
        folder_id = folder_id or None

        if folder_id is not None:
            folder = await self.db.get(Folder, folder_id)
            if folder is None or folder.workspace_id != workspace_id:
                # Children of a deleted folder stay unreachable under the orphan policy
                return WorkspaceContents()

        # Any failing query propagates, there are no partial listings
        folders = await self.db.execute(
            select(Folder)
            .where(Folder.workspace_id == workspace_id, _parent_matches(Folder.parent_folder_id, folder_id))
            .order_by(Folder.created_at.desc())
        )
        text_records = await self.db.execute(
            select(TextRecord)
            .where(TextRecord.workspace_id == workspace_id, _parent_matches(TextRecord.folder_id, folder_id))
            .order_by(TextRecord.created_at.desc())
        )
        files = await self.db.execute(
            select(FileRecord)
            .where(FileRecord.workspace_id == workspace_id, _parent_matches(FileRecord.folder_id, folder_id))
            .order_by(FileRecord.created_at.desc())
        )

        return WorkspaceContents(
            folders=list(folders.scalars().all()),
            text_records=list(text_records.scalars().all()),
            files=[ListedFile(record=f, url=self.storage.public_url(f.storage_path)) for f in files.scalars().all()],
        )
