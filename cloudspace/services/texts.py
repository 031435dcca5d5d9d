import logging
from sqlalchemy.ext.asyncio import AsyncSession
from cloudspace.core.errors import NotFoundError, ValidationError
from cloudspace.models.text_record import TextRecord
from cloudspace.models.workspace import Workspace
from cloudspace.services.folders import resolve_folder_id
from cloudspace.services.naming import NamingAssistant

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255

class TextRecords:
    def __init__(self, db: AsyncSession, naming: NamingAssistant):
        self.db = db
        self.naming = naming

    async def create_text(self, workspace_id: str, folder_id: str | None, content: str) -> TextRecord:
        if not workspace_id or not content:
            raise ValidationError("Workspace ID and content required")

        if await self.db.get(Workspace, workspace_id) is None:
            raise NotFoundError("Workspace not found")
        folder_id = await resolve_folder_id(self.db, workspace_id, folder_id)

        name = await self.naming.name_for(content)

        record = TextRecord(
            workspace_id=workspace_id,
            folder_id=folder_id,
            name=name[:MAX_NAME_LENGTH],
            content=content,
        )
        self.db.add(record)
        await self.db.commit()
        await self.db.refresh(record)
        return record

    async def delete_text(self, text_id: str) -> None:
        if not text_id:
            raise ValidationError("Text record ID required")

        record = await self.db.get(TextRecord, text_id)
        if record is None:
            raise NotFoundError("Text record not found")

        await self.db.delete(record)
        await self.db.commit()
        logger.info(f"Text record deleted: {text_id}")
