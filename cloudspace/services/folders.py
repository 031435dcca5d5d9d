"""Folder hierarchy: creation, deletion and breadcrumb resolution.

Folders form one forest per workspace. ``parent_folder_id`` is ``None`` for
folders at the workspace root; texts and files hang off folders the same way
through ``folder_id``.
"""

import logging
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from cloudspace.config import Settings
from cloudspace.core.errors import ConflictError, NotFoundError, StorageError, ValidationError
from cloudspace.models.file import FileRecord
from cloudspace.models.folder import Folder
from cloudspace.models.text_record import TextRecord
from cloudspace.models.workspace import Workspace
from cloudspace.services.storage import StorageService
from cloudspace.workers.tasks import schedule_storage_purge

logger = logging.getLogger(__name__)

DELETE_POLICIES = ("cascade", "orphan", "reject")

async def resolve_folder_id(db: AsyncSession, workspace_id: str, folder_id: str | None) -> str | None:
    """Normalize a target folder id: empty means root, otherwise it must be a folder of the workspace"""
    if not folder_id:
        return None
    folder = await db.get(Folder, folder_id)
    if folder is None or folder.workspace_id != workspace_id:
        raise NotFoundError("Folder not found")
    return folder_id

class FolderTree:
    def __init__(
        self,
        db: AsyncSession,
        settings: Settings,
        storage: StorageService | None = None,
    ):
        self.db = db
        self.storage = storage
        self.delete_policy = settings.FOLDER_DELETE_POLICY
        self.max_depth = settings.FOLDER_MAX_DEPTH
        if self.delete_policy not in DELETE_POLICIES:
            raise ValueError(f"Unknown folder delete policy: {self.delete_policy}")

    async def get(self, folder_id: str) -> Folder | None:
        return await self.db.get(Folder, folder_id)

    async def create_folder(self, workspace_id: str, parent_folder_id: str | None, name: str) -> Folder:
        if not workspace_id or not name:
            raise ValidationError("Workspace ID and name required")

        if await self.db.get(Workspace, workspace_id) is None:
            raise NotFoundError("Workspace not found")

        parent_folder_id = await resolve_folder_id(self.db, workspace_id, parent_folder_id)
        if parent_folder_id is not None and len(await self.breadcrumb(parent_folder_id)) >= self.max_depth:
            raise ValidationError(f"Folders cannot be nested more than {self.max_depth} levels deep")

        folder = Folder(workspace_id=workspace_id, parent_folder_id=parent_folder_id, name=name)
        self.db.add(folder)
        await self.db.commit()
        await self.db.refresh(folder)
        return folder

    async def delete_folder(self, folder_id: str) -> None:
        if not folder_id:
            raise ValidationError("Folder ID required")

        folder = await self.get(folder_id)
        if folder is None:
            raise NotFoundError("Folder not found")

        if self.delete_policy == "reject":
            if await self._has_children(folder):
                raise ConflictError("Folder is not empty")
            await self.db.delete(folder)
        elif self.delete_policy == "orphan":
            # Children keep pointing at the removed id and drop out of every listing
            await self.db.delete(folder)
        else:
            await self._delete_subtree(folder)

        await self.db.commit()
        logger.info(f"Folder deleted: {folder_id} (policy={self.delete_policy})")

    async def _has_children(self, folder: Folder) -> bool:
        for model, column in (
            (Folder, Folder.parent_folder_id),
            (TextRecord, TextRecord.folder_id),
            (FileRecord, FileRecord.folder_id),
        ):
            result = await self.db.execute(
                select(model.id).where(model.workspace_id == folder.workspace_id, column == folder.id).limit(1)
            )
            if result.first() is not None:
                return True
        return False

    async def descendant_ids(self, folder: Folder) -> list[str]:
        """Ids of ``folder`` and every folder below it, parents before children"""
        collected = [folder.id]
        seen = {folder.id}
        frontier = [folder.id]
        while frontier:
            result = await self.db.execute(
                select(Folder.id).where(
                    Folder.workspace_id == folder.workspace_id,
                    Folder.parent_folder_id.in_(frontier),
                )
            )
            frontier = [child_id for child_id in result.scalars().all() if child_id not in seen]
            seen.update(frontier)
            collected.extend(frontier)
        return collected

    async def _delete_subtree(self, folder: Folder) -> None:
        folder_ids = await self.descendant_ids(folder)
        workspace_id = folder.workspace_id

        result = await self.db.execute(
            select(FileRecord.storage_path).where(
                FileRecord.workspace_id == workspace_id,
                FileRecord.folder_id.in_(folder_ids),
            )
        )
        for storage_path in result.scalars().all():
            self._remove_blob(storage_path)

        await self.db.execute(
            delete(FileRecord).where(FileRecord.workspace_id == workspace_id, FileRecord.folder_id.in_(folder_ids))
        )
        await self.db.execute(
            delete(TextRecord).where(TextRecord.workspace_id == workspace_id, TextRecord.folder_id.in_(folder_ids))
        )
        await self.db.execute(
            delete(Folder).where(Folder.workspace_id == workspace_id, Folder.id.in_(folder_ids))
        )

    def _remove_blob(self, storage_path: str) -> None:
        if self.storage is None:
            logger.warning(f"No storage configured, leaving blob {storage_path}")
            schedule_storage_purge(storage_path)
            return
        try:
            self.storage.delete_file(storage_path)
        except StorageError as e:
            logger.error(f"Storage delete error for {storage_path}: {e}")
            schedule_storage_purge(storage_path)

    async def breadcrumb(self, folder_id: str | None) -> list[Folder]:
        """Folders from the root down to ``folder_id``.

        A missing folder along the way ends the walk quietly, so an unknown id
        yields an empty list and a dangling parent yields a truncated path.
        A cycle in corrupted data stops the walk as well.
        """
        trail: list[Folder] = []
        seen: set[str] = set()
        current_id = folder_id or None

        while current_id is not None:
            if current_id in seen:
                logger.warning(f"Cycle in folder parents at {current_id}, breadcrumb truncated")
                break
            seen.add(current_id)

            folder = await self.get(current_id)
            if folder is None:
                break

            trail.insert(0, folder)
            current_id = folder.parent_folder_id

        return trail
