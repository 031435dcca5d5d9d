import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from cloudspace.config import Settings
from cloudspace.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from cloudspace.core.security import get_password_hash, verify_password
from cloudspace.models.workspace import Workspace

logger = logging.getLogger(__name__)

class WorkspaceStore:
    """Creates and unlocks password protected workspaces"""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.bcrypt_rounds = settings.BCRYPT_ROUNDS

    async def find_by_name(self, name: str) -> Workspace | None:
        result = await self.db.execute(select(Workspace).where(Workspace.name == name))
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Workspace:
        if not name:
            raise ValidationError("Workspace name required")
        workspace = await self.find_by_name(name)
        if workspace is None:
            raise NotFoundError("Workspace not found")
        return workspace

    async def get(self, workspace_id: str) -> Workspace:
        workspace = await self.db.get(Workspace, workspace_id)
        if workspace is None:
            raise NotFoundError("Workspace not found")
        return workspace

    async def create(self, name: str, password: str) -> Workspace:
        if not name or not password:
            raise ValidationError("Name and password required")

        # Friendlier message only, the unique index below is the real guard
        if await self.find_by_name(name) is not None:
            raise ConflictError("Workspace name already exists")

        workspace = Workspace(
            name=name,
            password_hash=get_password_hash(password, rounds=self.bcrypt_rounds),
        )
        self.db.add(workspace)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(f"Workspace name taken concurrently: {name}")
            raise ConflictError("Workspace name already exists")

        await self.db.refresh(workspace)
        logger.info(f"Workspace created: {workspace.id}")
        return workspace

    async def access(self, name: str, password: str) -> Workspace:
        if not name or not password:
            raise ValidationError("Name and password required")

        workspace = await self.find_by_name(name)
        if workspace is None:
            raise NotFoundError("Workspace not found")

        if not verify_password(password, workspace.password_hash):
            logger.info(f"Rejected password for workspace {workspace.id}")
            raise AuthError("Incorrect password")

        return workspace
