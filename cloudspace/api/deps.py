from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from cloudspace.config import Settings
from cloudspace.db.session import get_db
from cloudspace.services.catalog import ContentCatalog
from cloudspace.services.files import FileRecords
from cloudspace.services.folders import FolderTree
from cloudspace.services.naming import NamingAssistant
from cloudspace.services.storage import StorageService
from cloudspace.services.texts import TextRecords
from cloudspace.services.workspaces import WorkspaceStore

def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings

def get_storage(request: Request) -> StorageService:
    return request.app.state.storage

def get_naming(request: Request) -> NamingAssistant:
    return request.app.state.naming

def get_workspace_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
) -> WorkspaceStore:
    return WorkspaceStore(db, settings)

def get_folder_tree(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
    storage: StorageService = Depends(get_storage),
) -> FolderTree:
    return FolderTree(db, settings, storage)

def get_content_catalog(
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage),
) -> ContentCatalog:
    return ContentCatalog(db, storage)

def get_text_records(
    db: AsyncSession = Depends(get_db),
    naming: NamingAssistant = Depends(get_naming),
) -> TextRecords:
    return TextRecords(db, naming)

def get_file_records(
    db: AsyncSession = Depends(get_db),
    storage: StorageService = Depends(get_storage),
    settings: Settings = Depends(get_settings_dep),
) -> FileRecords:
    return FileRecords(db, storage, settings)
