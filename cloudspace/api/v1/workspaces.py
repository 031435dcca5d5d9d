from fastapi import APIRouter, Depends, Query, Request
from cloudspace.api.deps import get_content_catalog, get_workspace_store
from cloudspace.api.v1.schemas import (
    ContentsResponse,
    FileOut,
    FolderOut,
    TextRecordOut,
    WorkspaceCredentials,
    WorkspaceInfo,
    WorkspaceResponse,
)
from cloudspace.core.rate_limit import auth_rate_limit, limiter
from cloudspace.services.catalog import ContentCatalog
from cloudspace.services.workspaces import WorkspaceStore

router = APIRouter()

@router.get("", response_model=WorkspaceInfo)
async def get_workspace(
    name: str = Query(..., min_length=1),
    store: WorkspaceStore = Depends(get_workspace_store),
):
    """Look up a workspace by name"""
    return await store.get_by_name(name)

@router.get("/contents", response_model=ContentsResponse)
async def get_workspace_contents(
    workspace_id: str = Query(..., alias="workspaceId", min_length=1),
    folder_id: str | None = Query(None, alias="folderId"),
    catalog: ContentCatalog = Depends(get_content_catalog),
):
    """Folders, texts and files directly inside a folder, or the root when folderId is absent"""
    contents = await catalog.list_contents(workspace_id, folder_id or None)

    return ContentsResponse(
        folders=[FolderOut.model_validate(f) for f in contents.folders],
        text_records=[TextRecordOut.model_validate(t) for t in contents.text_records],
        files=[FileOut.from_record(entry.record, entry.url) for entry in contents.files],
    )

@router.post("/create", response_model=WorkspaceResponse)
@limiter.limit(auth_rate_limit)
async def create_workspace(
    request: Request,
    credentials: WorkspaceCredentials,
    store: WorkspaceStore = Depends(get_workspace_store),
):
    """Create a workspace protected by a shared password"""
    return await store.create(credentials.name, credentials.password)

@router.post("/access", response_model=WorkspaceResponse)
@limiter.limit(auth_rate_limit)
async def access_workspace(
    request: Request,
    credentials: WorkspaceCredentials,
    store: WorkspaceStore = Depends(get_workspace_store),
):
    """Unlock a workspace with its password"""
    return await store.access(credentials.name, credentials.password)
