from typing import List
from fastapi import APIRouter, Depends, Query
from cloudspace.api.deps import get_folder_tree
from cloudspace.api.v1.schemas import FolderCreate, FolderOut, SuccessResponse
from cloudspace.services.folders import FolderTree

router = APIRouter()

@router.get("/breadcrumb", response_model=List[FolderOut])
async def get_breadcrumb(
    folder_id: str | None = Query(None, alias="folderId"),
    tree: FolderTree = Depends(get_folder_tree),
):
    """Path from the workspace root down to a folder"""
    return await tree.breadcrumb(folder_id or None)

@router.post("/create", response_model=FolderOut)
async def create_folder(
    folder_data: FolderCreate,
    tree: FolderTree = Depends(get_folder_tree),
):
    return await tree.create_folder(folder_data.workspace_id, folder_data.parent_folder_id, folder_data.name)

@router.delete("/delete", response_model=SuccessResponse)
async def delete_folder(
    id: str = Query(..., min_length=1),
    tree: FolderTree = Depends(get_folder_tree),
):
    """Delete a folder; descendants follow FOLDER_DELETE_POLICY"""
    await tree.delete_folder(id)
    return {"success": True}
