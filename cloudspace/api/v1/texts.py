from fastapi import APIRouter, Depends, Query
from cloudspace.api.deps import get_text_records
from cloudspace.api.v1.schemas import SuccessResponse, TextCreate, TextRecordOut
from cloudspace.services.texts import TextRecords

router = APIRouter()

@router.post("/create", response_model=TextRecordOut)
async def create_text(
    text_data: TextCreate,
    texts: TextRecords = Depends(get_text_records),
):
    """Store a text snippet, named by the naming assistant"""
    return await texts.create_text(text_data.workspace_id, text_data.folder_id, text_data.content)

@router.delete("/delete", response_model=SuccessResponse)
async def delete_text(
    id: str = Query(..., min_length=1),
    texts: TextRecords = Depends(get_text_records),
):
    await texts.delete_text(id)
    return {"success": True}
