import base64
import binascii
from fastapi import APIRouter, Depends, Query
from cloudspace.api.deps import get_file_records
from cloudspace.api.v1.schemas import FileOut, FileUpload, SuccessResponse
from cloudspace.core.errors import ValidationError
from cloudspace.services.files import FileRecords

router = APIRouter()

@router.post("/upload", response_model=FileOut)
async def upload_file(
    upload_data: FileUpload,
    files: FileRecords = Depends(get_file_records),
):
    """Upload a base64 encoded file into a folder (or the root)"""
    try:
        data = base64.b64decode(upload_data.file_data, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("fileData must be base64 encoded")

    record = await files.upload_file(
        upload_data.workspace_id,
        upload_data.folder_id,
        upload_data.file_name,
        data,
        mime_type=upload_data.mime_type,
        size=upload_data.size,
    )
    return FileOut.from_record(record, files.url_for(record))

@router.delete("/delete", response_model=SuccessResponse)
async def delete_file(
    id: str = Query(..., min_length=1),
    files: FileRecords = Depends(get_file_records),
):
    """Delete file metadata and its blob; a failed blob removal is retried later"""
    await files.delete_file(id)
    return {"success": True}
