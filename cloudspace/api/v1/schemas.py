from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class WorkspaceCredentials(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)

class WorkspaceResponse(CamelModel):
    id: str
    name: str

class WorkspaceInfo(WorkspaceResponse):
    created_at: datetime

class FolderCreate(CamelModel):
    workspace_id: str = Field(min_length=1)
    parent_folder_id: str | None = None
    name: str = Field(min_length=1, max_length=255)

class FolderOut(CamelModel):
    id: str
    workspace_id: str
    parent_folder_id: str | None
    name: str
    created_at: datetime

class TextCreate(CamelModel):
    workspace_id: str = Field(min_length=1)
    folder_id: str | None = None
    content: str = Field(min_length=1)

class TextRecordOut(CamelModel):
    id: str
    workspace_id: str
    folder_id: str | None
    name: str
    content: str
    created_at: datetime

class FileUpload(CamelModel):
    workspace_id: str = Field(min_length=1)
    folder_id: str | None = None
    file_name: str = Field(min_length=1, max_length=500)
    file_data: str = Field(min_length=1)
    mime_type: str | None = None
    size: int | None = Field(default=None, ge=0)

class FileOut(CamelModel):
    id: str
    workspace_id: str
    folder_id: str | None
    name: str
    storage_path: str
    size: int
    mime_type: str | None
    created_at: datetime
    url: str | None = None

    @classmethod
    def from_record(cls, record, url: str) -> "FileOut":
        return cls.model_validate(record).model_copy(update={"url": url})

class ContentsResponse(CamelModel):
    folders: list[FolderOut]
    text_records: list[TextRecordOut]
    files: list[FileOut]

class SuccessResponse(BaseModel):
    success: bool = True
