from cloudspace.models.workspace import Workspace
from cloudspace.models.folder import Folder
from cloudspace.models.text_record import TextRecord
from cloudspace.models.file import FileRecord

__all__ = ["Workspace", "Folder", "TextRecord", "FileRecord"]
