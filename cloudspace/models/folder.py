from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
import uuid
from cloudspace.db.base import Base, TimestampMixin

class Folder(Base, TimestampMixin):
    __tablename__ = "folders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    workspace_id = Column(String(36), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    # Plain pointer, NULL is the workspace root. Not a foreign key: what happens to
    # children on delete is decided by FolderTree, never by the database.
    parent_folder_id = Column(String(36), index=True)

    name = Column(String(255), nullable=False)

    # Relationships
    workspace = relationship("Workspace", back_populates="folders")
