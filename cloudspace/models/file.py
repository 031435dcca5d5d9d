from sqlalchemy import Column, String, BigInteger, ForeignKey, Text
from sqlalchemy.orm import relationship
import uuid
from cloudspace.db.base import Base, TimestampMixin

class FileRecord(Base, TimestampMixin):
    __tablename__ = "files"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    workspace_id = Column(String(36), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    folder_id = Column(String(36), index=True)

    # File Info
    name = Column(String(500), nullable=False)
    size = Column(BigInteger, nullable=False)
    mime_type = Column(String(255))

    # Storage key, opaque to everything but the storage service
    storage_path = Column(Text, nullable=False)

    # Relationships
    workspace = relationship("Workspace", back_populates="files")
