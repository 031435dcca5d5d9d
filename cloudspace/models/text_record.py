from sqlalchemy import Column, String, ForeignKey, Text
from sqlalchemy.orm import relationship
import uuid
from cloudspace.db.base import Base, TimestampMixin

class TextRecord(Base, TimestampMixin):
    __tablename__ = "text_records"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    workspace_id = Column(String(36), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False, index=True)
    folder_id = Column(String(36), index=True)

    name = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)

    # Relationships
    workspace = relationship("Workspace", back_populates="text_records")
