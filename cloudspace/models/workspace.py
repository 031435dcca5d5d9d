from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
import uuid
from cloudspace.db.base import Base, TimestampMixin

class Workspace(Base, TimestampMixin):
    __tablename__ = "workspaces"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # UNIQUE is what actually guarantees one workspace per name
    name = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    folders = relationship("Folder", back_populates="workspace", cascade="all, delete-orphan", passive_deletes=True)
    text_records = relationship("TextRecord", back_populates="workspace", cascade="all, delete-orphan", passive_deletes=True)
    files = relationship("FileRecord", back_populates="workspace", cascade="all, delete-orphan", passive_deletes=True)
