from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship
from pydantic import Field
from typing import List, Optional

from app_constants.connectors import Base
from scripts.models.common_models import CamelModel, UtcDatetime
from scripts.utils.common_utils import utcnow


class FileMetadata(Base):
    __tablename__ = "files"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    mime_type = Column(String, nullable=True)
    size = Column(Integer, nullable=True)
    folder_id = Column(Integer, ForeignKey("folders.id"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    provider_id = Column(Integer, ForeignKey("cloud_providers.id"), nullable=True)
    external_id = Column(String, nullable=True)
    path = Column(String, nullable=False)
    thumbnail_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    is_favorite = Column(Boolean, default=False, nullable=False)
    tags = Column(JSON, default=list, nullable=False)
    owner = relationship("User", back_populates="files")
    folder = relationship("Folder", back_populates="files")


class SharedFile(Base):
    __tablename__ = "shared_files"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    file_id = Column(Integer, ForeignKey("files.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String, unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    file = relationship("FileMetadata")


class FileUpload(CamelModel):
    """Metadata registered by an upload, no bytes are transferred"""
    name: str = Field(min_length=1)
    mime_type: Optional[str] = None
    size: Optional[int] = Field(default=None, ge=0)
    folder_id: Optional[int] = None
    provider_id: Optional[int] = None
    external_id: Optional[str] = None
    path: Optional[str] = None
    thumbnail_url: Optional[str] = None


class FileInfo(CamelModel):
    id: int
    name: str
    mime_type: Optional[str] = None
    size: Optional[int] = None
    folder_id: Optional[int] = None
    user_id: int
    provider_id: Optional[int] = None
    external_id: Optional[str] = None
    path: str
    thumbnail_url: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None
    is_favorite: bool = False
    tags: List[str] = []


class TagRequest(CamelModel):
    tag: str = Field(min_length=1)


class TagResponse(CamelModel):
    file_id: int
    tags: List[str]


class FileShare(CamelModel):
    file_id: int
    # seconds
    expires_in: Optional[int] = Field(default=None, gt=0)


class ShareLinkInfo(CamelModel):
    id: int
    file_id: int
    token: str
    url: str
    expires_at: Optional[UtcDatetime] = None


class SharedFileInfo(CamelModel):
    id: int
    file_id: int
    user_id: int
    token: str
    expires_at: Optional[UtcDatetime] = None
    created_at: Optional[UtcDatetime] = None
    file: FileInfo


class RevokeResponse(CamelModel):
    success: bool = True
    revoked: bool
