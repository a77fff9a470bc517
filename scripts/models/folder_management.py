from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from pydantic import Field
from typing import Annotated, List, Literal, Optional, Union

from app_constants.connectors import Base
from scripts.models.common_models import CamelModel, UtcDatetime
from scripts.models.file_management import FileInfo
from scripts.utils.common_utils import utcnow


class Folder(Base):
    __tablename__ = "folders"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    parent_id = Column(Integer, ForeignKey("folders.id"), nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    provider_id = Column(Integer, ForeignKey("cloud_providers.id"), nullable=True)
    external_id = Column(String, nullable=True)
    path = Column(String, nullable=False)
    is_root = Column(Boolean, default=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    owner = relationship("User", back_populates="folders")
    files = relationship("FileMetadata", back_populates="folder")


class FolderCreate(CamelModel):
    name: str = Field(min_length=1)
    parent_id: Optional[int] = None
    provider_id: Optional[int] = None
    external_id: Optional[str] = None
    path: Optional[str] = None
    is_root: bool = False


class FolderInfo(CamelModel):
    """A persisted folder"""
    kind: Literal["folder"] = "folder"
    id: int
    name: str
    path: str
    parent_id: Optional[int] = None
    user_id: int
    provider_id: Optional[int] = None
    external_id: Optional[str] = None
    is_root: bool = False
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None


class VirtualFolderInfo(CamelModel):
    """A folder synthesised from file path prefixes; it has no stored row"""
    kind: Literal["virtual"] = "virtual"
    name: str
    path: str
    user_id: int
    provider_id: Optional[int] = None


class ParentFolderLink(CamelModel):
    """Navigation entry pointing one level up in a provider listing"""
    kind: Literal["parent"] = "parent"
    name: str
    path: str
    is_root: bool = False
    provider_id: Optional[int] = None


FolderEntry = Annotated[Union[FolderInfo, VirtualFolderInfo, ParentFolderLink], Field(discriminator="kind")]


class FolderContents(CamelModel):
    folders: List[FolderEntry] = []
    files: List[FileInfo] = []
