from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from pydantic import EmailStr, Field
from typing import List, Optional

from app_constants.connectors import Base
from scripts.models.common_models import CamelModel, UtcDatetime
from scripts.utils.common_utils import utcnow


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    full_name = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
    files = relationship("FileMetadata", back_populates="owner")
    folders = relationship("Folder", back_populates="owner")


class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    email: EmailStr
    full_name: Optional[str] = None
    providers: Optional[List[int]] = None


class LoginRequest(CamelModel):
    username: str
    password: str


class UserUpdate(CamelModel):
    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None


class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
