from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship
from typing import Any, Dict, Optional

from app_constants.connectors import Base
from scripts.models.common_models import CamelModel, UtcDatetime


class CloudProvider(Base):
    __tablename__ = "cloud_providers"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    icon = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)


class UserCloudProvider(Base):
    __tablename__ = "user_cloud_providers"
    __table_args__ = {"sqlite_autoincrement": True}
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    provider_id = Column(Integer, ForeignKey("cloud_providers.id"), nullable=False)
    access_token = Column(String, nullable=True)
    refresh_token = Column(String, nullable=True)
    expires_at = Column(DateTime, nullable=True)
    is_active = Column(Boolean, default=True)
    # "metadata" is reserved on declarative classes
    connection_metadata = Column("metadata", JSON, nullable=True)
    provider = relationship("CloudProvider")


class CloudProviderResponse(CamelModel):
    id: int
    name: str
    type: str
    icon: Optional[str] = None
    is_active: bool = True


class ConnectionInfo(CamelModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[UtcDatetime] = None
    is_active: Optional[bool] = None
    metadata: Optional[Dict[str, Any]] = None


class ProviderConnect(CamelModel):
    provider_id: int
    connection_info: Optional[ConnectionInfo] = None


class ProviderStatusUpdate(CamelModel):
    is_active: bool


class UserCloudProviderResponse(CamelModel):
    id: int
    user_id: int
    provider_id: int
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[UtcDatetime] = None
    is_active: bool = True
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def from_connection(cls, connection: UserCloudProvider):
        return cls(
            id=connection.id,
            user_id=connection.user_id,
            provider_id=connection.provider_id,
            access_token=connection.access_token,
            refresh_token=connection.refresh_token,
            expires_at=connection.expires_at,
            is_active=connection.is_active,
            metadata=connection.connection_metadata,
        )


class ProviderConnectionResponse(UserCloudProviderResponse):
    provider: CloudProviderResponse

    @classmethod
    def from_connection(cls, connection: UserCloudProvider):
        base = UserCloudProviderResponse.from_connection(connection)
        return cls(**base.model_dump(), provider=CloudProviderResponse.model_validate(connection.provider))
