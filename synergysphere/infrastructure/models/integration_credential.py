"""SQLAlchemy model for encrypted third-party credentials."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint

from synergysphere.infrastructure.database import Base
from synergysphere.utils import now_in_app_naive_datetime


class IntegrationCredentialModel(Base):
    """Fernet-encrypted tokens issued by an external provider."""

    __tablename__ = "integration_credential"
    __table_args__ = (UniqueConstraint("user_id", "provider"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    provider = Column(String(20), nullable=False)
    account = Column(String(200), nullable=True)
    access_token_encrypted = Column(Text, nullable=False)
    refresh_token_encrypted = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["IntegrationCredentialModel"]
