"""Setting model for site configuration."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime

from storefront.database import Base


class Setting(Base):
    """Setting model - key-value store for storefront content settings."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    value = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<Setting(id={self.id}, key='{self.key}')>"
