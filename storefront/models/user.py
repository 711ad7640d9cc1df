"""Admin user model."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime

from storefront.database import Base


class AdminUser(Base):
    """Administrator allowed to sign in to the admin panel."""

    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<AdminUser(id={self.id}, email='{self.email}')>"
