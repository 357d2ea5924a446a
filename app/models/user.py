"""User model for staff authentication"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, Enum, Uuid
import enum

from app.database import Base


class UserRole(str, enum.Enum):
    """Staff roles for RBAC"""
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"


class User(Base):
    """Staff accounts"""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Authentication
    email = Column(String(255), unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    # Profile
    full_name = Column(String(255))
    phone = Column(String(20))

    # Role
    role = Column(Enum(UserRole), default=UserRole.STAFF)

    # Status
    is_active = Column(Boolean, default=True)

    # Timestamps
    last_login = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def has_permission(self, entity: str, action: str) -> bool:
        """Check the role against the permission table"""
        from app.permissions import has_permission

        return bool(self.is_active) and has_permission(self.role, entity, action)
