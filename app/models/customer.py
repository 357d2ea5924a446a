"""Customer model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Uuid

from app.database import Base


class Customer(Base):
    """Guests who book tables; phone is the loose identity key"""
    __tablename__ = "customers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(String(100), nullable=False)
    phone = Column(String(20), index=True)
    email = Column(String(255))

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
