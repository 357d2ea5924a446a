"""Audit log model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON, Uuid

from app.database import Base


class AuditLog(Base):
    """History of reservation and table actions"""
    __tablename__ = "audit_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Actor information
    actor_id = Column(Uuid)  # User ID or null for system/customer
    actor_type = Column(String(50))  # user, customer, system
    actor_name = Column(String(255))

    # Action details
    action = Column(String(100), nullable=False)  # create_reservation, confirm_reservation, ...
    resource_type = Column(String(50))  # reservation, table, order
    resource_id = Column(Uuid)

    # Change data
    data_json = Column(JSON)  # {"from": "pending", "to": "confirmed", ...}

    created_at = Column(DateTime, default=datetime.utcnow)
