"""Restaurant table schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field


class TableCreate(BaseModel):
    """Create table request"""
    table_number: int = Field(ge=1)
    table_name: Optional[str] = Field(default=None, max_length=50)
    capacity: int = Field(ge=1, le=50)
    location: Optional[str] = Field(default=None, max_length=100)
    is_active: bool = True


class TableUpdate(BaseModel):
    """Update table request"""
    table_name: Optional[str] = Field(default=None, max_length=50)
    capacity: Optional[int] = Field(default=None, ge=1, le=50)
    location: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None


class TableResponse(BaseModel):
    """Table response"""
    id: UUID
    table_number: int
    table_name: Optional[str]
    capacity: int
    location: Optional[str]
    status: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
