"""Restaurant table management API endpoints"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.database import get_db
from app.models.table import Table, TableStatus
from app.models.user import User
from app.schemas.table import TableCreate, TableUpdate, TableResponse
from app.api.auth import require_permission

router = APIRouter()
logger = structlog.get_logger()


@router.get("", response_model=List[TableResponse])
async def list_tables(
    location: Optional[str] = None,
    is_active: Optional[bool] = True,
    current_user: User = Depends(require_permission("table", "view")),
    db: AsyncSession = Depends(get_db),
):
    """List restaurant tables"""
    query = select(Table)

    if location:
        query = query.where(Table.location == location)

    if is_active is not None:
        query = query.where(Table.is_active == is_active)

    result = await db.execute(query.order_by(Table.table_number))
    return result.scalars().all()


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def create_table(
    table_data: TableCreate,
    current_user: User = Depends(require_permission("table", "create")),
    db: AsyncSession = Depends(get_db),
):
    """Create a table (Admin/Manager only)"""
    result = await db.execute(select(Table).where(Table.table_number == table_data.table_number))
    if result.scalar_one_or_none():
        raise HTTPException(status_code=400, detail="Table number already exists")

    table = Table(**table_data.model_dump(), status=TableStatus.AVAILABLE.value)
    db.add(table)
    await db.commit()
    await db.refresh(table)

    logger.info("Table created", table_number=table.table_number, capacity=table.capacity)
    return table


@router.put("/{table_id}", response_model=TableResponse)
async def update_table(
    table_id: UUID,
    table_data: TableUpdate,
    current_user: User = Depends(require_permission("table", "update")),
    db: AsyncSession = Depends(get_db),
):
    """Update table details (Admin/Manager only)"""
    result = await db.execute(select(Table).where(Table.id == table_id).with_for_update())
    table = result.scalar_one_or_none()

    if not table:
        raise HTTPException(status_code=404, detail="Table not found")

    for field, value in table_data.model_dump(exclude_unset=True).items():
        setattr(table, field, value)

    await db.commit()
    await db.refresh(table)

    return table
