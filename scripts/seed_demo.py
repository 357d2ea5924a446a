#!/usr/bin/env python3
"""
Seed script to create demo tables and staff accounts
"""

import asyncio
import uuid


async def seed_demo_data():
    """Seed demo data for development"""
    from sqlalchemy import select

    from app.api.auth import create_access_token, get_password_hash
    from app.database import SessionLocal, engine, Base
    from app.models.table import Table, TableStatus
    from app.models.user import User, UserRole

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo data already exists
        result = await db.execute(select(Table).limit(1))
        if result.scalar_one_or_none():
            print("Demo data already exists. Skipping...")
            return

        print("Creating dining tables...")

        layout = [
            # (number, name, capacity, area)
            (1, "Window 1", 2, "Floor 1"),
            (2, "Window 2", 2, "Floor 1"),
            (3, None, 4, "Floor 1"),
            (4, None, 4, "Floor 1"),
            (5, None, 6, "Floor 1"),
            (6, "Booth", 8, "Floor 1"),
            (7, None, 2, "Patio"),
            (8, None, 4, "Patio"),
            (9, None, 4, "Patio"),
            (10, "Garden Long Table", 10, "Patio"),
            (11, "Private Room", 12, "VIP"),
            (12, "Chef's Table", 6, "VIP"),
        ]
        for number, name, capacity, area in layout:
            db.add(Table(
                id=uuid.uuid4(),
                table_number=number,
                table_name=name,
                capacity=capacity,
                location=area,
                status=TableStatus.AVAILABLE.value,
                is_active=True,
            ))

        print("Creating staff users...")

        staff = [
            ("admin@tablebook.local", "admin123", "Restaurant Admin", UserRole.ADMIN),
            ("manager@tablebook.local", "manager123", "Floor Manager", UserRole.MANAGER),
            ("host@tablebook.local", "host123", "Host Stand", UserRole.STAFF),
        ]
        users = []
        for email, password, full_name, role in staff:
            user = User(
                id=uuid.uuid4(),
                email=email,
                hashed_password=get_password_hash(password),
                full_name=full_name,
                role=role,
                is_active=True,
            )
            db.add(user)
            users.append(user)

        await db.commit()

        print(f"\nDemo data created successfully!\n\nTables: {len(layout)} across Floor 1, Patio and VIP\n")
        print("Development access tokens:")
        for user in users:
            print(f"  {user.role.value:<8} {user.email}")
            print(f"    {create_access_token(user, expires_minutes=60 * 24 * 30)}")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
