"""Initial migration

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create customers table
    op.create_table(
        'customers',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('full_name', sa.String(100), nullable=False),
        sa.Column('phone', sa.String(20)),
        sa.Column('email', sa.String(255)),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create restaurant_tables table
    op.create_table(
        'restaurant_tables',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('table_number', sa.Integer(), unique=True, nullable=False),
        sa.Column('table_name', sa.String(50)),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(100)),
        sa.Column('status', sa.String(20), nullable=False, server_default='available'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
    )

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), unique=True, nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255)),
        sa.Column('phone', sa.String(20)),
        sa.Column('role', sa.Enum('ADMIN', 'MANAGER', 'STAFF', name='userrole'), default='STAFF'),
        sa.Column('is_active', sa.Boolean(), default=True),
        sa.Column('last_login', sa.DateTime()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create orders table
    op.create_table(
        'orders',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('order_number', sa.String(30), unique=True, nullable=False),
        sa.Column('reservation_id', postgresql.UUID(as_uuid=True)),
        sa.Column('customer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('customers.id')),
        sa.Column('number_of_guests', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='open'),
        sa.Column('notes', sa.Text()),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id')),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
    )

    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('reservation_number', sa.String(20), unique=True, nullable=False),
        sa.Column('customer_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('customers.id')),
        sa.Column('number_of_guests', sa.Integer(), nullable=False),
        sa.Column('reservation_time', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('notes', sa.Text()),
        sa.Column('preferred_area', sa.String(50)),
        sa.Column('cancel_reason', sa.String(500)),
        sa.Column('cancelled_at', sa.DateTime()),
        sa.Column('order_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('orders.id')),
        sa.Column('confirmed_at', sa.DateTime()),
        sa.Column('confirmation_sent', sa.DateTime()),
        sa.Column('reminder_sent', sa.DateTime()),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id')),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), default=sa.func.now(), onupdate=sa.func.now()),
        sa.CheckConstraint('number_of_guests BETWEEN 1 AND 20', name='ck_reservations_guests'),
    )

    # Create reservation_tables table
    op.create_table(
        'reservation_tables',
        sa.Column(
            'reservation_id',
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey('reservations.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column(
            'table_id',
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey('restaurant_tables.id'),
            primary_key=True,
        ),
        sa.Column('sort_order', sa.Integer()),
    )

    # Create order_tables table
    op.create_table(
        'order_tables',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            'order_id',
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey('orders.id', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.Column('table_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('restaurant_tables.id'), nullable=False),
    )

    # Create audit_logs table
    op.create_table(
        'audit_logs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('actor_id', postgresql.UUID(as_uuid=True)),
        sa.Column('actor_type', sa.String(50)),
        sa.Column('actor_name', sa.String(255)),
        sa.Column('action', sa.String(100), nullable=False),
        sa.Column('resource_type', sa.String(50)),
        sa.Column('resource_id', postgresql.UUID(as_uuid=True)),
        sa.Column('data_json', postgresql.JSON()),
        sa.Column('created_at', sa.DateTime(), default=sa.func.now()),
    )

    # Create indexes
    op.create_index('ix_customers_phone', 'customers', ['phone'])
    op.create_index('ix_orders_reservation_id', 'orders', ['reservation_id'])
    op.create_index('ix_reservations_reservation_time', 'reservations', ['reservation_time'])
    op.create_index('ix_reservations_status', 'reservations', ['status'])
    op.create_index('ix_reservation_tables_table_id', 'reservation_tables', ['table_id'])


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('order_tables')
    op.drop_table('reservation_tables')
    op.drop_table('reservations')
    op.drop_table('orders')
    op.drop_table('users')
    op.drop_table('restaurant_tables')
    op.drop_table('customers')
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
