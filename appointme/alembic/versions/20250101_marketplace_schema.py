"""create marketplace tables

Revision ID: 20250101_marketplace_schema
Revises:
Create Date: 2025-01-01

Creates all tables for the marketplace:
- users: customers and providers
- admin_accounts: administrators
- profile_pictures: one picture URL per user
- services: services listed by providers
- service_availabilities: cached availability flag, one row per service
- bookings: customer bookings (cancelled bookings are deleted)
- provider_applications: provider verification requests
- notifications: per-user inbox
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers
revision: str = '20250101_marketplace_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('bio', sa.String(1000), nullable=True),
        sa.Column('hashed_password', sa.String, nullable=False),
        sa.Column('is_verified', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('application_status', sa.String(20), nullable=False, server_default='none'),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Admin accounts table
    op.create_table(
        'admin_accounts',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_admin_accounts_email', 'admin_accounts', ['email'], unique=True)

    # Profile pictures table
    op.create_table(
        'profile_pictures',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('url', sa.String(2048), nullable=False),
        *_timestamps(),
    )

    # Services table
    op.create_table(
        'services',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('price', sa.Float, nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('ix_services_user_id', 'services', ['user_id'])

    # Service availability table; the unique service_id makes row materialization idempotent
    op.create_table(
        'service_availabilities',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('service_id', sa.Integer, sa.ForeignKey('services.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('is_booked', sa.Boolean, nullable=False, server_default=sa.false()),
        *_timestamps(),
    )

    # Bookings table
    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('service_id', sa.Integer, sa.ForeignKey('services.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('booking_time', sa.String(100), nullable=False),
        sa.Column('status', sa.Integer, nullable=False, server_default='0'),
        sa.Column('payment_status', sa.Integer, nullable=False, server_default='0'),
        *_timestamps(),
    )
    op.create_index('ix_bookings_service_id', 'bookings', ['service_id'])
    op.create_index('ix_bookings_user_id', 'bookings', ['user_id'])

    # Provider applications table
    op.create_table(
        'provider_applications',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('real_name', sa.String(255), nullable=False),
        sa.Column('document_url', sa.String(2048), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        *_timestamps(),
    )
    op.create_index('ix_provider_applications_user_id', 'provider_applications', ['user_id'])

    # Notifications table
    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('message', sa.Text, nullable=False),
        sa.Column('is_read', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])


def downgrade() -> None:
    op.drop_table('notifications')
    op.drop_table('provider_applications')
    op.drop_table('bookings')
    op.drop_table('service_availabilities')
    op.drop_table('services')
    op.drop_table('profile_pictures')
    op.drop_index('ix_admin_accounts_email', table_name='admin_accounts')
    op.drop_table('admin_accounts')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
