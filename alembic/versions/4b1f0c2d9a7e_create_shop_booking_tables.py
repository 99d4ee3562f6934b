"""create shop booking tables

Revision ID: 4b1f0c2d9a7e
Revises:
Create Date: 2025-11-01 13:27:58.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '4b1f0c2d9a7e'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

tenant_plan = sa.Enum('FREE', 'BASIC', 'PROFESSIONAL', 'ENTERPRISE', name='tenantplan')
tenant_status = sa.Enum('ACTIVE', 'TRIAL', 'SUSPENDED', 'CANCELLED', 'EXPIRED', name='tenantstatus')
service_category = sa.Enum(
    'GENERAL', 'OIL_CHANGE', 'BRAKE_SERVICE', 'TIRE_SERVICE', 'ENGINE', 'TRANSMISSION',
    'ELECTRICAL', 'DIAGNOSTIC', 'INSPECTION', 'MAINTENANCE',
    name='servicecategory'
)
appointment_status = sa.Enum('SCHEDULED', 'IN_PROGRESS', 'COMPLETED', 'CANCELLED', 'NO_SHOW', name='appointmentstatus')


def upgrade() -> None:
    """Upgrade schema."""

    # 1. Tenants
    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('slug', sa.String(30), nullable=False, unique=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('business_address', sa.String(200), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(50), nullable=True),
        sa.Column('zip_code', sa.String(20), nullable=True),
        sa.Column('country', sa.String(50), nullable=True),
        sa.Column('phone', sa.String(30), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('website', sa.String(255), nullable=True),
        sa.Column('logo_url', sa.String(500), nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('timezone', sa.String(50), nullable=True),
        sa.Column('plan', tenant_plan, nullable=False),
        sa.Column('status', tenant_status, nullable=False),
        sa.Column('trial_ends_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('onboarding_completed', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('onboarding_completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('onboarding_step', sa.Integer, nullable=False, server_default='0'),
        sa.Column('availability_rules', sa.JSON, nullable=True),
        sa.Column('booking_enabled', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('media_storage_path', sa.String(255), nullable=True),
        sa.Column('storage_used_bytes', sa.BigInteger, nullable=True),
        sa.Column('created_by', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_tenants_slug', 'tenants', ['slug'])

    # 2. Service items
    op.create_table(
        'service_items',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('tenant_id', sa.Integer, sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('duration_minutes', sa.Integer, nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=True),
        sa.Column('is_bookable_online', sa.Boolean, nullable=True),
        sa.Column('category', service_category, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_service_items_tenant_id', 'service_items', ['tenant_id'])
    op.create_index('ix_service_items_is_active', 'service_items', ['is_active'])

    # 3. Appointments
    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('tenant_id', sa.Integer, sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('service_item_id', sa.Integer, sa.ForeignKey('service_items.id', ondelete='SET NULL'), nullable=True),
        sa.Column('customer_name', sa.String(200), nullable=True),
        sa.Column('customer_phone', sa.String(30), nullable=True),
        sa.Column('customer_email', sa.String(255), nullable=True),
        sa.Column('scheduled_date', sa.DateTime, nullable=False),
        sa.Column('service_type', sa.String(100), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('notes', sa.Text, nullable=True),
        sa.Column('status', appointment_status, nullable=False),
        sa.Column('booking_source', sa.String(20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_appointments_tenant_id', 'appointments', ['tenant_id'])
    op.create_index('ix_appointments_scheduled_date', 'appointments', ['scheduled_date'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_appointments_scheduled_date', table_name='appointments')
    op.drop_index('ix_appointments_tenant_id', table_name='appointments')
    op.drop_table('appointments')

    op.drop_index('ix_service_items_is_active', table_name='service_items')
    op.drop_index('ix_service_items_tenant_id', table_name='service_items')
    op.drop_table('service_items')

    op.drop_index('ix_tenants_slug', table_name='tenants')
    op.drop_table('tenants')

    bind = op.get_bind()
    for enum_type in (appointment_status, service_category, tenant_status, tenant_plan):
        enum_type.drop(bind, checkfirst=True)
