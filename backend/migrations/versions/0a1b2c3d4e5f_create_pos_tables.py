"""create_pos_tables

Revision ID: 0a1b2c3d4e5f
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0a1b2c3d4e5f'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

json_doc = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')
money = sa.Numeric(precision=20, scale=4)

shift_status = sa.Enum('OPEN', 'CLOSED', name='shiftstatus')
movement_type = sa.Enum('OPEN', 'CLOSE', 'IN', 'OUT', name='movementtype')


def upgrade() -> None:
    """Create stores, profiles, catalog, sales, shifts and purchasing tables."""
    op.create_table(
        'stores',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('settings', json_doc, nullable=True),
        sa.Column('active_shift_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'profiles',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_profiles_store', 'profiles', ['store_id'])

    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('price', money, nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('stock', sa.Integer(), nullable=False),
        sa.Column('barcode', sa.String(length=100), nullable=True),
        sa.Column('has_variants', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('variants', json_doc, nullable=False),
        sa.Column('images', json_doc, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_products_store', 'products', ['store_id'])
    op.create_index('ix_products_store_barcode', 'products', ['store_id', 'barcode'])

    op.create_table(
        'customers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('document', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_customers_store', 'customers', ['store_id'])
    op.create_index('ix_customers_name', 'customers', ['name'])

    op.create_table(
        'suppliers',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('contact', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('ruc', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_suppliers_store', 'suppliers', ['store_id'])

    op.create_table(
        'purchases',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('supplier_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total', money, nullable=False),
        sa.Column('items', json_doc, nullable=False),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.ForeignKeyConstraint(['supplier_id'], ['suppliers.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_purchases_store', 'purchases', ['store_id'])
    op.create_index('ix_purchases_date', 'purchases', ['date'])

    op.create_table(
        'cash_shifts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('status', shift_status, nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('start_amount', money, nullable=False),
        sa.Column('end_amount', money, nullable=True),
        sa.Column('total_sales_cash', money, nullable=False),
        sa.Column('total_sales_digital', money, nullable=False),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cash_shifts_store', 'cash_shifts', ['store_id'])
    op.create_index('ix_cash_shifts_status', 'cash_shifts', ['store_id', 'status'])
    op.create_index('ix_cash_shifts_start_time', 'cash_shifts', ['start_time'])

    op.create_table(
        'cash_movements',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('shift_id', sa.Uuid(), nullable=False),
        sa.Column('type', movement_type, nullable=False),
        sa.Column('amount', money, nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('amount >= 0', name='ck_cash_movement_amount_non_negative'),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.ForeignKeyConstraint(['shift_id'], ['cash_shifts.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cash_movements_store', 'cash_movements', ['store_id'])
    op.create_index('ix_cash_movements_shift', 'cash_movements', ['shift_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('store_id', sa.Uuid(), nullable=False),
        sa.Column('shift_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('items', json_doc, nullable=False),
        sa.Column('subtotal', money, nullable=False),
        sa.Column('tax', money, nullable=False),
        sa.Column('discount', money, nullable=False),
        sa.Column('total', money, nullable=False),
        sa.Column('payments', json_doc, nullable=False),
        sa.Column('payment_method', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['store_id'], ['stores.id']),
        sa.ForeignKeyConstraint(['shift_id'], ['cash_shifts.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_transactions_store', 'transactions', ['store_id'])
    op.create_index('ix_transactions_shift', 'transactions', ['shift_id'])
    op.create_index('ix_transactions_date', 'transactions', ['date'])


def downgrade() -> None:
    """Drop all point-of-sale tables."""
    op.drop_table('transactions')
    op.drop_table('cash_movements')
    op.drop_table('cash_shifts')
    op.drop_table('purchases')
    op.drop_table('suppliers')
    op.drop_table('customers')
    op.drop_table('products')
    op.drop_table('profiles')
    op.drop_table('stores')
    shift_status.drop(op.get_bind(), checkfirst=True)
    movement_type.drop(op.get_bind(), checkfirst=True)
