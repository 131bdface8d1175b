"""initial schema

Revision ID: 8c1d2e4f6a7b
Revises: 
Create Date: 2026-10-18 10:12:41.203118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '8c1d2e4f6a7b'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    user_role = sa.Enum('admin', 'social_media', name='userrole')
    change_type = sa.Enum(
        'product_create', 'product_update', 'category_create', 'category_update', 'site_config_update',
        name='changetype',
    )
    change_status = sa.Enum('pending', 'approved', 'rejected', name='changerequeststatus')

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('full_name', sa.String(length=256), nullable=False),
        sa.Column('email', sa.String(length=256), nullable=False),
        sa.Column('password_hash', sa.String(length=512), nullable=False),
        sa.Column('role', user_role, nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'categories',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('name', sa.String(length=256), nullable=False),
        sa.Column('slug', sa.String(length=256), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'], unique=True)

    op.create_table(
        'products',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('slug', sa.String(length=256), nullable=False),
        sa.Column('name', sa.String(length=256), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('category', sa.String(length=256), nullable=True),
        sa.Column('category_slug', sa.String(length=256), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_products_slug', 'products', ['slug'], unique=True)
    op.create_index('ix_products_category_slug', 'products', ['category_slug'])
    op.create_index('ix_products_featured', 'products', ['featured'])

    op.create_table(
        'site_config',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('home_banner_url', sa.String(length=1024), nullable=True),
        sa.Column('about_image_url', sa.String(length=1024), nullable=True),
        sa.Column('about_story', sa.Text(), nullable=True),
        sa.Column('social_instagram', sa.String(length=512), nullable=True),
        sa.Column('social_facebook', sa.String(length=512), nullable=True),
        sa.Column('social_whatsapp', sa.String(length=64), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        'change_requests',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('type', change_type, nullable=False),
        sa.Column('target_id', sa.String(length=32), nullable=True),
        sa.Column('data', sa.JSON(), nullable=False),
        sa.Column('submitted_by', sa.String(length=256), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', change_status, nullable=False),
        sa.Column('change_summary', sa.Text(), nullable=True),
        sa.Column('reviewed_by', sa.String(length=256), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_change_requests_submitted_at', 'change_requests', ['submitted_at'])
    op.create_index('ix_change_requests_status', 'change_requests', ['status'])

    op.create_table(
        'orders',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('customer_phone', sa.String(length=64), nullable=False),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_orders_customer_phone', 'orders', ['customer_phone'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('orders')
    op.drop_table('change_requests')
    op.drop_table('site_config')
    op.drop_table('products')
    op.drop_table('categories')
    op.drop_table('users')

    bind = op.get_bind()
    sa.Enum(name='changerequeststatus').drop(bind, checkfirst=True)
    sa.Enum(name='changetype').drop(bind, checkfirst=True)
    sa.Enum(name='userrole').drop(bind, checkfirst=True)
