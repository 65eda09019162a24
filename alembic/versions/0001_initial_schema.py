"""initial storefront schema

Revision ID: 0001_initial_schema
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'categories',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('icon', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'], unique=True)

    op.create_table(
        'services',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Integer(), nullable=False),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('category_id', sa.Integer(), nullable=False),
        sa.Column('featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('payment_instructions', sa.Text(), nullable=True),
        sa.Column('kind', sa.String(length=50), nullable=True),
        sa.CheckConstraint('price > 0', name='ck_services_price_pos'),
    )
    op.create_index('ix_services_category', 'services', ['category_id'])
    op.create_index('ix_services_featured', 'services', ['featured'])

    op.create_table(
        'payment_methods',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('icon', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
    )

    op.create_table(
        'testimonials',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_testimonials_rating_range'),
    )

    op.create_table(
        'contact_info',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('phone', sa.String(length=100), nullable=False),
        sa.Column('telegram_link', sa.Text(), nullable=False),
        sa.Column('telegram_username', sa.String(length=255), nullable=False),
        sa.Column('facebook_link', sa.Text(), nullable=False, server_default=''),
        sa.Column('instagram_link', sa.Text(), nullable=False, server_default=''),
        sa.Column('twitter_link', sa.Text(), nullable=False, server_default=''),
        sa.Column('show_social_icons', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('weekday_hours', sa.String(length=255), nullable=False),
        sa.Column('weekend_hours', sa.String(length=255), nullable=False),
        sa.Column('time_zone', sa.String(length=255), nullable=False),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('service_id', sa.Integer(), nullable=False),
        sa.Column('service_name', sa.String(length=255), nullable=False),
        sa.Column('payment_method_id', sa.Integer(), nullable=False),
        sa.Column('payment_method', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('screenshot_url', sa.Text(), nullable=False),
        sa.Column('customer_phone', sa.String(length=100), nullable=False),
        sa.Column('customer_telegram', sa.String(length=255), nullable=True),
        sa.Column('platform_username', sa.String(length=255), nullable=True),
        sa.Column('target_url', sa.Text(), nullable=True),
        sa.Column('target_purpose', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("status IN ('pending', 'approved', 'rejected')", name='ck_orders_status'),
        sa.CheckConstraint('amount > 0', name='ck_orders_amount_pos'),
    )
    op.create_index('ix_orders_status_created', 'orders', ['status', 'created_at'])


def downgrade():
    op.drop_table('orders')
    op.drop_table('users')
    op.drop_table('contact_info')
    op.drop_table('testimonials')
    op.drop_table('payment_methods')
    op.drop_table('services')
    op.drop_table('categories')
