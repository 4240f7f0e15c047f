"""initial_menu_schema

Revision ID: 20261017_initial_menu_schema
Revises:
Create Date: 2026-10-17

Restaurants, users, catalog (categories/products), dated menus with their
items, and collaborator invites.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261017_initial_menu_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade():
    op.create_table(
        'restaurants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('logo_url', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('opening_days', sa.String(), nullable=True),
        sa.Column('opening_days_2', sa.String(), nullable=True),
        sa.Column('lunch_hours', sa.String(), nullable=True),
        sa.Column('dinner_hours', sa.String(), nullable=True),
        sa.Column('holiday_notice', sa.Text(), nullable=True),
        sa.Column('meat_origin', sa.Text(), nullable=True),
        sa.Column('payment_notice', sa.Text(), nullable=True),
        sa.Column('subtitle', sa.String(), nullable=True),
        sa.Column('restaurant_type', sa.String(), nullable=True),
        sa.Column('cities', sa.String(), nullable=True),
        sa.Column('sides_note', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_restaurants_slug', 'restaurants', ['slug'], unique=True)

    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False, unique=True),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'categories',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_categories_restaurant_order', 'categories', ['restaurant_id', 'display_order'])

    op.create_table(
        'products',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category_id', sa.String(), sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=True),
        sa.Column('price_unit', sa.String(), nullable=False, server_default='FIXED'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_products_restaurant_id', 'products', ['restaurant_id'])
    op.create_index('ix_products_category_id', 'products', ['category_id'])

    op.create_table(
        'daily_menus',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('show_prices', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('restaurant_id', 'date', name='uq_daily_menus_restaurant_date'),
    )

    op.create_table(
        'daily_menu_items',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('daily_menu_id', sa.String(), sa.ForeignKey('daily_menus.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.String(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('custom_price', sa.Numeric(10, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('daily_menu_id', 'product_id', name='uq_daily_menu_items_menu_product'),
    )
    op.create_index('ix_daily_menu_items_daily_menu_id', 'daily_menu_items', ['daily_menu_id'])

    op.create_table(
        'invites',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('restaurant_id', sa.Integer(), sa.ForeignKey('restaurants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token', sa.String(), nullable=False, unique=True),
        sa.Column('role', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('created_by', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('used_by', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('expires_at', sa.DateTime(), nullable=True),
        sa.Column('used_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_invites_restaurant_id', 'invites', ['restaurant_id'])


def downgrade():
    op.drop_index('ix_invites_restaurant_id', table_name='invites')
    op.drop_table('invites')
    op.drop_index('ix_daily_menu_items_daily_menu_id', table_name='daily_menu_items')
    op.drop_table('daily_menu_items')
    op.drop_table('daily_menus')
    op.drop_index('ix_products_category_id', table_name='products')
    op.drop_index('ix_products_restaurant_id', table_name='products')
    op.drop_table('products')
    op.drop_index('ix_categories_restaurant_order', table_name='categories')
    op.drop_table('categories')
    op.drop_table('users')
    op.drop_index('ix_restaurants_slug', table_name='restaurants')
    op.drop_table('restaurants')
