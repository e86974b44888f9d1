"""initial

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-18

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_init'
down_revision = None
branch_labels = None
depends_on = None

def upgrade() -> None:
    op.create_table('clothing_item',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('category', sa.String(length=64), nullable=True),
        sa.Column('color', sa.String(length=64), nullable=True),
        sa.Column('material', sa.String(length=32), nullable=True),
        sa.Column('pattern', sa.String(length=64), nullable=True),
        sa.Column('fit', sa.String(length=32), nullable=True),
        sa.Column('style', sa.String(length=64), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('season_tags', sa.JSON(), nullable=True),
        sa.Column('style_tags', sa.JSON(), nullable=True),
        sa.Column('dress_code', sa.JSON(), nullable=True),
        sa.Column('occasion', sa.JSON(), nullable=True),
        sa.Column('insulation_value', sa.Integer(), nullable=False, server_default=sa.text('5')),
        sa.Column('is_favorite', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('wear_count', sa.Integer(), nullable=False, server_default=sa.text('0')),
        sa.Column('last_worn', sa.DateTime(timezone=True), nullable=True),
        sa.Column('image_url', sa.Text(), nullable=False),
        sa.Column('image_path', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_clothing_item_user_id', 'clothing_item', ['user_id'])

    op.create_table('outfit',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('outfit_date', sa.Date(), nullable=False),
        sa.Column('feedback', sa.Integer(), nullable=True),
        sa.Column('weather_data', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_outfit_user_id', 'outfit', ['user_id'])

    op.create_table('outfit_item',
        sa.Column('outfit_id', sa.Integer(), sa.ForeignKey('outfit.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('clothing_item_id', sa.Integer(), sa.ForeignKey('clothing_item.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default=sa.text('0')),
    )

    op.create_table('outfit_recommendation',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('occasion', sa.Text(), nullable=True),
        sa.Column('weather', sa.Text(), nullable=True),
        sa.Column('item_ids', sa.JSON(), nullable=True),
        sa.Column('locked_item_ids', sa.JSON(), nullable=True),
        sa.Column('score', sa.Float(), nullable=True),
        sa.Column('reasoning', sa.JSON(), nullable=True),
        sa.Column('provider', sa.String(length=32), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )
    op.create_index('ix_outfit_recommendation_user_id', 'outfit_recommendation', ['user_id'])
    op.create_index('ix_outfit_recommendation_created_at', 'outfit_recommendation', ['created_at'])

    op.create_table('profile',
        sa.Column('user_id', sa.String(length=64), primary_key=True),
        sa.Column('name', sa.Text(), nullable=True),
        sa.Column('region', sa.Text(), nullable=True),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('preferences', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()')),
    )

def downgrade() -> None:
    op.drop_table('profile')
    op.drop_index('ix_outfit_recommendation_created_at', table_name='outfit_recommendation')
    op.drop_index('ix_outfit_recommendation_user_id', table_name='outfit_recommendation')
    op.drop_table('outfit_recommendation')
    op.drop_table('outfit_item')
    op.drop_index('ix_outfit_user_id', table_name='outfit')
    op.drop_table('outfit')
    op.drop_index('ix_clothing_item_user_id', table_name='clothing_item')
    op.drop_table('clothing_item')
