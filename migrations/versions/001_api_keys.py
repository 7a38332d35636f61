"""API key and usage tables

Revision ID: 001
Revises:
Create Date: 2026-10-19

Mirrors the schema created by keymanager.db.init_db. For databases that
were bootstrapped with init_db, mark this migration as complete using:
    alembic stamp 001
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'api_keys',
        sa.Column('id', sa.Text, primary_key=True),
        sa.Column('user_id', sa.Text, nullable=False),
        sa.Column('name', sa.Text, nullable=False),
        sa.Column('key_hash', sa.Text, nullable=False),
        sa.Column('key_prefix', sa.Text, nullable=False),
        sa.Column('permissions', sa.Text, nullable=False),
        sa.Column('is_active', sa.Integer, nullable=False, server_default='1'),
        sa.Column('last_used', sa.Text, nullable=True),
        sa.Column('created_at', sa.Text, nullable=False),
        sa.Column('updated_at', sa.Text, nullable=False),
        sa.Column('expires_at', sa.Text, nullable=True),
    )

    op.create_table(
        'api_key_usage',
        sa.Column('id', sa.Text, primary_key=True),
        sa.Column('api_key_id', sa.Text, nullable=False),
        sa.Column('endpoint', sa.Text, nullable=False),
        sa.Column('method', sa.Text, nullable=False),
        sa.Column('response_status', sa.Integer, nullable=False),
        sa.Column('request_count', sa.Integer, nullable=False, server_default='1'),
        sa.Column('timestamp', sa.Text, nullable=False),
    )

    op.create_index('idx_api_keys_user_id', 'api_keys', ['user_id'])
    op.create_index('idx_api_keys_key_hash', 'api_keys', ['key_hash'])
    op.create_index('idx_api_keys_key_prefix', 'api_keys', ['key_prefix'])
    op.create_index('idx_api_key_usage_api_key_id', 'api_key_usage', ['api_key_id'])
    op.create_index('idx_api_key_usage_timestamp', 'api_key_usage', [sa.text('timestamp DESC')])


def downgrade() -> None:
    op.drop_index('idx_api_key_usage_timestamp', table_name='api_key_usage')
    op.drop_index('idx_api_key_usage_api_key_id', table_name='api_key_usage')
    op.drop_index('idx_api_keys_key_prefix', table_name='api_keys')
    op.drop_index('idx_api_keys_key_hash', table_name='api_keys')
    op.drop_index('idx_api_keys_user_id', table_name='api_keys')
    op.drop_table('api_key_usage')
    op.drop_table('api_keys')
