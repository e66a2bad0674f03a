"""initial schema

Revision ID: 3b9d2c41a7e0
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql
from alembic import op

# revision identifiers, used by Alembic.
revision = '3b9d2c41a7e0'
down_revision = None
branch_labels = None
depends_on = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column('id', sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column('uuid', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    # Providers
    op.create_table('providers',
        *_base_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('country', sa.String(length=100), server_default='Ireland', nullable=False),
        sa.Column('provider_type', sa.String(length=50), server_default='independent', nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('target_audience', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('website_url', sa.String(length=500), nullable=True),
        sa.Column('logo_url', sa.String(length=500), nullable=True),
        sa.Column('is_verified', sa.Boolean(), server_default='false', nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('uuid', name='uq_providers_uuid')
    )
    op.create_index('idx_providers_name', 'providers', ['name'], unique=False)
    op.create_index('idx_providers_type', 'providers', ['provider_type'], unique=False)

    # Resources
    op.create_table('resources',
        *_base_columns(),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('external_url', sa.String(length=1000), nullable=True),
        sa.Column('resource_type', sa.String(length=50), nullable=False),
        sa.Column('topics', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=False),
        sa.Column('levels', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=False),
        sa.Column('segments', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=False),
        sa.Column('learning_outcomes', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=False),
        sa.Column('curriculum_tags', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('provider_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('submitted_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('review_status', sa.String(length=50), server_default='pending', nullable=False),
        sa.Column('review_notes', sa.Text(), nullable=True),
        sa.Column('reviewed_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_featured', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('view_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('download_count', sa.Integer(), server_default='0', nullable=False),
        sa.ForeignKeyConstraint(['provider_id'], ['providers.uuid'], name='fk_resources_provider'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('uuid', name='uq_resources_uuid')
    )
    op.create_index('idx_resources_title', 'resources', ['title'], unique=False)
    op.create_index('idx_resources_provider', 'resources', ['provider_id'], unique=False)
    op.create_index('idx_resources_review_status', 'resources', ['review_status'], unique=False)

    # User roles
    op.create_table('user_roles',
        *_base_columns(),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('role', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('uuid', name='uq_user_roles_uuid'),
        sa.UniqueConstraint('user_id', 'role', name='uq_user_roles_user_role')
    )
    op.create_index('idx_user_roles_user', 'user_roles', ['user_id'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_user_roles_user', table_name='user_roles')
    op.drop_table('user_roles')

    op.drop_index('idx_resources_review_status', table_name='resources')
    op.drop_index('idx_resources_provider', table_name='resources')
    op.drop_index('idx_resources_title', table_name='resources')
    op.drop_table('resources')

    op.drop_index('idx_providers_type', table_name='providers')
    op.drop_index('idx_providers_name', table_name='providers')
    op.drop_table('providers')
