"""add_log_deployment_tables

Revision ID: 7c1e4a9d2b30
Revises:
Create Date: 2026-10-19 10:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7c1e4a9d2b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('sp_log_deployment',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('org_id', sa.String(length=64), nullable=False),
        sa.Column('cluster_name', sa.String(length=128), nullable=False),
        sa.Column('cluster_type', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('es_url', sa.String(length=1024), nullable=False, server_default=''),
        sa.Column('es_config', sa.Text(), nullable=True),
        sa.Column('collector_url', sa.String(length=255), nullable=True),
        sa.Column('domain', sa.String(length=255), nullable=True),
        sa.Column('log_type', sa.String(length=32), nullable=False, server_default='log-analytics'),
        sa.Column('created', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_log_deployment_org_cluster', 'sp_log_deployment', ['org_id', 'cluster_name'])

    op.create_table('sp_log_instance',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('log_key', sa.String(length=64), nullable=False),
        sa.Column('org_id', sa.String(length=64), nullable=True),
        sa.Column('cluster_name', sa.String(length=128), nullable=False),
        sa.Column('project_id', sa.String(length=64), nullable=False, server_default=''),
        sa.Column('workspace', sa.String(length=32), nullable=False, server_default=''),
        sa.Column('log_type', sa.String(length=32), nullable=True),
        sa.Column('created', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_sp_log_instance_log_key', 'sp_log_instance', ['log_key'])
    op.create_index('idx_log_instance_group', 'sp_log_instance', ['cluster_name', 'project_id', 'workspace'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('idx_log_instance_group', 'sp_log_instance')
    op.drop_index('ix_sp_log_instance_log_key', 'sp_log_instance')
    op.drop_table('sp_log_instance')
    op.drop_index('idx_log_deployment_org_cluster', 'sp_log_deployment')
    op.drop_table('sp_log_deployment')
