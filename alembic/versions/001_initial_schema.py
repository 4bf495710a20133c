"""Initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

Tables:
- users
- services
- queues
- queue_entries
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from smartq.db.types import GUID


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


user_role_enum = sa.Enum('user', 'service provider', 'admin', name='user_role_enum')
queue_status_enum = sa.Enum('open', 'closed', name='queue_status_enum')
entry_status_enum = sa.Enum('waiting', 'served', 'cancelled', name='entry_status_enum')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', user_role_enum, nullable=False, server_default='user'),
        sa.Column('is_active', sa.Boolean(), nullable=True, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'services',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('provider_id', GUID(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_services_provider_id', 'services', ['provider_id'])

    op.create_table(
        'queues',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('service_id', GUID(), sa.ForeignKey('services.id'), nullable=False),
        sa.Column('status', queue_status_enum, nullable=False, server_default='open'),
        sa.Column('max_capacity', sa.Integer(), nullable=True),
        sa.Column('current_size', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_queue_number', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('current_size >= 0', name='ck_queues_current_size_non_negative'),
        sa.CheckConstraint('max_capacity IS NULL OR max_capacity > 0', name='ck_queues_max_capacity_positive'),
    )
    op.create_index('ix_queues_service_id', 'queues', ['service_id'])

    op.create_table(
        'queue_entries',
        sa.Column('id', GUID(), primary_key=True),
        sa.Column('queue_id', GUID(), sa.ForeignKey('queues.id'), nullable=False),
        sa.Column('user_id', GUID(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('queue_number', sa.Integer(), nullable=False),
        sa.Column('status', entry_status_enum, nullable=False, server_default='waiting'),
        sa.Column('joined_at', sa.DateTime(), nullable=False),
        sa.Column('served_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('queue_id', 'queue_number', name='uq_queue_entries_queue_number'),
    )
    op.create_index('ix_queue_entries_queue_user_status', 'queue_entries', ['queue_id', 'user_id', 'status'])
    op.create_index('ix_queue_entries_user_id', 'queue_entries', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_queue_entries_user_id', table_name='queue_entries')
    op.drop_index('ix_queue_entries_queue_user_status', table_name='queue_entries')
    op.drop_table('queue_entries')
    op.drop_index('ix_queues_service_id', table_name='queues')
    op.drop_table('queues')
    op.drop_index('ix_services_provider_id', table_name='services')
    op.drop_table('services')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    bind = op.get_bind()
    entry_status_enum.drop(bind, checkfirst=True)
    queue_status_enum.drop(bind, checkfirst=True)
    user_role_enum.drop(bind, checkfirst=True)
