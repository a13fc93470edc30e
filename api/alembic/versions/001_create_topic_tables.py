"""Create topic, subscriber and topic_subscriber tables

Revision ID: 001_create_topic_tables
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_create_topic_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'topic',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('key', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('organization_id', sa.Uuid(), nullable=False),
        sa.Column('environment_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        # Storage-level guard against concurrent creates of the same key
        sa.UniqueConstraint(
            'key', 'organization_id', 'environment_id', 'user_id',
            name='uq_topic_key_scope'
        )
    )
    op.create_index('ix_topic_key', 'topic', ['key'])
    op.create_index('ix_topic_organization_id', 'topic', ['organization_id'])
    op.create_index('ix_topic_environment_id', 'topic', ['environment_id'])

    op.create_table(
        'subscriber',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('subscriber_id', sa.String(), nullable=False),
        sa.Column('organization_id', sa.Uuid(), nullable=False),
        sa.Column('environment_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'subscriber_id', 'organization_id', 'environment_id',
            name='uq_subscriber_scope'
        )
    )
    op.create_index('ix_subscriber_subscriber_id', 'subscriber', ['subscriber_id'])

    op.create_table(
        'topic_subscriber',
        sa.Column('topic_id', sa.Uuid(), nullable=False),
        sa.Column('subscriber_id', sa.Uuid(), nullable=False),
        sa.Column('external_subscriber_id', sa.String(), nullable=False),
        sa.Column('topic_key', sa.String(), nullable=False),
        sa.Column('organization_id', sa.Uuid(), nullable=False),
        sa.Column('environment_id', sa.Uuid(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['topic_id'], ['topic.id'], ),
        sa.ForeignKeyConstraint(['subscriber_id'], ['subscriber.id'], ),
        sa.PrimaryKeyConstraint('topic_id', 'subscriber_id')
    )


def downgrade() -> None:
    op.drop_table('topic_subscriber')
    op.drop_index('ix_subscriber_subscriber_id', table_name='subscriber')
    op.drop_table('subscriber')
    op.drop_index('ix_topic_environment_id', table_name='topic')
    op.drop_index('ix_topic_organization_id', table_name='topic')
    op.drop_index('ix_topic_key', table_name='topic')
    op.drop_table('topic')
