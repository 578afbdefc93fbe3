"""Initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-16 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


party_type = sa.Enum('bachelor', 'bachelorette', name='party_type')
activity_preference = sa.Enum('activities', 'package', 'nightlife', name='activity_preference')
conversation_state = sa.Enum(
    'initial', 'party_type', 'city', 'activity_preference', 'party_details',
    'preferences', 'generating_itinerary', 'completed',
    name='conversation_state'
)
message_type = sa.Enum('user', 'bot', 'system', name='message_type')


def upgrade() -> None:
    # Create conversations table
    op.create_table(
        'conversations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Text(), nullable=False),
        sa.Column('party_type', party_type, nullable=True),
        sa.Column('city', sa.Text(), nullable=True),
        sa.Column('activity_preference', activity_preference, nullable=True),
        sa.Column('party_name', sa.Text(), nullable=True),
        sa.Column('party_dates', sa.Text(), nullable=True),
        sa.Column('guest_count', sa.Integer(), nullable=True),
        sa.Column('budget', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('theme', sa.Text(), nullable=True),
        sa.Column('dining_preferences', sa.Text(), nullable=True),
        sa.Column('music_preferences', sa.Text(), nullable=True),
        sa.Column('day_activities', sa.JSON(), nullable=True),
        sa.Column('night_activities', sa.JSON(), nullable=True),
        sa.Column('current_state', conversation_state, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Create messages table
    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('conversation_id', sa.Integer(), nullable=False),
        sa.Column('message_type', message_type, nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['conversation_id'], ['conversations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_messages_conversation_id', 'messages', ['conversation_id'])

    # Create itineraries table
    op.create_table(
        'itineraries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('conversation_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('activities', sa.JSON(), nullable=False),
        sa.Column('estimated_cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('media_urls', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['conversation_id'], ['conversations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_itineraries_conversation_id', 'itineraries', ['conversation_id'])


def downgrade() -> None:
    op.drop_index('ix_itineraries_conversation_id', table_name='itineraries')
    op.drop_table('itineraries')
    op.drop_index('ix_messages_conversation_id', table_name='messages')
    op.drop_table('messages')
    op.drop_table('conversations')
    bind = op.get_bind()
    for enum_type in (message_type, conversation_state, activity_preference, party_type):
        enum_type.drop(bind, checkfirst=True)
