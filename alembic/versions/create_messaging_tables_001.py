"""Create users, properties and messages tables

Revision ID: messaging_001
Revises:
Create Date: 2024-03-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'messaging_001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the messaging schema and the tables it references."""
    op.create_table(
        'users',
        sa.Column('user_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('picture', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(20), nullable=True),
        sa.Column('role', sa.Integer(), server_default=sa.text('1'), nullable=False),
    )

    op.create_table(
        'properties',
        sa.Column('property_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer(),
                  sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('property_name', sa.String(255), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('property_type', sa.String(100), nullable=True),
        sa.Column('bedrooms', sa.Integer(), nullable=True),
        sa.Column('bathrooms', sa.Integer(), nullable=True),
        sa.Column('max_guests', sa.Integer(), nullable=True),
        sa.Column('is_broker_listing', sa.Boolean(), server_default=sa.text('false'), nullable=True),
        sa.Column('status', sa.String(20), server_default='available', nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint("status IN ('available', 'rented', 'maintenance')", name='check_property_status'),
    )

    op.create_table(
        'messages',
        sa.Column('message_id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('conversation_id', sa.Uuid(), nullable=False),
        sa.Column('sender_id', sa.Integer(),
                  sa.ForeignKey('users.user_id', onupdate='CASCADE', ondelete='CASCADE'), nullable=False),
        sa.Column('receiver_id', sa.Integer(),
                  sa.ForeignKey('users.user_id', onupdate='CASCADE', ondelete='CASCADE'), nullable=False),
        sa.Column('property_id', sa.Integer(),
                  sa.ForeignKey('properties.property_id', onupdate='CASCADE', ondelete='CASCADE'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(), server_default=sa.text('now()'), nullable=False),
    )

    op.create_index('ix_messages_conversation_id', 'messages', ['conversation_id'])
    op.create_index('ix_messages_sender_id', 'messages', ['sender_id'])
    op.create_index('ix_messages_receiver_id', 'messages', ['receiver_id'])
    op.create_index('ix_messages_property_id', 'messages', ['property_id'])


def downgrade() -> None:
    """Drop the messaging schema."""
    op.drop_index('ix_messages_property_id', 'messages')
    op.drop_index('ix_messages_receiver_id', 'messages')
    op.drop_index('ix_messages_sender_id', 'messages')
    op.drop_index('ix_messages_conversation_id', 'messages')
    op.drop_table('messages')
    op.drop_table('properties')
    op.drop_table('users')
