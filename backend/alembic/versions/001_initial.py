"""Initial migration - create all tables

Revision ID: 001_initial
Revises: 
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('email', sa.String(64), nullable=False),
        sa.Column('password', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email', name='uq_users_email')
    )

    # Create chats table
    op.create_table(
        'chats',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('visibility', sa.String(20), nullable=False, server_default='private'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE')
    )

    op.create_index('ix_chats_user_id', 'chats', ['user_id'])
    op.create_index('ix_chats_created_at', 'chats', ['created_at'])

    # Create messages table
    op.create_table(
        'messages',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('chat_id', sa.String(64), nullable=False),
        sa.Column('role', sa.String(20), nullable=False),
        sa.Column('parts', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('attachments', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['chat_id'], ['chats.id'], ondelete='CASCADE')
    )

    op.create_index('ix_messages_chat_id', 'messages', ['chat_id'])
    op.create_index('ix_messages_created_at', 'messages', ['created_at'])

    # Create votes table
    op.create_table(
        'votes',
        sa.Column('chat_id', sa.String(64), nullable=False),
        sa.Column('message_id', sa.String(64), nullable=False),
        sa.Column('is_upvoted', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('chat_id', 'message_id'),
        sa.ForeignKeyConstraint(['chat_id'], ['chats.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['message_id'], ['messages.id'], ondelete='CASCADE')
    )

    # Create documents table, versioned by creation time
    op.create_table(
        'documents',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('kind', sa.String(20), nullable=False, server_default='text'),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.PrimaryKeyConstraint('id', 'created_at'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE')
    )

    op.create_index('ix_documents_user_id', 'documents', ['user_id'])

    # Create suggestions table
    op.create_table(
        'suggestions',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('document_id', sa.String(64), nullable=False),
        sa.Column('document_created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('original_text', sa.Text(), nullable=False),
        sa.Column('suggested_text', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_resolved', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['document_id', 'document_created_at'],
            ['documents.id', 'documents.created_at'],
            ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE')
    )

    op.create_index('ix_suggestions_document_id', 'suggestions', ['document_id'])


def downgrade() -> None:
    op.drop_table('suggestions')
    op.drop_table('documents')
    op.drop_table('votes')
    op.drop_table('messages')
    op.drop_table('chats')
    op.drop_table('users')
