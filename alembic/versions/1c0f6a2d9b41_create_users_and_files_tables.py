"""create users and files tables

Revision ID: 1c0f6a2d9b41
Revises:
Create Date: 2026-10-18 10:12:44.318092

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1c0f6a2d9b41'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('email', sa.String, nullable=False),
        sa.Column('hashed_password', sa.String, nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'files',
        sa.Column('id', sa.Integer, primary_key=True),
        sa.Column('owner_id', sa.Integer, sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String, nullable=False),
        sa.Column('type', sa.String(16), nullable=False),
        sa.Column('is_public', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('parent_id', sa.Integer, sa.ForeignKey('files.id'), nullable=True),
        sa.Column('local_path', sa.String, nullable=True),
    )
    op.create_index('ix_files_owner_id', 'files', ['owner_id'])
    op.create_index('ix_files_parent_id', 'files', ['parent_id'])


def downgrade() -> None:
    op.drop_index('ix_files_parent_id', table_name='files')
    op.drop_index('ix_files_owner_id', table_name='files')
    op.drop_table('files')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
