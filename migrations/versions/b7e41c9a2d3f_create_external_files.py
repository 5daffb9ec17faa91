"""Create external_files table

Revision ID: b7e41c9a2d3f
Revises:
Create Date: 2026-10-18 09:12:41.508113

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'b7e41c9a2d3f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'external_files',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('parent_id', sa.Integer(), nullable=True),
        sa.Column('parent_type', sa.String(length=255), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('key', sa.String(length=64), nullable=True),
        sa.Column('extension', sa.String(length=32), nullable=True),
        sa.Column('original_filename', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    # Attachments are looked up by parent and attachment name
    op.create_index(
        'ix_external_files_parent', 'external_files', ['parent_type', 'parent_id', 'name']
    )


def downgrade() -> None:
    op.drop_index('ix_external_files_parent', table_name='external_files')
    op.drop_table('external_files')
