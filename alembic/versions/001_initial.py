"""Migration initiale - Table des opérateurs de la console

Revision ID: 001_initial
Revises: 
Create Date: 2024-06-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Table operators
    op.create_table(
        'operators',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), server_default='lecteur', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_operators_id', 'operators', ['id'])
    op.create_index('ix_operators_email', 'operators', ['email'])
    op.create_index('idx_operator_email_active', 'operators', ['email', 'is_active'])
    op.create_index('idx_operator_role', 'operators', ['role'])


def downgrade() -> None:
    op.drop_index('idx_operator_role', table_name='operators')
    op.drop_index('idx_operator_email_active', table_name='operators')
    op.drop_index('ix_operators_email', table_name='operators')
    op.drop_index('ix_operators_id', table_name='operators')
    op.drop_table('operators')
