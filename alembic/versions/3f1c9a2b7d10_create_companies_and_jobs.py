"""create_companies_and_jobs

Creates the companies and jobs tables.

Jobs are keyed by a surrogate integer id; title is unique but may be renamed.
Deleting a company removes its jobs.

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-18 10:12:41.503118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create companies and jobs."""
    op.create_table(
        'companies',
        sa.Column('handle', sa.String(25), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False, unique=True),
        sa.Column('num_employees', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('logo_url', sa.Text(), nullable=True),
        sa.CheckConstraint('num_employees >= 0', name='ck_companies_num_employees_non_negative'),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('salary', sa.Integer(), nullable=True),
        sa.Column('equity', sa.Numeric(), nullable=True),
        sa.Column(
            'company_handle',
            sa.String(25),
            sa.ForeignKey('companies.handle', ondelete='CASCADE'),
            nullable=False,
        ),
        sa.CheckConstraint('salary >= 0', name='ck_jobs_salary_non_negative'),
        sa.CheckConstraint('equity <= 1.0', name='ck_jobs_equity_max'),
    )
    op.create_index('ix_jobs_id', 'jobs', ['id'])
    op.create_index('ix_jobs_title', 'jobs', ['title'], unique=True)


def downgrade() -> None:
    """Drop jobs and companies."""
    op.drop_index('ix_jobs_title', table_name='jobs')
    op.drop_index('ix_jobs_id', table_name='jobs')
    op.drop_table('jobs')
    op.drop_table('companies')
