"""005: seed development agents

Two verified agents and one pending agent with fixed API keys, for local
development and the integration suite. Do not run against production.

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        INSERT INTO agents (id, name, email, api_key, status, verified_at) VALUES
            ('00000000-0000-4000-8000-000000000001', 'DataBot Alpha',
             'alpha@agents.local', 'am_dev_alpha_key', 'VERIFIED', NOW()),
            ('00000000-0000-4000-8000-000000000002', 'ComputeBot Beta',
             'beta@agents.local', 'am_dev_beta_key', 'VERIFIED', NOW()),
            ('00000000-0000-4000-8000-000000000003', 'NewBot Gamma',
             'gamma@agents.local', 'am_dev_gamma_key', 'PENDING', NULL);
    """)


def downgrade() -> None:
    op.execute("""
        DELETE FROM agents WHERE id IN (
            '00000000-0000-4000-8000-000000000001',
            '00000000-0000-4000-8000-000000000002',
            '00000000-0000-4000-8000-000000000003'
        );
    """)
