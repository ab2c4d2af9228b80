"""001: create agents table

Revision ID: 001
Revises: 
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE agents (
            id              VARCHAR(36)     PRIMARY KEY,
            name            VARCHAR(100)    NOT NULL,
            email           VARCHAR(255),
            api_key         VARCHAR(128)    NOT NULL,
            status          VARCHAR(20)     NOT NULL DEFAULT 'PENDING',
            total_trades    INT             NOT NULL DEFAULT 0,
            wallet_address  VARCHAR(44),
            verified_at     TIMESTAMPTZ,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_agents_api_key        UNIQUE (api_key),
            CONSTRAINT uq_agents_email          UNIQUE (email),
            CONSTRAINT ck_agents_status         CHECK (status IN ('PENDING', 'VERIFIED', 'SUSPENDED')),
            CONSTRAINT ck_agents_total_trades   CHECK (total_trades >= 0),
            CONSTRAINT ck_agents_wallet_base58  CHECK (
                wallet_address IS NULL OR wallet_address ~ '^[1-9A-HJ-NP-Za-km-z]{32,44}$'
            )
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS agents;")
