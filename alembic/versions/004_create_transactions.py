"""004: create transactions table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE transactions (
            id                  VARCHAR(36)     PRIMARY KEY,
            order_id            VARCHAR(36)     NOT NULL REFERENCES orders(id),
            amount              NUMERIC         NOT NULL,
            platform_fee        NUMERIC         NOT NULL,
            net_amount          NUMERIC         NOT NULL,
            status              VARCHAR(20)     NOT NULL DEFAULT 'PENDING',
            tx_signature        VARCHAR(100),
            fee_tx_signature    VARCHAR(100),
            payment_method      VARCHAR(20),
            processed_at        TIMESTAMPTZ,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_transactions_order    UNIQUE (order_id),
            CONSTRAINT ck_transactions_status   CHECK (
                status IN ('PENDING', 'COMPLETED', 'FAILED', 'REFUNDED')
            ),
            CONSTRAINT ck_transactions_net      CHECK (net_amount = amount - platform_fee),
            CONSTRAINT ck_transactions_method   CHECK (
                payment_method IS NULL OR payment_method IN ('USDC_SOLANA')
            ),
            CONSTRAINT ck_transactions_sig_len  CHECK (
                tx_signature IS NULL OR char_length(tx_signature) BETWEEN 80 AND 100
            )
        );
    """)
    op.execute("CREATE INDEX idx_transactions_created ON transactions (created_at DESC, id DESC);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS transactions;")
