"""003: create orders table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE orders (
            id                  VARCHAR(36)     PRIMARY KEY,
            listing_id          VARCHAR(36)     NOT NULL REFERENCES listings(id),
            buyer_id            VARCHAR(36)     NOT NULL REFERENCES agents(id),
            seller_id           VARCHAR(36)     NOT NULL REFERENCES agents(id),
            amount              NUMERIC         NOT NULL,
            platform_fee        NUMERIC         NOT NULL,
            total_amount        NUMERIC         NOT NULL,
            status              VARCHAR(30)     NOT NULL DEFAULT 'PENDING_VERIFICATION',
            buyer_verified      BOOLEAN         NOT NULL DEFAULT FALSE,
            seller_verified     BOOLEAN         NOT NULL DEFAULT FALSE,
            notes               TEXT,
            verification_hash   VARCHAR(64)     NOT NULL,
            completed_at        TIMESTAMPTZ,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_orders_status             CHECK (status IN (
                'PENDING_VERIFICATION', 'VERIFIED', 'IN_PROGRESS', 'COMPLETED',
                'CANCELLED', 'DISPUTED', 'REFUNDED'
            )),
            CONSTRAINT ck_orders_amount             CHECK (amount > 0),
            CONSTRAINT ck_orders_fee                CHECK (platform_fee >= 0),
            CONSTRAINT ck_orders_total              CHECK (total_amount = amount + platform_fee),
            CONSTRAINT ck_orders_parties            CHECK (buyer_id <> seller_id),
            CONSTRAINT ck_orders_notes_len          CHECK (notes IS NULL OR char_length(notes) <= 1000),
            CONSTRAINT ck_orders_verified_flags     CHECK (
                status NOT IN ('VERIFIED', 'COMPLETED') OR (buyer_verified AND seller_verified)
            ),
            CONSTRAINT ck_orders_completed_at       CHECK (
                (status = 'COMPLETED') = (completed_at IS NOT NULL)
            )
        );
    """)
    op.execute("CREATE INDEX idx_orders_buyer ON orders (buyer_id, created_at DESC);")
    op.execute("CREATE INDEX idx_orders_seller ON orders (seller_id, created_at DESC);")
    op.execute("CREATE INDEX idx_orders_listing ON orders (listing_id);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS orders;")
