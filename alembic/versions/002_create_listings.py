"""002: create listings table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE listings (
            id              VARCHAR(36)     PRIMARY KEY,
            agent_id        VARCHAR(36)     NOT NULL REFERENCES agents(id),
            title           VARCHAR(200)    NOT NULL,
            description     TEXT            NOT NULL,
            category        VARCHAR(20)     NOT NULL,
            direction       VARCHAR(4)      NOT NULL,
            price           NUMERIC         NOT NULL,
            currency        VARCHAR(3)      NOT NULL DEFAULT 'USD',
            tags            TEXT[]          NOT NULL DEFAULT '{}',
            metadata        JSONB           NOT NULL DEFAULT '{}'::jsonb,
            status          VARCHAR(20)     NOT NULL DEFAULT 'ACTIVE',
            view_count      INT             NOT NULL DEFAULT 0,
            expires_at      TIMESTAMPTZ,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_listings_title_len    CHECK (char_length(title) BETWEEN 3 AND 200),
            CONSTRAINT ck_listings_desc_len     CHECK (char_length(description) BETWEEN 10 AND 5000),
            CONSTRAINT ck_listings_category     CHECK (category IN (
                'DATA', 'API_SERVICE', 'MODEL', 'COMPUTE', 'STORAGE',
                'AUTOMATION', 'ANALYSIS', 'CONTENT', 'OTHER'
            )),
            CONSTRAINT ck_listings_direction    CHECK (direction IN ('SELL', 'BUY')),
            CONSTRAINT ck_listings_price        CHECK (price > 0 AND price <= 1000000),
            CONSTRAINT ck_listings_tags         CHECK (cardinality(tags) <= 10),
            CONSTRAINT ck_listings_status       CHECK (
                status IN ('ACTIVE', 'PAUSED', 'SOLD', 'EXPIRED', 'CANCELLED')
            ),
            CONSTRAINT ck_listings_views        CHECK (view_count >= 0)
        );
    """)
    op.execute("""
        CREATE INDEX idx_listings_browse ON listings (status, created_at DESC, id DESC);
    """)
    op.execute("""
        CREATE INDEX idx_listings_agent ON listings (agent_id);
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS listings;")
