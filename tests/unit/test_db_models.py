"""ORM table definitions must agree with the raw SQL the repositories run."""

import re

import pytest
from sqlalchemy.sql.elements import TextClause

from src.am_agent.infrastructure.db_models import AgentORM
from src.am_common.database import Base
from src.am_listing.infrastructure.db_models import ListingORM
from src.am_listing.infrastructure.persistence import _INSERT_LISTING_SQL
from src.am_order.infrastructure.db_models import OrderORM
from src.am_order.infrastructure.persistence import _INSERT_ORDER_SQL
from src.am_settlement.infrastructure.db_models import TransactionORM
from src.am_settlement.infrastructure.persistence import _INSERT_TX_SQL

_INSERT_RE = re.compile(r"INSERT INTO (\w+) \(([^)]*)\)", re.S)


def _insert_target(stmt: TextClause) -> tuple[str, set[str]]:
    match = _INSERT_RE.search(str(stmt))
    assert match is not None
    return match.group(1), {c.strip() for c in match.group(2).split(",")}


@pytest.mark.parametrize(
    "orm, stmt",
    [
        (ListingORM, _INSERT_LISTING_SQL),
        (OrderORM, _INSERT_ORDER_SQL),
        (TransactionORM, _INSERT_TX_SQL),
    ],
)
def test_insert_columns_exist_on_table(orm, stmt) -> None:
    table, columns = _insert_target(stmt)
    assert table == orm.__tablename__
    assert columns <= set(orm.__table__.columns.keys())


def test_all_tables_registered_on_shared_base() -> None:
    assert {"agents", "listings", "orders", "transactions"} <= set(Base.metadata.tables)


def test_one_transaction_per_order() -> None:
    assert TransactionORM.__table__.c.order_id.unique is True


def test_agent_api_key_unique() -> None:
    assert AgentORM.__table__.c.api_key.unique is True


def test_listing_metadata_column_name() -> None:
    assert "metadata" in ListingORM.__table__.columns
