"""
Integration tests for easydb against a real PostgreSQL server.

The same DSN is registered as both master and slave unless DB_SLAVE_DSN points
at a replica, so routing is verified through behaviour rather than topology.

Run with: RUN_INTEGRATION_TESTS=1 DB_MASTER_DSN=postgresql://... pytest tests/integration/
"""

from __future__ import annotations

import os
import uuid

import pytest
from pydantic import BaseModel

import easydb
from easydb import NoRowsError, Registry, WrongInstanceError

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_INTEGRATION_TESTS", "0") != "1",
    reason="Integration tests require RUN_INTEGRATION_TESTS=1 and reachable Postgres",
)


class _Item(BaseModel):
    id: int
    name: str


@pytest.fixture
def live_registry(test_settings, test_dsn):
    reg = Registry()
    reg.connect_master(test_settings.db_driver, test_dsn, min_size=1, max_size=2, timeout=5.0)
    reg.connect_slave(
        test_settings.db_driver,
        test_settings.db_slave_dsn or test_dsn,
        min_size=1,
        max_size=2,
        timeout=5.0,
    )
    try:
        yield reg
    finally:
        reg.close()


@pytest.fixture
def items_table(live_registry):
    table = f"easydb_items_{uuid.uuid4().hex[:8]}"
    easydb.execute(
        f"CREATE TABLE {table} (id integer PRIMARY KEY, name text NOT NULL)",
        registry=live_registry,
    )
    try:
        yield table
    finally:
        easydb.execute(f"DROP TABLE IF EXISTS {table}", registry=live_registry)


def test_ping_both_pools(live_registry):
    live_registry.master.ping()
    live_registry.slave.ping()


def test_write_then_read_round_trip(live_registry, items_table):
    result = easydb.named_execute(
        f"INSERT INTO {items_table} (id, name) VALUES (:id, :name)",
        [{"id": 1, "name": "ann"}, _Item(id=2, name="bob")],
        registry=live_registry,
    )
    assert result.rows_affected == 2

    # Read from master so the check does not depend on replica lag.
    master = live_registry.master
    assert master.get(f"SELECT * FROM {items_table} WHERE id = %s", 2, model=_Item) == _Item(
        id=2, name="bob"
    )
    query = easydb.condition(f"SELECT id FROM {items_table} /*condition*/ ORDER BY id", "WHERE id > %s")
    assert master.select(query, 0) == [{"id": 1}, {"id": 2}]
    with pytest.raises(NoRowsError):
        master.get(f"SELECT * FROM {items_table} WHERE id = %s", 99)


def test_transaction_rollback_discards_changes(live_registry, items_table):
    with pytest.raises(RuntimeError):
        with easydb.begin(registry=live_registry) as tx:
            tx.execute(f"INSERT INTO {items_table} (id, name) VALUES (%s, %s)", 3, "cat")
            raise RuntimeError("abort")

    rows = live_registry.master.select(f"SELECT * FROM {items_table}")
    assert rows == []


def test_slave_instance_rejects_writes(test_settings, test_dsn):
    with easydb.new_instance(test_settings.db_driver, test_dsn, "slave", timeout=5.0) as instance:
        instance.ping()
        assert instance.get("SELECT 1 AS one") == {"one": 1}
        with pytest.raises(WrongInstanceError):
            instance.execute("SELECT 1")
