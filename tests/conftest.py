"""Pytest configuration helpers and shared plan fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from sqlalchemy.types import BIGINT, INTEGER, VARCHAR

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from streamplanner.logical import operators  # noqa: E402
from streamplanner.logical.plan import TableScan  # noqa: E402
from streamplanner.types import proctime, rowtime  # noqa: E402


@pytest.fixture
def orders() -> TableScan:
    return operators.scan(
        "orders",
        [
            ("order_id", BIGINT()),
            ("product", VARCHAR(32)),
            ("amount", INTEGER()),
            ("order_time", rowtime()),
        ],
    )


@pytest.fixture
def shipments() -> TableScan:
    return operators.scan(
        "shipments",
        [("ship_id", BIGINT()), ("order_id", BIGINT()), ("ship_time", rowtime())],
    )


@pytest.fixture
def orders_proctime() -> TableScan:
    return operators.scan(
        "orders",
        [
            ("order_id", BIGINT()),
            ("product", VARCHAR(32)),
            ("amount", INTEGER()),
            ("order_time", proctime()),
        ],
    )


@pytest.fixture
def shipments_proctime() -> TableScan:
    return operators.scan(
        "shipments",
        [("ship_id", BIGINT()), ("order_id", BIGINT()), ("ship_time", proctime())],
    )
