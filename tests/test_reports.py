"""
tests.test_reports

Report aggregates (pure helpers) and the report endpoints.
"""

from __future__ import annotations

import httpx
import pytest

from stationery_connect.db.models import Blast, BlastStatus, Customer, CustomerGroup, Product
from stationery_connect.services.reports import (
    average_open_rate,
    customers_by_group,
    inventory_value,
    pending_sends,
    top_customers,
    top_products,
)


def _products() -> list[Product]:
    return [
        Product(name="Notebooks", price=450.0, stock=150),
        Product(name="Pens", price=120.0, stock=0),
        Product(name="Paper", price=280.0, stock=75),
    ]


def test_inventory_value_sums_price_times_stock() -> None:
    assert inventory_value(_products()) == 450 * 150 + 280 * 75
    assert inventory_value([]) == 0


def test_average_open_rate_only_counts_sent() -> None:
    blasts = [
        Blast(status=BlastStatus.sent, open_rate=80.0),
        Blast(status=BlastStatus.sent, open_rate=60.0),
        Blast(status=BlastStatus.pending, open_rate=0.0),
    ]
    assert average_open_rate(blasts) == 70.0


def test_average_open_rate_with_nothing_sent_is_zero() -> None:
    assert average_open_rate([Blast(status=BlastStatus.draft, open_rate=0.0)]) == 0.0


def test_rankings_do_not_mutate_input() -> None:
    products = _products()
    names = [p.name for p in products]
    assert [p.name for p in top_products(products, 2)] == ["Notebooks", "Paper"]
    assert [p.name for p in products] == names

    customers = [
        Customer(name="a", budget=10.0, group=CustomerGroup.rural),
        Customer(name="b", budget=30.0, group=CustomerGroup.premium),
        Customer(name="c", budget=20.0, group=CustomerGroup.rural),
    ]
    assert [c.name for c in top_customers(customers, 5)] == ["b", "c", "a"]
    assert [c.name for c in customers] == ["a", "b", "c"]
    assert customers_by_group(customers) == {"Premium": 1, "Rural": 2, "Budget Buyers": 0}


@pytest.mark.asyncio
async def test_report_endpoints_are_tenant_scoped(client: httpx.AsyncClient, login) -> None:
    t1 = await login("u1", tenant_id="t1")
    t2 = await login("u2", tenant_id="t2")
    for name, stock in (("Notebooks", 10), ("Pens", 0)):
        await client.post(
            "/v1/products",
            json={"name": name, "category": "Office", "price": 100, "stock": stock},
            headers=t1,
        )
    await client.post(
        "/v1/products",
        json={"name": "Foreign", "category": "Office", "price": 1000, "stock": 1000},
        headers=t2,
    )

    r = await client.get("/v1/reports/products", headers=t1)
    stats = r.json()
    assert stats["total"] == 2
    assert stats["in_stock"] == 1
    assert stats["out_of_stock"] == 1
    assert stats["inventory_value"] == 1000
    assert [p["name"] for p in stats["top"]] == ["Notebooks", "Pens"]

    r = await client.get("/v1/reports/dashboard", headers=t1)
    assert r.json()["total_products"] == 2
    assert r.json()["avg_open_rate"] == 0.0

    r = await client.get("/v1/reports/customers", headers=t1)
    assert r.json()["total"] == 0
    assert r.json()["by_group"] == {"Premium": 0, "Rural": 0, "Budget Buyers": 0}


@pytest.mark.asyncio
async def test_export_requires_manager(client: httpx.AsyncClient, login) -> None:
    user = await login("u1")
    manager = await login("m1", role="manager")

    assert (await client.get("/v1/reports/export", headers=user)).status_code == 403

    r = await client.get("/v1/reports/export", headers=manager)
    assert r.status_code == 200
    body = r.json()
    assert body["customers"] == 0
    assert body["products"] == 0
    assert body["campaigns"] == 0
    assert "export_date" in body


def test_pending_sends_counts_everything_not_yet_sent() -> None:
    blasts = [Blast(status=s) for s in BlastStatus]
    assert pending_sends(blasts) == 3
    assert pending_sends([Blast(status=BlastStatus.sent), Blast(status=BlastStatus.failed)]) == 0
