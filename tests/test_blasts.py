"""
tests.test_blasts

WhatsApp blast composition, preview and (mocked) sending.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import httpx
import pytest

from stationery_connect.db.models import Product
from stationery_connect.services.blasts import INCOMPLETE_SELECTION, render_preview


def test_preview_lists_featured_products() -> None:
    products = [Product(name="A4 Copy Paper", price=280.0), Product(name="Eraser", price=7.5)]
    assert render_preview("Back to school!", products) == (
        "Back to school!\n\n"
        "🛍️ Featured Products:\n"
        "• A4 Copy Paper - ₹280\n"
        "• Eraser - ₹7.50\n"
        "\n📞 Contact us for bulk orders!"
    )


def test_preview_without_products_is_just_the_message() -> None:
    assert render_preview("Hello", []) == "Hello\n\n"


async def _seed(client: httpx.AsyncClient, headers: dict[str, str]) -> tuple[str, str]:
    r = await client.post(
        "/v1/customers",
        json={"name": "Rajesh", "whatsapp_number": "+91 98765 43210", "group": "Premium"},
        headers=headers,
    )
    customer_id = r.json()["id"]
    r = await client.post(
        "/v1/products",
        json={"name": "Highlighter Markers Set", "category": "Markers", "price": 85, "stock": 200},
        headers=headers,
    )
    return customer_id, r.json()["id"]


@pytest.mark.asyncio
async def test_compose_requires_full_selection(client: httpx.AsyncClient, login) -> None:
    headers = await login("u1")
    customer_id, product_id = await _seed(client, headers)

    for body in (
        {"message": "Hi", "customer_ids": [], "product_ids": [product_id]},
        {"message": "Hi", "customer_ids": [customer_id], "product_ids": []},
        {"message": "   ", "customer_ids": [customer_id], "product_ids": [product_id]},
    ):
        r = await client.post("/v1/blasts", json=body, headers=headers)
        assert r.status_code == 422
        assert r.json()["detail"] == INCOMPLETE_SELECTION


@pytest.mark.asyncio
async def test_compose_rejects_other_tenant_records(client: httpx.AsyncClient, login) -> None:
    mine = await login("u1", tenant_id="t1")
    theirs = await login("u2", tenant_id="t2")
    customer_id, _ = await _seed(client, mine)
    _, foreign_product = await _seed(client, theirs)

    r = await client.post(
        "/v1/blasts",
        json={"message": "Hi", "customer_ids": [customer_id], "product_ids": [foreign_product]},
        headers=mine,
    )
    assert r.status_code == 422
    assert foreign_product in r.json()["detail"]


@pytest.mark.asyncio
async def test_compose_preview_send(client: httpx.AsyncClient, login) -> None:
    headers = await login("u1")
    customer_id, product_id = await _seed(client, headers)

    r = await client.post(
        "/v1/blasts",
        json={
            "title": "Diwali offer",
            "message": "Festive discounts this week!",
            "customer_ids": [customer_id, customer_id],
            "product_ids": [product_id],
        },
        headers=headers,
    )
    assert r.status_code == 201, r.text
    blast = r.json()
    assert blast["status"] == "draft"
    assert blast["customer_ids"] == [customer_id]

    r = await client.get(f"/v1/blasts/{blast['id']}/preview", headers=headers)
    assert "• Highlighter Markers Set - ₹85" in r.json()["preview"]

    r = await client.post(f"/v1/blasts/{blast['id']}/send", headers=headers)
    assert r.status_code == 200
    assert r.json()["status"] == "sent"
    assert r.json()["sent_at"] is not None

    r = await client.post(f"/v1/blasts/{blast['id']}/send", headers=headers)
    assert r.status_code == 422

    r = await client.get("/v1/reports/dashboard", headers=headers)
    dashboard = r.json()
    assert dashboard["sent_blasts"] == 1
    assert "blast_sent" in [a["type"] for a in dashboard["recent_activities"]]


@pytest.mark.asyncio
async def test_only_owner_or_manager_can_send(client: httpx.AsyncClient, login) -> None:
    author = await login("u1")
    colleague = await login("u2")
    manager = await login("m1", role="manager")
    customer_id, product_id = await _seed(client, author)
    r = await client.post(
        "/v1/blasts",
        json={
            "message": "New stock",
            "customer_ids": [customer_id],
            "product_ids": [product_id],
            "scheduled_at": "2030-01-01T09:00:00Z",
        },
        headers=author,
    )
    blast = r.json()
    assert blast["status"] == "scheduled"

    r = await client.post(f"/v1/blasts/{blast['id']}/send", headers=colleague)
    assert r.status_code == 403
    r = await client.post(f"/v1/blasts/{blast['id']}/send", headers=manager)
    assert r.status_code == 200


async def _compose(
    client: httpx.AsyncClient, headers: dict[str, str], **extra: object
) -> dict:
    customer_id, product_id = await _seed(client, headers)
    r = await client.post(
        "/v1/blasts",
        json={
            "title": "Back to school",
            "message": "Fresh stock has arrived",
            "customer_ids": [customer_id],
            "product_ids": [product_id],
            **extra,
        },
        headers=headers,
    )
    assert r.status_code == 201, r.text
    return r.json()


def _is_utc(value: str) -> bool:
    return datetime.fromisoformat(value).utcoffset() == timedelta(0)


@pytest.mark.asyncio
async def test_dashboard_counts_unsent_blasts(client: httpx.AsyncClient, login) -> None:
    headers = await login("u1")
    draft = await _compose(client, headers)
    await _compose(client, headers, scheduled_at="2030-01-01T09:00:00Z")

    r = await client.get("/v1/reports/dashboard", headers=headers)
    assert r.json()["pending_blasts"] == 2
    assert r.json()["sent_blasts"] == 0

    r = await client.post(f"/v1/blasts/{draft['id']}/send", headers=headers)
    # Delivery is mocked, so no open rate is ever reported back.
    assert r.json()["open_rate"] == 0.0

    r = await client.get("/v1/reports/dashboard", headers=headers)
    dashboard = r.json()
    assert dashboard["pending_blasts"] == 1
    assert dashboard["sent_blasts"] == 1
    assert dashboard["avg_open_rate"] == 0.0


@pytest.mark.asyncio
async def test_status_follows_scheduled_at(client: httpx.AsyncClient, login) -> None:
    headers = await login("u1")
    blast = await _compose(client, headers)
    url = f"/v1/blasts/{blast['id']}"
    assert blast["status"] == "draft"

    r = await client.patch(url, json={"scheduled_at": "2030-01-01T09:00:00+05:30"}, headers=headers)
    assert r.status_code == 200
    assert r.json()["status"] == "scheduled"

    r = await client.get(url, headers=headers)
    scheduled_at = r.json()["scheduled_at"]
    assert _is_utc(scheduled_at)
    assert datetime.fromisoformat(scheduled_at) == datetime(2030, 1, 1, 3, 30, tzinfo=UTC)
    assert _is_utc(r.json()["created_at"])

    r = await client.patch(url, json={"scheduled_at": None}, headers=headers)
    assert r.status_code == 200
    assert r.json()["status"] == "draft"
    assert r.json()["scheduled_at"] is None

    r = await client.get(url, headers=headers)
    assert r.json()["status"] == "draft"
    assert r.json()["scheduled_at"] is None


@pytest.mark.asyncio
async def test_null_message_leaves_message_unchanged(client: httpx.AsyncClient, login) -> None:
    headers = await login("u1")
    blast = await _compose(client, headers)

    r = await client.patch(f"/v1/blasts/{blast['id']}", json={"message": None}, headers=headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Fresh stock has arrived"


@pytest.mark.asyncio
async def test_sent_blast_cannot_be_edited(client: httpx.AsyncClient, login) -> None:
    headers = await login("u1")
    blast = await _compose(client, headers)
    url = f"/v1/blasts/{blast['id']}"
    await client.post(f"{url}/send", headers=headers)

    r = await client.patch(url, json={"message": "rewritten"}, headers=headers)
    assert r.status_code == 422
    assert r.json()["detail"] == "Blast already sent"

    r = await client.patch(url, json={"scheduled_at": "2030-01-01T09:00:00Z"}, headers=headers)
    assert r.status_code == 422

    r = await client.get(url, headers=headers)
    assert r.json()["message"] == "Fresh stock has arrived"
    assert r.json()["status"] == "sent"


@pytest.mark.asyncio
async def test_blast_write_policy(client: httpx.AsyncClient, login) -> None:
    author = await login("u1", tenant_id="t1")
    colleague = await login("u2", tenant_id="t1")
    manager = await login("m1", tenant_id="t1", role="manager")
    outsider = await login("a9", tenant_id="t2", role="admin")
    blast = await _compose(client, author)
    url = f"/v1/blasts/{blast['id']}"

    assert (await client.patch(url, json={"title": "x"}, headers=colleague)).status_code == 403
    assert (await client.delete(url, headers=colleague)).status_code == 403

    assert (await client.get(url, headers=outsider)).status_code == 404
    assert (await client.patch(url, json={"title": "x"}, headers=outsider)).status_code == 404
    assert (await client.delete(url, headers=outsider)).status_code == 404

    r = await client.patch(url, json={"title": "Exam season"}, headers=manager)
    assert r.status_code == 200
    updated = r.json()
    assert updated["title"] == "Exam season"
    assert updated["tenant_id"] == blast["tenant_id"] == "t1"
    assert updated["created_by"] == blast["created_by"] == "u1"
    assert updated["created_at"] == blast["created_at"]
    assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(
        blast["updated_at"]
    )

    assert (await client.delete(url, headers=author)).status_code == 204
    assert (await client.get(url, headers=author)).status_code == 404
