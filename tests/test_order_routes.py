import pytest

from services.order_service.models import Order, OrderStatus


@pytest.fixture
async def order(db, customer, products):
    order = Order(
        products=[p.id for p in products],
        payment={"success": True},
        buyer_id=customer.id,
        transaction_id="txn-o1",
    )
    db.add(order)
    await db.commit()
    await db.refresh(order)
    return order


async def test_buyer_sees_own_orders(client, customer_headers, order, products):
    resp = await client.get("/api/v1/auth/orders", headers=customer_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert [o["id"] for o in body] == [order.id]
    assert body[0]["buyer"]["name"] == "John Doe"
    assert [p["name"] for p in body[0]["products"]] == ["Laptop", "Phone"]


async def test_buyer_without_orders_gets_empty_list(client, admin_headers, order):
    resp = await client.get("/api/v1/auth/orders", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json() == []


async def test_orders_require_login(client, order):
    resp = await client.get("/api/v1/auth/orders")

    assert resp.status_code == 401


async def test_admin_lists_all_orders_newest_first(client, db, admin, admin_headers, order):
    newer = Order(products=[], payment={"success": True}, buyer_id=admin.id, transaction_id="txn-o2")
    db.add(newer)
    await db.commit()

    resp = await client.get("/api/v1/auth/all-orders", headers=admin_headers)

    assert resp.status_code == 200
    assert [o["id"] for o in resp.json()] == [newer.id, order.id]


async def test_all_orders_is_admin_only(client, customer_headers, order):
    resp = await client.get("/api/v1/auth/all-orders", headers=customer_headers)

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Admin Access Required"


async def test_admin_updates_status(client, admin_headers, customer_headers, order):
    resp = await client.put(
        f"/api/v1/auth/order-status/{order.id}",
        json={"status": "Shipped"},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["status"] == "Shipped"

    orders = (await client.get("/api/v1/auth/orders", headers=customer_headers)).json()
    assert orders[0]["status"] == "Shipped"


@pytest.mark.parametrize("status", [s.value for s in OrderStatus])
async def test_every_status_is_accepted(client, admin_headers, order, status):
    resp = await client.put(
        f"/api/v1/auth/order-status/{order.id}",
        json={"status": status},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["status"] == status


async def test_status_can_move_backwards(client, db, admin_headers, order):
    order.status = OrderStatus.DELIVERED
    await db.commit()

    resp = await client.put(
        f"/api/v1/auth/order-status/{order.id}",
        json={"status": "Not Processed"},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["status"] == "Not Processed"


async def test_unknown_status_is_rejected(client, admin_headers, order):
    resp = await client.put(
        f"/api/v1/auth/order-status/{order.id}",
        json={"status": "Lost"},
        headers=admin_headers,
    )

    assert resp.status_code == 400


async def test_unknown_order_is_404(client, admin_headers, database):
    resp = await client.put(
        "/api/v1/auth/order-status/999",
        json={"status": "Shipped"},
        headers=admin_headers,
    )

    assert resp.status_code == 404


async def test_status_update_is_admin_only(client, customer_headers, order):
    resp = await client.put(
        f"/api/v1/auth/order-status/{order.id}",
        json={"status": "Shipped"},
        headers=customer_headers,
    )

    assert resp.status_code == 401
