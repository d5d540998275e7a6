from decimal import Decimal

import pytest
from sqlalchemy import func, select

from services.order_service.models import Order
from services.payment_service.gateway import GatewayResult, PaymentGatewayError

TOKEN_URL = "/api/v1/product/braintree/token"
PAYMENT_URL = "/api/v1/product/braintree/payment"


async def count_orders(db):
    result = await db.execute(select(func.count(Order.id)))
    return result.scalar_one()


def cart_for(products):
    return [
        {"_id": p.id, "name": p.name, "price": p.price, "description": p.description}
        for p in products
    ]


async def test_client_token(client, gateway):
    resp = await client.get(TOKEN_URL)

    assert resp.status_code == 200
    assert resp.json() == {"clientToken": "client-token-123"}


async def test_client_token_failure_is_500(client, gateway):
    gateway.token_error = PaymentGatewayError("token fail")

    resp = await client.get(TOKEN_URL)

    assert resp.status_code == 500
    assert resp.json()["detail"] == "token fail"


async def test_payment_creates_order(client, db, gateway, customer, customer_headers, products):
    resp = await client.post(
        PAYMENT_URL,
        json={"nonce": "ok", "cart": cart_for(products)},
        headers=customer_headers,
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert gateway.sales == [(Decimal("30"), "ok")]

    order = body["order"]
    assert [p["id"] for p in order["products"]] == [p.id for p in products]
    assert order["payment"] == gateway.result.payload
    assert order["buyer"] == {"id": customer.id, "name": customer.name}
    assert order["status"] == "Not Processed"
    assert await count_orders(db) == 1


async def test_client_total_is_ignored(client, gateway, customer_headers, products):
    payload = {"nonce": "ok", "cart": cart_for(products), "total": 1}

    resp = await client.post(PAYMENT_URL, json=payload, headers=customer_headers)

    assert resp.status_code == 200
    assert gateway.sales[0][0] == Decimal("30")


async def test_gateway_failure_returns_500_without_order(client, db, gateway, customer_headers, products):
    gateway.result = GatewayResult.failure("Processor Declined", code="declined")

    resp = await client.post(
        PAYMENT_URL,
        json={"nonce": "bad", "cart": cart_for(products)},
        headers=customer_headers,
    )

    assert resp.status_code == 500
    detail = resp.json()["detail"]
    assert detail["success"] is False
    assert detail["error"] == {"message": "Processor Declined", "code": "declined"}
    assert await count_orders(db) == 0


async def test_empty_cart_still_reaches_gateway(client, gateway, customer_headers):
    resp = await client.post(PAYMENT_URL, json={"nonce": "ok", "cart": []}, headers=customer_headers)

    assert resp.status_code == 200
    assert gateway.sales == [(Decimal("0"), "ok")]


async def test_payment_requires_authentication(client, db, gateway, products):
    resp = await client.post(PAYMENT_URL, json={"nonce": "ok", "cart": cart_for(products)})

    assert resp.status_code == 401
    assert gateway.sales == []
    assert await count_orders(db) == 0


async def test_missing_nonce_is_bad_request(client, gateway, customer_headers, products):
    resp = await client.post(PAYMENT_URL, json={"cart": cart_for(products)}, headers=customer_headers)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Nonce is required"
    assert gateway.sales == []


@pytest.mark.parametrize(
    "cart",
    [
        '[{"_id": 1, "price": 1e400}]',
        '[{"_id": 1, "price": 100}, {"_id": 2, "price": -99.5}]',
        '[{"_id": 1, "price": 10.005}]',
    ],
    ids=["overflow", "negative", "sub-cent"],
)
async def test_unchargeable_prices_are_bad_request(client, db, gateway, customer_headers, cart):
    resp = await client.post(
        PAYMENT_URL,
        content='{"nonce": "ok", "cart": %s}' % cart,
        headers={**customer_headers, "Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert resp.json()["message"].startswith("price:")
    assert gateway.sales == []
    assert await count_orders(db) == 0
