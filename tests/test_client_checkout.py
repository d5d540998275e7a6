import asyncio
import json

import httpx
import pytest

from storefront_client import MemoryStorage, StorefrontContext
from storefront_client.checkout import FAILURE_MESSAGE, ORDERS_PATH, SUCCESS_MESSAGE

CART = [
    {"_id": 1, "name": "Product 1", "price": 10, "description": "First product description"},
    {"_id": 2, "name": "Product 2", "price": 20, "description": "Second product description"},
]


class RecordingNotifier:
    def __init__(self):
        self.successes = []
        self.errors = []

    def success(self, message):
        self.successes.append(message)

    def error(self, message):
        self.errors.append(message)


class RecordingNavigator:
    def __init__(self):
        self.paths = []

    def navigate(self, path):
        self.paths.append(path)


class DropIn:
    def __init__(self, nonce="test-nonce", error=None):
        self.nonce = nonce
        self.error = error
        self.calls = 0

    async def request_payment_method(self):
        self.calls += 1
        if self.error:
            raise self.error
        return {"nonce": self.nonce}


class SlowDropIn(DropIn):
    async def request_payment_method(self):
        await asyncio.sleep(0)
        return await super().request_payment_method()


class FakeApiServer:
    def __init__(self, payment_status=200):
        self.payment_status = payment_status
        self.payments = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/braintree/token"):
            return httpx.Response(200, json={"clientToken": "test-client-token"})
        if request.url.path.endswith("/braintree/payment"):
            self.payments.append((json.loads(request.content), request.headers.get("Authorization")))
            if self.payment_status != 200:
                return httpx.Response(self.payment_status, json={"detail": {"message": "Payment failed"}})
            return httpx.Response(200, json={"ok": True})
        return httpx.Response(404)


def build(server, user=None, cart=CART):
    user = user if user is not None else {"name": "John Doe", "address": "123 Main St"}
    storage = MemoryStorage({
        "cart": json.dumps(cart),
        "auth": json.dumps({"user": user, "token": "test-token"}),
    })
    client = httpx.AsyncClient(transport=httpx.MockTransport(server), base_url="http://test/api/v1")
    context = StorefrontContext(storage, client=client).start()
    notifier, navigator = RecordingNotifier(), RecordingNavigator()
    return storage, context.checkout(notifier, navigator), notifier, navigator


async def test_successful_payment_clears_cart_and_navigates():
    server = FakeApiServer()
    storage, checkout, notifier, navigator = build(server)
    await checkout.fetch_client_token()
    assert checkout.can_submit

    assert await checkout.submit(DropIn()) is True

    assert server.payments == [({"nonce": "test-nonce", "cart": CART}, "Bearer test-token")]
    assert storage.get_item("cart") is None
    assert checkout.cart.items == []
    assert navigator.paths == [ORDERS_PATH]
    assert notifier.successes == [SUCCESS_MESSAGE]
    assert not checkout.in_flight


async def test_server_failure_keeps_cart_and_reenables_submit():
    server = FakeApiServer(payment_status=500)
    storage, checkout, notifier, navigator = build(server)
    await checkout.fetch_client_token()

    assert await checkout.submit(DropIn()) is False

    assert json.loads(storage.get_item("cart")) == CART
    assert checkout.cart.items == CART
    assert notifier.errors == [FAILURE_MESSAGE]
    assert navigator.paths == []
    assert not checkout.in_flight
    assert checkout.can_submit


async def test_nonce_failure_never_posts():
    server = FakeApiServer()
    _, checkout, notifier, _ = build(server)
    await checkout.fetch_client_token()

    assert await checkout.submit(DropIn(error=RuntimeError("card form incomplete"))) is False

    assert server.payments == []
    assert notifier.errors == [FAILURE_MESSAGE]
    assert not checkout.in_flight


async def test_double_click_posts_once():
    server = FakeApiServer()
    _, checkout, notifier, _ = build(server)
    await checkout.fetch_client_token()
    widget = SlowDropIn()

    results = await asyncio.gather(checkout.submit(widget), checkout.submit(widget))

    assert sorted(results) == [False, True]
    assert widget.calls == 1
    assert len(server.payments) == 1
    assert notifier.successes == [SUCCESS_MESSAGE]
    assert not checkout.in_flight


async def test_direct_submit_with_empty_cart_never_posts():
    server = FakeApiServer()
    _, checkout, notifier, _ = build(server, cart=[])
    await checkout.fetch_client_token()
    widget = DropIn()

    assert await checkout.submit(widget) is False

    assert widget.calls == 0
    assert server.payments == []
    assert notifier.errors == []


@pytest.mark.parametrize(
    "user,cart",
    [
        ({"name": "John Doe", "address": ""}, CART),
        ({"name": "John Doe", "address": "123 Main St"}, []),
    ],
)
async def test_submit_disabled_without_address_or_items(user, cart):
    _, checkout, _, _ = build(FakeApiServer(), user=user, cart=cart)
    await checkout.fetch_client_token()

    assert not checkout.can_submit


async def test_token_fetch_failure_leaves_submit_disabled():
    def broken(request):
        return httpx.Response(500, json={"detail": "token fail"})

    _, checkout, _, _ = build(broken)

    assert await checkout.fetch_client_token() is None
    assert not checkout.can_submit
