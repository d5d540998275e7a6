from typing import Any

import httpx

from shared.config.settings import STOREFRONT_API_URL as API_URL

from .auth import AuthSession


class StorefrontApi:
    """Thin async wrapper over the storefront REST API."""

    def __init__(self, auth: AuthSession, client: httpx.AsyncClient | None = None, base_url: str = API_URL):
        self._auth = auth
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=15.0)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def login(self, email: str, password: str) -> dict[str, Any]:
        resp = await self._client.post("/auth/login", json={"email": email, "password": password})
        resp.raise_for_status()
        data = resp.json()
        self._auth.login(data["user"], data["token"])
        return data

    async def get_client_token(self) -> str:
        resp = await self._client.get("/product/braintree/token")
        resp.raise_for_status()
        return resp.json()["clientToken"]

    async def submit_payment(self, nonce: str, cart: list[dict[str, Any]]) -> dict[str, Any]:
        resp = await self._client.post(
            "/product/braintree/payment",
            json={"nonce": nonce, "cart": cart},
            headers=self._auth.headers,
        )
        resp.raise_for_status()
        return resp.json()

    async def my_orders(self) -> list[dict[str, Any]]:
        resp = await self._client.get("/auth/orders", headers=self._auth.headers)
        resp.raise_for_status()
        return resp.json()
