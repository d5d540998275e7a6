import httpx

from .api import API_URL, StorefrontApi
from .auth import AuthSession
from .cart import Cart
from .checkout import CheckoutSubmitter, Navigator, Notifier
from .storage import Storage


class StorefrontContext:
    """
    Owns the client-side state for one app run: auth session, cart and the
    API client. ``start`` restores persisted state; ``logout`` tears the
    session down; ``close`` releases the HTTP client.
    """

    def __init__(self, storage: Storage, client: httpx.AsyncClient | None = None, base_url: str = API_URL):
        self.storage = storage
        self.auth = AuthSession(storage)
        self.cart = Cart(storage)
        self.api = StorefrontApi(self.auth, client=client, base_url=base_url)

    def start(self) -> "StorefrontContext":
        self.auth.restore()
        self.cart.restore()
        return self

    def checkout(self, notifier: Notifier, navigator: Navigator) -> CheckoutSubmitter:
        return CheckoutSubmitter(self.api, self.auth, self.cart, notifier, navigator)

    def logout(self) -> None:
        self.auth.logout()

    async def close(self) -> None:
        await self.api.aclose()
