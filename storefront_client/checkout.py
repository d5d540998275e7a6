from typing import Optional, Protocol

import structlog

from .api import StorefrontApi
from .auth import AuthSession
from .cart import Cart

logger = structlog.get_logger(__name__)

ORDERS_PATH = "/dashboard/user/orders"
SUCCESS_MESSAGE = "Payment Completed Successfully"
FAILURE_MESSAGE = "Payment failed, please try again"


class PaymentWidget(Protocol):
    """The embedded gateway drop-in. Resolves to ``{"nonce": ...}``."""

    async def request_payment_method(self) -> dict: ...


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class Navigator(Protocol):
    def navigate(self, path: str) -> None: ...


class CheckoutSubmitter:
    """
    Drives the "Make Payment" action of the cart page.

    ``in_flight`` is the disable flag for the submit control. ``submit``
    does nothing unless ``can_submit`` holds, so a second call while one is
    running, or a call with an empty cart, never posts.
    """

    def __init__(
        self,
        api: StorefrontApi,
        auth: AuthSession,
        cart: Cart,
        notifier: Notifier,
        navigator: Navigator,
    ):
        self.api = api
        self.auth = auth
        self.cart = cart
        self.notifier = notifier
        self.navigator = navigator
        self.client_token: Optional[str] = None
        self.in_flight = False

    @property
    def can_submit(self) -> bool:
        return (
            self.auth.is_authenticated
            and self.auth.has_address
            and bool(self.cart)
            and self.client_token is not None
            and not self.in_flight
        )

    async def fetch_client_token(self) -> Optional[str]:
        try:
            self.client_token = await self.api.get_client_token()
        except Exception as e:
            logger.error("client_token_fetch_failed", error=str(e))
            self.client_token = None
        return self.client_token

    async def submit(self, widget: PaymentWidget) -> bool:
        if not self.can_submit:
            return False

        self.in_flight = True
        try:
            method = await widget.request_payment_method()
            await self.api.submit_payment(method["nonce"], self.cart.items)
        except Exception as e:
            # Cart is left as it was so the buyer can retry.
            logger.error("checkout_submit_failed", error=str(e), error_type=type(e).__name__)
            self.notifier.error(FAILURE_MESSAGE)
            return False
        finally:
            self.in_flight = False

        self.cart.clear()
        self.navigator.navigate(ORDERS_PATH)
        self.notifier.success(SUCCESS_MESSAGE)
        return True
