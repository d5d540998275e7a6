import time
from decimal import Decimal
from typing import Iterable

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.observability import (
    ecomm_checkout_amount,
    ecomm_checkout_duration_seconds,
    ecomm_checkout_total,
)
from services.order_service.models import Order
from services.order_service.service import OrderService

from .gateway import BraintreePaymentGateway, format_amount
from .schemas import CartItem, CheckoutRequest

logger = structlog.get_logger(__name__)


class CheckoutError(Exception):
    """Checkout did not produce an order. ``detail`` is safe to return to the caller."""

    def __init__(self, message: str, detail=None):
        super().__init__(message)
        self.message = message
        self.detail = detail


def compute_total(cart: Iterable[CartItem]) -> Decimal:
    """Exact sum of cart prices. Prices go through str() so 0.1 + 0.2 == 0.3."""
    return sum((Decimal(str(item.price)) for item in cart), Decimal("0"))


class CheckoutService:
    @staticmethod
    async def checkout(
        db: AsyncSession,
        gateway: BraintreePaymentGateway,
        buyer_id: int,
        data: CheckoutRequest,
    ) -> Order:
        """
        Charge the cart and record the order.

        The amount is always recomputed from the submitted cart; there is no
        client-supplied total. An order is written only after the gateway
        confirms the sale, and the write is keyed on the gateway transaction
        id so replaying it cannot create a second order for one charge.
        """
        started = time.perf_counter()
        amount = compute_total(data.cart)
        log = logger.bind(buyer_id=buyer_id, items=len(data.cart), amount=format_amount(amount))

        result = await gateway.submit_sale(amount, data.nonce)
        if not result.success:
            ecomm_checkout_total.labels(status="declined").inc()
            log.warning("checkout_payment_failed", error=result.error)
            raise CheckoutError("Payment failed", detail=result.error)

        ecomm_checkout_amount.observe(float(amount))
        log = log.bind(transaction_id=result.transaction_id)
        log.info("checkout_charged")

        try:
            order = await OrderService.record_paid_order(
                db,
                buyer_id=buyer_id,
                product_ids=[item.id for item in data.cart],
                payment=result.payload,
                transaction_id=result.transaction_id,
            )
        except Exception as exc:
            # The buyer has been charged; this needs manual reconciliation.
            ecomm_checkout_total.labels(status="unrecorded").inc()
            log.critical("order_persist_failed", error=str(exc), error_type=type(exc).__name__)
            await db.rollback()
            raise CheckoutError(
                "Payment captured but the order could not be saved",
                detail={"message": str(exc), "transaction_id": result.transaction_id},
            ) from exc

        ecomm_checkout_total.labels(status="success").inc()
        ecomm_checkout_duration_seconds.observe(time.perf_counter() - started)
        log.info("checkout_completed", order_id=order.id)
        return order
