"""
Braintree adapter.

The SDK reports failures two ways: some raise (authentication, network,
timeouts) and some come back as a result with ``is_success == False``
(declines, invalid nonces). ``BraintreePaymentGateway.submit_sale`` folds
both into a single ``GatewayResult`` so callers only ever branch on
``result.success``.
"""
import asyncio
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from typing import Any, Optional

import braintree
import structlog

from shared.config.settings import (
    BRAINTREE_ENVIRONMENT,
    BRAINTREE_MERCHANT_ID,
    BRAINTREE_PRIVATE_KEY,
    BRAINTREE_PUBLIC_KEY,
    BRAINTREE_TIMEOUT_SECONDS,
)

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")


class PaymentGatewayError(Exception):
    """Raised when the gateway cannot issue a client token."""


@dataclass(frozen=True)
class GatewayResult:
    success: bool
    transaction_id: Optional[str] = None
    payload: dict[str, Any] = field(default_factory=dict)
    error: Optional[dict[str, Any]] = None

    @classmethod
    def failure(cls, message: str, code: str = "gateway_error", **extra) -> "GatewayResult":
        error = {"message": message, "code": code, **extra}
        return cls(success=False, payload={"success": False, "error": error}, error=error)


def format_amount(amount: Decimal) -> str:
    return str(Decimal(amount).quantize(CENTS))


def _transaction_payload(transaction) -> dict[str, Any]:
    if transaction is None:
        return {}
    amount = getattr(transaction, "amount", None)
    created_at = getattr(transaction, "created_at", None)
    return {
        "id": getattr(transaction, "id", None),
        "status": getattr(transaction, "status", None),
        "amount": str(amount) if amount is not None else None,
        "currency": getattr(transaction, "currency_iso_code", None),
        "payment_instrument_type": getattr(transaction, "payment_instrument_type", None),
        "processor_response_code": getattr(transaction, "processor_response_code", None),
        "created_at": created_at.isoformat() if hasattr(created_at, "isoformat") else created_at,
    }


def _deep_errors(result) -> list[dict[str, Any]]:
    errors = getattr(result, "errors", None)
    deep = getattr(errors, "deep_errors", None) or []
    return [
        {"attribute": getattr(e, "attribute", None), "code": getattr(e, "code", None), "message": getattr(e, "message", None)}
        for e in deep
    ]


class BraintreePaymentGateway:
    def __init__(self, gateway, timeout: float = BRAINTREE_TIMEOUT_SECONDS):
        self._gateway = gateway
        self._timeout = timeout

    @classmethod
    def from_settings(cls) -> "BraintreePaymentGateway":
        environment = getattr(braintree.Environment, BRAINTREE_ENVIRONMENT.capitalize())
        gateway = braintree.BraintreeGateway(
            braintree.Configuration(
                environment=environment,
                merchant_id=BRAINTREE_MERCHANT_ID,
                public_key=BRAINTREE_PUBLIC_KEY,
                private_key=BRAINTREE_PRIVATE_KEY,
                timeout=BRAINTREE_TIMEOUT_SECONDS,
            )
        )
        return cls(gateway)

    async def _call(self, fn, *args):
        # The SDK is blocking; keep it off the event loop and bound it.
        return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=self._timeout)

    async def generate_client_token(self) -> str:
        try:
            return await self._call(self._gateway.client_token.generate)
        except Exception as exc:
            logger.error("client_token_failed", error=str(exc), error_type=type(exc).__name__)
            raise PaymentGatewayError(str(exc) or type(exc).__name__) from exc

    async def submit_sale(self, amount: Decimal, nonce: str) -> GatewayResult:
        request = {
            "amount": format_amount(amount),
            "payment_method_nonce": nonce,
            "options": {"submit_for_settlement": True},
        }
        try:
            result = await self._call(self._gateway.transaction.sale, request)
        except asyncio.TimeoutError:
            logger.error("sale_timed_out", amount=request["amount"], timeout=self._timeout)
            return GatewayResult.failure("Payment gateway timed out", code="timeout")
        except Exception as exc:
            logger.error("sale_raised", amount=request["amount"], error=str(exc), error_type=type(exc).__name__)
            return GatewayResult.failure(str(exc) or type(exc).__name__, code=type(exc).__name__)

        transaction = getattr(result, "transaction", None)
        if not getattr(result, "is_success", False):
            message = getattr(result, "message", None) or "Transaction declined"
            logger.warning("sale_declined", amount=request["amount"], message=message)
            return GatewayResult.failure(
                message,
                code="declined",
                errors=_deep_errors(result),
                transaction=_transaction_payload(transaction),
            )

        details = _transaction_payload(transaction)
        return GatewayResult(
            success=True,
            transaction_id=details.get("id"),
            payload={"success": True, "transaction": details},
        )


@lru_cache(maxsize=1)
def get_payment_gateway() -> BraintreePaymentGateway:
    """FastAPI dependency; tests swap it out through dependency_overrides."""
    return BraintreePaymentGateway.from_settings()
