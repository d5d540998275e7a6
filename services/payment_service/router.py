from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.security import checkout_limit, limiter
from services.auth_service.dependencies import get_current_user_id
from services.order_service.service import OrderService

from .gateway import BraintreePaymentGateway, PaymentGatewayError, get_payment_gateway
from .schemas import CheckoutRequest, CheckoutResponse, ClientTokenResponse
from .service import CheckoutError, CheckoutService

router = APIRouter(tags=["Payments"])


@router.get("/token", response_model=ClientTokenResponse)
async def client_token(gateway: BraintreePaymentGateway = Depends(get_payment_gateway)):
    try:
        token = await gateway.generate_client_token()
    except PaymentGatewayError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    return ClientTokenResponse(clientToken=token)


@router.post("/payment", response_model=CheckoutResponse)
@limiter.limit(checkout_limit)  # slowapi needs `request` in the signature
async def payment(
    request: Request,
    payload: CheckoutRequest,
    user_id: int = Depends(get_current_user_id),
    gateway: BraintreePaymentGateway = Depends(get_payment_gateway),
    db: AsyncSession = Depends(get_db),
):
    try:
        order = await CheckoutService.checkout(db, gateway, user_id, payload)
    except CheckoutError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"success": False, "message": e.message, "error": e.detail},
        )
    populated = await OrderService.populate(db, [order])
    return CheckoutResponse(order=populated[0])
