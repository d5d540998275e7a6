"""
Auth service app. Also serves the order endpoints, which the storefront
addresses under the /auth prefix (orders, all-orders, order-status).
"""
from fastapi import FastAPI

from shared.errors import install_error_handlers
from shared.observability.setup import setup_observability

from services.order_service.models import Order  # noqa: F401 registers model with SQLAlchemy Base
from services.order_service.router import router as order_router

from .models import User  # noqa: F401 registers model with SQLAlchemy Base
from .router import router, public_router

auth_app = FastAPI(
    title="Auth Service",
    version="2.0.0",
    description="Accounts, access tokens, profile and order history.",
)

setup_observability(auth_app, "auth_service")
install_error_handlers(auth_app)

auth_app.include_router(router)
auth_app.include_router(order_router)
auth_app.include_router(public_router)
