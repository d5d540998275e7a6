"""
Product catalog app. The Braintree token and payment endpoints are served
from here as well, under /braintree.
"""
from fastapi import FastAPI

from shared.errors import install_error_handlers
from shared.observability import setup_observability
from shared.security import limiter

from services.payment_service.router import router as payment_router

from .models import Product  # noqa: F401 registers model with SQLAlchemy Base
from .router import admin_router, public_router, router

product_app = FastAPI(
    title="Product Service",
    version="1.0.0"
)

setup_observability(product_app, "product_service")

# --- SECURITY SETUP ---
product_app.state.limiter = limiter
install_error_handlers(product_app)

product_app.include_router(public_router)
product_app.include_router(router)
product_app.include_router(admin_router)
product_app.include_router(payment_router, prefix="/braintree")
