from fastapi import FastAPI

from shared.errors import install_error_handlers
from shared.observability import setup_observability

from .models import Category  # noqa: F401 registers model with SQLAlchemy Base
from .router import admin_router, public_router, router

category_app = FastAPI(title="Category Service", version="1.0.0")

setup_observability(category_app, "category_service")
install_error_handlers(category_app)

category_app.include_router(public_router)
category_app.include_router(router)
category_app.include_router(admin_router)
