from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.database import create_all

# Importing the service apps registers every model with Base
from services.auth_service.main import auth_app
from services.category_service.main import category_app
from services.product_service.main import product_app

API_PREFIX = "/api/v1"

app = FastAPI(title="Storefront")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    await create_all()

@app.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "storefront", "status": "running"}

app.mount(f"{API_PREFIX}/auth", auth_app)
app.mount(f"{API_PREFIX}/category", category_app)
app.mount(f"{API_PREFIX}/product", product_app)
