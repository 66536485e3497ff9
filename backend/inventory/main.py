from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory.core.config import settings
from inventory.core.logging import setup_logging
from inventory.api.errors import register_exception_handlers
from inventory.db.session import create_tables

setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_tables()
    yield


app = FastAPI(
    title="Product Inventory API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
)

register_exception_handlers(app)

# Import routers after app creation to avoid circular imports
from inventory.api import categories, products  # noqa: E402

app.include_router(products.router)
app.include_router(categories.router)


@app.get("/")
def root():
    return {"status": "ok", "service": "inventory-api"}


@app.get("/health")
def health_check():
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "env": settings.ENV,
    }
