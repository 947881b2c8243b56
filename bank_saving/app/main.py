import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI

from .api.exceptions import register_exception_handlers
from .api.routes import router as api_router
from .core.config import get_settings
from .core.db import init_db
from .services import AccountLockRegistry

settings = get_settings()
logging.basicConfig(level=settings.log_level)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    app.state.account_locks = AccountLockRegistry()
    yield

app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

app.include_router(api_router, prefix=settings.api_prefix)
register_exception_handlers(app)

@app.get("/")
def read_root() -> dict:
    prefix = settings.api_prefix
    return {
        "success": True,
        "message": settings.app_name,
        "version": settings.version,
        "endpoints": {
            "health": f"{prefix}/health",
            "customers": f"{prefix}/customers",
            "depositoTypes": f"{prefix}/deposito-types",
            "accounts": f"{prefix}/accounts",
            "transactions": f"{prefix}/transactions",
        },
    }

@app.get(f"{settings.api_prefix}/health")
def read_health() -> dict:
    return {
        "success": True,
        "message": f"{settings.app_name} is running",
        "timestamp": datetime.now(UTC).isoformat(),
    }
