# invoicer/main.py

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.staticfiles import StaticFiles
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from invoicer.core.config import settings, warn_on_default_secret
from invoicer.core.logging_config import setup_logging
from invoicer.db.database import check_connection, db, ensure_indexes
from invoicer.middleware.request_context import RequestContextMiddleware

# Routers
from invoicer.routes.auth import auth_router
from invoicer.routes.admin import admin_router
from invoicer.routes.address_book import address_book_router
from invoicer.routes.invoices import invoice_router
from invoicer.routes.templates import template_router
from invoicer.routes.catalog import catalog_router
from invoicer.routes.upload import upload_router

# Error Handlers
from invoicer.core.error_handlers import (
    database_exception_handler,
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)

setup_logging()
logger = logging.getLogger("invoicer")


# ------------------------
# Startup / shutdown
# ------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    warn_on_default_secret(settings)
    if await check_connection(db):
        await ensure_indexes(db)
    logger.info("Invoicer API started (environment=%s)", settings.ENVIRONMENT)
    yield
    logger.info("Shutting down Invoicer API")


# ------------------------
# App init
# ------------------------
app = FastAPI(title="Invoicer API", version="1.0.0", lifespan=lifespan)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Invoicer API",
        version="1.0.0",
        description="Invoices, address book, templates and catalog for invoicing",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"}
    }
    for path, operations in openapi_schema["paths"].items():
        if path.startswith("/api/auth/") and not path.endswith("/me"):
            continue
        for method in operations.values():
            method["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi

# ------------------------
# Middleware
# ------------------------
app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

# ------------------------
# Routes
# ------------------------
app.include_router(auth_router, prefix="/api/auth")
app.include_router(admin_router, prefix="/api/admin")
app.include_router(address_book_router, prefix="/api/address-book")
app.include_router(invoice_router, prefix="/api/invoices")
app.include_router(invoice_router, prefix="/api/invoice", include_in_schema=False)
app.include_router(template_router, prefix="/api/templates")
app.include_router(catalog_router, prefix="/api/catalog")
app.include_router(upload_router, prefix="/api/upload")

app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")

# ------------------------
# Exception handlers
# ------------------------
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(PyMongoError, database_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# ------------------------
# Health & root
# ------------------------
@app.get("/")
async def root():
    return {"message": "Welcome to Invoicer API"}

@app.get("/api/health")
async def health():
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("invoicer.main:app", host="0.0.0.0", port=settings.PORT)
