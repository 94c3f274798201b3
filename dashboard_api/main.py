import logging
from datetime import date
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .cache import ViewCache
from .config import Settings, get_settings
from .errors import DataAccessError, InvoiceValidationError
from .logs import configure_logging
from .models import ErrorResponse
from .routers.auth import router as auth_router
from .routers.customers import router as customers_router
from .routers.dashboard import router as dashboard_router
from .routers.invoices import router as invoices_router
from .routers.query import router as query_router
from .stores import InvoiceStore, create_store

logger = logging.getLogger(__name__)


def create_app(store: Optional[InvoiceStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API. The store is created from settings unless one is passed in."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Invoice Dashboard API",
        description="Data access and invoice actions for the invoice admin dashboard",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store if store is not None else create_store(settings)
    app.state.view_cache = ViewCache(
        settings.view_cache_dir,
        expire=settings.view_cache_ttl_seconds,
        max_entries=settings.view_cache_max_entries,
    )

    app.include_router(dashboard_router)
    app.include_router(invoices_router)
    app.include_router(customers_router)
    app.include_router(query_router)
    app.include_router(auth_router)

    @app.get("/")
    async def root():
        """Health check endpoint"""
        return {"message": "Invoice Dashboard API is running", "status": "healthy"}

    @app.get("/api/health")
    async def health_check(request: Request):
        """Reports whether reads come from the database or the placeholder data"""
        return {
            "status": "healthy",
            "database": request.app.state.store.mode,
            "timestamp": date.today().isoformat()
        }

    # Error handlers
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                success=False,
                error=exc.detail,
                details=f"Status Code: {exc.status_code}"
            ).model_dump()
        )

    @app.exception_handler(InvoiceValidationError)
    async def validation_exception_handler(request, exc):
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                success=False,
                error=exc.message,
                field_errors=exc.field_errors
            ).model_dump()
        )

    @app.exception_handler(DataAccessError)
    async def data_access_exception_handler(request, exc):
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                success=False,
                error=str(exc)
            ).model_dump()
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                success=False,
                error="Internal server error"
            ).model_dump()
        )

    return app


app = create_app()
