"""
FastAPI Application Entry Point

Main application with proper lifecycle management for the clinic store client.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clinic_service import __version__
from clinic_service.api import api_router
from clinic_service.constants import TRACE_HEADER_NAME, normalize_trace_id
from clinic_service.core.config import is_production, settings
from clinic_service.core.errors import AppError
from clinic_service.core.logging import set_trace_id, setup_logging
from clinic_service.tools.time_tool import utcnow_iso

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles logging setup on startup and closes the store client on shutdown.
    """
    setup_logging()
    logger.info(f"Clinic Scheduling Service starting up (env={settings.APP_ENV})...")

    yield

    logger.info("Clinic Scheduling Service shutting down...")

    from clinic_service.tools import clinic_store_client
    await clinic_store_client.aclose_client()

    logger.info("Clinic Scheduling Service shutdown complete")


# Initialize FastAPI app with lifespan
app = FastAPI(
    title="Clinic Scheduling Service",
    description="Appointment slot generation and scan-to-client matching",
    version=__version__,
    lifespan=lifespan,
    docs_url=None if is_production() else "/docs",
    redoc_url=None if is_production() else "/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def trace_id_middleware(request: Request, call_next):
    """Bind the request's trace id to the logging context and echo it back."""
    trace_id = normalize_trace_id(request.headers.get(TRACE_HEADER_NAME))
    request.state.trace_id = trace_id
    set_trace_id(trace_id)

    response = await call_next(request)
    response.headers[TRACE_HEADER_NAME] = trace_id
    return response


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    trace_id = getattr(request.state, "trace_id", None)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.to_dict(trace_id=trace_id)}
    )


app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "service": "Clinic Scheduling Service",
        "status": "running",
        "version": __version__
    }


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "service": "clinic_scheduling_service",
        "timestamp": utcnow_iso(),
        "components": {
            "api": "ok",
            "clinic_store": settings.CLINIC_STORE_URL
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
