"""
Table Booking - FastAPI Backend Application
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
import structlog

from app.config import settings
from app.database import SessionLocal
from app.api import auth, reservations, tables
from app.api.deps import get_clock, get_email_sender
from app.jobs.sweeper import ReservationSweeper
from app.services.errors import ReservationError

logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting Table Booking API", version="1.0.0", sweeper_mode=settings.sweeper_mode)

    sweeper = None
    if settings.sweeper_mode == "inprocess":
        sweeper = ReservationSweeper(
            SessionLocal,
            clock=get_clock(),
            email_sender=get_email_sender(),
        )
        sweeper.start()
    app.state.sweeper = sweeper

    yield

    if sweeper is not None:
        await sweeper.stop()
    logger.info("Shutting down Table Booking API")


# Create FastAPI application
app = FastAPI(
    title="Table Booking",
    description="Restaurant table reservations with automatic table assignment",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ReservationError)
async def reservation_error_handler(request: Request, exc: ReservationError):
    """Render domain failures as 4xx responses"""
    logger.info(
        "Reservation request rejected",
        path=request.url.path,
        code=exc.code,
        message=exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": {"code": exc.code, "message": exc.message}},
    )


# Health check endpoints
@app.get("/health")
async def health():
    """Basic health check"""
    return {"status": "healthy", "service": "api", "version": "1.0.0"}


@app.get("/health/ready")
async def ready():
    """Readiness check with dependency verification"""
    checks = {}

    # Check database
    try:
        async with SessionLocal() as db:
            await db.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"failed: {str(e)}"

    # Check Redis only when Celery runs the sweeps
    if settings.sweeper_mode == "celery":
        try:
            from app.jobs.celery_app import celery_app
            celery_app.control.ping(timeout=1)
            checks["redis"] = "ok"
        except Exception as e:
            checks["redis"] = f"failed: {str(e)}"

    all_ok = all(v == "ok" for v in checks.values())

    return {
        "status": "ready" if all_ok else "not_ready",
        "checks": checks,
    }


# Include API routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
app.include_router(tables.router, prefix="/tables", tags=["Tables"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )
