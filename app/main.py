"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import engine, Base
from app.exceptions import DashboardError
from app.routes.transactions import router as transactions_router
from app.seeds import initialize_database

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Transaction Dashboard API...")
    logger.info(f"Environment: {settings.environment}")

    # Create tables (for development; use Alembic migrations in production)
    if settings.environment == "development":
        Base.metadata.create_all(bind=engine)

    # Seed failures are logged inside; serve whatever is stored
    if settings.seed_on_startup:
        await initialize_database()

    yield

    # Shutdown
    logger.info("Shutting down Transaction Dashboard API...")


# Create FastAPI app
app = FastAPI(
    title="Transaction Dashboard API",
    description="Listing, search and monthly aggregates over product sale transactions",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include routes
app.include_router(transactions_router)


@app.exception_handler(DashboardError)
async def dashboard_error_handler(request: Request, exc: DashboardError):
    """Render domain errors as {"error": message}."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed query values (e.g. page=abc) are client errors too."""
    fields = ", ".join(str(err["loc"][-1]) for err in exc.errors())
    return JSONResponse(status_code=400, content={"error": f"Invalid query parameter: {fields}"})


@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": "Transaction Dashboard API",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "seed_on_startup": settings.seed_on_startup,
        "transactions_feed_url": settings.transactions_feed_url,
    }
