"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.api.router import api_router
from app.database import SessionLocal, init_db
from app.exceptions import PersistFailure, StoreUnavailable
from app.seed import seed_budgets
from app.services.app_state import AppStateStore
from app.services.materializer import run_startup_materialization

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and catch up on recurring transactions before serving."""
    init_db()
    db = SessionLocal()
    try:
        state = AppStateStore(db)
        if not state.get_database_initialized():
            seed_budgets(db)
            state.set_database_initialized(True)
        if settings.materialize_on_startup:
            run_startup_materialization(db)
    except StoreUnavailable as e:
        logger.error(f"Database unavailable during startup: {e}")
    except SQLAlchemyError as e:
        logger.exception(f"Database error during startup: {e}")
    finally:
        db.close()
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Local-first personal finance tracker with recurring transactions",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(PersistFailure)
async def persist_failure_handler(request: Request, exc: PersistFailure):
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/api/v1/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "app_name": settings.app_name
    }
