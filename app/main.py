import asyncio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager, suppress
from app.config import settings
from app.database import Database
from app.features.auth.router import router as auth_router
from app.features.otp.router import router as otp_router
from app.features.patients.router import router as patients_router
from app.features.sessions.router import router as sessions_router
from app.features.earnings.router import router as earnings_router
from app.features.otp.service import run_otp_sweep
from app.features.sessions.service import SessionService
from app.shared.exceptions import register_exception_handlers
from app.shared.schemas import BaseResponse
from app.core.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI application."""
    # Startup
    logger.info("Starting Rehabiri API...")
    await Database.connect_db()
    await SessionService.backfill_legacy_status()

    otp_sweep = asyncio.create_task(run_otp_sweep())

    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Shutting down...")
    otp_sweep.cancel()
    with suppress(asyncio.CancelledError):
        await otp_sweep
    await Database.close_db()
    logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Physiotherapy practice management API: patients, sessions and earnings",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Register routers
app.include_router(auth_router, prefix=settings.API_V1_PREFIX)
app.include_router(otp_router, prefix=settings.API_V1_PREFIX)
app.include_router(patients_router, prefix=settings.API_V1_PREFIX)
app.include_router(sessions_router, prefix=settings.API_V1_PREFIX)
app.include_router(earnings_router, prefix=settings.API_V1_PREFIX)


@app.get(f"{settings.API_V1_PREFIX}/health", response_model=BaseResponse)
async def health_check():
    """Health check endpoint."""
    return BaseResponse(
        message=f"{settings.APP_NAME} is running",
        data={"status": "healthy", "environment": settings.ENVIRONMENT},
    )
