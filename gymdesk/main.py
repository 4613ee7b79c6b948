"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from gymdesk.core.config import settings
from gymdesk.core.middleware import setup_middleware
from gymdesk.core.exceptions import AuthenticationError, GymDeskError

from gymdesk.api.auth import router as auth_router
from gymdesk.api.roles import router as roles_router
from gymdesk.api.permissions import router as permissions_router
from gymdesk.api.lookups import router as lookups_router
from gymdesk.api.trainers import router as trainers_router
from gymdesk.api.notes import router as notes_router
from gymdesk.api.notifications import router as notifications_router
from gymdesk.api.attendance import router as attendance_router
from gymdesk.api.support import router as support_router
from gymdesk.api.reports import router as reports_router
from gymdesk.api.admin import router as admin_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("gymdesk")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("🚀 Starting %s API", settings.APP_NAME)
    yield
    logger.info("🔻 Shutting down %s API", settings.APP_NAME)


app = FastAPI(
    title="GymDesk API",
    description="Multi-tenant gym management backend",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Middleware
setup_middleware(app)


@app.exception_handler(GymDeskError)
async def gymdesk_exception_handler(request: Request, exc: GymDeskError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )

# Register routers
app.include_router(auth_router, prefix="/api")
app.include_router(roles_router, prefix="/api")
app.include_router(permissions_router, prefix="/api")
app.include_router(lookups_router, prefix="/api")
app.include_router(trainers_router, prefix="/api")
app.include_router(notes_router, prefix="/api")
app.include_router(notifications_router, prefix="/api")
app.include_router(attendance_router, prefix="/api")
app.include_router(support_router, prefix="/api")
app.include_router(reports_router, prefix="/api")
app.include_router(admin_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/api/health")
async def health():
    """Quick health check endpoint."""
    return {"status": "ok"}
