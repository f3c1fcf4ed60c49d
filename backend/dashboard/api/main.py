from fastapi import FastAPI, Request, HTTPException, Depends, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session
import logging

from .. import config
from ..database.connection import DatabaseManager, SessionLocal, get_db
from ..services import timekeeping
from ..services.accounts import ensure_admin_account
from .routes import auth, employees, profile, clients, work, reports, admin

API_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Initialize FastAPI app with metadata
app = FastAPI(
    title="Business Dashboard API",
    description="Admin management of employees and clients, with employee daily task tracking, work sessions and end-of-day reports.",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Authentication",
            "description": "Sign in, sign out and the current account"
        },
        {
            "name": "Employees",
            "description": "Staff account management and client assignment (admin)"
        },
        {
            "name": "Profile",
            "description": "Employee self-service profile"
        },
        {
            "name": "Clients",
            "description": "Client records, form options and employee assignment"
        },
        {
            "name": "Work",
            "description": "Office login, todos and checkout"
        },
        {
            "name": "Reports",
            "description": "End-of-day reports as JSON, text or PDF"
        },
        {
            "name": "Admin",
            "description": "Admin dashboard statistics"
        }
    ]
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize database and provision the admin account."""
    logger.info("Starting up Business Dashboard API...")

    try:
        DatabaseManager.init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    db = SessionLocal()
    try:
        if ensure_admin_account(db) is None:
            logger.info("ADMIN_PASSWORD not set; skipping admin account provisioning")
    finally:
        db.close()


# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Perform cleanup tasks on shutdown."""
    logger.info("Shutting down Business Dashboard API...")


# Health check endpoint
@app.get("/", tags=["Health"])
def health_check():
    """
    Health check endpoint.

    Returns basic API status and version information.
    """
    return {
        "message": "Business Dashboard API is healthy",
        "version": API_VERSION,
        "status": "operational"
    }


@app.get("/health", tags=["Health"])
def detailed_health_check(db: Session = Depends(get_db)):
    """
    Detailed health check endpoint.

    Returns health status including database connectivity.
    """
    try:
        db.execute(text("SELECT 1")).scalar()
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy - database connection failed"
        )

    return {
        "status": "healthy",
        "version": API_VERSION,
        "database": "connected",
        "timestamp": timekeeping.utcnow().isoformat()
    }


# Include routers
app.include_router(auth.router, prefix="/api/v1")
app.include_router(employees.router, prefix="/api/v1")
app.include_router(profile.router, prefix="/api/v1")
app.include_router(clients.router, prefix="/api/v1")
app.include_router(work.router, prefix="/api/v1")
app.include_router(reports.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "dashboard.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
