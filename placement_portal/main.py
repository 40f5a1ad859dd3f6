"""
Campus Placement Portal - Main Application

FastAPI backend with:
- PostgreSQL for profile sections, users, roles and attendance
- MongoDB for resume versions, the analytics log and file buckets
- A hosted language model for resume content, ATS scoring and cover letters
- JWT authentication with role-based navigation

Run: uvicorn placement_portal.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from placement_portal.api import api_router
from placement_portal.core.config import get_settings
from placement_portal.core.errors import PlacementError
from placement_portal.core.logging_config import configure_logging
from placement_portal.db.mongodb import init_mongo_indexes, test_mongo_connection
from placement_portal.db.postgres import test_postgres_connection
from placement_portal.services.sections import SectionRowNotFound

settings = get_settings()
configure_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Campus Placement Portal",
    description="""
    Placement and campus management for students, faculty and administrators.

    ## Features
    - **Profile**: personal info plus seven section editors, completeness gate
    - **Resume**: AI content generation, ATS analysis, PDF download, cover letters
    - **Documents**: upload, text extraction, stored-file parsing
    - **Coding Practice**: code execution through a Judge0-compatible service
    - **Attendance & Analytics**: faculty marking, student dashboards
    - **Navigation**: role-based menus
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware (open, as the browser client is served elsewhere)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(PlacementError)
async def placement_error_handler(request: Request, exc: PlacementError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(SectionRowNotFound)
async def section_row_not_found_handler(request: Request, exc: SectionRowNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "Campus Placement Portal", "docs": "/docs"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "postgres": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
