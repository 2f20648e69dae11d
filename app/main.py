"""
FastAPI Main Application
Exam profiles, study-time allocation and exam templates
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from pathlib import Path
import logging
from typing import AsyncGenerator

from app.config import settings
from app.core.logging import setup_logging
from app.infrastructure.db.database import init_db, close_db
from app.domain.services.allocation_engine import AllocationEngine
from app.domain.services.template_catalog import ExamTemplateCatalog

# Configure logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


# Global instances
allocation_engine: AllocationEngine | None = None
template_catalog: ExamTemplateCatalog | None = None


def resolve_templates_file() -> Path:
    path = Path(settings.EXAM_TEMPLATES_FILE)
    return path if path.is_absolute() else PROJECT_ROOT / path


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Handles startup and shutdown of all services
    """
    global allocation_engine, template_catalog

    # ===================
    # STARTUP
    # ===================
    logger.info("=" * 60)
    logger.info("Starting Study Planner API")
    logger.info("=" * 60)

    # 1. Initialize database
    logger.info("Step 1/3: Initializing database...")
    await init_db()
    logger.info("Database initialized")

    # 2. Load exam templates
    logger.info("Step 2/3: Loading exam templates...")
    template_catalog = ExamTemplateCatalog(resolve_templates_file())
    template_catalog.load()
    logger.info(f"   Templates: {len(template_catalog.list_public())} public")

    # 3. Initialize domain engines
    logger.info("Step 3/3: Initializing allocation engine...")
    allocation_engine = AllocationEngine(strict_checks=settings.STRICT_ALLOCATION_CHECKS)
    logger.info(
        f"Allocation engine ready (strict checks: {settings.STRICT_ALLOCATION_CHECKS}, "
        f"timezone: {settings.TIMEZONE})"
    )

    logger.info(f"API Server: http://{settings.API_HOST}:{settings.API_PORT}")
    logger.info(f"API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")

    yield

    # ===================
    # SHUTDOWN
    # ===================
    logger.info("Shutting down Study Planner API...")
    await close_db()
    logger.info("Database connections closed")


# Create FastAPI app
app = FastAPI(
    title="Study Planner - Exam Allocation",
    description="Exam profiles and weekly study-time allocation per subject",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Study Planner API",
        "version": "1.0.0",
        "docs": "/docs"
    }


# Import and include routers
from app.api.routes import allocation, exam_profiles, exam_templates, health

app.include_router(health.router, tags=["Health"])
app.include_router(exam_profiles.router, prefix="/api/v1/exam-profiles", tags=["Exam Profiles"])
app.include_router(allocation.router, prefix="/api/v1/allocation", tags=["Allocation"])
app.include_router(exam_templates.router, prefix="/api/v1/exam-templates", tags=["Exam Templates"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
