from datetime import date, timedelta
from pathlib import Path
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.infrastructure.db.database import Base, get_db
from app.infrastructure.db import models  # noqa: F401
from app.api.routes import allocation, exam_profiles, exam_templates
from app.domain.services.allocation_engine import AllocationEngine
from app.domain.services.template_catalog import ExamTemplateCatalog
from app.utils.time import today_local
import app.main as app_main


TEMPLATES_FILE = Path(__file__).resolve().parents[1] / "config" / "exam_templates.yml"


@pytest.fixture()
async def db_engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        future=True,
        echo=False
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture()
def template_catalog() -> ExamTemplateCatalog:
    catalog = ExamTemplateCatalog(TEMPLATES_FILE)
    catalog.load()
    return catalog


@pytest.fixture()
async def app(db_session, template_catalog, monkeypatch) -> FastAPI:
    app = FastAPI()
    app.include_router(exam_profiles.router, prefix="/api/v1/exam-profiles", tags=["Exam Profiles"])
    app.include_router(allocation.router, prefix="/api/v1/allocation", tags=["Allocation"])
    app.include_router(exam_templates.router, prefix="/api/v1/exam-templates", tags=["Exam Templates"])

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    # Routes read the engine and catalog from app.main
    monkeypatch.setattr(app_main, "allocation_engine", AllocationEngine(strict_checks=True))
    monkeypatch.setattr(app_main, "template_catalog", template_catalog)

    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def exam_in_ten_weeks() -> date:
    """Exam date exactly 10 weeks after today in the planner timezone"""
    return today_local() + timedelta(weeks=10)
