"""
Fake Stack Overflow Backend — Test Configuration (conftest.py)
================================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite) with the
       tables created from the ORM metadata; endpoint tests run the FastAPI
       app through HTTPX with get_db_session pointed at that database.

Fixture Hierarchy (all function-scoped):
    db_engine   → in-memory database with tables
    ├── db_session  → AsyncSession for service tests
    ├── test_client → HTTPX AsyncClient for endpoint tests
    └── seeded_forum → a few questions/answers/tags with fixed timestamps
"""

import os
from datetime import datetime, timedelta, timezone

# Settings are read at import time: point them at SQLite before any fakeso import
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fakeso.database import Base, get_db_session
from fakeso.models.question import Question  # noqa: F401  (registers every table)
from fakeso.schemas.answer import AnswerCreate
from fakeso.schemas.question import QuestionCreate
from fakeso.services.answer_service import answer_service
from fakeso.services.question_service import question_service

BASE_TIME = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def at(minutes: int) -> datetime:
    """BASE_TIME shifted by `minutes`; keeps test orderings explicit."""
    return BASE_TIME + timedelta(minutes=minutes)


@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite engine shared by every session of one test.

    StaticPool keeps a single connection, so the database lives as long as
    the engine and every session sees the same data.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """A session for calling services directly."""
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(db_engine):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    get_db_session is overridden with the same commit/rollback behavior,
    backed by the test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from fakeso.main import create_app

    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db_session():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def seeded_forum(db_session):
    """
    Four questions with fixed ask times (q1 oldest … q4 newest):

        q1  "How to write a for loop in JavaScript?"   [javascript]        answered at +50
        q2  "Looping over a dict"                       [python]            answered at +20, +60
        q3  "React state not updating"                  [javascript, react] unanswered
        q4  "Is looping in Rust fast?"                  [rust]              unanswered

    Returns a dict of name → QuestionResponse.
    """
    q1 = await question_service.add_question(db_session, QuestionCreate(
        title="How to write a for loop in JavaScript?",
        text="I need a loop that counts to ten.",
        tags=["javascript"],
        asked_by="alice",
        ask_date_time=at(0),
    ))
    q2 = await question_service.add_question(db_session, QuestionCreate(
        title="Looping over a dict",
        text="What is the idiomatic way to iterate keys and values?",
        tags=["python"],
        asked_by="bob",
        ask_date_time=at(10),
    ))
    q3 = await question_service.add_question(db_session, QuestionCreate(
        title="React state not updating",
        text="setState does nothing inside my effect.",
        tags="JavaScript react",
        asked_by="carol",
        ask_date_time=at(30),
    ))
    q4 = await question_service.add_question(db_session, QuestionCreate(
        title="Is looping in Rust fast?",
        text="Iterators versus while loops, which compiles better?",
        tags=["rust"],
        asked_by="dave",
        ask_date_time=at(40),
    ))

    await answer_service.add_answer(db_session, AnswerCreate(
        qid=q2.id, text="Use dict.items().", ans_by="erin", ans_date_time=at(20),
    ))
    await answer_service.add_answer(db_session, AnswerCreate(
        qid=q1.id, text="for (let i = 0; i < 10; i++) {}", ans_by="frank", ans_date_time=at(50),
    ))
    await answer_service.add_answer(db_session, AnswerCreate(
        qid=q2.id, text="Or iterate the dict directly for keys.", ans_by="grace", ans_date_time=at(60),
    ))
    await db_session.commit()

    return {"q1": q1, "q2": q2, "q3": q3, "q4": q4}
