"""Shared fixtures for the studycards test suite."""

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from studycards.database import init_db
from studycards.schemas import Card
from studycards.store import InMemoryProgressStore, SqlAlchemyProgressStore


def make_card(card_id, course_id="bio101", difficulty=1):
    return Card(
        id=card_id,
        course_id=course_id,
        question=f"Question {card_id}?",
        answer=f"Answer {card_id}",
        difficulty=difficulty,
    )


@pytest.fixture
def now():
    return datetime(2026, 3, 10, 14, 30)


@pytest.fixture
def pool():
    return [make_card(f"c{i}") for i in range(1, 6)]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(params=["memory", "sql"])
def store(request, pool, session_factory):
    """Both reference adapters, preloaded with the card pool"""
    if request.param == "memory":
        return InMemoryProgressStore(pool)
    sql_store = SqlAlchemyProgressStore(session_factory)
    sql_store.add_cards(pool)
    return sql_store
