"""
Shared fixtures: in-memory database, storage facade and fake redis
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CACHE_ENABLED", "false")

from datetime import datetime

import fakeredis
import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.core.cache import UserCache
from app.core.db import Base, create_session_factory
from app.schemas.card_template import CardTemplateCreate
from app.schemas.event import EventCreate
from app.schemas.user import UserCreate
from app.services.storage import new_storage

@pytest.fixture
def engine():
    """Single shared in-memory connection so every session sees the same data"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()

@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)

@pytest.fixture
def storage(session_factory):
    return new_storage(session_factory)

@pytest.fixture
def redis_client():
    return fakeredis.FakeRedis(decode_responses=True)

@pytest.fixture
def user_cache(redis_client):
    return UserCache(redis_client, ttl_seconds=60)

@pytest.fixture
def owner(storage):
    return storage.users.create(UserCreate(username="alice", email="alice@example.com"))

@pytest.fixture
def other_owner(storage):
    return storage.users.create(UserCreate(username="bob", email="bob@example.com"))

@pytest.fixture
def template(storage):
    return storage.card_templates.create(CardTemplateCreate(image_path="templates/gold_wedding.png"))

@pytest.fixture
def event(storage, owner, template):
    return storage.events.create(EventCreate(
        name="Test Wedding",
        date=datetime(2024, 6, 15, 18, 0),
        location="Grand Hall",
        card_template_id=template.id,
        user_id=owner.id,
    ))
