import os
import sys
from pathlib import Path

# Bootstrap to ensure tests can import app modules without modifying app import paths.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Settings require a secret; it has to be present before any app import.
os.environ.setdefault("JWT_SECRET", "test-secret-for-ticket-desk-suite-0123456789")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Base
from app.schemas.actor import Actor
from app.services.access_policy import AccessPolicy
from app.services.notifications import NotificationFanout
from app.services.stats import StatsAggregator
from app.services.ticket_service import TicketService
from app.services.ticket_store import TicketStore


class FakeDirectory:
    """In-memory roster that records every delivered notice."""

    def __init__(self, online=(), operators=()):
        self.online = {actor.identity: actor for actor in online}
        self.operators = {name.lower() for name in operators}
        self.sent = []

    def online_actors(self):
        return list(self.online.values())

    def is_online(self, identity):
        return identity in self.online

    def is_operator(self, identity):
        return identity.lower() in self.operators

    def send(self, identity, notice):
        if not self.is_online(identity):
            return False
        self.sent.append((identity, notice))
        return True

    def connect(self, actor):
        self.online[actor.identity] = actor

    def disconnect(self, identity):
        self.online.pop(identity, None)

    def recipients(self):
        return [identity for identity, _ in self.sent]


class StubPermissions:
    def __init__(self, granted=()):
        self.granted = set(granted)
        self.calls = []

    def has_permission(self, identity, node):
        self.calls.append((identity, node))
        return identity in self.granted


@pytest.fixture(scope="function")
def engine():
    """Provides a fresh in-memory SQLite engine with the tickets table."""
    db_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def store(session_factory):
    return TicketStore(session_factory)


@pytest.fixture
def directory():
    return FakeDirectory(
        online=[
            Actor(identity="alice"),
            Actor(identity="bob"),
            Actor(identity="carol"),
            Actor(identity="staff"),
        ],
        operators=["staff"],
    )


@pytest.fixture
def permissions():
    return StubPermissions()


@pytest.fixture
def policy(directory, permissions):
    return AccessPolicy(directory, permissions, mode="dedicated")


@pytest.fixture
def fanout(directory, policy):
    return NotificationFanout(directory, policy)


@pytest.fixture
def service(store, policy, fanout):
    return TicketService(store, policy, fanout, StatsAggregator(5), server_name="lobby")


@pytest.fixture
def make_directory():
    return FakeDirectory


@pytest.fixture
def make_permissions():
    return StubPermissions
