"""Shared fixtures: in-memory database, seeded parties, API client and tokens."""

import os

# Keep tests off any real database and secret
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from auth.dependencies import create_access_token
from database.config import get_db, init_db
from database.models import User, UserType, Business, Creator, Workspace
from services.proposal_store import ProposalStore


BUDGET_CENTS = 100000


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


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def _add_business(db, email, company, budget_cents):
    user = User(email=email, name=company, user_type=UserType.BUSINESS)
    db.add(user)
    db.flush()
    business = Business(user_id=user.id, company_name=company, budget_cents=budget_cents)
    db.add(business)
    db.flush()
    return business


def _add_creator(db, email, slug):
    user = User(email=email, name=slug, user_type=UserType.CREATOR)
    db.add(user)
    db.flush()
    creator = Creator(user_id=user.id, bio=f"{slug} bio", categories=["lifestyle"])
    db.add(creator)
    db.flush()
    workspace = Workspace(user_id=user.id, creator_id=creator.id, name=slug.title(), slug=slug)
    db.add(workspace)
    db.flush()
    return creator, workspace


def seed_parties(db):
    """Two businesses and two creators, each creator with one workspace."""
    business = _add_business(db, "brand@example.com", "Acme Coffee", BUDGET_CENTS)
    rival = _add_business(db, "rival@example.com", "Rival Tea", BUDGET_CENTS)
    creator, workspace = _add_creator(db, "creator@example.com", "jane")
    other_creator, other_workspace = _add_creator(db, "other@example.com", "sam")
    db.commit()

    return SimpleNamespace(
        business=business,
        rival=rival,
        creator=creator,
        workspace=workspace,
        other_creator=other_creator,
        other_workspace=other_workspace,
        business_email="brand@example.com",
        rival_email="rival@example.com",
        creator_email="creator@example.com",
        other_creator_email="other@example.com",
    )


@pytest.fixture
def seed(db):
    return seed_parties(db)


@pytest.fixture
def make_proposal(db, seed):
    """Create a pending proposal from the seeded business to the seeded creator."""
    def _make(price_cents=20000, title="Summer Sale", start=None, end=None, business=None):
        now = datetime.utcnow()
        return ProposalStore(db).create_proposal(
            business=business or seed.business,
            creator_id=seed.creator.id,
            workspace_id=seed.workspace.id,
            title=title,
            url="https://acme.example.com/summer",
            start_date=start or now,
            end_date=end or now + timedelta(days=30),
            price_cents=price_cents,
        )
    return _make


@pytest.fixture
def client(session_factory):
    from server import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth_headers(email):
    return {"Authorization": f"Bearer {create_access_token(email)}"}
