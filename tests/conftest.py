"""
Shared fixtures: in-memory SQLite database, users with tokens, and a
PayChangu client backed by httpx.MockTransport.
"""
import json
from datetime import timedelta
from decimal import Decimal

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from campus_gigs.main import app
from campus_gigs.core.security import create_access_token
from campus_gigs.db.base import Base
from campus_gigs.db.models import Gig, Plan, Subscription, User
from campus_gigs.db.session import get_db, utcnow
from campus_gigs.services.paychangu_client import PayChanguClient, get_payment_gateway


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    db = TestSessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


class FakePayChangu:
    """Records outgoing requests and answers with a canned response."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = {"status": "success", "data": {"checkout_url": "https://checkout.paychangu.test/abc"}}
        self.exception = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exception is not None:
            raise self.exception
        return httpx.Response(self.status_code, json=self.body)

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)

    def client(self) -> PayChanguClient:
        return PayChanguClient(
            secret_key="sk_test_123",
            base_url="https://api.paychangu.test",
            timeout=5,
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=test_engine)
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def fake_gateway():
    return FakePayChangu()


@pytest.fixture
def gateway(fake_gateway):
    return fake_gateway.client()


@pytest.fixture
def client(db, fake_gateway):
    """Test client wired to the test database and the fake gateway."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = fake_gateway.client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def plans(db):
    rows = [
        Plan(key="free", label="Free", price=Decimal("0"), max_posts=3),
        Plan(key="basic", label="Basic", price=Decimal("5000"), max_posts=5),
        Plan(key="pro", label="Pro", price=Decimal("15000"), max_posts=None),
    ]
    db.add_all(rows)
    db.commit()
    return {p.key: p for p in rows}


def _make_user(db, name, email, role):
    user = User(name=name, email=email, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def recruiter(db):
    return _make_user(db, "Rita Recruiter", "rita@example.com", "recruiter")


@pytest.fixture
def other_recruiter(db):
    return _make_user(db, "Omar Recruiter", "omar@example.com", "recruiter")


@pytest.fixture
def student(db):
    return _make_user(db, "Sam Student", "sam@example.com", "student")


@pytest.fixture
def admin(db):
    return _make_user(db, "Ada Admin", "ada@example.com", "admin")


def auth_headers(user) -> dict:
    token = create_access_token({"sub": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def recruiter_headers(recruiter):
    return auth_headers(recruiter)


@pytest.fixture
def student_headers(student):
    return auth_headers(student)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def gig(db, recruiter):
    gig = Gig(recruiter_id=recruiter.id, title="Design a poster", payment_amount=Decimal("10000"))
    db.add(gig)
    db.commit()
    db.refresh(gig)
    return gig


@pytest.fixture
def make_subscription(db):
    """Factory for subscriptions whose period started yesterday and runs 29 more days."""
    counter = {"n": 0}

    def _make(recruiter, plan="basic", status="active", tx_ref=None, created_offset=timedelta(0)):
        counter["n"] += 1
        now = utcnow()
        sub = Subscription(
            recruiter_id=recruiter.id,
            plan=plan,
            order_reference=tx_ref or f"sub_test_{counter['n']}",
            status=status,
            current_period_start=now - timedelta(days=1),
            current_period_end=now + timedelta(days=29),
            created_at=now + created_offset,
        )
        db.add(sub)
        db.commit()
        db.refresh(sub)
        return sub

    return _make


@pytest.fixture
def make_gigs(db):
    """Factory inserting ``count`` gigs for a recruiter."""
    def _make(recruiter, count, created_at=None):
        for i in range(count):
            db.add(Gig(
                recruiter_id=recruiter.id,
                title=f"Gig {i}",
                created_at=created_at or utcnow(),
            ))
        db.commit()

    return _make
