import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fullservice.core.database import Base, build_engine, get_db
from fullservice.core.security import create_access_token
from fullservice.main import app
from fullservice.models.listing import Listing
from fullservice.models.payment_method import PaymentMethod
from fullservice.models.user import User

engine = build_engine("sqlite://", poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def app_db(db):
    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app_db):
    with TestClient(app_db) as c:
        yield c


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role="users", is_banned=False, password="secret1", **fields):
        counter["n"] += 1
        n = counter["n"]
        user = User(
            name=fields.get("name", f"User {n}"),
            username=fields.get("username", f"user{n}"),
            email=fields.get("email", f"user{n}@example.com"),
            password=password,
            role=role,
            is_banned=is_banned,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_listing(db):
    def _make(owner, name="Phone", price="100.00", images=None, is_active=True):
        from fullservice.models.listing_image import ListingImage

        listing = Listing(
            owner_id=owner.id,
            name=name,
            description=f"{name} description",
            price=price,
            is_active=is_active,
        )
        listing.images = [ListingImage(url=u, sort_order=i) for i, u in enumerate(images or [])]
        db.add(listing)
        db.flush()
        listing.target_number = f"T{listing.id:06d}"
        db.commit()
        db.refresh(listing)
        return listing

    return _make


@pytest.fixture
def make_method(db):
    def _make(owner, name="KBZ Pay", is_active=True):
        method = PaymentMethod(
            user_id=owner.id,
            payment_name=name,
            address="09-123456",
            is_active=is_active,
        )
        db.add(method)
        db.commit()
        db.refresh(method)
        return method

    return _make


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def headers():
    return auth_headers
