import os

# The db module refuses to import without a URL; tests bring their own engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import menudujour.models  # noqa: F401  registers every table
from menudujour.auth.dependencies import get_optional_user
from menudujour.db import get_db
from menudujour.main import app
from menudujour.models.base import Base
from menudujour.models.menu import Category, Product
from menudujour.models.restaurant import Restaurant
from menudujour.models.user import User


@dataclass
class MenuFixture:
    restaurant_id: int
    slug: str
    owner_id: str
    category_ids: Dict[str, str] = field(default_factory=dict)
    product_ids: Dict[str, str] = field(default_factory=dict)


@pytest_asyncio.fixture
async def engine():
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
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def chez_marcel(db) -> MenuFixture:
    """Chez Marcel: Entrée(0) / Plat(1), Soupe 6.00 and Steak 18.50, one owner."""
    restaurant = Restaurant(name="Chez Marcel", slug="chez-marcel-abc123")
    db.add(restaurant)
    await db.flush()

    owner = User(email="marcel@example.com", role="owner", restaurant_id=restaurant.id)
    entree = Category(restaurant_id=restaurant.id, name="Entrée", display_order=0)
    plat = Category(restaurant_id=restaurant.id, name="Plat", display_order=1)
    db.add_all([owner, entree, plat])
    await db.flush()

    soupe = Product(restaurant_id=restaurant.id, category_id=entree.id, name="Soupe", price=Decimal("6.00"))
    steak = Product(restaurant_id=restaurant.id, category_id=plat.id, name="Steak", price=Decimal("18.50"))
    db.add_all([soupe, steak])
    await db.commit()

    return MenuFixture(
        restaurant_id=restaurant.id,
        slug=restaurant.slug,
        owner_id=owner.id,
        category_ids={"Entrée": entree.id, "Plat": plat.id},
        product_ids={"Soupe": soupe.id, "Steak": steak.id},
    )


@pytest_asyncio.fixture
async def other_restaurant(db) -> MenuFixture:
    restaurant = Restaurant(name="Le Voisin", slug="le-voisin-zzz999")
    db.add(restaurant)
    await db.flush()
    tarte = Product(restaurant_id=restaurant.id, name="Tarte", price=Decimal("7.00"))
    db.add(tarte)
    await db.commit()
    return MenuFixture(
        restaurant_id=restaurant.id,
        slug=restaurant.slug,
        owner_id="",
        product_ids={"Tarte": tarte.id},
    )


@pytest.fixture
def login(db):
    """Set the user the API treats as logged in (None → anonymous)."""
    state = {"user_id": None}

    async def _current_user():
        if state["user_id"] is None:
            return None
        return await db.get(User, state["user_id"])

    def _login(user_id):
        state["user_id"] = user_id

    app.dependency_overrides[get_optional_user] = _current_user
    yield _login
    app.dependency_overrides.pop(get_optional_user, None)


@pytest_asyncio.fixture
async def client(db, login):
    async def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db, None)
