"""
Storefront Backend: Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Gateway tests run against a throwaway SQLite file (aiosqlite) whose
       schema is created from the ORM metadata. Route tests talk to the
       FastAPI app through httpx's ASGITransport with the gateway dependency
       pointed at that same database.

Fixture Hierarchy (all function-scoped):
    ├── db_engine:        async engine on a fresh SQLite file, tables created
    ├── session_factory:  session factory bound to db_engine
    ├── gateway:          PersistenceGateway (non-transactional writes)
    ├── tx_gateway:       PersistenceGateway (transactional writes)
    ├── seeded_gateway:   gateway with categories, products and users loaded
    ├── sample_order:     the two-item order "o1" used across tests
    └── test_client:      httpx AsyncClient wired to seeded_gateway
"""

import os

# Settings are read at import time: point them at SQLite BEFORE any
# storefront import so no test ever reaches a real server
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./storefront_test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["TRANSACTIONAL_WRITES"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storefront.database import Base, build_engine, build_session_factory
from storefront.middleware.logging import request_counter
from storefront.models.catalog import Category, Product
from storefront.models.user import User
from storefront.schemas.order import LineItem, Order
from storefront.services.gateway import PersistenceGateway, get_gateway


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Async engine on a fresh SQLite file with every table created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return build_session_factory(db_engine)


@pytest.fixture
def gateway(session_factory):
    return PersistenceGateway(session_factory)


@pytest.fixture
def tx_gateway(session_factory):
    return PersistenceGateway(session_factory, transactional_writes=True)


@pytest_asyncio.fixture
async def seeded_gateway(gateway, session_factory):
    """
    Gateway over a database holding:
        categories: c1 (Books), c2 (Games)
        products:   p1, p2 in c1; p3 in c2; p4 uncategorized
        users:      u1, u2 (with passwords that must never be returned)
    """
    async with session_factory() as session:
        async with session.begin():
            session.add_all([
                Category(id="c1", name="Books", description="Paper things"),
                Category(id="c2", name="Games", description=None),
                Product(id="p1", name="Novel", description="A story", price=12.5, category_id="c1"),
                Product(id="p2", name="Atlas", description=None, price=30.0, category_id="c1"),
                Product(id="p3", name="Chess", description="Board game", price=25.0, category_id="c2"),
                Product(id="p4", name="Gift card", description=None, price=10.0, category_id=None),
                User(id="u1", email="ada@example.com", name="Ada", password="secret-1"),
                User(id="u2", email="bob@example.com", name="Bob", password="secret-2"),
            ])
    return gateway


@pytest.fixture
def sample_order() -> Order:
    return Order(
        id="o1",
        user_id="u1",
        total_amount=30,
        items=[
            LineItem(product_id="p1", quantity=2),
            LineItem(product_id="p2", quantity=1),
        ],
    )


@pytest_asyncio.fixture
async def test_client(seeded_gateway):
    """
    HTTPX AsyncClient talking to the app in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from storefront.main import app

    app.dependency_overrides[get_gateway] = lambda: seeded_gateway
    request_counter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
