import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from tinycrm.main import app
from tinycrm.database import Base, configure_engine, get_db
from tinycrm.api.deps import get_password_hash
from tinycrm.models.user import User
from tinycrm.services.repository import Repository

TEST_USERNAME = "admin"
TEST_PASSWORD = "testpassword123"


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """Fresh SQLite file per test, foreign keys enforced."""
    engine = configure_engine(
        create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_db(session_factory):
    """Session for arranging data and checking the store directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def repo(test_db: AsyncSession) -> Repository:
    return Repository(test_db)


@pytest_asyncio.fixture
async def test_user(test_db: AsyncSession):
    """Create a test user (low bcrypt cost keeps the suite fast)."""
    user = User(
        username=TEST_USERNAME,
        password_hash=get_password_hash(TEST_PASSWORD, rounds=4),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest_asyncio.fixture
async def client(session_factory):
    """Test client; every request gets its own session, like production."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def authenticated_client(client: AsyncClient, test_user: User):
    """Client sending valid Basic credentials."""
    client.auth = (TEST_USERNAME, TEST_PASSWORD)
    return client


@pytest_asyncio.fixture
async def base_records(repo: Repository) -> dict:
    """Issuer, client, two products (10.50 and 3.25) and a remit record."""
    from decimal import Decimal
    from tinycrm.schemas import CompanyCreate, ProductCreate, RemitInformationIn

    company = await repo.create_company(
        CompanyCreate(name="Test Company Ltd", document="12.345.678/0001-90", address="123 Test Street")
    )
    client = await repo.create_company(
        CompanyCreate(name="Client Co  Ltda", document="98.765.432/0001-10", address="456 Client Ave")
    )
    widget = await repo.create_product(ProductCreate(name="Widget", price=Decimal("10.50")))
    service = await repo.create_product(
        ProductCreate(name="Service Hour", description="Support", price=Decimal("3.25"))
    )
    remit = await repo.create_remit_information(
        RemitInformationIn(
            name="Main account",
            lines=[{"key": "bank", "value": "Test Bank"}, {"key": "account", "value": "123456789"}],
        )
    )
    return {
        "company_id": company.id,
        "client_id": client.id,
        "widget_id": widget.id,
        "service_id": service.id,
        "remit_information_id": remit.id,
    }
