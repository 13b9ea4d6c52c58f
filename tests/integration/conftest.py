from decimal import Decimal

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error, Return
from src.app.services.invoice_source import InvoiceSource
from src.depends import get_invoice_source, get_session
from src.domain.invoice import Invoice
from src.domain.invoice_remark import InvoiceRemarkDocument  # noqa: F401  registers the table


class StubInvoiceSource(InvoiceSource):
    """Invoice source returning preset invoices or a preset error"""

    def __init__(self, invoices=None):
        self.invoices = list(invoices or [])
        self.error = None
        self.calls = 0

    async def fetch_invoices(self):
        self.calls += 1
        if self.error is not None:
            return Return.err(self.error)
        return Return.ok(list(self.invoices))

    def fail_with(self, code, message):
        self.error = Error(code=code, message=message)


def sample_invoices():
    return [
        Invoice(customer_code="C1", customer_name="Acme Ltd", invoice_date="2024-01-05T00:00:00",
                due_date="2024-02-04T00:00:00", invoice_number="IN100", amount=Decimal("100"), line_number=1),
        Invoice(customer_code="C1", customer_name="Acme Ltd", invoice_date="2024-01-10T00:00:00",
                due_date="2024-02-09T00:00:00", invoice_number="IN200", amount=Decimal("200"), line_number=1),
        Invoice(customer_code="C2", customer_name="Globex", invoice_date="2024-01-12T00:00:00",
                due_date="2024-02-11T00:00:00", invoice_number="IN300", amount=Decimal("300"), line_number=1),
    ]


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite engine shared by every connection of one test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def invoice_source():
    return StubInvoiceSource(sample_invoices())


@pytest_asyncio.fixture
async def client(db_session, invoice_source):
    """Create test client with session and ERP overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_invoice_source] = lambda: invoice_source

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
