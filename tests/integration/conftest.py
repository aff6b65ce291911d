import itertools
import json

import httpx
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers tables on SQLModel.metadata
from src.depends import get_session, get_payment_provider, get_notification_service
from src.adapter.services.notification_service import LoggingNotificationService
from src.adapter.services.paystack_client import PaystackClient
from src.domain.ledger import Ledger
from src.domain.user import User
from tests.integration.helpers import PAYSTACK_SECRET


class FakePaystackAPI:
    """In-process stand-in for the Paystack REST API, served through httpx.MockTransport"""

    def __init__(self):
        self.requests = []
        self.resolvable = True
        self.fail_transfers = False
        self.customers = {}
        self._ids = itertools.count(1)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        body = json.loads(request.content) if request.content else {}

        if path == "/bank/resolve":
            if not self.resolvable:
                return httpx.Response(422, json={"status": False, "message": "Could not resolve account name"})
            return httpx.Response(200, json={"status": True, "data": {"account_name": "ADA OBI"}})

        if path == "/transferrecipient":
            return httpx.Response(
                201,
                json={"status": True, "data": {"recipient_code": f"RCP_{body['account_number']}"}},
            )

        if path == "/transfer":
            if self.fail_transfers:
                return httpx.Response(400, json={"status": False, "message": "Insufficient balance"})
            return httpx.Response(
                200,
                json={
                    "status": True,
                    "data": {
                        "transfer_code": f"TRF_{next(self._ids)}",
                        "reference": body["reference"],
                        "status": "pending",
                    },
                },
            )

        if path == "/customer" and request.method == "POST":
            customer = {
                "customer_code": f"CUS_{next(self._ids)}",
                "email": body["email"],
                "subscriptions": [],
            }
            self.customers[body["email"]] = customer
            return httpx.Response(200, json={"status": True, "data": customer})

        if path.startswith("/customer/"):
            customer = self.customers.get(path[len("/customer/"):])
            if customer is None:
                return httpx.Response(404, json={"status": False, "message": "Customer not found"})
            return httpx.Response(200, json={"status": True, "data": customer})

        if path == "/transaction/initialize":
            reference = f"T{next(self._ids)}"
            return httpx.Response(
                200,
                json={
                    "status": True,
                    "data": {
                        "authorization_url": f"https://checkout.paystack.com/{reference}",
                        "access_code": reference,
                        "reference": reference,
                    },
                },
            )

        return httpx.Response(404, json={"status": False})

    def paths(self):
        return [r.url.path for r in self.requests]


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a fresh SQLite database per test"""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'payouts_test.db'}", echo=False, future=True
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
def paystack_api():
    return FakePaystackAPI()


@pytest_asyncio.fixture
def provider(paystack_api):
    return PaystackClient(
        secret_key=PAYSTACK_SECRET,
        base_url="https://api.paystack.test",
        transport=httpx.MockTransport(paystack_api),
    )


@pytest_asyncio.fixture
async def make_user(db_session):
    """Factory persisting a user, optionally with earnings"""

    async def _make_user(email: str, total_earnings: int = 0) -> User:
        user = User(email=email, full_name="Test Seller")
        db_session.add(user)
        if total_earnings:
            db_session.add(Ledger(user_id=user.id, total_earnings=total_earnings))
        await db_session.commit()
        return user

    return _make_user


@pytest_asyncio.fixture
async def client(db_session, provider):
    """Create test client with database session and provider overrides"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_payment_provider] = lambda: provider
    app.dependency_overrides[get_notification_service] = lambda: LoggingNotificationService()

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
