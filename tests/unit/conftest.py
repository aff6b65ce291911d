import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.ledger_store import LedgerStore
from src.domain.revenue import RevenueActivity


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def ledgers():
    """Ledgers by user_id backing the mocked ledger repository"""
    return {}


@pytest.fixture
def entries():
    """Ledger entries by idempotency key backing the mocked entry repository"""
    return {}


@pytest.fixture
def mock_ledger_repo(ledgers):
    """Ledger repository mock that keeps ledgers in a dict"""
    repo = MagicMock()

    async def get_by_user_id(user_id, for_update=False):
        return ledgers.get(user_id)

    async def create(ledger):
        ledgers[ledger.user_id] = ledger
        return ledger

    async def update(ledger):
        ledgers[ledger.user_id] = ledger
        return ledger

    repo.get_by_user_id = AsyncMock(side_effect=get_by_user_id)
    repo.create = AsyncMock(side_effect=create)
    repo.update = AsyncMock(side_effect=update)
    return repo


@pytest.fixture
def mock_entry_repo(entries):
    """Ledger entry repository mock that keeps entries in a dict"""
    repo = MagicMock()

    async def get_by_idempotency_key(key):
        return entries.get(key)

    async def create(entry):
        entries[entry.idempotency_key] = entry
        return entry

    repo.get_by_idempotency_key = AsyncMock(side_effect=get_by_idempotency_key)
    repo.create = AsyncMock(side_effect=create)
    return repo


@pytest.fixture
def ledger_store(mock_ledger_repo, mock_entry_repo):
    return LedgerStore(mock_ledger_repo, mock_entry_repo)


@pytest.fixture
def mock_notification_service():
    service = MagicMock()
    service.notify_user = AsyncMock(return_value=True)
    service.alert_operators = AsyncMock(return_value=True)
    return service


@pytest.fixture
def revenues():
    """Revenue records by reference backing the mocked revenue repository"""
    return {}


@pytest.fixture
def mock_revenue_repo(revenues):
    """Revenue repository mock that keeps records in a dict"""
    repo = MagicMock()

    async def get_by_reference(reference):
        return revenues.get(reference)

    async def create(revenue):
        revenues[revenue.reference] = revenue
        return revenue

    repo.get_by_reference = AsyncMock(side_effect=get_by_reference)
    repo.create = AsyncMock(side_effect=create)
    repo.get_totals = AsyncMock(
        return_value={activity: 0 for activity in RevenueActivity}
    )
    repo.get_total_commission = AsyncMock(return_value=0)
    return repo
