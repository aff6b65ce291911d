"""Unit tests for InitiatePayout use case

Tests cover:
- Reservation then pending payout, committed before the transfer starts
- NO_PAYOUT_ACCOUNT and INSUFFICIENT_BALANCE leave the ledger untouched
- Provider failure releases the reservation and fails the payout
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.errors import ErrorCode, ProviderError
from src.app.services.payment_provider import TransferDTO
from src.app.use_cases.payouts import InitiatePayout, InitiatePayoutCommandDTO
from src.domain.ledger import Ledger
from src.domain.payout import PayoutStatus
from src.domain.payout_account import PayoutAccount


@pytest.fixture
def active_account():
    return PayoutAccount(
        id="acc_1",
        user_id="user_1",
        account_number="0123456789",
        account_name="Ada Obi",
        bank_code="058",
        bank_name="GTBank",
        recipient_code="RCP_abc",
        active=True,
    )


@pytest.fixture
def mock_account_repo(active_account):
    repo = MagicMock()
    repo.get_active = AsyncMock(return_value=active_account)
    return repo


@pytest.fixture
def payouts():
    return {}


@pytest.fixture
def mock_payout_repo(payouts):
    repo = MagicMock()

    async def create(payout):
        payouts[payout.reference] = payout
        return payout

    async def get_by_reference(reference, for_update=False):
        return payouts.get(reference)

    repo.create = AsyncMock(side_effect=create)
    repo.get_by_reference = AsyncMock(side_effect=get_by_reference)
    repo.update = AsyncMock(side_effect=lambda payout: payout)
    return repo


@pytest.fixture
def mock_provider():
    provider = MagicMock()

    async def initiate_transfer(amount, recipient_code, reference):
        return TransferDTO(transfer_code="TRF_1", reference=reference, status="pending")

    provider.initiate_transfer = AsyncMock(side_effect=initiate_transfer)
    return provider


@pytest.fixture
def use_case(mock_uow, ledger_store, mock_account_repo, mock_payout_repo, mock_provider):
    return InitiatePayout(mock_uow, ledger_store, mock_account_repo, mock_payout_repo, mock_provider)


@pytest.mark.asyncio
class TestInitiatePayout:
    async def test_successful_payout_reserves_and_starts_transfer(
        self, use_case, ledgers, payouts, mock_provider, mock_uow
    ):
        """
        Given: total_earnings=10000, nothing withdrawn or pending
        When: 5000 is withdrawn
        Then: pending=5000, a pending payout exists and the transfer is started
        """
        # Arrange
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000)

        # Act
        result = await use_case.execute(InitiatePayoutCommandDTO(user_id="user_1", amount=5000))

        # Assert
        assert result.is_ok()
        assert result.value.status == "pending"
        assert result.value.transfer_code == "TRF_1"
        assert result.value.amount == 5000

        assert ledgers["user_1"].pending == 5000
        assert ledgers["user_1"].withdrawn_earnings == 0

        payout = payouts[result.value.reference]
        assert payout.status is PayoutStatus.PENDING
        assert payout.account_id == "acc_1"

        mock_provider.initiate_transfer.assert_called_once_with(
            5000, "RCP_abc", result.value.reference
        )
        assert mock_uow.commit.call_count == 2

    async def test_active_account_is_locked(self, use_case, ledgers, mock_account_repo):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000)

        await use_case.execute(InitiatePayoutCommandDTO(user_id="user_1", amount=1000))

        mock_account_repo.get_active.assert_called_once_with("user_1", for_update=True)

    async def test_reservation_committed_before_transfer(
        self, use_case, ledgers, mock_provider, mock_uow
    ):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000)

        async def initiate_transfer(amount, recipient_code, reference):
            assert mock_uow.commit.call_count == 1
            return TransferDTO(transfer_code="TRF_1", reference=reference, status="pending")

        mock_provider.initiate_transfer.side_effect = initiate_transfer

        result = await use_case.execute(InitiatePayoutCommandDTO(user_id="user_1", amount=1000))

        assert result.is_ok()

    async def test_no_active_account(self, use_case, ledgers, mock_account_repo, mock_provider):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000)
        mock_account_repo.get_active.return_value = None

        result = await use_case.execute(InitiatePayoutCommandDTO(user_id="user_1", amount=5000))

        assert result.is_err()
        assert result.error.code == ErrorCode.NO_PAYOUT_ACCOUNT
        assert ledgers["user_1"].pending == 0
        mock_provider.initiate_transfer.assert_not_called()

    async def test_insufficient_balance_leaves_ledger_unchanged(
        self, use_case, ledgers, payouts, mock_provider, mock_uow
    ):
        """
        Given: available = 3000
        When: 3001 is withdrawn
        Then: INSUFFICIENT_BALANCE, no payout, no transfer, ledger unchanged
        """
        ledgers["user_1"] = Ledger(
            user_id="user_1", total_earnings=10000, withdrawn_earnings=5000, pending=2000
        )

        result = await use_case.execute(InitiatePayoutCommandDTO(user_id="user_1", amount=3001))

        assert result.is_err()
        assert result.error.code == ErrorCode.INSUFFICIENT_BALANCE
        assert ledgers["user_1"].pending == 2000
        assert ledgers["user_1"].withdrawn_earnings == 5000
        assert payouts == {}
        mock_provider.initiate_transfer.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_provider_error_releases_reservation(
        self, use_case, ledgers, payouts, mock_provider
    ):
        """
        Given: The provider times out
        When: A payout is initiated
        Then: PROVIDER_ERROR, payout failed, pending back to 0
        """
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000)
        mock_provider.initiate_transfer.side_effect = ProviderError("Paystack request timed out")

        result = await use_case.execute(InitiatePayoutCommandDTO(user_id="user_1", amount=5000))

        assert result.is_err()
        assert result.error.code == ErrorCode.PROVIDER_ERROR
        assert ledgers["user_1"].pending == 0
        assert ledgers["user_1"].available == 10000

        (payout,) = payouts.values()
        assert payout.status is PayoutStatus.FAILED
        assert payout.failure_reason == "Paystack request timed out"

    async def test_each_payout_gets_a_fresh_reference(self, use_case, ledgers):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000)

        first = await use_case.execute(InitiatePayoutCommandDTO(user_id="user_1", amount=1000))
        second = await use_case.execute(InitiatePayoutCommandDTO(user_id="user_1", amount=1000))

        assert first.value.reference != second.value.reference
        assert ledgers["user_1"].pending == 2000
