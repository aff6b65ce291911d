"""Unit tests for LedgerStore

Tests cover:
- Credits create the ledger on first use and are idempotent
- Reservations never exceed available earnings
- Settlement moves pending to withdrawn or back to available
- total_earnings - withdrawn_earnings - pending >= 0 after every operation
"""

import pytest

from src.app.errors import ErrorCode
from src.domain.ledger import Ledger
from src.domain.ledger_entry import EntryType
from src.domain.payout import PayoutStatus


def assert_balanced(ledger: Ledger):
    assert ledger.total_earnings - ledger.withdrawn_earnings - ledger.pending >= 0
    assert ledger.pending >= 0
    assert ledger.withdrawn_earnings >= 0


@pytest.mark.asyncio
class TestCredit:
    async def test_first_credit_creates_ledger(self, ledger_store, ledgers, mock_ledger_repo):
        """
        Given: Seller has never earned
        When: A sale is credited
        Then: A ledger is created holding the amount
        """
        # Act
        result = await ledger_store.credit("seller_1", 7500, "charge:ref_1:prod_1")

        # Assert
        assert result.is_ok()
        assert result.value.entry_type is EntryType.CREDIT
        assert result.value.total_earnings_after == 7500
        assert ledgers["seller_1"].total_earnings == 7500
        mock_ledger_repo.create.assert_called_once()

    async def test_repeated_key_credits_once(self, ledger_store, ledgers):
        """
        Given: A credit was applied
        When: The same idempotency key is credited again
        Then: The original entry is returned and earnings are unchanged
        """
        first = await ledger_store.credit("seller_1", 5000, "charge:ref_1:prod_1")
        second = await ledger_store.credit("seller_1", 5000, "charge:ref_1:prod_1")

        assert second.is_ok()
        assert second.value is first.value
        assert ledgers["seller_1"].total_earnings == 5000

    async def test_rejects_non_positive_amount(self, ledger_store, ledgers):
        result = await ledger_store.credit("seller_1", 0, "charge:ref_1:prod_1")

        assert result.is_err()
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert ledgers == {}


@pytest.mark.asyncio
class TestReserveForWithdrawal:
    async def test_reserve_moves_available_to_pending(self, ledger_store, ledgers):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000)

        result = await ledger_store.reserve_for_withdrawal("user_1", 5000, "payout_ref_1")

        assert result.is_ok()
        assert ledgers["user_1"].pending == 5000
        assert ledgers["user_1"].available == 5000
        assert_balanced(ledgers["user_1"])

    async def test_reserve_more_than_available_leaves_ledger_unchanged(
        self, ledger_store, ledgers, entries
    ):
        """
        Given: available = 3000
        When: 3001 is reserved
        Then: INSUFFICIENT_BALANCE and nothing changes
        """
        ledgers["user_1"] = Ledger(
            user_id="user_1", total_earnings=10000, withdrawn_earnings=5000, pending=2000
        )

        result = await ledger_store.reserve_for_withdrawal("user_1", 3001, "payout_ref_1")

        assert result.is_err()
        assert result.error.code == ErrorCode.INSUFFICIENT_BALANCE
        assert ledgers["user_1"].pending == 2000
        assert ledgers["user_1"].withdrawn_earnings == 5000
        assert entries == {}

    async def test_reserve_exact_available_succeeds(self, ledger_store, ledgers):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=4000, withdrawn_earnings=1000)

        result = await ledger_store.reserve_for_withdrawal("user_1", 3000, "payout_ref_1")

        assert result.is_ok()
        assert ledgers["user_1"].available == 0
        assert_balanced(ledgers["user_1"])

    async def test_reserve_without_ledger_is_insufficient(self, ledger_store):
        result = await ledger_store.reserve_for_withdrawal("nobody", 100, "payout_ref_1")

        assert result.is_err()
        assert result.error.code == ErrorCode.INSUFFICIENT_BALANCE

    async def test_reserve_same_reference_twice_reserves_once(self, ledger_store, ledgers):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000)

        await ledger_store.reserve_for_withdrawal("user_1", 4000, "payout_ref_1")
        result = await ledger_store.reserve_for_withdrawal("user_1", 4000, "payout_ref_1")

        assert result.is_ok()
        assert ledgers["user_1"].pending == 4000


@pytest.mark.asyncio
class TestSettleWithdrawal:
    async def test_completed_moves_pending_to_withdrawn(self, ledger_store, ledgers, entries):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000, pending=5000)

        result = await ledger_store.settle_withdrawal(
            "user_1", 5000, PayoutStatus.COMPLETED, "payout_ref_1"
        )

        assert result.is_ok()
        assert ledgers["user_1"].pending == 0
        assert ledgers["user_1"].withdrawn_earnings == 5000
        assert entries["settle:payout_ref_1"].entry_type is EntryType.SETTLE_COMPLETED

    @pytest.mark.parametrize("outcome", [PayoutStatus.FAILED, PayoutStatus.REVERSED])
    async def test_failed_or_reversed_releases_pending(self, ledger_store, ledgers, entries, outcome):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000, pending=5000)

        result = await ledger_store.settle_withdrawal("user_1", 5000, outcome, "payout_ref_1")

        assert result.is_ok()
        assert ledgers["user_1"].pending == 0
        assert ledgers["user_1"].withdrawn_earnings == 0
        assert ledgers["user_1"].available == 10000
        assert entries["settle:payout_ref_1"].entry_type is EntryType.RELEASE

    async def test_settling_twice_applies_once(self, ledger_store, ledgers):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000, pending=5000)

        await ledger_store.settle_withdrawal("user_1", 5000, PayoutStatus.COMPLETED, "payout_ref_1")
        result = await ledger_store.settle_withdrawal(
            "user_1", 5000, PayoutStatus.COMPLETED, "payout_ref_1"
        )

        assert result.is_ok()
        assert ledgers["user_1"].withdrawn_earnings == 5000
        assert ledgers["user_1"].pending == 0

    async def test_pending_outcome_is_rejected(self, ledger_store, ledgers):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000, pending=5000)

        result = await ledger_store.settle_withdrawal(
            "user_1", 5000, PayoutStatus.PENDING, "payout_ref_1"
        )

        assert result.is_err()
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert ledgers["user_1"].pending == 5000

    async def test_settlement_larger_than_pending_is_rejected(self, ledger_store, ledgers):
        ledgers["user_1"] = Ledger(user_id="user_1", total_earnings=10000, pending=1000)

        result = await ledger_store.settle_withdrawal(
            "user_1", 5000, PayoutStatus.COMPLETED, "payout_ref_1"
        )

        assert result.is_err()
        assert result.error.code == ErrorCode.VALIDATION_ERROR
        assert ledgers["user_1"].withdrawn_earnings == 0

    async def test_missing_ledger(self, ledger_store):
        result = await ledger_store.settle_withdrawal(
            "nobody", 5000, PayoutStatus.COMPLETED, "payout_ref_1"
        )

        assert result.is_err()
        assert result.error.code == ErrorCode.LEDGER_NOT_FOUND


@pytest.mark.asyncio
class TestLedgerInvariant:
    async def test_invariant_holds_across_mixed_operations(self, ledger_store, ledgers):
        """
        Given: A sequence of credits, reservations and settlements, some rejected
        When: Each operation is applied
        Then: available never goes negative
        """
        operations = [
            ("credit", 8000, "c1", None),
            ("reserve", 5000, "p1", None),
            ("reserve", 4000, "p2", None),  # rejected, only 3000 available
            ("settle", 5000, "p1", PayoutStatus.FAILED),
            ("reserve", 8000, "p3", None),
            ("credit", 2000, "c2", None),
            ("settle", 8000, "p3", PayoutStatus.COMPLETED),
            ("reserve", 2001, "p4", None),  # rejected
            ("reserve", 2000, "p5", None),
            ("settle", 2000, "p5", PayoutStatus.REVERSED),
        ]

        for op, amount, ref, outcome in operations:
            if op == "credit":
                await ledger_store.credit("user_1", amount, ref)
            elif op == "reserve":
                await ledger_store.reserve_for_withdrawal("user_1", amount, ref)
            else:
                await ledger_store.settle_withdrawal("user_1", amount, outcome, ref)
            assert_balanced(ledgers["user_1"])

        ledger = ledgers["user_1"]
        assert ledger.total_earnings == 10000
        assert ledger.withdrawn_earnings == 8000
        assert ledger.pending == 0
        assert ledger.available == 2000
