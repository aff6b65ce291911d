"""Ledger Store

Applies earnings mutations to a user's ledger. Every operation locks the
ledger row (SELECT FOR UPDATE) before reading the counters, so the
balance check and the write happen atomically with respect to other
webhook deliveries or user actions on the same user.

The store never commits. Callers own the transaction through their
UnitOfWork and commit once all related writes are staged.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode
from src.app.repositories.ledger_repository import LedgerRepository
from src.app.repositories.ledger_entry_repository import LedgerEntryRepository
from src.domain.ledger import Ledger
from src.domain.ledger_entry import LedgerEntry, EntryType
from src.domain.payout import PayoutStatus

logger = logging.getLogger(__name__)


def reserve_key(reference: str) -> str:
    return f"reserve:{reference}"


def settle_key(reference: str) -> str:
    return f"settle:{reference}"


class LedgerStore:
    """
    Ledger mutations with idempotency and row-level locking

    Invariant after every operation:
        total_earnings - withdrawn_earnings - pending >= 0
    """

    def __init__(self, ledger_repo: LedgerRepository, entry_repo: LedgerEntryRepository):
        self.ledger_repo = ledger_repo
        self.entry_repo = entry_repo

    async def credit(
        self,
        user_id: str,
        amount: int,
        idempotency_key: str,
        reference_type: Optional[str] = None,
        reference_id: Optional[str] = None,
    ) -> Result[LedgerEntry]:
        """
        Increase total_earnings for a settled sale

        The ledger is created on first credit. A repeated idempotency_key
        returns the original entry without crediting again.
        """
        if amount <= 0:
            return Return.err(self._invalid_amount(amount))

        ledger = await self._get_or_create_locked(user_id)

        existing = await self.entry_repo.get_by_idempotency_key(idempotency_key)
        if existing:
            logger.info(f"Credit {idempotency_key} already applied to user {user_id}, skipping")
            return Return.ok(existing)

        ledger.total_earnings += amount
        await self._save(ledger)

        entry = await self._record(
            ledger, EntryType.CREDIT, amount, idempotency_key, reference_type, reference_id
        )
        return Return.ok(entry)

    async def reserve_for_withdrawal(
        self, user_id: str, amount: int, reference: str
    ) -> Result[Ledger]:
        """
        Move amount from available into pending

        Errors:
            VALIDATION_ERROR: amount is not positive
            INSUFFICIENT_BALANCE: amount exceeds available earnings (ledger untouched)
        """
        if amount <= 0:
            return Return.err(self._invalid_amount(amount))

        ledger = await self.ledger_repo.get_by_user_id(user_id, for_update=True)
        available = ledger.available if ledger else 0

        if ledger and await self.entry_repo.get_by_idempotency_key(reserve_key(reference)):
            return Return.ok(ledger)

        if amount > available:
            return Return.err(
                Error(
                    code=ErrorCode.INSUFFICIENT_BALANCE,
                    message=(
                        "Insufficient balance. You cannot withdraw more than your "
                        "current balance."
                    ),
                    reason=f"available={available}, requested={amount}",
                )
            )

        ledger.pending += amount
        await self._save(ledger)
        await self._record(
            ledger, EntryType.RESERVE, amount, reserve_key(reference), "payout", reference
        )
        return Return.ok(ledger)

    async def settle_withdrawal(
        self, user_id: str, amount: int, outcome: PayoutStatus, reference: str
    ) -> Result[Ledger]:
        """
        Resolve a reservation once the transfer outcome is known

        COMPLETED moves amount from pending to withdrawn_earnings.
        FAILED and REVERSED return amount from pending to available.
        A reference settles at most once.
        """
        if outcome is PayoutStatus.PENDING:
            return Return.err(
                Error(
                    code=ErrorCode.VALIDATION_ERROR,
                    message="Withdrawal outcome must be terminal",
                    reason=f"outcome={outcome.value}",
                )
            )
        if amount <= 0:
            return Return.err(self._invalid_amount(amount))

        ledger = await self.ledger_repo.get_by_user_id(user_id, for_update=True)
        if not ledger:
            return Return.err(
                Error(
                    code=ErrorCode.LEDGER_NOT_FOUND,
                    message=f"Ledger not found for user {user_id}",
                )
            )

        if await self.entry_repo.get_by_idempotency_key(settle_key(reference)):
            logger.info(f"Withdrawal {reference} already settled, skipping")
            return Return.ok(ledger)

        if amount > ledger.pending:
            return Return.err(
                Error(
                    code=ErrorCode.VALIDATION_ERROR,
                    message="Settlement exceeds pending withdrawals",
                    reason=f"pending={ledger.pending}, amount={amount}",
                )
            )

        ledger.pending -= amount
        if outcome is PayoutStatus.COMPLETED:
            ledger.withdrawn_earnings += amount
            entry_type = EntryType.SETTLE_COMPLETED
        else:
            entry_type = EntryType.RELEASE

        await self._save(ledger)
        await self._record(ledger, entry_type, amount, settle_key(reference), "payout", reference)
        return Return.ok(ledger)

    async def get_entry(self, idempotency_key: str) -> Optional[LedgerEntry]:
        return await self.entry_repo.get_by_idempotency_key(idempotency_key)

    async def _get_or_create_locked(self, user_id: str) -> Ledger:
        ledger = await self.ledger_repo.get_by_user_id(user_id, for_update=True)
        if ledger:
            return ledger
        return await self.ledger_repo.create(Ledger(user_id=user_id))

    async def _save(self, ledger: Ledger) -> None:
        ledger.updated_at = datetime.utcnow()
        await self.ledger_repo.update(ledger)

    async def _record(
        self,
        ledger: Ledger,
        entry_type: EntryType,
        amount: int,
        idempotency_key: str,
        reference_type: Optional[str],
        reference_id: Optional[str],
    ) -> LedgerEntry:
        entry = LedgerEntry(
            user_id=ledger.user_id,
            ledger_id=ledger.id,
            entry_type=entry_type,
            amount=amount,
            total_earnings_after=ledger.total_earnings,
            withdrawn_earnings_after=ledger.withdrawn_earnings,
            pending_after=ledger.pending,
            reference_type=reference_type,
            reference_id=reference_id,
            idempotency_key=idempotency_key,
        )
        return await self.entry_repo.create(entry)

    @staticmethod
    def _invalid_amount(amount: int) -> Error:
        return Error(
            code=ErrorCode.VALIDATION_ERROR,
            message="Amount must be a positive integer",
            reason=f"amount={amount}",
        )
