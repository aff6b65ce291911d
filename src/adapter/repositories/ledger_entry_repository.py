"""SQLAlchemy implementation of LedgerEntryRepository

Idempotency is enforced by the unique constraint on idempotency_key.
"""

from typing import Dict, Optional
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.ledger_entry_repository import LedgerEntryRepository
from src.domain.ledger_entry import LedgerEntry, EntryType


class SqlAlchemyLedgerEntryRepository(LedgerEntryRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: LedgerEntry) -> LedgerEntry:
        """
        Create a new ledger entry

        Raises:
            IntegrityError: If idempotency_key already exists (duplicate mutation attempt)
        """
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def get_by_idempotency_key(self, idempotency_key: str) -> Optional[LedgerEntry]:
        stmt = select(LedgerEntry).where(LedgerEntry.idempotency_key == idempotency_key)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_sums_by_ledger(self, ledger_id: str) -> Dict[EntryType, int]:
        stmt = (
            select(LedgerEntry.entry_type, func.coalesce(func.sum(LedgerEntry.amount), 0))
            .where(LedgerEntry.ledger_id == ledger_id)
            .group_by(LedgerEntry.entry_type)
        )
        result = await self.session.execute(stmt)

        sums = {entry_type: 0 for entry_type in EntryType}
        for entry_type, total in result.all():
            sums[EntryType(entry_type)] = int(total)
        return sums
