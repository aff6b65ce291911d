"""SQLAlchemy implementation of LedgerRepository

Provides persistence for Ledger entities with pessimistic locking support
to prevent lost updates during concurrent webhook deliveries.
"""

from typing import List, Optional
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.errors import ModelMismatch
from src.app.repositories.ledger_repository import LedgerRepository
from src.domain.ledger import Ledger


class SqlAlchemyLedgerRepository(LedgerRepository):
    """
    SQLAlchemy implementation of LedgerRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Counter updates flushed inside the caller's transaction
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: str, for_update: bool = False) -> Optional[Ledger]:
        """
        Retrieve ledger by user ID with optional row-level locking

        Args:
            user_id: User identifier
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Ledger if found, None otherwise
        """
        stmt = select(Ledger).where(Ledger.user_id == user_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, ledger: Ledger) -> Ledger:
        self.session.add(ledger)
        await self.session.flush()
        await self.session.refresh(ledger)
        return ledger

    async def update(self, ledger: Ledger) -> Ledger:
        """
        Flush counter changes

        Note:
            Should be called within a transaction with the ledger already locked
        """
        if not isinstance(ledger, Ledger):
            raise ModelMismatch("Ledger", type(ledger).__name__)

        self.session.add(ledger)
        await self.session.flush()
        return ledger

    async def get_all(self) -> List[Ledger]:
        result = await self.session.execute(select(Ledger))
        return list(result.scalars().all())

    async def get_totals(self) -> dict:
        stmt = select(
            func.coalesce(func.sum(Ledger.total_earnings), 0),
            func.coalesce(func.sum(Ledger.withdrawn_earnings), 0),
            func.coalesce(func.sum(Ledger.pending), 0),
        )
        result = await self.session.execute(stmt)
        total, withdrawn, pending = result.one()
        return {
            "total_earnings": int(total),
            "withdrawn_earnings": int(withdrawn),
            "pending": int(pending),
        }
