"""SQLAlchemy implementation of PayoutAccountRepository

The active flag is changed with a bulk UPDATE on siblings followed by a
flush of the target, so the partial unique index never sees two active
rows for one user.
"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.errors import ModelMismatch
from src.app.repositories.payout_account_repository import PayoutAccountRepository
from src.domain.payout_account import PayoutAccount


class SqlAlchemyPayoutAccountRepository(PayoutAccountRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: str, for_update: bool = False) -> Optional[PayoutAccount]:
        stmt = select(PayoutAccount).where(PayoutAccount.id == account_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: str, for_update: bool = False) -> List[PayoutAccount]:
        stmt = (
            select(PayoutAccount)
            .where(PayoutAccount.user_id == user_id)
            .order_by(PayoutAccount.created_at)
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_active(self, user_id: str, for_update: bool = False) -> Optional[PayoutAccount]:
        stmt = select(PayoutAccount).where(
            PayoutAccount.user_id == user_id,
            PayoutAccount.active == True,  # noqa: E712
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def exists_by_account_number(self, account_number: str) -> bool:
        stmt = select(PayoutAccount.id).where(PayoutAccount.account_number == account_number)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def create(self, account: PayoutAccount) -> PayoutAccount:
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def deactivate_siblings(self, user_id: str, keep_account_id: str) -> None:
        stmt = (
            update(PayoutAccount)
            .where(
                PayoutAccount.user_id == user_id,
                PayoutAccount.id != keep_account_id,
                PayoutAccount.active == True,  # noqa: E712
            )
            .values(active=False, updated_at=datetime.utcnow())
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(stmt)

    async def update(self, account: PayoutAccount) -> PayoutAccount:
        if not isinstance(account, PayoutAccount):
            raise ModelMismatch("PayoutAccount", type(account).__name__)

        account.updated_at = datetime.utcnow()
        self.session.add(account)
        await self.session.flush()
        return account
