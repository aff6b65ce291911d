"""SQLAlchemy implementation of PayoutRepository"""

from datetime import datetime
from typing import Optional
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.errors import ModelMismatch
from src.app.repositories.payout_repository import PayoutRepository
from src.domain.payout import Payout


class SqlAlchemyPayoutRepository(PayoutRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payout: Payout) -> Payout:
        self.session.add(payout)
        await self.session.flush()
        await self.session.refresh(payout)
        return payout

    async def get_by_reference(self, reference: str, for_update: bool = False) -> Optional[Payout]:
        stmt = select(Payout).where(Payout.reference == reference)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_id(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Payout], int]:
        conditions = [Payout.user_id == user_id]
        if start_date and end_date:
            conditions.append(Payout.created_at.between(start_date, end_date))

        count_stmt = select(func.count()).select_from(Payout).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(Payout)
            .where(*conditions)
            .order_by(Payout.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def update(self, payout: Payout) -> Payout:
        if not isinstance(payout, Payout):
            raise ModelMismatch("Payout", type(payout).__name__)

        payout.updated_at = datetime.utcnow()
        self.session.add(payout)
        await self.session.flush()
        return payout
