"""SQLAlchemy implementation of RevenueRepository"""

from decimal import Decimal
from typing import Dict, Optional
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.revenue_repository import RevenueRepository
from src.domain.revenue import Revenue, RevenueActivity, RevenueStatus


class SqlAlchemyRevenueRepository(RevenueRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, revenue: Revenue) -> Revenue:
        self.session.add(revenue)
        await self.session.flush()
        await self.session.refresh(revenue)
        return revenue

    async def get_by_reference(self, reference: str) -> Optional[Revenue]:
        stmt = select(Revenue).where(Revenue.reference == reference)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_totals(self) -> Dict[RevenueActivity, int]:
        stmt = (
            select(Revenue.activity, func.coalesce(func.sum(Revenue.amount), 0))
            .where(Revenue.status == RevenueStatus.COMPLETED)
            .group_by(Revenue.activity)
        )
        result = await self.session.execute(stmt)

        totals = {activity: 0 for activity in RevenueActivity}
        for activity, amount in result.all():
            totals[RevenueActivity(activity)] = int(amount)
        return totals

    async def get_total_commission(self) -> int:
        stmt = select(
            func.coalesce(func.sum(Revenue.amount * Revenue.commission_rate), 0)
        ).where(
            Revenue.status == RevenueStatus.COMPLETED,
            Revenue.activity == RevenueActivity.PURCHASE,
        )
        total = (await self.session.execute(stmt)).scalar_one()
        return int(Decimal(str(total)).quantize(Decimal("1")))
