"""Get Earnings Summary Use Case

Platform-wide earnings totals and platform revenue for administrators.
"""

from libs.result import Result, Return
from src.app.repositories.ledger_repository import LedgerRepository
from src.app.repositories.revenue_repository import RevenueRepository
from src.domain.revenue import RevenueActivity
from .dtos import EarningsSummaryDTO


class GetEarningsSummary:
    def __init__(self, ledger_repo: LedgerRepository, revenue_repo: RevenueRepository):
        self.ledger_repo = ledger_repo
        self.revenue_repo = revenue_repo

    async def execute(self) -> Result[EarningsSummaryDTO]:
        totals = await self.ledger_repo.get_totals()
        revenue = await self.revenue_repo.get_totals()
        commission = await self.revenue_repo.get_total_commission()

        subscription_revenue = (
            revenue[RevenueActivity.SUBSCRIPTION] + revenue[RevenueActivity.SUBSCRIPTION_RENEW]
        )

        return Return.ok(
            EarningsSummaryDTO(
                total_earnings=totals["total_earnings"],
                withdrawn_earnings=totals["withdrawn_earnings"],
                pending=totals["pending"],
                available_earnings=(
                    totals["total_earnings"] - totals["withdrawn_earnings"] - totals["pending"]
                ),
                platform_revenue=subscription_revenue + commission,
                subscription_revenue=subscription_revenue,
                sale_revenue=revenue[RevenueActivity.PURCHASE],
                sale_commission=commission,
            )
        )
