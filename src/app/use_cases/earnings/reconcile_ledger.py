"""ReconcileLedger Use Case

Reconciles ledger counters against ledger entry history to detect discrepancies.
"""

import logging
import time
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.repositories.ledger_repository import LedgerRepository
from src.app.repositories.ledger_entry_repository import LedgerEntryRepository
from src.domain.ledger_entry import EntryType
from .dtos import LedgerDiscrepancyDTO, ReconciliationResultDTO

logger = logging.getLogger(__name__)


class ReconcileLedger:
    """
    Use Case: Reconcile ledgers against their entries

    Business Rules:
    1. total_earnings     == sum(credit)
    2. withdrawn_earnings == sum(settle_completed)
    3. pending            == sum(reserve) - sum(settle_completed) - sum(release)
    4. Does NOT modify any data (read-only reconciliation)
    """

    def __init__(
        self,
        ledger_repo: LedgerRepository,
        entry_repo: LedgerEntryRepository,
    ):
        self.ledger_repo = ledger_repo
        self.entry_repo = entry_repo

    async def execute(self) -> Result[ReconciliationResultDTO]:
        start_time = time.time()
        reconciliation_time = datetime.utcnow()

        try:
            logger.info("Starting ledger reconciliation")

            ledgers = await self.ledger_repo.get_all()
            total_ledgers = len(ledgers)

            logger.info(f"Found {total_ledgers} ledgers to reconcile")

            discrepancies: list[LedgerDiscrepancyDTO] = []

            for ledger in ledgers:
                sums = await self.entry_repo.get_sums_by_ledger(ledger.id)

                expected_total = sums[EntryType.CREDIT]
                expected_withdrawn = sums[EntryType.SETTLE_COMPLETED]
                expected_pending = (
                    sums[EntryType.RESERVE]
                    - sums[EntryType.SETTLE_COMPLETED]
                    - sums[EntryType.RELEASE]
                )

                if (
                    ledger.total_earnings != expected_total
                    or ledger.withdrawn_earnings != expected_withdrawn
                    or ledger.pending != expected_pending
                ):
                    discrepancies.append(
                        LedgerDiscrepancyDTO(
                            user_id=ledger.user_id,
                            ledger_id=ledger.id,
                            total_earnings=ledger.total_earnings,
                            calculated_total_earnings=expected_total,
                            withdrawn_earnings=ledger.withdrawn_earnings,
                            calculated_withdrawn_earnings=expected_withdrawn,
                            pending=ledger.pending,
                            calculated_pending=expected_pending,
                        )
                    )

                    logger.warning(
                        f"Discrepancy found for user {ledger.user_id} "
                        f"(ledger_id={ledger.id}): "
                        f"total={ledger.total_earnings}/{expected_total}, "
                        f"withdrawn={ledger.withdrawn_earnings}/{expected_withdrawn}, "
                        f"pending={ledger.pending}/{expected_pending}"
                    )

            execution_time_ms = int((time.time() - start_time) * 1000)

            response = ReconciliationResultDTO(
                total_ledgers_checked=total_ledgers,
                discrepancies_found=len(discrepancies),
                discrepancies=discrepancies,
                reconciliation_time=reconciliation_time,
                execution_time_ms=execution_time_ms,
            )

            if discrepancies:
                logger.warning(
                    f"Reconciliation complete. Found {len(discrepancies)} discrepancies "
                    f"out of {total_ledgers} ledgers in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Reconciliation complete. All {total_ledgers} ledgers balanced "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(response)

        except Exception as e:
            logger.error(f"Ledger reconciliation failed: {e}")
            return Return.err(
                Error(
                    code="RECONCILIATION_FAILED",
                    message="Failed to reconcile ledgers",
                    reason=str(e),
                )
            )
