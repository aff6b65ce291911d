"""Earnings use cases"""
from .get_earnings import GetEarnings
from .get_earnings_summary import GetEarningsSummary
from .reconcile_ledger import ReconcileLedger
from .dtos import (
    EarningsResponseDTO,
    EarningsSummaryDTO,
    LedgerDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "GetEarnings",
    "GetEarningsSummary",
    "ReconcileLedger",
    "EarningsResponseDTO",
    "EarningsSummaryDTO",
    "LedgerDiscrepancyDTO",
    "ReconciliationResultDTO",
]
