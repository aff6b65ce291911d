"""InitiatePayout Use Case

Withdraws available earnings to the user's active payout account.
"""

import logging
import uuid
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, ModelMismatch, ProviderError
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.ledger_store import LedgerStore
from src.app.services.payment_provider import PaymentProvider
from src.app.repositories.payout_account_repository import PayoutAccountRepository
from src.app.repositories.payout_repository import PayoutRepository
from src.domain.payout import Payout, PayoutStatus
from .dtos import InitiatePayoutCommandDTO, PayoutResponseDTO

logger = logging.getLogger(__name__)


def to_response_dto(payout: Payout) -> PayoutResponseDTO:
    return PayoutResponseDTO(
        id=payout.id,
        user_id=payout.user_id,
        account_id=payout.account_id,
        reference=payout.reference,
        amount=payout.amount,
        status=payout.status.value,
        transfer_code=payout.transfer_code,
        failure_reason=payout.failure_reason,
        created_at=payout.created_at,
        updated_at=payout.updated_at,
    )


class InitiatePayout:
    """
    Use Case: Initiate a payout

    Business Rules:
    1. The user must have an active payout account
    2. The amount is reserved (moved to pending) before any money moves
    3. Reservation and the pending payout are committed before the
       provider is called, so a transfer event arriving early finds both
    4. A provider failure releases the reservation and fails the payout
    5. The final outcome arrives later as a transfer.* event

    Flow:
    1. Look up active payout account
    2. Reserve amount on the ledger
    3. Persist pending payout with a fresh reference, commit
    4. Start the transfer with the provider
    5. Store the transfer code, commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        ledger_store: LedgerStore,
        account_repo: PayoutAccountRepository,
        payout_repo: PayoutRepository,
        provider: PaymentProvider,
    ):
        self.uow = uow
        self.ledger_store = ledger_store
        self.account_repo = account_repo
        self.payout_repo = payout_repo
        self.provider = provider

    async def execute(self, command: InitiatePayoutCommandDTO) -> Result[PayoutResponseDTO]:
        try:
            # Step 1: Destination account, held until the reservation commits
            account = await self.account_repo.get_active(command.user_id, for_update=True)
            if not account:
                return Return.err(
                    Error(
                        code=ErrorCode.NO_PAYOUT_ACCOUNT,
                        message="Add and activate a payout account before withdrawing",
                        reason=f"user_id={command.user_id}",
                    )
                )

            # Step 2: Reserve under ledger lock
            reference = str(uuid.uuid4())
            reserved = await self.ledger_store.reserve_for_withdrawal(
                command.user_id, command.amount, reference
            )
            if reserved.is_err():
                await self.uow.rollback()
                return reserved

            # Step 3: Durable pending payout
            payout = await self.payout_repo.create(
                Payout(
                    account_id=account.id,
                    user_id=command.user_id,
                    reference=reference,
                    amount=command.amount,
                    status=PayoutStatus.PENDING,
                )
            )
            await self.uow.commit()

            logger.info(
                f"Payout {reference} reserved: user={command.user_id}, amount={command.amount}"
            )

        except ModelMismatch:
            raise
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="INITIATE_PAYOUT_FAILED",
                    message="Failed to initiate payout",
                    reason=str(e),
                )
            )

        # Step 4: Start transfer
        try:
            transfer = await self.provider.initiate_transfer(
                command.amount, account.recipient_code, reference
            )
        except ProviderError as e:
            logger.critical(f"Transfer for payout {reference} failed to start: {e.message}")
            return await self._release(reference, e)

        # Step 5: Record provider handle
        try:
            payout = await self.payout_repo.get_by_reference(reference, for_update=True)
            if payout.status is PayoutStatus.PENDING:
                payout.transfer_code = transfer.transfer_code
                payout = await self.payout_repo.update(payout)
            await self.uow.commit()
            return Return.ok(to_response_dto(payout))

        except ModelMismatch:
            raise
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="INITIATE_PAYOUT_FAILED",
                    message="Transfer started but could not be recorded",
                    reason=str(e),
                )
            )

    async def _release(self, reference: str, cause: ProviderError) -> Result[PayoutResponseDTO]:
        try:
            payout = await self.payout_repo.get_by_reference(reference, for_update=True)

            # A transfer event may already have resolved it
            if payout.status is PayoutStatus.PENDING:
                payout.status = PayoutStatus.FAILED
                payout.failure_reason = cause.message[:255]
                await self.payout_repo.update(payout)

                settled = await self.ledger_store.settle_withdrawal(
                    payout.user_id, payout.amount, PayoutStatus.FAILED, reference
                )
                if settled.is_err():
                    await self.uow.rollback()
                    return settled

            await self.uow.commit()

        except ModelMismatch:
            raise
        except Exception as e:
            await self.uow.rollback()
            logger.critical(f"Could not release reservation for payout {reference}: {e}")
            return Return.err(
                Error(
                    code="INITIATE_PAYOUT_FAILED",
                    message="Failed to release reservation after provider error",
                    reason=str(e),
                )
            )

        return Return.err(
            Error(
                code=ErrorCode.PROVIDER_ERROR,
                message="Payment provider could not start the transfer",
                reason=cause.message,
            )
        )
