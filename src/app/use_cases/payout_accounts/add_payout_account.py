"""AddPayoutAccount Use Case

Registers a bank account a user can withdraw earnings to.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, ModelMismatch, ProviderError
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.payment_provider import PaymentProvider
from src.app.repositories.payout_account_repository import PayoutAccountRepository
from src.app.repositories.user_repository import UserRepository
from src.domain.payout_account import PayoutAccount
from .dtos import AddPayoutAccountCommandDTO, PayoutAccountResponseDTO

logger = logging.getLogger(__name__)


def to_response_dto(account: PayoutAccount) -> PayoutAccountResponseDTO:
    return PayoutAccountResponseDTO(
        id=account.id,
        user_id=account.user_id,
        account_number=account.account_number,
        account_name=account.account_name,
        bank_code=account.bank_code,
        bank_name=account.bank_name,
        active=account.active,
        created_at=account.created_at,
    )


class AddPayoutAccount:
    """
    Use Case: Add a payout account

    Business Rules:
    1. An account number can be registered once across the platform
    2. The provider must resolve the account number at the bank
    3. The provider issues a transfer recipient code for the account
    4. The new account becomes active when the user has no active account,
       otherwise it starts inactive; exactly one account is active afterwards
    5. The user's payout_setup_at is stamped

    Flow:
    1. Check user exists
    2. Reject duplicate account number
    3. Resolve account with provider
    4. Create transfer recipient
    5. Lock the user's accounts and decide the active flag
    6. Persist account and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: PayoutAccountRepository,
        user_repo: UserRepository,
        provider: PaymentProvider,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.user_repo = user_repo
        self.provider = provider

    async def execute(self, command: AddPayoutAccountCommandDTO) -> Result[PayoutAccountResponseDTO]:
        try:
            # Step 1: Owner must exist
            user = await self.user_repo.get_by_id(command.user_id)
            if not user:
                return Return.err(
                    Error(
                        code=ErrorCode.USER_NOT_FOUND,
                        message=f"User {command.user_id} not found",
                    )
                )

            # Step 2: Account numbers are unique platform-wide
            if await self.account_repo.exists_by_account_number(command.account_number):
                return Return.err(
                    Error(
                        code=ErrorCode.DUPLICATE_ACCOUNT,
                        message="This account number is already registered",
                        reason=f"account_number={command.account_number}",
                    )
                )

            # Step 3: Bank must know the account
            resolved = await self.provider.resolve_account_number(
                command.account_number, command.bank_code
            )
            if not resolved:
                return Return.err(
                    Error(
                        code=ErrorCode.VALIDATION_ERROR,
                        message="Account number could not be resolved at the bank",
                        reason=f"account_number={command.account_number}, bank_code={command.bank_code}",
                    )
                )

            # Step 4: Provider recipient token used for transfers
            recipient = await self.provider.create_transfer_recipient(
                command.account_name, command.account_number, command.bank_code
            )

            # Step 5: New account becomes active when none is
            existing = await self.account_repo.get_by_user_id(command.user_id, for_update=True)

            account = PayoutAccount(
                user_id=command.user_id,
                account_number=command.account_number,
                account_name=command.account_name,
                bank_code=command.bank_code,
                bank_name=command.bank_name,
                recipient_code=recipient.recipient_code,
                active=not any(a.active for a in existing),
            )
            created = await self.account_repo.create(account)

            if user.payout_setup_at is None:
                user.payout_setup_at = datetime.utcnow()
            user.updated_at = datetime.utcnow()
            await self.user_repo.update(user)

            # Step 6: Commit
            await self.uow.commit()

            logger.info(
                f"Payout account {created.id} added for user {command.user_id} "
                f"(active={created.active})"
            )
            return Return.ok(to_response_dto(created))

        except ModelMismatch:
            raise
        except ProviderError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code=ErrorCode.PROVIDER_ERROR,
                    message="Payment provider could not register the account",
                    reason=e.message,
                )
            )
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ADD_PAYOUT_ACCOUNT_FAILED",
                    message="Failed to add payout account",
                    reason=str(e),
                )
            )
