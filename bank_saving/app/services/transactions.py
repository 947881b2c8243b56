from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ..core.errors import (
    AccountNotFoundError,
    ConflictError,
    DepositoTypeNotFoundError,
    InsufficientBalanceError,
    InvalidRequestError,
    StorageFailureError,
    TransactionNotFoundError,
)
from ..models import (
    DEPOSIT,
    WITHDRAWAL,
    AccountModel,
    AccountSummary,
    MoneyMovementRequest,
    TransactionDetailResponse,
    TransactionModel,
    TransactionResponse,
)
from .interest import quote_withdrawal
from .locks import AccountLockRegistry
from .repository import BankRepository


logger = logging.getLogger(__name__)


class TransactionService:
    """Deposits and withdrawals against a single account.

    Each operation reads the account, computes the new balance, inserts the
    transaction row and writes the balance inside one session transaction,
    while holding the account's lock. Either both writes are committed or
    neither is.
    """

    def __init__(
        self,
        session: Session,
        repository: Optional[BankRepository] = None,
        locks: Optional[AccountLockRegistry] = None,
        reject_backdated_withdrawals: bool = False,
    ) -> None:
        self.session = session
        self.repository = repository or BankRepository(session)
        self.locks = locks or AccountLockRegistry()
        self.reject_backdated_withdrawals = reject_backdated_withdrawals

    # ------------------------------------------------------------------
    # Helper utilities
    # ------------------------------------------------------------------
    def _get_account(self, account_id: UUID) -> AccountModel:
        account = self.repository.get_account(account_id)
        if account is None:
            raise AccountNotFoundError("Account not found")
        return account

    def _check_amount(self, amount: Decimal) -> None:
        if amount <= 0:
            raise InvalidRequestError("Amount must be greater than 0")

    def _persist(
        self,
        account: AccountModel,
        operation: str,
        **fields,
    ) -> TransactionModel:
        account_id = account.id
        try:
            transaction = self.repository.add_transaction(account_id=account_id, **fields)
            self.repository.update_account_balance(account, fields["balance_after"])
            self.session.commit()
        except ConflictError:
            self.session.rollback()
            logger.warning(
                "transaction.conflict",
                extra={"account_id": str(account_id), "operation": operation},
            )
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(
                "transaction.storage_failure",
                extra={"account_id": str(account_id), "operation": operation, "error": str(exc)},
            )
            raise StorageFailureError(f"Failed to process {operation}") from exc

        self.session.refresh(transaction)
        return transaction

    def _to_response(self, transaction: TransactionModel) -> TransactionResponse:
        return TransactionResponse.model_validate(transaction)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def process_deposit(self, payload: MoneyMovementRequest) -> TransactionResponse:
        self._check_amount(payload.amount)

        with self.locks.hold(payload.account_id):
            account = self._get_account(payload.account_id)
            balance_before = account.balance
            balance_after = balance_before + payload.amount

            transaction = self._persist(
                account,
                "deposit",
                transaction_type=DEPOSIT,
                amount=payload.amount,
                transaction_date=payload.transaction_date,
                balance_before=balance_before,
                balance_after=balance_after,
            )

        logger.info(
            "transaction.deposit",
            extra={
                "account_id": str(payload.account_id),
                "transaction_id": str(transaction.id),
                "amount": str(payload.amount),
                "balance_before": str(balance_before),
                "balance_after": str(balance_after),
            },
        )
        return self._to_response(transaction)

    def process_withdrawal(self, payload: MoneyMovementRequest) -> TransactionResponse:
        self._check_amount(payload.amount)

        with self.locks.hold(payload.account_id):
            account = self._get_account(payload.account_id)
            deposito_type = self.repository.get_deposito_type(account.deposito_type_id)
            if deposito_type is None:
                raise DepositoTypeNotFoundError("Deposito type not found for this account")

            quote = quote_withdrawal(
                balance=account.balance,
                amount=payload.amount,
                yearly_return=deposito_type.yearly_return,
                opened_at=account.created_at,
                withdrawn_at=payload.transaction_date,
            )

            if quote.months_held < 0 and self.reject_backdated_withdrawals:
                raise InvalidRequestError("Transaction date precedes account opening")

            if not quote.is_covered:
                logger.info(
                    "transaction.withdrawal.rejected",
                    extra={
                        "account_id": str(account.id),
                        "amount": str(payload.amount),
                        "balance_before": str(quote.balance_before),
                        "interest_earned": str(quote.interest_earned),
                    },
                )
                raise InsufficientBalanceError("Insufficient balance for withdrawal")

            transaction = self._persist(
                account,
                "withdrawal",
                transaction_type=WITHDRAWAL,
                amount=payload.amount,
                transaction_date=payload.transaction_date,
                balance_before=quote.balance_before,
                balance_after=quote.balance_after,
                months_count=quote.months_held,
                interest_earned=quote.interest_earned,
            )

        logger.info(
            "transaction.withdrawal",
            extra={
                "account_id": str(payload.account_id),
                "transaction_id": str(transaction.id),
                "amount": str(payload.amount),
                "months_count": quote.months_held,
                "interest_earned": str(quote.interest_earned),
                "balance_after": str(quote.balance_after),
            },
        )
        return self._to_response(transaction)

    def get_transaction(self, transaction_id: UUID) -> TransactionResponse:
        transaction = self.repository.get_transaction(transaction_id)
        if transaction is None:
            raise TransactionNotFoundError("Transaction not found")
        return self._to_response(transaction)

    def list_transactions(
        self, account_id: Optional[UUID] = None
    ) -> list[TransactionDetailResponse]:
        transactions = self.repository.list_transactions(account_id)
        accounts = self.repository.get_accounts(t.account_id for t in transactions)

        items = []
        for transaction in transactions:
            account = accounts.get(transaction.account_id)
            item = TransactionDetailResponse.model_validate(transaction)
            if account is not None:
                item.account = AccountSummary.model_validate(account)
            items.append(item)
        return items
