from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlmodel import Session

from ..core.errors import (
    AccountNotFoundError,
    CustomerNotFoundError,
    DepositoTypeNotFoundError,
    ResourceInUseError,
)
from ..models import (
    AccountCreate,
    AccountDetailResponse,
    AccountModel,
    AccountResponse,
    CustomerSummary,
    DepositoTypeSummary,
)
from .repository import BankRepository


logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, session: Session, repository: Optional[BankRepository] = None) -> None:
        self.session = session
        self.repository = repository or BankRepository(session)

    def _get_account(self, account_id: UUID) -> AccountModel:
        account = self.repository.get_account(account_id)
        if account is None:
            raise AccountNotFoundError("Account not found")
        return account

    def _with_details(self, account: AccountModel) -> AccountDetailResponse:
        response = AccountDetailResponse.model_validate(account)
        customer = self.repository.get_customer(account.customer_id)
        if customer is not None:
            response.customer = CustomerSummary.model_validate(customer)
        deposito_type = self.repository.get_deposito_type(account.deposito_type_id)
        if deposito_type is not None:
            response.deposito_type = DepositoTypeSummary.model_validate(deposito_type)
        return response

    def list_accounts(self, customer_id: Optional[UUID] = None) -> list[AccountDetailResponse]:
        return [self._with_details(a) for a in self.repository.list_accounts(customer_id)]

    def get_account(self, account_id: UUID) -> AccountDetailResponse:
        return self._with_details(self._get_account(account_id))

    def create_account(self, payload: AccountCreate) -> AccountResponse:
        if self.repository.get_customer(payload.customer_id) is None:
            raise CustomerNotFoundError("Customer not found")
        if self.repository.get_deposito_type(payload.deposito_type_id) is None:
            raise DepositoTypeNotFoundError("Deposito type not found")

        account = self.repository.add_account(
            customer_id=payload.customer_id,
            deposito_type_id=payload.deposito_type_id,
            balance=payload.initial_balance,
        )
        self.session.commit()
        self.session.refresh(account)
        logger.info(
            "account.created",
            extra={
                "account_id": str(account.id),
                "customer_id": str(account.customer_id),
                "balance": str(account.balance),
            },
        )
        return AccountResponse.model_validate(account)

    def delete_account(self, account_id: UUID) -> None:
        account = self._get_account(account_id)
        if self.repository.count_transactions(account_id):
            raise ResourceInUseError("Account has recorded transactions")
        self.repository.delete(account)
        self.session.commit()
        logger.info("account.deleted", extra={"account_id": str(account_id)})
