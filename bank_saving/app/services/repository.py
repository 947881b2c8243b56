from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlmodel import Session, select

from ..core.errors import ConcurrentUpdateError
from ..models import AccountModel, CustomerModel, DepositoTypeModel, TransactionModel
from ..models.db import utcnow


class BankRepository:
    """Thin data access layer around the SQLModel session.

    Nothing here commits; the calling service owns the unit of work.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def _save(self, record):
        self.session.add(record)
        self.session.flush()
        self.session.refresh(record)
        return record

    # Customers ----------------------------------------------------------
    def add_customer(self, name: str) -> CustomerModel:
        return self._save(CustomerModel(name=name))

    def get_customer(self, customer_id: UUID) -> Optional[CustomerModel]:
        return self.session.get(CustomerModel, customer_id)

    def list_customers(self, search: Optional[str] = None) -> list[CustomerModel]:
        stmt = select(CustomerModel).order_by(CustomerModel.created_at.desc())
        if search:
            stmt = stmt.where(func.lower(CustomerModel.name).contains(search.lower()))
        return list(self.session.exec(stmt))

    def rename_customer(self, customer: CustomerModel, name: str) -> CustomerModel:
        customer.name = name
        customer.updated_at = utcnow()
        return self._save(customer)

    # Deposito types -----------------------------------------------------
    def add_deposito_type(self, name: str, yearly_return: Decimal) -> DepositoTypeModel:
        return self._save(DepositoTypeModel(name=name, yearly_return=yearly_return))

    def get_deposito_type(self, deposito_type_id: UUID) -> Optional[DepositoTypeModel]:
        return self.session.get(DepositoTypeModel, deposito_type_id)

    def list_deposito_types(self) -> list[DepositoTypeModel]:
        stmt = select(DepositoTypeModel).order_by(DepositoTypeModel.yearly_return.asc())
        return list(self.session.exec(stmt))

    def update_deposito_type(
        self,
        deposito_type: DepositoTypeModel,
        *,
        name: Optional[str] = None,
        yearly_return: Optional[Decimal] = None,
    ) -> DepositoTypeModel:
        if name is not None:
            deposito_type.name = name
        if yearly_return is not None:
            deposito_type.yearly_return = yearly_return
        deposito_type.updated_at = utcnow()
        return self._save(deposito_type)

    # Accounts -----------------------------------------------------------
    def add_account(
        self,
        *,
        customer_id: UUID,
        deposito_type_id: UUID,
        balance: Decimal,
    ) -> AccountModel:
        return self._save(
            AccountModel(
                customer_id=customer_id,
                deposito_type_id=deposito_type_id,
                balance=balance,
            )
        )

    def get_account(self, account_id: UUID) -> Optional[AccountModel]:
        return self.session.get(AccountModel, account_id)

    def get_accounts(self, account_ids: Iterable[UUID]) -> dict[UUID, AccountModel]:
        ids = set(account_ids)
        if not ids:
            return {}
        stmt = select(AccountModel).where(AccountModel.id.in_(ids))
        return {account.id: account for account in self.session.exec(stmt)}

    def list_accounts(self, customer_id: Optional[UUID] = None) -> list[AccountModel]:
        stmt = select(AccountModel).order_by(AccountModel.created_at.desc())
        if customer_id is not None:
            stmt = stmt.where(AccountModel.customer_id == customer_id)
        return list(self.session.exec(stmt))

    def count_accounts(
        self,
        *,
        customer_id: Optional[UUID] = None,
        deposito_type_id: Optional[UUID] = None,
    ) -> int:
        stmt = select(func.count()).select_from(AccountModel)
        if customer_id is not None:
            stmt = stmt.where(AccountModel.customer_id == customer_id)
        if deposito_type_id is not None:
            stmt = stmt.where(AccountModel.deposito_type_id == deposito_type_id)
        return self.session.exec(stmt).one()

    def update_account_balance(self, account: AccountModel, new_balance: Decimal) -> AccountModel:
        """Write ``new_balance`` only if the account still has the version we read."""
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account.id)
            .where(AccountModel.version == account.version)
            .values(
                balance=new_balance,
                version=account.version + 1,
                updated_at=utcnow(),
            )
        )
        result = self.session.connection().execute(stmt)
        if result.rowcount != 1:
            raise ConcurrentUpdateError(
                f"Account {account.id} was modified by another request"
            )
        self.session.refresh(account)
        return account

    # Transactions -------------------------------------------------------
    def add_transaction(
        self,
        *,
        account_id: UUID,
        transaction_type: str,
        amount: Decimal,
        transaction_date: datetime,
        balance_before: Decimal,
        balance_after: Decimal,
        months_count: Optional[int] = None,
        interest_earned: Optional[Decimal] = None,
    ) -> TransactionModel:
        return self._save(
            TransactionModel(
                account_id=account_id,
                type=transaction_type,
                amount=amount,
                transaction_date=transaction_date,
                balance_before=balance_before,
                balance_after=balance_after,
                months_count=months_count,
                interest_earned=interest_earned,
            )
        )

    def get_transaction(self, transaction_id: UUID) -> Optional[TransactionModel]:
        return self.session.get(TransactionModel, transaction_id)

    def list_transactions(self, account_id: Optional[UUID] = None) -> list[TransactionModel]:
        stmt = select(TransactionModel).order_by(
            TransactionModel.transaction_date.desc(),
            TransactionModel.created_at.desc(),
        )
        if account_id is not None:
            stmt = stmt.where(TransactionModel.account_id == account_id)
        return list(self.session.exec(stmt))

    def count_transactions(self, account_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(TransactionModel)
            .where(TransactionModel.account_id == account_id)
        )
        return self.session.exec(stmt).one()

    # Shared -------------------------------------------------------------
    def delete(self, record) -> None:
        self.session.delete(record)
        self.session.flush()
