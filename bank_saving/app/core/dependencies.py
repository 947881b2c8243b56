from fastapi import Depends, Request
from sqlmodel import Session

from ..services import (
    AccountLockRegistry,
    AccountService,
    BankRepository,
    CustomerService,
    DepositoTypeService,
    TransactionService,
)
from .config import get_settings
from .db import get_session

def get_repository(session: Session = Depends(get_session)) -> BankRepository:
    return BankRepository(session)

def get_account_locks(request: Request) -> AccountLockRegistry:
    return request.app.state.account_locks

def get_customer_service(
    session: Session = Depends(get_session),
    repository: BankRepository = Depends(get_repository),
) -> CustomerService:
    return CustomerService(session, repository)

def get_deposito_type_service(
    session: Session = Depends(get_session),
    repository: BankRepository = Depends(get_repository),
) -> DepositoTypeService:
    return DepositoTypeService(session, repository)

def get_account_service(
    session: Session = Depends(get_session),
    repository: BankRepository = Depends(get_repository),
) -> AccountService:
    return AccountService(session, repository)

def get_transaction_service(
    session: Session = Depends(get_session),
    repository: BankRepository = Depends(get_repository),
    locks: AccountLockRegistry = Depends(get_account_locks),
) -> TransactionService:
    return TransactionService(
        session,
        repository,
        locks=locks,
        reject_backdated_withdrawals=get_settings().reject_backdated_withdrawals,
    )
