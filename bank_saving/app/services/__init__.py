from .accounts import AccountService
from .customers import CustomerService
from .deposito_types import DepositoTypeService
from .locks import AccountLockRegistry
from .repository import BankRepository
from .transactions import TransactionService

__all__ = [
    "AccountLockRegistry",
    "AccountService",
    "BankRepository",
    "CustomerService",
    "DepositoTypeService",
    "TransactionService",
]
