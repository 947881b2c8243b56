from .db import Account as AccountModel
from .db import Customer as CustomerModel
from .db import DEPOSIT, WITHDRAWAL
from .db import DepositoType as DepositoTypeModel
from .db import Transaction as TransactionModel
from .schemas import (
    AccountCreate,
    AccountDetailResponse,
    AccountResponse,
    AccountSummary,
    ApiResponse,
    CustomerCreate,
    CustomerResponse,
    CustomerSummary,
    CustomerUpdate,
    DepositoTypeCreate,
    DepositoTypeResponse,
    DepositoTypeSummary,
    DepositoTypeUpdate,
    ErrorResponse,
    MoneyMovementRequest,
    TransactionDetailResponse,
    TransactionResponse,
)

__all__ = [
    "AccountCreate",
    "AccountDetailResponse",
    "AccountResponse",
    "AccountSummary",
    "ApiResponse",
    "CustomerCreate",
    "CustomerResponse",
    "CustomerSummary",
    "CustomerUpdate",
    "DepositoTypeCreate",
    "DepositoTypeResponse",
    "DepositoTypeSummary",
    "DepositoTypeUpdate",
    "ErrorResponse",
    "MoneyMovementRequest",
    "TransactionDetailResponse",
    "TransactionResponse",
    "AccountModel",
    "CustomerModel",
    "DepositoTypeModel",
    "TransactionModel",
    "DEPOSIT",
    "WITHDRAWAL",
]
