from datetime import datetime
from decimal import Decimal
from typing import Annotated, Generic, Literal, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

T = TypeVar("T")

# SQLite keeps NUMERIC values as doubles, exact to 15 significant digits.
Money = Annotated[Decimal, Field(max_digits=15, decimal_places=2)]
CustomerName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3)]
ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
YearlyReturn = Annotated[
    Decimal,
    Field(ge=0, le=1, decimal_places=6, description="Annual return as a fraction (0.05 = 5%)"),
]


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None

class ErrorResponse(BaseModel):
    success: bool = False
    error: str

# Customers ---------------------------------------------------------------
class CustomerCreate(BaseModel):
    name: CustomerName

class CustomerUpdate(BaseModel):
    name: CustomerName

class CustomerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    created_at: datetime
    updated_at: datetime

class CustomerSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str

# Deposito types ----------------------------------------------------------
class DepositoTypeCreate(BaseModel):
    name: ProductName
    yearly_return: YearlyReturn

class DepositoTypeUpdate(BaseModel):
    name: Optional[ProductName] = None
    yearly_return: Optional[YearlyReturn] = None

class DepositoTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    yearly_return: Decimal
    created_at: datetime
    updated_at: datetime

class DepositoTypeSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    yearly_return: Decimal

# Accounts ----------------------------------------------------------------
class AccountCreate(BaseModel):
    customer_id: UUID
    deposito_type_id: UUID
    initial_balance: Money = Field(
        default=Decimal("0"), ge=0, description="Opening balance (optional, default 0)"
    )

class AccountResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_id: UUID
    deposito_type_id: UUID
    balance: Decimal = Field(..., ge=0)
    created_at: datetime
    updated_at: datetime

class AccountDetailResponse(AccountResponse):
    customer: Optional[CustomerSummary] = None
    deposito_type: Optional[DepositoTypeSummary] = None

class AccountSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_id: UUID
    deposito_type_id: UUID

# Transactions ------------------------------------------------------------
class MoneyMovementRequest(BaseModel):
    account_id: UUID
    amount: Money = Field(..., gt=0, description="Requested amount, must be greater than 0")
    transaction_date: datetime = Field(..., description="ISO-8601 date of the movement")

class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    account_id: UUID
    type: Literal["DEPOSIT", "WITHDRAWAL"]
    amount: Decimal
    transaction_date: datetime
    balance_before: Decimal
    balance_after: Decimal
    months_count: Optional[int] = None
    interest_earned: Optional[Decimal] = None
    created_at: datetime

class TransactionDetailResponse(TransactionResponse):
    account: Optional[AccountSummary] = None
