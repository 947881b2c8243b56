from __future__ import annotations
from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4
from sqlmodel import Field, SQLModel

DEPOSIT = "DEPOSIT"
WITHDRAWAL = "WITHDRAWAL"


def utcnow() -> datetime:
    return datetime.now(UTC)


class Customer(SQLModel, table=True):
    __tablename__ = "customers"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    name: str = Field(index=True)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)

class DepositoType(SQLModel, table=True):
    __tablename__ = "deposito_types"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    name: str
    yearly_return: Decimal = Field(max_digits=7, decimal_places=6, ge=0, le=1)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

class Account(SQLModel, table=True):
    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    customer_id: UUID = Field(foreign_key="customers.id", index=True)
    deposito_type_id: UUID = Field(foreign_key="deposito_types.id", index=True)
    balance: Decimal = Field(default=Decimal("0"), max_digits=18, decimal_places=2, ge=0)
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: datetime = Field(default_factory=utcnow)
    version: int = Field(default=1)

class Transaction(SQLModel, table=True):
    __tablename__ = "transactions"

    id: UUID = Field(default_factory=uuid4, primary_key=True, index=True)
    account_id: UUID = Field(foreign_key="accounts.id", index=True)
    type: str
    amount: Decimal = Field(max_digits=18, decimal_places=2)
    transaction_date: datetime = Field(index=True)
    balance_before: Decimal = Field(max_digits=18, decimal_places=2)
    balance_after: Decimal = Field(max_digits=18, decimal_places=2)
    months_count: Optional[int] = None
    interest_earned: Optional[Decimal] = Field(default=None, max_digits=18, decimal_places=2)
    created_at: datetime = Field(default_factory=utcnow)
