from datetime import UTC, datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from ..core import db
from ..core.db import create_engine_for_url, get_session, set_engine
from ..main import app
from ..models import AccountModel, CustomerModel, DepositoTypeModel


@pytest.fixture
def engine(tmp_path):
    test_engine = create_engine_for_url(f"sqlite:///{tmp_path / 'test.db'}")
    SQLModel.metadata.drop_all(test_engine)
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine) -> TestClient:
    original_engine = db.engine
    set_engine(engine)

    def _get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session_override

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    set_engine(original_engine)


@pytest.fixture
def make_account(session):
    """Persist a customer, a deposito type and an account opened at ``opened_at``."""

    def _make_account(
        balance: str = "0",
        yearly_return: str = "0.05",
        opened_at: datetime = datetime(2025, 1, 10, 9, 30, tzinfo=UTC),
    ) -> AccountModel:
        customer = CustomerModel(name="Budi Santoso")
        product = DepositoTypeModel(name="Gold Deposito", yearly_return=Decimal(yearly_return))
        session.add(customer)
        session.add(product)
        session.flush()
        account = AccountModel(
            customer_id=customer.id,
            deposito_type_id=product.id,
            balance=Decimal(balance),
            created_at=opened_at,
        )
        session.add(account)
        session.commit()
        session.refresh(account)
        return account

    return _make_account
