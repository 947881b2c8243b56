import threading
from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import update
from sqlalchemy.exc import OperationalError
from sqlmodel import Session, select

from ..core.errors import (
    AccountNotFoundError,
    ConcurrentUpdateError,
    DepositoTypeNotFoundError,
    InsufficientBalanceError,
    InvalidRequestError,
    StorageFailureError,
)
from ..models import AccountModel, DepositoTypeModel, MoneyMovementRequest, TransactionModel
from ..services import AccountLockRegistry, BankRepository, TransactionService


WITHDRAWN_AT = datetime(2025, 7, 2, 10, 0, tzinfo=UTC)


def _movement(account_id, amount: str, when: datetime = WITHDRAWN_AT) -> MoneyMovementRequest:
    return MoneyMovementRequest(account_id=account_id, amount=Decimal(amount), transaction_date=when)


def _stored_transactions(session) -> list[TransactionModel]:
    return list(session.exec(select(TransactionModel)))


def _stored_balance(session, account_id) -> Decimal:
    session.expire_all()
    return session.get(AccountModel, account_id).balance


class FailingBalanceRepository(BankRepository):
    def update_account_balance(self, account, new_balance):
        raise OperationalError("UPDATE accounts", {}, Exception("disk I/O error"))


class RacingRepository(BankRepository):
    """Bumps the account version behind the caller's back right after the read."""

    def get_account(self, account_id):
        account = super().get_account(account_id)
        if account is not None:
            self.session.connection().execute(
                update(AccountModel)
                .where(AccountModel.id == account_id)
                .values(version=AccountModel.version + 1)
            )
        return account


def test_deposit_adds_amount_exactly(session, make_account) -> None:
    account = make_account(balance="1000.10")
    service = TransactionService(session)

    result = service.process_deposit(_movement(account.id, "250.25"))

    assert result.type == "DEPOSIT"
    assert result.amount == Decimal("250.25")
    assert result.balance_before == Decimal("1000.10")
    assert result.balance_after == Decimal("1250.35")
    assert result.months_count is None
    assert result.interest_earned is None
    assert _stored_balance(session, account.id) == Decimal("1250.35")


def test_deposit_refreshes_updated_at_and_version(session, make_account) -> None:
    account = make_account(balance="10")
    before = account.updated_at
    service = TransactionService(session)

    service.process_deposit(_movement(account.id, "5"))

    session.expire_all()
    stored = session.get(AccountModel, account.id)
    assert stored.version == 2
    assert stored.updated_at >= before


def test_withdrawal_applies_interest(session, make_account) -> None:
    account = make_account(balance="1000000", yearly_return="0.05")
    service = TransactionService(session)

    result = service.process_withdrawal(_movement(account.id, "500000"))

    assert result.type == "WITHDRAWAL"
    assert result.months_count == 6
    assert result.interest_earned == Decimal("25000")
    assert result.amount == Decimal("500000")
    assert result.balance_before == Decimal("1000000")
    assert result.balance_after == Decimal("525000")
    assert _stored_balance(session, account.id) == Decimal("525000")


def test_interest_can_cover_withdrawal_above_balance(session, make_account) -> None:
    account = make_account(balance="100", yearly_return="0.2")
    service = TransactionService(session)

    result = service.process_withdrawal(_movement(account.id, "110"))

    assert result.interest_earned == Decimal("10")
    assert result.balance_after == Decimal("0")


def test_withdrawal_guard_performs_no_writes(session, make_account) -> None:
    account = make_account(balance="100", yearly_return="0.2")
    service = TransactionService(session)

    with pytest.raises(InsufficientBalanceError, match="Insufficient balance"):
        service.process_withdrawal(_movement(account.id, "150"))

    assert _stored_transactions(session) == []
    assert _stored_balance(session, account.id) == Decimal("100")


def test_unknown_account_is_not_found_without_writes(session) -> None:
    service = TransactionService(session)

    with pytest.raises(AccountNotFoundError):
        service.process_deposit(_movement(uuid4(), "10"))
    with pytest.raises(AccountNotFoundError):
        service.process_withdrawal(_movement(uuid4(), "10"))

    assert _stored_transactions(session) == []


def test_withdrawal_without_deposito_type_is_distinct_not_found(session, make_account) -> None:
    account = make_account(balance="500")
    session.delete(session.get(DepositoTypeModel, account.deposito_type_id))
    session.commit()
    service = TransactionService(session)

    with pytest.raises(DepositoTypeNotFoundError, match="Deposito type not found for this account"):
        service.process_withdrawal(_movement(account.id, "10"))

    assert _stored_transactions(session) == []


def test_non_positive_amount_is_rejected(session, make_account) -> None:
    account = make_account(balance="500")
    service = TransactionService(session)
    payload = MoneyMovementRequest.model_construct(
        account_id=account.id, amount=Decimal("0"), transaction_date=WITHDRAWN_AT
    )

    with pytest.raises(InvalidRequestError):
        service.process_deposit(payload)


def test_backdated_withdrawal_accrues_negative_interest_by_default(session, make_account) -> None:
    account = make_account(balance="1200", yearly_return="0.10")
    service = TransactionService(session)

    result = service.process_withdrawal(
        _movement(account.id, "100", datetime(2024, 11, 20, tzinfo=UTC))
    )

    assert result.months_count == -2
    assert result.interest_earned == Decimal("-20")
    assert result.balance_after == Decimal("1080")


def test_backdated_withdrawal_can_be_refused(session, make_account) -> None:
    account = make_account(balance="1200", yearly_return="0.10")
    service = TransactionService(session, reject_backdated_withdrawals=True)

    with pytest.raises(InvalidRequestError, match="precedes account opening"):
        service.process_withdrawal(
            _movement(account.id, "100", datetime(2024, 11, 20, tzinfo=UTC))
        )

    assert _stored_transactions(session) == []


def test_storage_failure_rolls_back_transaction_insert(session, make_account) -> None:
    account = make_account(balance="300")
    service = TransactionService(session, FailingBalanceRepository(session))

    with pytest.raises(StorageFailureError, match="Failed to process deposit"):
        service.process_deposit(_movement(account.id, "50"))

    assert _stored_transactions(session) == []
    assert _stored_balance(session, account.id) == Decimal("300")


def test_concurrent_version_change_is_a_conflict(session, make_account) -> None:
    account = make_account(balance="300")
    service = TransactionService(session, RacingRepository(session))

    with pytest.raises(ConcurrentUpdateError):
        service.process_withdrawal(_movement(account.id, "50"))

    assert _stored_transactions(session) == []
    assert _stored_balance(session, account.id) == Decimal("300")


def test_sequential_movements_chain_balances(session, make_account) -> None:
    account = make_account(balance="0", yearly_return="0.05")
    service = TransactionService(session, locks=AccountLockRegistry())

    first = service.process_deposit(_movement(account.id, "1000", datetime(2025, 1, 20, tzinfo=UTC)))
    second = service.process_deposit(_movement(account.id, "500", datetime(2025, 1, 25, tzinfo=UTC)))
    third = service.process_withdrawal(_movement(account.id, "200", datetime(2025, 1, 30, tzinfo=UTC)))

    assert first.balance_after == second.balance_before
    assert second.balance_after == third.balance_before
    assert third.months_count == 0
    assert third.balance_after == Decimal("1300")
    assert _stored_balance(session, account.id) == Decimal("1300")


def test_get_transaction_is_stable(session, make_account) -> None:
    account = make_account(balance="10")
    service = TransactionService(session)
    created = service.process_deposit(_movement(account.id, "5"))

    assert service.get_transaction(created.id) == service.get_transaction(created.id)


def test_list_transactions_newest_transaction_date_first(session, make_account) -> None:
    account = make_account(balance="0")
    other = make_account(balance="0")
    service = TransactionService(session)
    for day in (5, 20, 12):
        service.process_deposit(_movement(account.id, "1", datetime(2025, 3, day, tzinfo=UTC)))
    service.process_deposit(_movement(other.id, "1", datetime(2025, 3, 1, tzinfo=UTC)))

    items = service.list_transactions(account.id)

    assert [item.transaction_date.day for item in items] == [20, 12, 5]
    assert all(item.account.id == account.id for item in items)
    assert len(service.list_transactions()) == 4


def test_missing_accounts_leave_no_locks_behind(session) -> None:
    locks = AccountLockRegistry()
    service = TransactionService(session, locks=locks)

    for _ in range(100):
        with pytest.raises(AccountNotFoundError):
            service.process_deposit(_movement(uuid4(), "10"))

    assert len(locks) == 0


def test_parallel_deposits_on_one_account_lose_no_updates(engine, make_account) -> None:
    account = make_account(balance="0")
    account_id = account.id
    locks = AccountLockRegistry()
    workers = 8
    start = threading.Barrier(workers)
    errors: list[Exception] = []

    def _deposit(amount: int) -> None:
        try:
            with Session(engine) as worker_session:
                service = TransactionService(worker_session, locks=locks)
                start.wait(timeout=5)
                service.process_deposit(_movement(account_id, str(amount)))
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=_deposit, args=(n,)) for n in range(1, workers + 1)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)

    assert errors == []
    assert len(locks) == 0

    with Session(engine) as check:
        stored = check.get(AccountModel, account_id)
        rows = list(
            check.exec(select(TransactionModel).where(TransactionModel.account_id == account_id))
        )

    assert stored.balance == Decimal(sum(range(1, workers + 1)))
    assert stored.version == workers + 1
    assert len(rows) == workers

    chain = sorted(rows, key=lambda row: row.balance_before)
    assert chain[0].balance_before == Decimal("0")
    for previous, current in zip(chain, chain[1:]):
        assert current.balance_before == previous.balance_after
    assert chain[-1].balance_after == stored.balance
