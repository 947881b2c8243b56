"""Simple-interest arithmetic for withdrawals.

Interest accrues on whole calendar months: the month index of the withdrawal
date minus the month index of the account opening date. Day of month and
time of day play no part, so an account opened on the 28th earns one month
on the 1st of the following month.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
MONTHS_PER_YEAR = 12


def _calendar_date(value: date) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date()
    return value


def months_between(start: date, end: date) -> int:
    """Signed difference in calendar month indices between two dates.

    Negative when ``end`` precedes ``start``.
    """
    start_day = _calendar_date(start)
    end_day = _calendar_date(end)
    return (end_day.year - start_day.year) * MONTHS_PER_YEAR + (end_day.month - start_day.month)


def accrued_interest(balance: Decimal, yearly_return: Decimal, months: int) -> Decimal:
    """``balance * months * yearly_return / 12``, rounded to the cent."""
    raw = Decimal(balance) * months * Decimal(yearly_return) / MONTHS_PER_YEAR
    return raw.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class WithdrawalQuote:
    months_held: int
    interest_earned: Decimal
    balance_before: Decimal
    balance_after: Decimal

    @property
    def is_covered(self) -> bool:
        return self.balance_after >= 0


def quote_withdrawal(
    *,
    balance: Decimal,
    amount: Decimal,
    yearly_return: Decimal,
    opened_at: date,
    withdrawn_at: date,
) -> WithdrawalQuote:
    months_held = months_between(opened_at, withdrawn_at)
    interest = accrued_interest(balance, yearly_return, months_held)
    return WithdrawalQuote(
        months_held=months_held,
        interest_earned=interest,
        balance_before=balance,
        balance_after=balance - amount + interest,
    )
