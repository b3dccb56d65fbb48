"""Revolving credit account with daily interest accrual.

Implements the account's balance/interest state machine:
- Daily interest accrual on the outstanding balance, closed one day behind
- Interest posting into principal from day 30 of the billing cycle
- Charges bounded by the credit limit
- Payments, with interest forgiveness on payoff inside the first cycle
- Balance statements as of a given day
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from credit_ledger.ledger.dates import DateLike, day_before, days_between, to_date
from credit_ledger.ledger.exceptions import (
    BackdatedTransactionError,
    InsufficientCreditLimitError,
    InvalidAmountError,
    OverpaymentError,
)

logger = logging.getLogger(__name__)

# Zero-indexed cycle age at which accrued interest starts posting (day 30)
POSTING_CYCLE_AGE = 29
BILLING_CYCLE_DAYS = 30
DAYS_PER_YEAR = 365


@dataclass
class CreditAccount:
    """Mutable state for a single credit card account.

    Build one with :meth:`open` to pass the APR as a percentage; the
    dataclass fields take the APR as a fraction. Not thread-safe: callers
    sharing one account must serialize whole operations.
    """

    credit_limit: float                   # Maximum allowed outstanding balance
    apr: float                            # Annual percentage rate (e.g., 0.35 for 35%)
    opening_date: date                    # Start of the current billing cycle
    outstanding_balance: float = 0.0      # Principal owed, excluding unposted interest
    accrued_interest: float = 0.0         # Interest for closed days, not yet posted
    last_accrual_date: date | None = None  # Last day interest has been computed through
    interest_posted: float = 0.0          # Running total of interest moved into principal

    def __post_init__(self) -> None:
        self.opening_date = to_date(self.opening_date)
        if self.last_accrual_date is None:
            # Nothing has closed yet: the day before opening is the cursor
            self.last_accrual_date = day_before(self.opening_date)
        else:
            self.last_accrual_date = to_date(self.last_accrual_date)

    @classmethod
    def open(cls, limit: float, apr_percent: float, date: DateLike) -> CreditAccount:
        """Open an account with a credit limit and an APR given in percent (35 → 35%)."""
        return cls(credit_limit=limit, apr=apr_percent / 100, opening_date=to_date(date))

    @property
    def daily_rate(self) -> float:
        """APR ÷ 365, the periodic rate applied per closed day."""
        return self.apr / DAYS_PER_YEAR

    @property
    def available_credit(self) -> float:
        return self.credit_limit - self.outstanding_balance

    @property
    def utilization(self) -> float:
        """Current balance / credit limit. 0 if limit is 0."""
        if self.credit_limit <= 0:
            return 0.0
        return self.outstanding_balance / self.credit_limit

    # ──────────────────────────────────────────────────────────────────────
    # Public operations
    # ──────────────────────────────────────────────────────────────────────

    def charge(self, amount: float, date: DateLike) -> None:
        """Record a charge (card swipe) made on ``date``.

        Raises:
            InsufficientCreditLimitError: the charge would take the balance
                over the credit limit. Accrual up to the day before still
                applies.
            BackdatedTransactionError: ``date`` falls before a closed day.
        """
        _check_amount(amount)
        self._accrue_through_day_before(to_date(date))

        if amount + self.outstanding_balance > self.credit_limit:
            raise InsufficientCreditLimitError("Insufficient credit limit.")
        self.outstanding_balance += amount

    def payment(self, amount: float, date: DateLike) -> None:
        """Record a payment made on ``date``.

        Paying the balance off inside the first 30 days of the cycle forgives
        the accrued interest. A payoff after interest has started posting
        restores the unposted interest first, and if nothing is still owed
        the billing cycle restarts on ``date``.

        Raises:
            OverpaymentError: ``amount`` exceeds the outstanding balance as it
                stands after accrual. The accrual is kept.
            BackdatedTransactionError: ``date`` falls before a closed day.
        """
        _check_amount(amount)
        today = to_date(date)
        closed_day = self._accrue_through_day_before(today)

        if amount > self.outstanding_balance:
            raise OverpaymentError(self.outstanding_balance)
        self.outstanding_balance -= amount

        if self.outstanding_balance > 0:
            return

        cycle_days = days_between(self.opening_date, closed_day)
        if cycle_days < BILLING_CYCLE_DAYS:
            self.accrued_interest = 0.0
        else:
            self.outstanding_balance += self.accrued_interest
            self.accrued_interest = 0.0
            if self.outstanding_balance <= 0:
                logger.debug("Balance cleared on %s, billing cycle restarts", today)
                self.opening_date = today

    def balance(self, date: DateLike) -> str:
        """Statement line for ``date``, with interest accrued through the day before.

        Returns:
            e.g. "30 days after account opening. Current balance due: $514.38"
        """
        as_of = to_date(date)
        self._accrue_through_day_before(as_of)
        total_days = days_between(self.opening_date, as_of)
        return (
            f"{total_days} days after account opening. "
            f"Current balance due: ${self.outstanding_balance:.2f}"
        )

    # ──────────────────────────────────────────────────────────────────────
    # Accrual
    # ──────────────────────────────────────────────────────────────────────

    def _accrue_through_day_before(self, as_of: date) -> date:
        """Close every day up to the one before ``as_of`` and post if the cycle is due.

        Interest for the span is one lump at the current balance, with no
        compounding inside the span.

        Returns:
            The day before ``as_of``.
        """
        closed_day = day_before(as_of)
        if closed_day < self.last_accrual_date:
            raise BackdatedTransactionError(
                "Inaccurate Date. Cannot make backdated transactions."
            )

        if closed_day != self.last_accrual_date:
            days = days_between(self.last_accrual_date, closed_day)
            self.accrued_interest += compute_interest(self.outstanding_balance, self.apr, days)
            self.last_accrual_date = closed_day

        if days_between(self.opening_date, closed_day) >= POSTING_CYCLE_AGE:
            if self.accrued_interest:
                logger.debug(
                    "Posting %.4f accrued interest as of %s", self.accrued_interest, closed_day
                )
            self.outstanding_balance += self.accrued_interest
            self.interest_posted += self.accrued_interest
            self.accrued_interest = 0.0

        return closed_day


def compute_interest(balance: float, apr: float, days: int) -> float:
    """Simple interest on ``balance`` for ``days`` closed days.

    Formula: I = B × (APR / 365) × days
    """
    return balance * (apr / DAYS_PER_YEAR) * days


def _check_amount(amount: float) -> None:
    if amount <= 0:
        raise InvalidAmountError(f"Amount must be positive, got {amount!r}")
