"""Single-account revolving credit ledger."""

from credit_ledger.ledger.account import CreditAccount, compute_interest
from credit_ledger.ledger.dates import day_before, days_between, to_date
from credit_ledger.ledger.exceptions import (
    BackdatedTransactionError,
    InsufficientCreditLimitError,
    InvalidAmountError,
    LedgerError,
    OverpaymentError,
)

__all__ = [
    "CreditAccount",
    "compute_interest",
    "to_date",
    "day_before",
    "days_between",
    "LedgerError",
    "InsufficientCreditLimitError",
    "OverpaymentError",
    "BackdatedTransactionError",
    "InvalidAmountError",
]
