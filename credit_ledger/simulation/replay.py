"""Replay a sequence of ledger operations and record the account after each one."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from credit_ledger.ledger import CreditAccount, LedgerError, to_date
from credit_ledger.ledger.dates import DateLike
from credit_ledger.utils.config import ScenarioConfig

HISTORY_COLUMNS = [
    "date",
    "kind",
    "amount",
    "status",
    "error",
    "message",
    "outstanding_balance",
    "accrued_interest",
    "interest_posted",
    "opening_date",
    "last_accrual_date",
    "utilization",
]


@dataclass(frozen=True)
class LedgerEvent:
    kind: str                    # "charge", "payment" or "balance"
    date: DateLike
    amount: float | None = None


def _apply(account: CreditAccount, event: LedgerEvent) -> str:
    if event.kind == "charge":
        account.charge(event.amount, event.date)
        return ""
    if event.kind == "payment":
        account.payment(event.amount, event.date)
        return ""
    if event.kind == "balance":
        return account.balance(event.date)
    raise ValueError(f"Unknown event kind: {event.kind!r}")


def replay(
    account: CreditAccount,
    events: Iterable[LedgerEvent],
    strict: bool = True,
) -> pd.DataFrame:
    """Apply ``events`` to ``account`` in order.

    Args:
        account: Account to mutate.
        events: Operations to apply.
        strict: Re-raise ledger errors. When False, a failed operation is
            recorded as a "rejected" row and the replay carries on.

    Returns:
        DataFrame with one row per event, columns ``HISTORY_COLUMNS``.
    """
    rows: list[dict] = []
    for event in events:
        status, error, message = "ok", "", ""
        try:
            message = _apply(account, event)
        except LedgerError as exc:
            if strict:
                raise
            status, error, message = "rejected", type(exc).__name__, str(exc)

        rows.append({
            "date": to_date(event.date),
            "kind": event.kind,
            "amount": event.amount,
            "status": status,
            "error": error,
            "message": message,
            "outstanding_balance": account.outstanding_balance,
            "accrued_interest": account.accrued_interest,
            "interest_posted": account.interest_posted,
            "opening_date": account.opening_date,
            "last_accrual_date": account.last_accrual_date,
            "utilization": account.utilization,
        })

    df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    if not df.empty:
        df["date"] = pd.to_datetime(df["date"])
    return df


def run_scenario(
    config: ScenarioConfig,
    strict: bool = True,
) -> tuple[CreditAccount, pd.DataFrame]:
    """Open the scenario's account and replay its events against it."""
    account = config.account.open_account()
    events = [LedgerEvent(ev.kind, ev.date, ev.amount) for ev in config.events]
    return account, replay(account, events, strict=strict)
