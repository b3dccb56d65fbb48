"""Summary metrics over a replayed account history.

Works on the DataFrame produced by ``credit_ledger.simulation.replay.replay``.
"""

from __future__ import annotations

import pandas as pd


def summarize_history(history: pd.DataFrame) -> dict:
    """Aggregate a replay history into headline numbers.

    Only accepted operations count toward charged/paid totals.

    Args:
        history: One row per replayed event (see ``HISTORY_COLUMNS``).

    Returns:
        Dict with total_charged, total_paid, interest_posted, rejected,
        peak_utilization, final_utilization, final_balance, days_covered.
    """
    if history.empty:
        return {
            "total_charged": 0.0,
            "total_paid": 0.0,
            "interest_posted": 0.0,
            "rejected": 0,
            "peak_utilization": 0.0,
            "final_utilization": 0.0,
            "final_balance": 0.0,
            "days_covered": 0,
        }

    accepted = history[history["status"] == "ok"]
    last = history.iloc[-1]

    return {
        "total_charged": float(accepted.loc[accepted["kind"] == "charge", "amount"].sum()),
        "total_paid": float(accepted.loc[accepted["kind"] == "payment", "amount"].sum()),
        # Cumulative on the account, so the last row holds the total
        "interest_posted": float(last["interest_posted"]),
        "rejected": int((history["status"] == "rejected").sum()),
        "peak_utilization": float(history["utilization"].max()),
        "final_utilization": float(last["utilization"]),
        "final_balance": float(last["outstanding_balance"]),
        "days_covered": int((history["date"].max() - history["date"].min()).days),
    }


def rejection_counts(history: pd.DataFrame) -> dict[str, int]:
    """Number of rejected operations per error type."""
    rejected = history[history["status"] == "rejected"]
    return {str(k): int(v) for k, v in rejected["error"].value_counts().items()}
