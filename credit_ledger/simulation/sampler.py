"""TransactionSampler: generates random account histories for robustness checks.

Produces ScenarioConfig instances with varied credit limits, APRs, and
date-ordered sequences of charges, payments and balance queries. Dates never
go backwards, so sampled events are never backdated; charges over the limit
and overpayments do occur and are expected to be rejected.
"""

from __future__ import annotations

from datetime import date, timedelta

import numpy as np

from credit_ledger.utils.config import EVENT_KINDS, AccountConfig, EventConfig, ScenarioConfig


class TransactionSampler:
    """Generate randomized account scenarios."""

    def __init__(
        self,
        num_events_range: tuple[int, int] = (5, 40),
        gap_days_range: tuple[int, int] = (0, 12),
        credit_limit_range: tuple[float, float] = (500.0, 5000.0),
        apr_percent_range: tuple[float, float] = (12.0, 36.0),
        charge_amount_range: tuple[float, float] = (10.0, 800.0),
        payment_amount_range: tuple[float, float] = (10.0, 600.0),
        kind_probabilities: tuple[float, float, float] = (0.5, 0.3, 0.2),
        opening_date: str | date = "2018-01-01",
    ):
        if len(kind_probabilities) != len(EVENT_KINDS):
            raise ValueError(
                f"kind_probabilities needs {len(EVENT_KINDS)} entries, got {len(kind_probabilities)}"
            )
        total = float(sum(kind_probabilities))
        if total <= 0:
            raise ValueError("kind_probabilities must sum to a positive number")

        self.num_events_range = num_events_range
        self.gap_days_range = gap_days_range
        self.credit_limit_range = credit_limit_range
        self.apr_percent_range = apr_percent_range
        self.charge_amount_range = charge_amount_range
        self.payment_amount_range = payment_amount_range
        self.kind_probabilities = tuple(p / total for p in kind_probabilities)
        # YAML turns a bare 2018-01-01 into a date object
        self.opening_date = str(opening_date)

    def sample(self, rng: np.random.Generator | None = None) -> ScenarioConfig:
        """Sample a random account and its event sequence.

        Args:
            rng: Numpy random Generator for reproducibility.

        Returns:
            A randomized ScenarioConfig.
        """
        if rng is None:
            rng = np.random.default_rng()

        account = AccountConfig(
            credit_limit=round(float(rng.uniform(*self.credit_limit_range)), 2),
            apr_percent=round(float(rng.uniform(*self.apr_percent_range)), 2),
            opening_date=self.opening_date,
        )

        num_events = int(rng.integers(self.num_events_range[0], self.num_events_range[1] + 1))
        current = date.fromisoformat(self.opening_date)
        events: list[EventConfig] = []
        for _ in range(num_events):
            current += timedelta(days=int(rng.integers(self.gap_days_range[0], self.gap_days_range[1] + 1)))
            kind = str(rng.choice(EVENT_KINDS, p=self.kind_probabilities))

            if kind == "charge":
                amount = round(float(rng.uniform(*self.charge_amount_range)), 2)
            elif kind == "payment":
                amount = round(float(rng.uniform(*self.payment_amount_range)), 2)
            else:
                amount = None

            events.append(EventConfig(kind=kind, date=current.isoformat(), amount=amount))

        return ScenarioConfig(name="sampled", account=account, events=events)
