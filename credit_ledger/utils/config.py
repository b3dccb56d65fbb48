"""YAML configuration loader and dataclasses for ledger scenarios."""

from __future__ import annotations

import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from credit_ledger.ledger import CreditAccount

EVENT_KINDS = ("charge", "payment", "balance")


def _resolve_config_path(path: str | Path) -> Path:
    """Resolve a config path, anchoring relative paths to the project root.

    The project root is identified as the nearest ancestor directory that
    contains ``pyproject.toml``.  If the file exists as-is (e.g. an absolute
    path or the CWD happens to be the project root already), it is returned
    unchanged.
    """
    p = Path(path)
    if p.is_absolute() or p.exists():
        return p

    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "pyproject.toml").exists():
            # open() gives the descriptive FileNotFoundError if it is missing
            return parent / p

    return p


@dataclass
class AccountConfig:
    """Terms an account is opened with."""

    credit_limit: float = 1000.0
    apr_percent: float = 35.0     # 35 means 35%
    opening_date: str = "2018-01-01"

    def open_account(self) -> CreditAccount:
        return CreditAccount.open(self.credit_limit, self.apr_percent, self.opening_date)


@dataclass
class EventConfig:
    """One scripted ledger operation."""

    kind: str                     # "charge", "payment" or "balance"
    date: str
    amount: float | None = None   # Required for charge and payment


@dataclass
class ScenarioConfig:
    """An account plus the operations replayed against it."""

    name: str = "Scenario"
    account: AccountConfig = field(default_factory=AccountConfig)
    events: list[EventConfig] = field(default_factory=list)
    # Expected statement lines, keyed by balance date (optional)
    expected: dict[str, str] = field(default_factory=dict)

    @property
    def num_events(self) -> int:
        return len(self.events)


def _parse_event(raw: dict[str, Any]) -> EventConfig:
    kind = str(raw.get("kind", "")).lower()
    if kind not in EVENT_KINDS:
        raise ValueError(f"Unknown event kind: {kind!r}")
    amount = raw.get("amount")
    if kind != "balance" and amount is None:
        raise ValueError(f"Event {kind!r} on {raw.get('date')!r} needs an amount")
    return EventConfig(
        kind=kind,
        # YAML turns bare 2018-01-01 into a date object
        date=str(raw["date"]),
        amount=float(amount) if amount is not None else None,
    )


def load_scenario_config(path: str | Path) -> ScenarioConfig:
    """Load a ScenarioConfig from a YAML file.

    Args:
        path: Path to a YAML scenario (e.g., configs/scenarios/scenario_a.yaml).

    Returns:
        Populated ScenarioConfig instance.
    """
    path = _resolve_config_path(path)
    with open(path, "r") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}

    account_dict = raw.get("account", {})
    account = AccountConfig(
        credit_limit=float(account_dict.get("credit_limit", 1000.0)),
        apr_percent=float(account_dict.get("apr_percent", 35.0)),
        opening_date=str(account_dict.get("opening_date", "2018-01-01")),
    )

    events = [_parse_event(ev) for ev in raw.get("events", [])]

    return ScenarioConfig(
        name=raw.get("name", path.stem),
        account=account,
        events=events,
        expected={str(k): str(v) for k, v in (raw.get("expected") or {}).items()},
    )


def load_sampler_config(path: str | Path) -> dict[str, Any]:
    """Load TransactionSampler keyword arguments from a YAML file.

    Returns a plain dict; two-element lists become ``(low, high)`` tuples.
    """
    path = _resolve_config_path(path)
    with open(path, "r") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}
    return {k: tuple(v) if isinstance(v, list) else v for k, v in raw.items()}
