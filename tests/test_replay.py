"""Tests for scenario replay and history metrics."""

from pathlib import Path

import pandas as pd
import pytest

from credit_ledger.evaluation.metrics import rejection_counts, summarize_history
from credit_ledger.ledger import CreditAccount, InsufficientCreditLimitError
from credit_ledger.simulation.replay import HISTORY_COLUMNS, LedgerEvent, replay, run_scenario
from credit_ledger.utils.config import load_scenario_config

SCENARIO_DIR = Path(__file__).resolve().parent.parent / "configs" / "scenarios"
DAILY = 0.35 / 365


@pytest.fixture
def card() -> CreditAccount:
    return CreditAccount.open(1000, 35, "2018-01-01")


# ── Bundled scenarios ─────────────────────────────────────────────────────

@pytest.mark.parametrize("path", sorted(SCENARIO_DIR.glob("*.yaml")), ids=lambda p: p.stem)
def test_bundled_scenarios_match_expected(path):
    cfg = load_scenario_config(path)
    _, history = run_scenario(cfg)

    balances = history[history["kind"] == "balance"]
    assert cfg.expected, "scenario file lists no expected statements"
    for day, message in cfg.expected.items():
        row = balances[balances["date"] == pd.Timestamp(day)]
        assert len(row) == 1
        assert row.iloc[0]["message"] == message


# ── Replay ────────────────────────────────────────────────────────────────

class TestReplay:

    def test_history_shape(self, card):
        events = [
            LedgerEvent("charge", "2018-01-01", 500),
            LedgerEvent("balance", "2018-01-31"),
        ]
        history = replay(card, events)
        assert list(history.columns) == HISTORY_COLUMNS
        assert len(history) == 2
        assert (history["status"] == "ok").all()
        assert history.iloc[0]["outstanding_balance"] == pytest.approx(500)
        assert history.iloc[1]["message"].endswith("$514.38")
        assert pd.api.types.is_datetime64_any_dtype(history["date"])

    def test_strict_replay_raises(self, card):
        events = [
            LedgerEvent("charge", "2018-01-01", 900),
            LedgerEvent("charge", "2018-01-02", 200),
        ]
        with pytest.raises(InsufficientCreditLimitError):
            replay(card, events)

    def test_lenient_replay_records_rejections(self, card):
        events = [
            LedgerEvent("charge", "2018-01-01", 900),
            LedgerEvent("charge", "2018-01-02", 200),
            LedgerEvent("payment", "2018-01-03", 1000),
            LedgerEvent("charge", "2018-01-01", 10),
            LedgerEvent("payment", "2018-01-04", 100),
        ]
        history = replay(card, events, strict=False)

        assert list(history["status"]) == ["ok", "rejected", "rejected", "rejected", "ok"]
        assert list(history["error"][1:4]) == [
            "InsufficientCreditLimitError",
            "OverpaymentError",
            "BackdatedTransactionError",
        ]
        assert history.iloc[2]["message"] == "Maximum payment allowed is 900.00"
        assert card.outstanding_balance == pytest.approx(800)

        assert rejection_counts(history) == {
            "InsufficientCreditLimitError": 1,
            "OverpaymentError": 1,
            "BackdatedTransactionError": 1,
        }

    def test_unknown_kind(self, card):
        with pytest.raises(ValueError, match="Unknown event kind"):
            replay(card, [LedgerEvent("refund", "2018-01-01", 5)])

    def test_empty_replay(self, card):
        history = replay(card, [])
        assert history.empty
        assert list(history.columns) == HISTORY_COLUMNS


# ── Metrics ───────────────────────────────────────────────────────────────

class TestSummarizeHistory:

    def test_scenario_b_totals(self):
        _, history = run_scenario(load_scenario_config(SCENARIO_DIR / "scenario_b.yaml"))
        summary = summarize_history(history)

        interest = 500 * DAILY * 15 + 300 * DAILY * 10 + 400 * DAILY * 5
        assert summary["total_charged"] == pytest.approx(600)
        assert summary["total_paid"] == pytest.approx(200)
        assert summary["interest_posted"] == pytest.approx(interest)
        assert summary["final_balance"] == pytest.approx(400 + interest)
        assert summary["rejected"] == 0
        # Peak is right after the $500 opening charge
        assert summary["peak_utilization"] == pytest.approx(0.5)
        assert summary["final_utilization"] == pytest.approx((400 + interest) / 1000)
        assert summary["days_covered"] == 30

    def test_rejected_amounts_not_counted(self, card):
        events = [
            LedgerEvent("charge", "2018-01-01", 400),
            LedgerEvent("charge", "2018-01-01", 700),
        ]
        summary = summarize_history(replay(card, events, strict=False))
        assert summary["total_charged"] == pytest.approx(400)
        assert summary["rejected"] == 1

    def test_empty_history(self, card):
        summary = summarize_history(replay(card, []))
        assert summary["total_charged"] == 0.0
        assert summary["days_covered"] == 0
