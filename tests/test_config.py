"""Unit tests for YAML scenario and sampler configuration."""

from datetime import date

import pytest

from credit_ledger.utils.config import (
    AccountConfig,
    load_sampler_config,
    load_scenario_config,
)


def _write(tmp_path, text: str):
    path = tmp_path / "scenario.yaml"
    path.write_text(text)
    return path


class TestScenarioConfig:

    def test_bundled_scenario_resolves_from_project_root(self):
        cfg = load_scenario_config("configs/scenarios/scenario_a.yaml")
        assert cfg.name == "scenario_a"
        assert cfg.account.credit_limit == 1000.0
        assert cfg.account.apr_percent == 35.0
        assert cfg.num_events == 2
        assert cfg.events[0].kind == "charge"
        assert cfg.events[0].amount == 500.0
        assert cfg.events[1].amount is None
        assert cfg.expected["2018-01-31"].endswith("$514.38")

    def test_unquoted_dates_and_defaults(self, tmp_path):
        path = _write(tmp_path, (
            "account:\n"
            "  credit_limit: 2500\n"
            "events:\n"
            "  - {kind: Charge, amount: 40, date: 2018-02-03}\n"
            "expected:\n"
            "  2018-02-03: anything\n"
        ))
        cfg = load_scenario_config(path)
        assert cfg.name == "scenario"
        assert cfg.account.apr_percent == 35.0
        assert cfg.events[0].kind == "charge"
        assert cfg.events[0].date == "2018-02-03"
        assert "2018-02-03" in cfg.expected

    def test_empty_file_gives_defaults(self, tmp_path):
        cfg = load_scenario_config(_write(tmp_path, ""))
        assert cfg.name == "scenario"
        assert cfg.account == AccountConfig()
        assert cfg.events == []
        assert cfg.expected == {}

    def test_unknown_kind(self, tmp_path):
        path = _write(tmp_path, "events:\n  - {kind: refund, amount: 5, date: '2018-01-01'}\n")
        with pytest.raises(ValueError, match="Unknown event kind"):
            load_scenario_config(path)

    def test_charge_needs_amount(self, tmp_path):
        path = _write(tmp_path, "events:\n  - {kind: charge, date: '2018-01-01'}\n")
        with pytest.raises(ValueError, match="needs an amount"):
            load_scenario_config(path)

    def test_account_config_opens_account(self):
        account = AccountConfig(credit_limit=800, apr_percent=20, opening_date="2018-05-01").open_account()
        assert account.credit_limit == 800
        assert account.apr == pytest.approx(0.20)
        assert account.opening_date == date(2018, 5, 1)


class TestSamplerConfig:

    def test_lists_become_tuples(self):
        cfg = load_sampler_config("configs/sampler/default.yaml")
        assert cfg["num_events_range"] == (5, 40)
        assert cfg["kind_probabilities"] == (0.5, 0.3, 0.2)
        assert cfg["opening_date"] == "2018-01-01"
