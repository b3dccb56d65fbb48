"""Replay a scripted account scenario and report its statements.

Usage:
    python scripts/run_scenario.py                                   # Scenario A
    python scripts/run_scenario.py --config configs/scenarios/multi_month.yaml
    python scripts/run_scenario.py --all                             # Every scenario in configs/scenarios
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pandas as pd

from credit_ledger.evaluation.metrics import summarize_history
from credit_ledger.simulation.replay import run_scenario
from credit_ledger.utils.config import ScenarioConfig, load_scenario_config

SCENARIO_DIR = Path(__file__).resolve().parent.parent / "configs" / "scenarios"


def report(config: ScenarioConfig, output_dir: str = "results") -> pd.DataFrame:
    """Replay one scenario, print its statement lines and save the history CSV.

    Returns:
        The replay history.
    """
    print(f"\n{'='*70}")
    print(f"  {config.name}  ({config.num_events} events)")
    print(f"{'='*70}")

    _, history = run_scenario(config, strict=False)

    for row in history.itertuples(index=False):
        day = row.date.date().isoformat()
        if row.status == "rejected":
            print(f"  {day}  {row.kind:<8s} REJECTED: {row.message}")
        elif row.kind == "balance":
            print(f"  {day}  {row.message}")
            expected = config.expected.get(day)
            if expected is not None:
                mark = "PASS" if expected == row.message else "FAIL"
                print(f"              [{mark}] expected: {expected}")
        else:
            print(f"  {day}  {row.kind:<8s} ${row.amount:>9,.2f}  -> owed ${row.outstanding_balance:,.2f}")

    summary = summarize_history(history)
    print(f"  {'─'*66}")
    print(
        f"  Charged: ${summary['total_charged']:,.2f}  "
        f"Paid: ${summary['total_paid']:,.2f}  "
        f"Interest posted: ${summary['interest_posted']:,.2f}  "
        f"Rejected: {summary['rejected']}"
    )

    out_path = Path(output_dir)
    out_path.mkdir(parents=True, exist_ok=True)
    csv_path = out_path / f"{config.name}_history.csv"
    history.to_csv(csv_path, index=False)
    print(f"  History saved to {csv_path}")

    return history


def main():
    parser = argparse.ArgumentParser(description="Replay account scenarios")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/scenarios/scenario_a.yaml",
        help="Path to scenario YAML",
    )
    parser.add_argument("--all", action="store_true", help="Replay every scenario in configs/scenarios")
    parser.add_argument("--output", type=str, default="results", help="Output directory")
    args = parser.parse_args()

    if args.all:
        paths = sorted(SCENARIO_DIR.glob("*.yaml"))
    else:
        paths = [Path(args.config)]

    for path in paths:
        report(load_scenario_config(path), output_dir=args.output)


if __name__ == "__main__":
    main()
