"""Sanity check: replay random account histories and verify ledger invariants.

Usage:
    python scripts/sanity_check.py
    python scripts/sanity_check.py --episodes 1000 --seed 7
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import numpy as np
import pandas as pd

from credit_ledger.evaluation.metrics import rejection_counts
from credit_ledger.simulation.replay import run_scenario
from credit_ledger.simulation.sampler import TransactionSampler
from credit_ledger.utils.config import load_sampler_config


def check_history(history: pd.DataFrame, credit_limit: float) -> list[str]:
    """Return a list of invariant violations found in one replay history."""
    problems = []

    charges = history[(history["kind"] == "charge") & (history["status"] == "ok")]
    over = charges[charges["outstanding_balance"] > credit_limit + 1e-9]
    if not over.empty:
        problems.append(f"{len(over)} accepted charge(s) left the balance over the limit")

    cursor = pd.to_datetime(history["last_accrual_date"])
    if not cursor.is_monotonic_increasing:
        problems.append("accrual cursor moved backwards")

    if (history["accrued_interest"] < -1e-9).any():
        problems.append("negative accrued interest")

    if not history["interest_posted"].is_monotonic_increasing:
        problems.append("posted interest total decreased")

    return problems


def main():
    parser = argparse.ArgumentParser(description="Sanity check: random ledger histories")
    parser.add_argument("--config", type=str, default="configs/sampler/default.yaml")
    parser.add_argument("--episodes", type=int, default=200)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    sampler = TransactionSampler(**load_sampler_config(args.config))
    rng = np.random.default_rng(args.seed)

    failures = 0
    rejected: dict[str, int] = {}
    for ep in range(args.episodes):
        scenario = sampler.sample(rng)
        _, history = run_scenario(scenario, strict=False)

        for name, count in rejection_counts(history).items():
            rejected[name] = rejected.get(name, 0) + count

        problems = check_history(history, scenario.account.credit_limit)
        if problems:
            failures += 1
            print(f"  [FAIL] episode {ep}: " + "; ".join(problems))

    print(f"\nReplayed {args.episodes} sampled histories (seed={args.seed})")
    for name, count in sorted(rejected.items()):
        print(f"  rejected {name}: {count}")

    if failures:
        print(f"  [FAIL] {failures} episode(s) violated ledger invariants")
        sys.exit(1)
    print("  [PASS] all invariants held")


if __name__ == "__main__":
    main()
