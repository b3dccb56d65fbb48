"""Plot an account's balance and interest from a replay history CSV.

Usage:
    python scripts/plot_balance.py
    python scripts/plot_balance.py --input results/multi_month_history.csv
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import pandas as pd

COLORS = {
    "charge": "#e74c3c",
    "payment": "#2ecc71",
    "balance": "#3498db",
}


def make_balance_plot(df: pd.DataFrame, output_path: str = "results/balance.png") -> None:
    """Create a 2-panel plot: balance with events marked, and interest.

    Rejected operations are drawn hollow.
    """
    fig, (ax_bal, ax_int) = plt.subplots(2, 1, figsize=(12, 8), sharex=True)
    fig.suptitle("Account Balance History", fontsize=16, fontweight="bold", y=0.98)

    ax_bal.step(df["date"], df["outstanding_balance"], where="post", color="black", linewidth=1.5)
    for kind, color in COLORS.items():
        subset = df[df["kind"] == kind]
        ok = subset[subset["status"] == "ok"]
        rejected = subset[subset["status"] == "rejected"]
        ax_bal.scatter(ok["date"], ok["outstanding_balance"], color=color, label=kind, zorder=3)
        ax_bal.scatter(
            rejected["date"], rejected["outstanding_balance"],
            facecolors="none", edgecolors=color, zorder=3,
        )
    ax_bal.set_title("Outstanding Balance ($)", fontsize=12, fontweight="bold")
    ax_bal.legend()
    ax_bal.grid(axis="y", alpha=0.3)

    ax_int.plot(df["date"], df["accrued_interest"], label="accrued (unposted)", color="#9b59b6")
    ax_int.plot(df["date"], df["interest_posted"], label="posted (cumulative)", color="#e67e22")
    ax_int.set_title("Interest ($)", fontsize=12, fontweight="bold")
    ax_int.legend()
    ax_int.grid(axis="y", alpha=0.3)
    ax_int.tick_params(axis="x", rotation=30)

    plt.tight_layout(rect=[0, 0, 1, 0.95])

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(str(out), dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"Balance plot saved to {out}")


def main():
    parser = argparse.ArgumentParser(description="Plot a replay history")
    parser.add_argument(
        "--input",
        type=str,
        default="results/scenario_a_history.csv",
        help="Path to history CSV",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="results/balance.png",
        help="Path to save plot image",
    )
    args = parser.parse_args()

    csv_path = Path(args.input)
    if not csv_path.exists():
        print(f"Error: {csv_path} not found. Run run_scenario.py first.")
        sys.exit(1)

    df = pd.read_csv(csv_path, parse_dates=["date"])
    print(f"Loaded {len(df)} rows from {csv_path}")

    make_balance_plot(df, args.output)


if __name__ == "__main__":
    main()
