#!/usr/bin/env python3
"""
FIRE Calculator Runner

This is the main entry point that ties everything together:
- Reads your inputs from the command line (defaults from config.py)
- Runs the projection from fire_calculator.py
- Prints results, a trajectory table, and optionally the scenario presets

Run with: python run_calculator.py --income 120000 --expenses 60000
"""

import argparse
import math
import sys
from typing import Dict, List, Optional

from config import DEFAULT_CURRENCY, DEFAULT_PARAMS, GROWTH_FLOOR_MODE, GROWTH_FLOOR_MODES
from export_data import export_csv, export_json
from fire_calculator import (
    FireInputs, FireResults, TrajectoryPoint,
    calculate_fire, format_currency
)
from scenarios import SCENARIOS, run_all_scenarios


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="FIRE (Financial Independence, Retire Early) calculator")
    parser.add_argument("--income", type=float, default=DEFAULT_PARAMS['annual_income'], help="Annual income")
    parser.add_argument("--expenses", type=float, default=DEFAULT_PARAMS['annual_expenses'], help="Annual expenses")
    parser.add_argument("--returns", type=float, default=DEFAULT_PARAMS['investment_returns'], help="Nominal investment return, percent")
    parser.add_argument("--withdrawal-rate", type=float, default=DEFAULT_PARAMS['withdrawal_rate'], help="Withdrawal rate, percent")
    parser.add_argument("--portfolio", type=float, default=DEFAULT_PARAMS['current_portfolio_value'], help="Current portfolio value")
    parser.add_argument("--inflation", type=float, default=DEFAULT_PARAMS['inflation_rate'], help="Inflation rate, percent")
    parser.add_argument("--currency", default=DEFAULT_CURRENCY, help="Display currency (USD, CAD, EUR, GBP, JPY, INR)")
    parser.add_argument("--growth-floor-mode", choices=GROWTH_FLOOR_MODES, default=GROWTH_FLOOR_MODE, help="How the chart compounds under very negative real growth")
    parser.add_argument("--export-json", metavar="PATH", help="Write results and trajectory to a JSON file")
    parser.add_argument("--export-csv", metavar="PATH", help="Write the trajectory to a CSV file")
    parser.add_argument("--scenarios", action="store_true", help="Also print the scenario preset comparison")
    return parser


# =============================================================================
# OUTPUT
# =============================================================================

def print_results(inputs: FireInputs, results: FireResults, currency: str):
    """Print the headline numbers."""
    print("\n" + "=" * 60)
    print("FIRE CALCULATION RESULTS")
    print("=" * 60)

    print(f"\nAnnual Income:      {format_currency(inputs.annual_income, currency)}")
    print(f"Annual Expenses:    {format_currency(inputs.annual_expenses, currency)}")
    print(f"Current Portfolio:  {format_currency(inputs.current_portfolio_value, currency)}")
    print(f"Savings Rate:       {results.savings_rate}%")
    print(f"Expected Return:    {inputs.investment_returns:g}%")
    print(f"Inflation:          {inputs.inflation_rate:g}%")
    print(f"Real Return:        {results.real_return_rate:.1%}")
    print(f"Withdrawal Rate:    {inputs.withdrawal_rate:g}%")

    print(f"\nFIRE Number:              {format_currency(results.fire_number, currency)}")
    print(f"Years to FIRE:            {results.years_to_retirement.display()}")
    print(f"Monthly Savings Needed:   {format_currency(results.monthly_savings_needed, currency)}")
    print(f"Progress to FIRE:         {results.current_progress}%")

    if results.years_to_retirement.is_unreachable:
        print("\nInflation outpaces your returns - FIRE is not achievable with these inputs.")


def print_trajectory(trajectory: List[TrajectoryPoint], currency: str, step: int = 5):
    """Print every `step` years plus the last year."""
    print("\n" + "=" * 60)
    print("PORTFOLIO PROJECTION")
    print("=" * 60)
    print(f"\n{'Year':>4} {'Portfolio':>17} {'Expenses':>15} {'FIRE Number':>17}")
    print("-" * 60)

    last_year = trajectory[-1].year
    for point in trajectory:
        if point.year % step == 0 or point.year == last_year:
            print(f"{point.year:>4} {format_currency(point.portfolio_value, currency):>17}"
                  f" {format_currency(point.expenses, currency):>15}"
                  f" {format_currency(point.fire_number, currency):>17}")

    print("-" * 60)


def print_scenario_comparison(results: Dict[str, FireResults], currency: str):
    """Print a summary table comparing all presets."""
    print("\n" + "=" * 60)
    print("SCENARIO COMPARISON")
    print("=" * 60)
    print(f"\n{'Scenario':<32} {'FIRE Number':>15} {'Years':>8}")
    print("-" * 60)

    for key, result in results.items():
        scenario_name = SCENARIOS[key]['name']
        fire_number = format_currency(result.fire_number, currency)
        print(f"{scenario_name:<32} {fire_number:>15} {result.years_to_retirement.display():>8}")

    print("-" * 60)


# =============================================================================
# MAIN
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Run the calculator from the command line."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    numbers = (args.income, args.expenses, args.returns, args.withdrawal_rate, args.portfolio, args.inflation)
    if not all(math.isfinite(value) for value in numbers):
        print("numeric arguments must be finite", file=sys.stderr)
        return 2
    if args.withdrawal_rate <= 0:
        print("--withdrawal-rate must be > 0", file=sys.stderr)
        return 2
    if min(args.income, args.expenses, args.portfolio) < 0:
        print("--income, --expenses and --portfolio cannot be negative", file=sys.stderr)
        return 2

    inputs = FireInputs(
        annual_income=args.income,
        annual_expenses=args.expenses,
        investment_returns=args.returns,
        withdrawal_rate=args.withdrawal_rate,
        current_portfolio_value=args.portfolio,
        inflation_rate=args.inflation,
    )

    results, trajectory = calculate_fire(inputs, growth_floor_mode=args.growth_floor_mode)
    print_results(inputs, results, args.currency)
    print_trajectory(trajectory, args.currency)

    if args.scenarios:
        print_scenario_comparison(run_all_scenarios(inputs.to_dict()), args.currency)

    if args.export_json:
        export_json(inputs, args.export_json, args.currency, args.growth_floor_mode)
        print(f"\nExported to {args.export_json}")
    if args.export_csv:
        export_csv(trajectory, args.export_csv)
        print(f"\nExported to {args.export_csv}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
