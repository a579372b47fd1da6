"""
Scenario Presets for the FIRE Calculator

Each scenario is a "what if" on top of the default inputs: spend less,
spend more, save harder, or get hit by inflation that outruns your returns.

Why scenarios matter:
- The savings rate is the biggest lever - it moves both sides of the equation
- Expenses set the target, so cutting spending helps twice
- If inflation beats your returns, no amount of time gets you there
"""

from typing import Dict, Optional

from config import DEFAULT_PARAMS
from fire_calculator import FireInputs, FireResults, calculate_fire


# =============================================================================
# SCENARIO PRESETS
# =============================================================================

# Each preset only lists the inputs it changes; everything else comes from
# the base inputs (DEFAULT_PARAMS unless you pass your own).

SCENARIOS = {
    'baseline': {
        'name': 'Baseline',
        'description': 'Default inputs: $100k income, $70k expenses, 7% returns, 4% withdrawal',
        'overrides': {},
    },
    'lean_fire': {
        'name': 'Lean FIRE',
        'description': 'Frugal lifestyle: expenses cut to $40k',
        'overrides': {'annual_expenses': 40_000},
    },
    'fat_fire': {
        'name': 'Fat FIRE',
        'description': 'Comfortable lifestyle on a bigger salary: $250k income, $120k expenses',
        'overrides': {'annual_income': 250_000, 'annual_expenses': 120_000},
    },
    'high_saver': {
        'name': 'High Saver (50%)',
        'description': 'Half of income saved: $50k expenses',
        'overrides': {'annual_expenses': 50_000},
    },
    'conservative': {
        'name': 'Conservative (3.5% withdrawal)',
        'description': 'Lower withdrawal rate for a longer retirement',
        'overrides': {'withdrawal_rate': 3.5},
    },
    'stagflation': {
        'name': 'Stagflation',
        'description': '1970s-style: 4% returns with 6% inflation, negative real growth',
        'overrides': {'investment_returns': 4.0, 'inflation_rate': 6.0},
    },
    'coast_fire': {
        'name': 'Coast FIRE',
        'description': 'Stop contributing: income equals expenses, $500k already invested',
        'overrides': {'annual_income': 70_000, 'current_portfolio_value': 500_000},
    },
}


def build_scenario_inputs(key: str, base: Optional[dict] = None) -> FireInputs:
    """
    Apply a preset's overrides on top of the base inputs.

    Raises:
        KeyError: if the scenario doesn't exist
    """
    scenario = SCENARIOS[key]
    params = dict(base if base is not None else DEFAULT_PARAMS)
    params.update(scenario['overrides'])
    return FireInputs.from_dict(params)


def run_all_scenarios(base: Optional[dict] = None) -> Dict[str, FireResults]:
    """Run every preset and return the headline results keyed by scenario."""
    results = {}
    for key in SCENARIOS:
        result, _ = calculate_fire(build_scenario_inputs(key, base))
        results[key] = result
    return results


# =============================================================================
# QUICK TEST
# =============================================================================

if __name__ == "__main__":
    print("=== Scenario Presets ===\n")

    for key, result in run_all_scenarios().items():
        scenario = SCENARIOS[key]
        print(f"{scenario['name']}:")
        print(f"  {scenario['description']}")
        print(f"  FIRE number ${result.fire_number:,}, "
              f"{result.years_to_retirement.display()} years")
        print()
