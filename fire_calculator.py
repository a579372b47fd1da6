"""
FIRE Projection Engine

This is the core logic that answers "when can I retire?".
Given income, expenses, savings, returns, inflation and a withdrawal rate it
works out the FIRE number, how many years it takes to get there, what you'd
need to save each year to get there in that time, and a year-by-year
trajectory for charting.

Everything here is a pure function of its inputs: no global state, nothing
cached between calls. Change an input, recompute the lot.
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

from config import (
    CURRENCIES,
    DEFAULT_CURRENCY,
    DEFAULT_PARAMS,
    GROWTH_FLOOR_MODE,
    GROWTH_FLOOR_MODES,
    MAX_YEARS,
    REAL_GROWTH_FLOOR,
    TRAJECTORY_EXTRA_YEARS,
    ZERO_RETURN_TOLERANCE,
)

logger = logging.getLogger(__name__)


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class FireInputs:
    """
    The six numbers the calculator needs, bundled into one immutable record.

    Percentages are given as percentages (7 means 7%), money in whole
    currency units. Nothing is validated here - that's the caller's job.
    """
    annual_income: float
    annual_expenses: float
    investment_returns: float
    withdrawal_rate: float
    current_portfolio_value: float
    inflation_rate: float

    @classmethod
    def from_dict(cls, params: Dict[str, float]) -> 'FireInputs':
        """Build inputs from a mapping, falling back to DEFAULT_PARAMS for missing keys."""
        merged = {**DEFAULT_PARAMS, **{k: v for k, v in params.items() if k in DEFAULT_PARAMS}}
        return cls(**{k: float(merged[k]) for k in DEFAULT_PARAMS})

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class TrajectoryPoint:
    """One year of the chart. All money values are already rounded."""
    year: int
    portfolio_value: int
    expenses: int        # Inflation-adjusted annual expenses
    fire_number: int     # Inflation-adjusted FIRE number

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class YearsToFire:
    """
    Years until the FIRE number is reached.

    years is None when the goal is unreachable (the 100-year cap was hit
    while real returns were negative). A capped result with non-negative
    real returns stays a plain 100.
    """
    years: Optional[int]

    @property
    def is_unreachable(self) -> bool:
        return self.years is None

    def display(self) -> str:
        return '∞' if self.years is None else str(self.years)


UNREACHABLE = YearsToFire(None)


@dataclass
class FireResults:
    """The headline numbers shown next to the chart."""
    fire_number: int
    years_to_retirement: YearsToFire
    monthly_savings_needed: int
    current_progress: int          # Percent of the FIRE number already saved, 0-100
    savings_rate: int              # Percent of income saved, 0-100
    annual_savings: float          # income - expenses, never negative
    real_return_rate: float        # (returns - inflation) / 100, may be negative

    def to_dict(self) -> dict:
        return {
            'fire_number': self.fire_number,
            'years_to_retirement': self.years_to_retirement.years,
            'unreachable': self.years_to_retirement.is_unreachable,
            'monthly_savings_needed': self.monthly_savings_needed,
            'current_progress': self.current_progress,
            'savings_rate': self.savings_rate,
            'annual_savings': self.annual_savings,
            'real_return_rate': self.real_return_rate,
        }


# =============================================================================
# NUMERIC HELPERS
# =============================================================================

def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 always going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def savings_rate(annual_income: float, annual_expenses: float) -> int:
    """Share of income that gets saved, as a whole percent clamped to 0-100."""
    if annual_income <= 0:
        return 0
    rate = round_half_up((annual_income - annual_expenses) / annual_income * 100)
    return max(0, min(100, rate))


def current_progress(current_portfolio: float, fire_number: float) -> int:
    """How far along you are, as a whole percent clamped to 0-100."""
    if fire_number <= 0:
        # Nothing to save for - you're already there
        return 100
    progress = round_half_up(current_portfolio / fire_number * 100)
    return max(0, min(100, progress))


# =============================================================================
# CORE CALCULATIONS
# =============================================================================

def compute_fire_number(annual_expenses: float, withdrawal_rate: float) -> int:
    """
    The FIRE number: the portfolio that funds your expenses forever.

    With a 4% withdrawal rate that's 25x your annual expenses.

    Args:
        annual_expenses: Yearly spending
        withdrawal_rate: Withdrawal rate in percent (4 means 4%)

    Returns:
        Target portfolio value, rounded. A non-positive withdrawal rate has no
        finite target and yields 0; callers treat that as unreachable.
    """
    if withdrawal_rate <= 0:
        logger.debug("withdrawal rate %s has no finite FIRE number", withdrawal_rate)
        return 0
    return round_half_up(annual_expenses / (withdrawal_rate / 100))


def years_to_goal(
    current_portfolio: float,
    target: float,
    annual_contribution: float,
    real_return: float
) -> int:
    """
    How many years until the portfolio reaches the target.

    Each year the portfolio grows by the real return and then you add your
    annual contribution. We simulate year by year rather than solving for n
    directly - at most MAX_YEARS iterations, so it's cheap.

    Args:
        current_portfolio: What you have today
        target: The FIRE number
        annual_contribution: What you add every year
        real_return: Inflation-adjusted return (e.g., 0.045 for 4.5%)

    Returns:
        Whole years in [0, MAX_YEARS]. MAX_YEARS means "not within the window".
    """
    if current_portfolio >= target:
        return 0

    if real_return == 0:
        # No growth at all, just saving
        if annual_contribution <= 0:
            logger.debug("no growth and no contributions, capping at %d years", MAX_YEARS)
            return MAX_YEARS
        years = math.ceil((target - current_portfolio) / annual_contribution)
        return min(years, MAX_YEARS)

    if real_return < 0 and abs(current_portfolio * real_return) >= annual_contribution:
        # The portfolio shrinks faster than you can top it up
        return MAX_YEARS

    years = 0
    portfolio = current_portfolio
    while portfolio < target and years < MAX_YEARS:
        portfolio = portfolio * (1 + real_return) + annual_contribution
        years += 1

    return years


def required_annual_contribution(
    current_portfolio: float,
    target: float,
    years: int,
    annual_return: float
) -> float:
    """
    What you'd need to save each year to hit the target in exactly `years`.

    This is the future-value-of-an-annuity formula solved for the payment:

        PMT = (FV - PV * (1+r)^n) / (((1+r)^n - 1) / r)

    Returns:
        Annual contribution, never negative. 0 if there's nothing to solve
        (already there, no horizon, or horizon at the cap).
    """
    if years <= 0 or years >= MAX_YEARS:
        return 0.0
    if current_portfolio >= target:
        return 0.0

    if abs(annual_return) < ZERO_RETURN_TOLERANCE:
        return (target - current_portfolio) / years

    compound_factor = (1 + annual_return) ** years

    if annual_return < 0 and (compound_factor <= 0 or compound_factor == 1):
        # Formula breaks down (return of -100% or worse, or a factor of exactly 1), fall back to linear
        logger.debug("degenerate compound factor %s, using linear amortization", compound_factor)
        return (target - current_portfolio) / years

    numerator = target - current_portfolio * compound_factor
    denominator = (compound_factor - 1) / annual_return

    return max(numerator / denominator, 0.0)


def generate_trajectory(
    starting_portfolio: float,
    annual_contribution: float,
    growth_rate: float,
    annual_expenses: float,
    fire_number: float,
    years: int,
    inflation_rate: float,
    withdrawal_rate: float,
    growth_floor_mode: str = GROWTH_FLOOR_MODE
) -> List[TrajectoryPoint]:
    """
    Year-by-year projection for the chart.

    The portfolio compounds at the nominal growth rate while expenses grow
    with inflation, and the FIRE number is re-derived from the inflated
    expenses every year. The fire_number argument is only used for year 0.

    Args:
        starting_portfolio: Portfolio at year 0
        annual_contribution: Added at the end of every year
        growth_rate: Nominal return as a fraction (0.07 for 7%)
        annual_expenses: Expenses at year 0
        fire_number: FIRE number at year 0
        years: Horizon; the result has years + 1 points
        inflation_rate: Inflation as a fraction (0.025 for 2.5%)
        withdrawal_rate: Withdrawal rate in percent (4 means 4%)
        growth_floor_mode: 'nominal' or 'clamped', see config.GROWTH_FLOOR_MODE

    Returns:
        List of TrajectoryPoint, year 0 first
    """
    if growth_floor_mode not in GROWTH_FLOOR_MODES:
        raise ValueError(
            f"unknown growth floor mode {growth_floor_mode!r}, expected one of {GROWTH_FLOOR_MODES}"
        )

    real_growth_rate = growth_rate - inflation_rate
    effective_growth_rate = growth_rate
    # 'clamped' is what the web calculator does; 'nominal' ignores the floor
    if growth_floor_mode == 'clamped' and real_growth_rate < REAL_GROWTH_FLOOR:
        effective_growth_rate = REAL_GROWTH_FLOOR

    portfolio_value = starting_portfolio
    inflated_expenses = annual_expenses
    inflated_fire_number = fire_number

    trajectory = [TrajectoryPoint(
        year=0,
        portfolio_value=round_half_up(max(0, portfolio_value)),
        expenses=round_half_up(inflated_expenses),
        fire_number=round_half_up(inflated_fire_number),
    )]

    for year in range(1, max(years, 0) + 1):
        portfolio_value = portfolio_value * (1 + effective_growth_rate) + annual_contribution
        inflated_expenses *= (1 + inflation_rate)
        if withdrawal_rate > 0:
            inflated_fire_number = inflated_expenses / (withdrawal_rate / 100)
        else:
            inflated_fire_number = 0

        trajectory.append(TrajectoryPoint(
            year=year,
            portfolio_value=round_half_up(max(0, portfolio_value)),
            expenses=round_half_up(inflated_expenses),
            fire_number=round_half_up(inflated_fire_number),
        ))

    return trajectory


# =============================================================================
# PUTTING IT TOGETHER
# =============================================================================

def calculate_fire(
    inputs: FireInputs,
    growth_floor_mode: str = GROWTH_FLOOR_MODE
) -> Tuple[FireResults, List[TrajectoryPoint]]:
    """
    Run the whole calculation for one set of inputs.

    The order matters:
    1. FIRE number from expenses and withdrawal rate
    2. Years to reach it, using real (inflation-adjusted) returns
    3. Savings needed to get there in that many years
    4. Chart data, running 10 years past the FIRE date (max 100)

    Returns:
        (FireResults, trajectory)
    """
    fire_number = compute_fire_number(inputs.annual_expenses, inputs.withdrawal_rate)
    annual_savings = max(0.0, inputs.annual_income - inputs.annual_expenses)
    real_return_rate = (inputs.investment_returns - inputs.inflation_rate) / 100

    if inputs.withdrawal_rate <= 0:
        years = MAX_YEARS
        horizon = UNREACHABLE
        progress = 0
    else:
        years = years_to_goal(
            inputs.current_portfolio_value, fire_number, annual_savings, real_return_rate
        )
        if real_return_rate < 0 and years >= MAX_YEARS:
            horizon = UNREACHABLE
        else:
            horizon = YearsToFire(years)
        progress = current_progress(inputs.current_portfolio_value, fire_number)

    required = required_annual_contribution(
        inputs.current_portfolio_value, fire_number, years, real_return_rate
    )

    if years < MAX_YEARS:
        monthly_savings_needed = round_half_up(required / 12)
    else:
        # Not reachable in the window - just show what you're saving now
        monthly_savings_needed = round_half_up(annual_savings / 12)

    results = FireResults(
        fire_number=fire_number,
        years_to_retirement=horizon,
        monthly_savings_needed=monthly_savings_needed,
        current_progress=progress,
        savings_rate=savings_rate(inputs.annual_income, inputs.annual_expenses),
        annual_savings=annual_savings,
        real_return_rate=real_return_rate,
    )

    trajectory = generate_trajectory(
        starting_portfolio=inputs.current_portfolio_value,
        annual_contribution=annual_savings,
        growth_rate=inputs.investment_returns / 100,
        annual_expenses=inputs.annual_expenses,
        fire_number=fire_number,
        years=min(years + TRAJECTORY_EXTRA_YEARS, MAX_YEARS),
        inflation_rate=inputs.inflation_rate / 100,
        withdrawal_rate=inputs.withdrawal_rate,
        growth_floor_mode=growth_floor_mode,
    )

    return results, trajectory


# =============================================================================
# FORMATTING
# =============================================================================

def currency_symbol(currency: str = DEFAULT_CURRENCY) -> str:
    """Symbol for a currency code; unknown codes get the default currency's symbol."""
    return CURRENCIES.get((currency or '').upper(), CURRENCIES[DEFAULT_CURRENCY])


def format_currency(amount: float, currency: str = DEFAULT_CURRENCY) -> str:
    """Format a number as money with thousands separators and no decimals."""
    rounded = round_half_up(amount)
    sign = '-' if rounded < 0 else ''
    return f"{sign}{currency_symbol(currency)}{abs(rounded):,}"


def format_compact(value: float) -> str:
    """Short form for chart axes: 1.5b, 2.3m, 40.0k."""
    if value >= 1_000_000_000:
        return f"{value / 1_000_000_000:.1f}b"
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}m"
    if value >= 1_000:
        return f"{value / 1_000:.1f}k"
    return f"{value:g}"


# =============================================================================
# QUICK TEST
# =============================================================================

if __name__ == "__main__":
    inputs = FireInputs.from_dict(DEFAULT_PARAMS)
    results, trajectory = calculate_fire(inputs)

    print("=== FIRE Calculation (default inputs) ===\n")
    print(f"Annual Income:    {format_currency(inputs.annual_income)}")
    print(f"Annual Expenses:  {format_currency(inputs.annual_expenses)}")
    print(f"Portfolio:        {format_currency(inputs.current_portfolio_value)}")
    print(f"Returns: {inputs.investment_returns:g}% nominal, {inputs.inflation_rate:g}% inflation")
    print()
    print(f"FIRE Number:      {format_currency(results.fire_number)}")
    print(f"Years to FIRE:    {results.years_to_retirement.display()}")
    print(f"Monthly Savings:  {format_currency(results.monthly_savings_needed)}")
    print(f"Progress:         {results.current_progress}%")

    print("\nTrajectory snapshots:")
    for point in trajectory[::5]:
        print(f"  Year {point.year:>3}: {format_currency(point.portfolio_value):>15}"
              f"  (target {format_currency(point.fire_number)})")
