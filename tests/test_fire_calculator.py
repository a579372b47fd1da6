import pytest

from config import MAX_YEARS
from fire_calculator import (
    FireInputs,
    UNREACHABLE,
    YearsToFire,
    calculate_fire,
    compute_fire_number,
    current_progress,
    format_compact,
    format_currency,
    generate_trajectory,
    required_annual_contribution,
    round_half_up,
    savings_rate,
    years_to_goal,
)


def _count_years(portfolio, target, contribution, rate):
    years = 0
    while portfolio < target and years < 100:
        portfolio = portfolio * (1 + rate) + contribution
        years += 1
    return years


# -- FIRE number ---------------------------------------------------------------

def test_fire_number_is_expenses_over_withdrawal_rate():
    assert compute_fire_number(70000, 4) == 1_750_000
    assert compute_fire_number(40000, 3.5) == round_half_up(40000 / 0.035)


def test_fire_number_with_zero_withdrawal_rate_does_not_divide():
    assert compute_fire_number(70000, 0) == 0
    assert compute_fire_number(70000, -1) == 0


def test_round_half_up_rounds_halves_away_from_even():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


# -- Years to goal -------------------------------------------------------------

def test_years_to_goal_is_zero_when_already_there():
    assert years_to_goal(2_000_000, 1_750_000, 30000, 0.045) == 0
    assert years_to_goal(1_750_000, 1_750_000, 0, -0.05) == 0


def test_years_to_goal_matches_year_by_year_loop():
    expected = _count_years(50000, 1_750_000, 30000, 0.045)
    assert years_to_goal(50000, 1_750_000, 30000, 0.045) == expected
    assert 0 < expected < MAX_YEARS


def test_years_to_goal_is_monotonic_in_target():
    years = [years_to_goal(50000, target, 30000, 0.045) for target in range(100_000, 3_000_000, 100_000)]
    assert years == sorted(years)


def test_years_to_goal_linear_when_no_growth():
    assert years_to_goal(0, 100_000, 10_000, 0) == 10
    assert years_to_goal(0, 100_001, 10_000, 0) == 11


def test_years_to_goal_linear_is_capped():
    assert years_to_goal(0, 1_000_000, 1, 0) == MAX_YEARS


def test_years_to_goal_no_growth_no_contribution_hits_sentinel():
    assert years_to_goal(10_000, 100_000, 0, 0) == MAX_YEARS


def test_years_to_goal_negative_drag_beats_contribution():
    # 500k * 3% = 15k lost per year, only 10k added
    assert years_to_goal(500_000, 1_000_000, 10_000, -0.03) == MAX_YEARS


def test_years_to_goal_negative_return_still_reachable():
    years = years_to_goal(10_000, 100_000, 20_000, -0.02)
    assert years == _count_years(10_000, 100_000, 20_000, -0.02)
    assert years < MAX_YEARS


# -- Required contribution -----------------------------------------------------

def test_required_contribution_zero_growth_is_linear():
    assert required_annual_contribution(0, 100_000, 10, 0) == pytest.approx(10_000)
    assert required_annual_contribution(0, 100_000, 10, 0.00005) == pytest.approx(10_000)


@pytest.mark.parametrize("years", [0, -3, 100, 150])
def test_required_contribution_without_finite_horizon_is_zero(years):
    assert required_annual_contribution(0, 100_000, years, 0.05) == 0


def test_required_contribution_when_already_there_is_zero():
    assert required_annual_contribution(200_000, 100_000, 10, 0.05) == 0


def test_required_contribution_never_negative_on_overshoot():
    # 900k at 5% for 10 years is ~1.47M without any help
    assert required_annual_contribution(900_000, 1_000_000, 10, 0.05) == 0


def test_required_contribution_degenerate_factor_falls_back_to_linear():
    assert required_annual_contribution(0, 1000, 5, -1.0) == pytest.approx(200)
    # (1 - 2) ** 2 == 1 leaves a zero denominator
    assert required_annual_contribution(0, 1000, 2, -2.0) == pytest.approx(500)


@pytest.mark.parametrize("rate", [0.045, 0.07, -0.02])
def test_required_contribution_lands_on_target(rate):
    start, target, years = 50_000, 1_750_000, 20
    payment = required_annual_contribution(start, target, years, rate)

    trajectory = generate_trajectory(start, payment, rate, 0, 0, years, 0.0, 4)

    assert abs(trajectory[-1].portfolio_value - target) <= 1


# -- Trajectory ----------------------------------------------------------------

def test_trajectory_length_and_first_point():
    trajectory = generate_trajectory(50000.4, 30000, 0.07, 70000.5, 1_750_000.4, 12, 0.025, 4)

    assert len(trajectory) == 13
    assert [p.year for p in trajectory] == list(range(13))
    first = trajectory[0]
    assert first.portfolio_value == 50000
    assert first.expenses == 70001
    assert first.fire_number == 1_750_000


def test_trajectory_recomputes_fire_number_from_inflated_expenses():
    trajectory = generate_trajectory(0, 0, 0.05, 40000, 123, 2, 0.10, 4)

    assert trajectory[0].fire_number == 123
    assert trajectory[1].expenses == 44000
    assert trajectory[1].fire_number == 1_100_000
    assert trajectory[2].expenses == 48400
    assert trajectory[2].fire_number == 1_210_000


def test_trajectory_portfolio_is_never_negative():
    trajectory = generate_trajectory(1000, 0, -1.5, 1000, 25000, 6, 0.0, 4)
    assert all(p.portfolio_value >= 0 for p in trajectory)
    assert trajectory[1].portfolio_value == 0


def test_trajectory_compounds_nominal_rate_by_default():
    # real growth 2% - 20% = -18%, below the -15% floor
    trajectory = generate_trajectory(1000, 0, 0.02, 100, 2500, 1, 0.20, 4)
    assert trajectory[1].portfolio_value == 1020


def test_trajectory_clamped_mode_applies_growth_floor():
    trajectory = generate_trajectory(1000, 0, 0.02, 100, 2500, 1, 0.20, 4, growth_floor_mode="clamped")
    assert trajectory[1].portfolio_value == 850


def test_trajectory_clamped_mode_leaves_mild_real_growth_alone():
    trajectory = generate_trajectory(1000, 0, 0.07, 100, 2500, 1, 0.025, 4, growth_floor_mode="clamped")
    assert trajectory[1].portfolio_value == 1070


def test_trajectory_rejects_unknown_growth_floor_mode():
    with pytest.raises(ValueError, match="growth floor mode"):
        generate_trajectory(1000, 0, 0.07, 100, 2500, 1, 0.025, 4, growth_floor_mode="bogus")


def test_trajectory_negative_horizon_is_just_year_zero():
    assert len(generate_trajectory(1000, 0, 0.07, 100, 2500, -5, 0.025, 4)) == 1


def test_trajectory_is_deterministic():
    args = (50000, 30000, 0.07, 70000, 1_750_000, 30, 0.025, 4)
    assert generate_trajectory(*args) == generate_trajectory(*args)


# -- Full calculation ----------------------------------------------------------

def test_calculate_fire_with_defaults(default_inputs):
    results, trajectory = calculate_fire(default_inputs)

    years = _count_years(50000, 1_750_000, 30000, 0.045)
    assert results.fire_number == 1_750_000
    assert results.years_to_retirement == YearsToFire(years)
    assert results.current_progress == 3
    assert results.savings_rate == 30
    assert results.annual_savings == 30000
    assert results.real_return_rate == pytest.approx(0.045)
    expected_monthly = round_half_up(required_annual_contribution(50000, 1_750_000, years, 0.045) / 12)
    assert results.monthly_savings_needed == expected_monthly
    assert len(trajectory) == min(years + 10, 100) + 1


def test_calculate_fire_negative_real_return_is_unreachable():
    inputs = FireInputs.from_dict({"investment_returns": 4, "inflation_rate": 6})
    results, trajectory = calculate_fire(inputs)

    assert results.years_to_retirement == UNREACHABLE
    assert results.years_to_retirement.display() == "∞"
    assert results.monthly_savings_needed == 2500
    assert len(trajectory) == 101


def test_calculate_fire_zero_real_return_no_savings_reports_literal_cap():
    inputs = FireInputs.from_dict({
        "annual_income": 70000, "annual_expenses": 70000,
        "investment_returns": 3, "inflation_rate": 3,
    })
    results, trajectory = calculate_fire(inputs)

    assert results.years_to_retirement == YearsToFire(100)
    assert not results.years_to_retirement.is_unreachable
    assert results.monthly_savings_needed == 0
    assert len(trajectory) == 101


def test_calculate_fire_income_below_expenses_never_contributes_negative():
    inputs = FireInputs.from_dict({"annual_income": 50000, "annual_expenses": 70000})
    results, trajectory = calculate_fire(inputs)

    assert results.annual_savings == 0
    assert results.savings_rate == 0
    assert results.monthly_savings_needed >= 0


def test_calculate_fire_zero_withdrawal_rate_is_unreachable():
    inputs = FireInputs.from_dict({"withdrawal_rate": 0})
    results, trajectory = calculate_fire(inputs)

    assert results.fire_number == 0
    assert results.years_to_retirement.is_unreachable
    assert results.current_progress == 0
    assert all(p.fire_number == 0 for p in trajectory[1:])


def test_calculate_fire_zero_expenses_is_already_there():
    inputs = FireInputs.from_dict({"annual_expenses": 0})
    results, trajectory = calculate_fire(inputs)

    assert results.fire_number == 0
    assert results.years_to_retirement == YearsToFire(0)
    assert results.current_progress == 100
    assert results.monthly_savings_needed == 0
    assert len(trajectory) == 11


def test_results_to_dict_exposes_unreachable_flag():
    inputs = FireInputs.from_dict({"investment_returns": 4, "inflation_rate": 6})
    data = calculate_fire(inputs)[0].to_dict()

    assert data["years_to_retirement"] is None
    assert data["unreachable"] is True


# -- Helpers -------------------------------------------------------------------

def test_inputs_from_dict_fills_defaults_and_ignores_unknown_keys():
    inputs = FireInputs.from_dict({"annual_income": "120000", "bogus": 1})

    assert inputs.annual_income == 120000.0
    assert inputs.annual_expenses == 70000.0
    assert inputs.withdrawal_rate == 4.0


def test_savings_rate_is_clamped():
    assert savings_rate(100000, 70000) == 30
    assert savings_rate(50000, 80000) == 0
    assert savings_rate(0, 10000) == 0


def test_current_progress_is_clamped():
    assert current_progress(50000, 1_750_000) == 3
    assert current_progress(5_000_000, 1_750_000) == 100
    assert current_progress(0, 0) == 100


def test_format_currency():
    assert format_currency(1_750_000) == "$1,750,000"
    assert format_currency(2500.4, "EUR") == "€2,500"
    assert format_currency(1000, "inr") == "₹1,000"
    assert format_currency(1000, "XYZ") == "$1,000"
    assert format_currency(-1000, "GBP") == "-£1,000"


def test_format_compact():
    assert format_compact(2_300_000_000) == "2.3b"
    assert format_compact(1_500_000) == "1.5m"
    assert format_compact(40_000) == "40.0k"
    assert format_compact(999) == "999"
