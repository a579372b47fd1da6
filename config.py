"""
Configuration for the FIRE calculator.

This file contains the default inputs and the knobs the engine reads.
Tweak these values to change what the calculator starts with.
"""

# =============================================================================
# DEFAULT INPUTS
# =============================================================================

DEFAULT_PARAMS = {
    'annual_income': 100_000,          # Gross yearly income
    'annual_expenses': 70_000,         # Yearly spending (drives the FIRE number)
    'investment_returns': 7.0,         # Nominal annual return, percent
    'withdrawal_rate': 4.0,            # Safe withdrawal rate, percent (the "4% rule")
    'current_portfolio_value': 50_000, # What you have invested today
    'inflation_rate': 2.5,             # Annual inflation, percent
}

# =============================================================================
# CURRENCIES
# =============================================================================
# Display-symbol substitution only - no conversion between currencies.

CURRENCIES = {
    'USD': '$',
    'CAD': '$',
    'EUR': '€',
    'GBP': '£',
    'JPY': '¥',
    'INR': '₹',
}

DEFAULT_CURRENCY = 'USD'

# =============================================================================
# INPUT RANGES (front-end sliders)
# =============================================================================
# Informative only: served by the API so a front-end can build its widgets.
# The engine itself never rejects a value for being outside these ranges.

INPUT_RANGES = {
    'current_portfolio_value': {'min': 0, 'max': None, 'step': 5_000},
    'annual_income': {'min': 0, 'max': None, 'step': 1_000},
    'annual_expenses': {'min': 0, 'max': None, 'step': 1_000},
    'investment_returns': {'min': 1, 'max': 12, 'step': 0.5},
    'withdrawal_rate': {'min': 2, 'max': 8, 'step': 0.1},
    'inflation_rate': {'min': 0, 'max': 10, 'step': 0.1},
}

# =============================================================================
# ENGINE CONSTANTS
# =============================================================================

MAX_YEARS = 100                 # Horizon cap; also the "not reached" sentinel
TRAJECTORY_EXTRA_YEARS = 10     # Chart shows this many years past the FIRE date
ZERO_RETURN_TOLERANCE = 1e-4    # |rate| below this is treated as zero growth
REAL_GROWTH_FLOOR = -0.15       # Real growth floor used by the 'clamped' mode

# How the trajectory compounds the portfolio when real growth is very negative:
#   'nominal' - always compound the nominal return, ignoring the floor
#   'clamped' - compound at REAL_GROWTH_FLOOR once real growth drops below it (the web calculator's rule)
GROWTH_FLOOR_MODES = ('nominal', 'clamped')
GROWTH_FLOOR_MODE = 'nominal'
