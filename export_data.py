#!/usr/bin/env python3
"""
Export FIRE calculation data for visualization.

Exports:
- The inputs and the headline results
- The year-by-year trajectory (portfolio, inflated expenses, inflated FIRE number)
- Display strings in the chosen currency
"""

import csv
import json
from pathlib import Path
from typing import Any, Dict, List

from config import DEFAULT_CURRENCY, DEFAULT_PARAMS, GROWTH_FLOOR_MODE
from fire_calculator import (
    FireInputs, TrajectoryPoint, calculate_fire,
    currency_symbol, format_currency
)


TRAJECTORY_COLUMNS = ['year', 'portfolio_value', 'expenses', 'fire_number']


def build_export(
    inputs: FireInputs,
    currency: str = DEFAULT_CURRENCY,
    growth_floor_mode: str = GROWTH_FLOOR_MODE
) -> Dict[str, Any]:
    """
    Run the calculation and bundle everything a chart or report needs.

    The same dict is returned by the API, so the front-end and the JSON file
    always agree on shape.
    """
    results, trajectory = calculate_fire(inputs, growth_floor_mode=growth_floor_mode)
    years = results.years_to_retirement

    return {
        "params": inputs.to_dict(),
        "currency": {
            "code": (currency or DEFAULT_CURRENCY).upper(),
            "symbol": currency_symbol(currency),
        },
        "growth_floor_mode": growth_floor_mode,
        "results": results.to_dict(),
        "trajectory": [point.to_dict() for point in trajectory],
        "formatted": {
            "fire_number": format_currency(results.fire_number, currency),
            "years_to_retirement": years.display(),
            "monthly_savings_needed": format_currency(results.monthly_savings_needed, currency),
            "current_progress": f"{results.current_progress}%",
            "savings_rate": f"{results.savings_rate}%",
        },
    }


def export_json(
    inputs: FireInputs,
    output_path: str,
    currency: str = DEFAULT_CURRENCY,
    growth_floor_mode: str = GROWTH_FLOOR_MODE
) -> Dict[str, Any]:
    """Write the export to a JSON file and return it."""
    export_data = build_export(inputs, currency, growth_floor_mode)

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(export_data, f, indent=2, ensure_ascii=False)

    return export_data


def export_csv(trajectory: List[TrajectoryPoint], output_path: str) -> Path:
    """Write the trajectory as CSV, one row per year."""
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='utf-8', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=TRAJECTORY_COLUMNS)
        writer.writeheader()
        for point in trajectory:
            writer.writerow(point.to_dict())

    return output_file


if __name__ == "__main__":
    data = export_json(FireInputs.from_dict(DEFAULT_PARAMS), "visualization/data.json")
    print("Exported to visualization/data.json")
    print(f"FIRE number: {data['formatted']['fire_number']}")
    print(f"Years to FIRE: {data['formatted']['years_to_retirement']}")
