#!/usr/bin/env python3
"""
Flask API for the FIRE Calculator

Provides endpoints to run the projection with custom inputs.
"""

import math
import os

from flask import Flask, jsonify, request
from flask_cors import CORS

from config import (
    CURRENCIES, DEFAULT_CURRENCY, DEFAULT_PARAMS,
    GROWTH_FLOOR_MODE, GROWTH_FLOOR_MODES, INPUT_RANGES
)
from export_data import build_export
from fire_calculator import FireInputs, calculate_fire
from scenarios import SCENARIOS, build_scenario_inputs


# Money inputs can't be negative; rates can (deflation, losses)
NON_NEGATIVE_FIELDS = ('annual_income', 'annual_expenses', 'current_portfolio_value')


class InputError(ValueError):
    """Request body can't be turned into calculator inputs."""


def parse_inputs(user_params) -> FireInputs:
    """
    Merge user values over the defaults and check they make sense.

    The engine itself never rejects values, so the checks live here at the edge.
    """
    if not isinstance(user_params, dict):
        raise InputError("request body must be a JSON object")

    params = dict(DEFAULT_PARAMS)
    for key in DEFAULT_PARAMS:
        if key not in user_params:
            continue
        value = user_params[key]
        if isinstance(value, bool):
            raise InputError(f"{key} must be a number")
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise InputError(f"{key} must be a number")
        if not math.isfinite(value):
            raise InputError(f"{key} must be finite")
        params[key] = value

    for key in NON_NEGATIVE_FIELDS:
        if params[key] < 0:
            raise InputError(f"{key} cannot be negative")
    if params['withdrawal_rate'] <= 0:
        raise InputError("withdrawal_rate must be greater than 0")

    return FireInputs.from_dict(params)


def parse_growth_floor_mode(user_params: dict) -> str:
    mode = user_params.get('growth_floor_mode', GROWTH_FLOOR_MODE)
    if mode not in GROWTH_FLOOR_MODES:
        raise InputError(f"growth_floor_mode must be one of {', '.join(GROWTH_FLOOR_MODES)}")
    return mode


def create_app() -> Flask:
    app = Flask(__name__)
    CORS(app)

    @app.errorhandler(InputError)
    def handle_input_error(e):
        return jsonify({"error": str(e)}), 400

    @app.route('/api/calculate', methods=['POST'])
    def calculate():
        """
        Run the calculator with custom inputs.

        Accepts JSON body with optional overrides for any DEFAULT_PARAMS values,
        plus 'currency' and 'growth_floor_mode'.
        """
        user_params = request.get_json(silent=True)
        if user_params is None:
            user_params = {}

        inputs = parse_inputs(user_params)
        mode = parse_growth_floor_mode(user_params)
        currency = str(user_params.get('currency') or DEFAULT_CURRENCY)

        try:
            result = build_export(inputs, currency=currency, growth_floor_mode=mode)
        except Exception as e:
            app.logger.exception("calculation failed")
            return jsonify({"error": str(e)}), 500

        app.logger.info(
            "calculated fire_number=%s years=%s",
            result['results']['fire_number'],
            result['formatted']['years_to_retirement'],
        )
        return jsonify(result)

    @app.route('/api/defaults', methods=['GET'])
    def get_defaults():
        """Return default inputs so a front-end can initialize its widgets."""
        return jsonify({
            "params": DEFAULT_PARAMS,
            "currencies": CURRENCIES,
            "default_currency": DEFAULT_CURRENCY,
            "input_ranges": INPUT_RANGES,
            "growth_floor_modes": list(GROWTH_FLOOR_MODES),
        })

    @app.route('/api/scenarios', methods=['GET'])
    def get_scenarios():
        """Run every preset against the defaults."""
        scenarios = []
        for key, scenario in SCENARIOS.items():
            inputs = build_scenario_inputs(key)
            results, _ = calculate_fire(inputs)
            scenarios.append({
                "key": key,
                "name": scenario['name'],
                "description": scenario['description'],
                "params": inputs.to_dict(),
                "results": results.to_dict(),
            })
        return jsonify({"scenarios": scenarios})

    return app


app = create_app()


if __name__ == '__main__':
    host = os.environ.get('FIRE_API_HOST', '127.0.0.1')
    port = int(os.environ.get('FIRE_API_PORT', '5000'))
    print(f"Starting FIRE Calculator API on http://{host}:{port}")
    app.run(debug=True, host=host, port=port)
