"""
This module contains the Flask application serving the pickup schedule API.
"""

import logging
from typing import Optional

from flask import Flask, current_app, jsonify, render_template, request

from pickup_schedule.config import DEFAULT_NUMBER_OF_DAYS
from pickup_schedule.exceptions import DownloadError
from pickup_schedule.facade import PickupScheduleFacade

logger = logging.getLogger(__name__)

app = Flask(__name__)

EXAMPLE_LOCATION = {"latitude": 29.7982722, "longitude": -95.3736702}


def get_facade() -> PickupScheduleFacade:
    """Returns the configured facade, creating the default one on first use."""
    facade = current_app.config.get("FACADE")
    if facade is None:
        from rollout.app_factory import create_facade

        facade = create_facade()
        current_app.config["FACADE"] = facade
    return facade


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


def _parse_float(name: str) -> Optional[float]:
    value = request.args.get(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


@app.after_request
def allow_cors(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    return response


@app.route("/")
def index():
    """Renders the landing page with an example query."""
    return render_template(
        "index.html", example=EXAMPLE_LOCATION, default_days=DEFAULT_NUMBER_OF_DAYS
    )


@app.route("/upcoming")
def upcoming():
    """Returns the upcoming pickup events for a location as JSON."""
    latitude = _parse_float("latitude")
    longitude = _parse_float("longitude")
    if latitude is None or longitude is None:
        return error_response("latitude and longitude are required numbers", 400)

    days = request.args.get("days")
    if days is not None:
        try:
            days = int(days)
        except ValueError:
            return error_response("days must be an integer", 400)

    try:
        schedule = get_facade().get_upcoming_schedule(latitude, longitude, days)
    except ValueError as e:
        return error_response(str(e), 400)
    except DownloadError as e:
        logger.error(f"Error Loading Schedule: {dict(request.args)} {e}")
        return error_response("Error Loading Schedule", 504)

    return jsonify(schedule)


def run_api(facade: PickupScheduleFacade, host: str = "0.0.0.0", port: int = 8080) -> None:
    """Runs the API server with the given facade."""
    app.config["FACADE"] = facade
    app.run(host=host, port=port)


if __name__ == "__main__":
    app.run(debug=True)
