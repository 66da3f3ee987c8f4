"""
This script runs the Flask pickup schedule API.
"""

from api.app import run_api
from pickup_schedule.config import API_HOST, API_PORT
from rollout.app_factory import create_facade, initialize_app

if __name__ == "__main__":
    initialize_app()
    # Running on 0.0.0.0 makes it accessible from outside the container
    run_api(create_facade(), host=API_HOST, port=API_PORT)
