import argparse
import json
import logging
import sys

from pickup_schedule.config import API_HOST, API_PORT
from pickup_schedule.exceptions import DownloadError

from .app_factory import create_facade, initialize_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rollout pickup schedule runner.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve.add_argument("--host", default=API_HOST)
    serve.add_argument("--port", type=int, default=API_PORT)

    upcoming = subparsers.add_parser("upcoming", help="Print the upcoming schedule as JSON.")
    upcoming.add_argument("--latitude", type=float, required=True)
    upcoming.add_argument("--longitude", type=float, required=True)
    upcoming.add_argument("--days", type=int, default=None)
    return parser


def main(argv=None) -> int:
    initialize_app()
    args = build_parser().parse_args(argv)

    facade = create_facade()

    if args.command == "serve":
        # Flask is only needed for this command
        from api.app import run_api
        logger.info("Starting API...")
        run_api(facade, host=args.host, port=args.port)
    elif args.command == "upcoming":
        try:
            schedule = facade.get_upcoming_schedule(args.latitude, args.longitude, args.days)
        except (ValueError, DownloadError) as e:
            logger.error(f"Error Loading Schedule: {e}")
            return 1
        print(json.dumps(schedule, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
