"""Entry point for Junkyard."""

import argparse
import logging

from junkyard.app import JunkyardApp
from junkyard.engine.progression import ProgressionEngine
from junkyard.engine.save import JsonFileStorage


def main() -> None:
    parser = argparse.ArgumentParser(description="Junkyard — TUI Version")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--log-file", default=None, help="Write logs here instead of stderr")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), filename=args.log_file)

    app = JunkyardApp(ProgressionEngine(JsonFileStorage()))
    app.run()


if __name__ == "__main__":
    main()
