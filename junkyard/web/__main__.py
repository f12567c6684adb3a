"""Entry point for the web version: python -m junkyard.web"""

import argparse
import logging

from junkyard.engine.progression import ProgressionEngine
from junkyard.engine.save import JsonFileStorage
from junkyard.web.server import init_engine, run_server


def main() -> None:
    parser = argparse.ArgumentParser(description="Junkyard — Web Version")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=5000, help="Port (default: 5000)")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper())

    init_engine(ProgressionEngine(JsonFileStorage()))

    print("\n  Junkyard (Web Edition)")
    print(f"  ➜ http://{args.host}:{args.port}/api/state\n")

    run_server(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
