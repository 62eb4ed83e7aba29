#!/usr/bin/env python3
"""
Entry point for running the Color Picker web server.

Usage:
    python run_web.py [--host HOST] [--port PORT] [--log-level LEVEL] [--reload]

Examples:
    python run_web.py                    # Run on localhost:1234
    python run_web.py --port 3000        # Run on localhost:3000
    python run_web.py --host 0.0.0.0     # Allow external connections
    python run_web.py --reload           # Auto-reload on code changes

Defaults come from the COLORPICKER_* environment variables.
"""
import argparse
import logging
import uvicorn

from colorpicker.config import Settings


def main():
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Run the Color Picker web server")
    parser.add_argument(
        "--host",
        type=str,
        default=settings.host,
        help=f"Host to bind to (default: {settings.host})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port to bind to (default: {settings.port})"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.log_level})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on code changes"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    print(f"Starting Color Picker web server at http://{args.host}:{args.port}")
    print(f"API documentation: http://{args.host}:{args.port}/docs")
    print()

    uvicorn.run(
        "colorpicker.web.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower()
    )


if __name__ == "__main__":
    main()
