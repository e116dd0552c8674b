#!/usr/bin/env python3
"""
Holdem - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload] [--settings PATH]
"""

import argparse
import os

import uvicorn

from holdem.server.app import SETTINGS_ENV


def main():
    parser = argparse.ArgumentParser(description="Holdem Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--settings", default="holdem_settings.json", help="Table settings JSON file")
    args = parser.parse_args()

    # The app factory runs in the server process, so hand the path over the environment
    os.environ[SETTINGS_ENV] = args.settings

    uvicorn.run(
        "holdem.server.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
