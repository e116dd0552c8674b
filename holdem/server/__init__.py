"""
Holdem Server - FastAPI layer for a single table
"""

from holdem.server.app import create_app

__all__ = ["create_app"]
