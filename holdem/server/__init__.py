"""
Holdem Server - FastAPI + WebSocket Server Layer
"""

from holdem.server.app import app, create_app

__all__ = ["app", "create_app"]
