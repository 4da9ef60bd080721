"""
HTTP service for procscene.

FastAPI endpoints for scene layout generation and day/night simulation.
"""

from .server import create_app, main

__all__ = ["create_app", "main"]
