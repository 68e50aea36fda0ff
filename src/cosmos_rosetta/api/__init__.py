"""
HTTP API module.

Serves the construction pipeline over the Rosetta HTTP/JSON interface.
"""

from cosmos_rosetta.api.app import create_app
from cosmos_rosetta.api.routes import router

__all__ = [
    "create_app",
    "router",
]
