"""
Node Integration Layer.

Provides abstracted access to chain state needed for transaction construction.
"""

from cosmos_rosetta.node.interface import (
    AccountInfo,
    ChainClient,
    NodeConnectionError,
    NodeStatus,
)
from cosmos_rosetta.node.lcd import LcdClient

__all__ = [
    "AccountInfo",
    "ChainClient",
    "NodeConnectionError",
    "NodeStatus",
    "LcdClient",
]
