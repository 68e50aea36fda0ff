"""
Cosmos Rosetta Construction

Implementation of the Rosetta construction API for a Cosmos SDK chain.
Turns chain-agnostic operations into unsigned transactions and the payloads
external signers sign, using live account and network state from a node.
"""

__version__ = "0.1.0"

from cosmos_rosetta.construction.service import ConstructionService
from cosmos_rosetta.core.transfer import TransferIntent
from cosmos_rosetta.errors import RosettaError
from cosmos_rosetta.node.lcd import LcdClient

__all__ = [
    "ConstructionService",
    "TransferIntent",
    "RosettaError",
    "LcdClient",
]
