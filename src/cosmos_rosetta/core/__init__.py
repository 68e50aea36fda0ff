"""
Core construction components.

This module contains the domain value objects shared by the operation
interpreter and the transaction builder.
"""

from cosmos_rosetta.core.transfer import TransferIntent

__all__ = [
    "TransferIntent",
]
