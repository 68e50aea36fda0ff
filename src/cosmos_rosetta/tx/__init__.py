"""
Transaction module.

Handles unsigned transaction construction, sign bytes and wire encoding.
"""

from cosmos_rosetta.errors import TransactionBuildError
from cosmos_rosetta.tx.builder import BuiltTransaction, TransactionBuilder, TxFactory
from cosmos_rosetta.tx.signing import (
    LegacyAminoJsonHandler,
    SignModeHandler,
    TxConfig,
    default_tx_config,
    hash_for_signing,
)
from cosmos_rosetta.tx.types import SignMode, SignerData, UnsignedTx

__all__ = [
    "BuiltTransaction",
    "TransactionBuilder",
    "TransactionBuildError",
    "TxFactory",
    "LegacyAminoJsonHandler",
    "SignModeHandler",
    "TxConfig",
    "default_tx_config",
    "hash_for_signing",
    "SignMode",
    "SignerData",
    "UnsignedTx",
]
