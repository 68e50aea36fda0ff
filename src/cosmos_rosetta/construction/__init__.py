"""
Construction pipeline module.

Contains the operation interpreter, the metadata resolver, account derivation
and the service implementing the Rosetta construction operations.
"""

from cosmos_rosetta.construction.interface import ConstructionAPI
from cosmos_rosetta.construction.keys import derive_account
from cosmos_rosetta.construction.metadata import MetadataResolver
from cosmos_rosetta.construction.operations import extract_transfer
from cosmos_rosetta.construction.service import ConstructionService

__all__ = [
    "ConstructionAPI",
    "ConstructionService",
    "MetadataResolver",
    "derive_account",
    "extract_transfer",
]
