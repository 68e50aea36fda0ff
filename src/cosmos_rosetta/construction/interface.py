"""
Capability interface of the Rosetta construction API.

Any implementation serving the construction endpoints must implement every
operation declared here.
"""

from abc import ABC, abstractmethod

from cosmos_rosetta.models import (
    ConstructionCombineRequest,
    ConstructionCombineResponse,
    ConstructionDeriveRequest,
    ConstructionDeriveResponse,
    ConstructionHashRequest,
    ConstructionMetadataRequest,
    ConstructionMetadataResponse,
    ConstructionParseRequest,
    ConstructionParseResponse,
    ConstructionPayloadsRequest,
    ConstructionPayloadsResponse,
    ConstructionPreprocessRequest,
    ConstructionPreprocessResponse,
    ConstructionSubmitRequest,
    TransactionIdentifierResponse,
)


class ConstructionAPI(ABC):
    """
    The set of Rosetta construction operations.

    Every operation either returns a complete response or raises a
    ``RosettaError``.
    """

    @abstractmethod
    async def preprocess(
        self, request: ConstructionPreprocessRequest
    ) -> ConstructionPreprocessResponse:
        """Extract the options Metadata needs from the operations."""
        pass

    @abstractmethod
    async def metadata(
        self, request: ConstructionMetadataRequest
    ) -> ConstructionMetadataResponse:
        """Resolve options into transaction metadata from live chain state."""
        pass

    @abstractmethod
    async def payloads(
        self, request: ConstructionPayloadsRequest
    ) -> ConstructionPayloadsResponse:
        """Build the unsigned transaction and the payloads to sign."""
        pass

    @abstractmethod
    async def derive(
        self, request: ConstructionDeriveRequest
    ) -> ConstructionDeriveResponse:
        """Derive the account address of a public key."""
        pass

    @abstractmethod
    async def combine(
        self, request: ConstructionCombineRequest
    ) -> ConstructionCombineResponse:
        """Attach signatures to an unsigned transaction."""
        pass

    @abstractmethod
    async def hash(
        self, request: ConstructionHashRequest
    ) -> TransactionIdentifierResponse:
        """Compute the identifier of a signed transaction."""
        pass

    @abstractmethod
    async def parse(
        self, request: ConstructionParseRequest
    ) -> ConstructionParseResponse:
        """Recover the operations of a transaction."""
        pass

    @abstractmethod
    async def submit(
        self, request: ConstructionSubmitRequest
    ) -> TransactionIdentifierResponse:
        """Broadcast a signed transaction."""
        pass
