"""
Construction service - orchestrates the Rosetta construction pipeline.

Sequences operation interpretation, metadata resolution, transaction assembly
and sign-bytes hashing, and maps every failure to a ``RosettaError``.
"""

import functools
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

import structlog
from pydantic import ValidationError

from cosmos_rosetta.config import RosettaConfig, get_config
from cosmos_rosetta.construction.interface import ConstructionAPI
from cosmos_rosetta.construction.keys import derive_account
from cosmos_rosetta.construction.metadata import MetadataResolver
from cosmos_rosetta.construction.operations import extract_transfer, is_transfer
from cosmos_rosetta.errors import (
    ALL_ERRORS,
    EndpointNotImplemented,
    InterpretationError,
    InvalidAddress,
    InvalidMemo,
    InvalidOperation,
    InvalidRequest,
    RosettaError,
    UnknownError,
)
from cosmos_rosetta.models import (
    SIGNATURE_TYPE_ECDSA,
    AccountIdentifier,
    ConstructionCombineRequest,
    ConstructionCombineResponse,
    ConstructionDeriveRequest,
    ConstructionDeriveResponse,
    ConstructionHashRequest,
    ConstructionMetadataRequest,
    ConstructionMetadataResponse,
    ConstructionOptions,
    ConstructionParseRequest,
    ConstructionParseResponse,
    ConstructionPayloadsRequest,
    ConstructionPayloadsResponse,
    ConstructionPreprocessRequest,
    ConstructionPreprocessResponse,
    ConstructionSubmitRequest,
    ErrorEnvelope,
    SigningPayload,
    TransactionIdentifierResponse,
    TransactionMetadata,
)
from cosmos_rosetta.node.interface import ChainClient
from cosmos_rosetta.tx.builder import TransactionBuilder
from cosmos_rosetta.tx.signing import hash_for_signing

logger = structlog.get_logger(__name__)

R = TypeVar("R")

MEMO_KEY = "memo"


def translate_errors(
    func: Callable[[Any, Any], Awaitable[R]],
) -> Callable[[Any, Any], Awaitable[R]]:
    """Let protocol errors through and turn anything else into UnknownError."""

    @functools.wraps(func)
    async def wrapper(self, request):
        try:
            return await func(self, request)
        except RosettaError as e:
            logger.info(
                "construction_call_rejected",
                call=func.__name__,
                code=e.code,
                error=str(e),
            )
            raise
        except Exception as e:
            logger.exception("construction_call_failed", call=func.__name__)
            raise UnknownError(f"{func.__name__} failed: {e}") from e

    return wrapper


class ConstructionService(ConstructionAPI):
    """
    Rosetta construction API for a single network.

    Stateless per request: all chain state is fetched fresh from the chain
    client on every call.

    Usage:
        ```python
        service = ConstructionService(LcdClient(config), config)
        options = (await service.preprocess(request)).options
        ```
    """

    def __init__(
        self,
        client: ChainClient,
        config: Optional[RosettaConfig] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the service.

        Args:
            client: Chain client used for account and status queries
            config: Service configuration
            timeout: Per chain call timeout; the configured request timeout when not given
        """
        self.config = config or get_config()
        self.client = client
        self.timeout = timeout if timeout is not None else self.config.request_timeout_seconds

        self.resolver = MetadataResolver(client, timeout=self.timeout)
        self.builder = TransactionBuilder(client, self.config)

    @staticmethod
    def error_catalog() -> List[ErrorEnvelope]:
        """All errors this service can return."""
        return [error.catalog_entry() for error in ALL_ERRORS]

    @translate_errors
    async def preprocess(
        self, request: ConstructionPreprocessRequest
    ) -> ConstructionPreprocessResponse:
        operations = request.operations
        if len(operations) != 2:
            raise InterpretationError(f"expected 2 operations, got {len(operations)}")

        intent = extract_transfer(operations)
        if not intent.from_address:
            raise InvalidAddress("from address is empty")

        metadata = request.metadata or {}
        if metadata.get(MEMO_KEY) is None:
            raise InvalidMemo("memo not set")

        # Forwarded as given, fractional multipliers included
        gas = request.suggested_fee_multiplier
        if gas is None:
            gas = self.config.default_gas

        try:
            options = ConstructionOptions(
                address=intent.from_address,
                memo=metadata[MEMO_KEY],
                gas=gas,
            )
        except ValidationError as e:
            raise InterpretationError(f"invalid construction options: {e}")

        logger.debug("preprocess_completed", address=intent.from_address[:16] + "...")
        return ConstructionPreprocessResponse(options=options.to_options())

    @translate_errors
    async def metadata(
        self, request: ConstructionMetadataRequest
    ) -> ConstructionMetadataResponse:
        if not request.options:
            raise InterpretationError("construction options are empty")

        try:
            options = ConstructionOptions.from_options(request.options)
        except ValidationError as e:
            raise InterpretationError(f"invalid construction options: {e}")

        metadata = await self.resolver.resolve(options)
        return ConstructionMetadataResponse(metadata=metadata.to_metadata())

    @translate_errors
    async def payloads(
        self, request: ConstructionPayloadsRequest
    ) -> ConstructionPayloadsResponse:
        operations = request.operations
        if len(operations) != 2:
            raise InvalidOperation(f"expected 2 operations, got {len(operations)}")

        if not all(is_transfer(op) for op in operations):
            raise InvalidOperation("the operations are not Transfer")

        intent = extract_transfer(operations)

        try:
            metadata = TransactionMetadata.from_metadata(request.metadata or {})
            metadata.gas_limit()
        except ValueError as e:
            # pydantic's ValidationError is a ValueError
            raise InvalidRequest(f"invalid metadata: {e}")

        built = self.builder.build(intent, metadata)
        payload = hash_for_signing(built.sign_bytes)

        return ConstructionPayloadsResponse(
            unsigned_transaction=built.tx_hex,
            payloads=[
                SigningPayload(
                    account_identifier=AccountIdentifier(address=intent.from_address),
                    hex_bytes=payload.hex(),
                    signature_type=SIGNATURE_TYPE_ECDSA,
                ),
            ],
        )

    @translate_errors
    async def derive(
        self, request: ConstructionDeriveRequest
    ) -> ConstructionDeriveResponse:
        account = derive_account(request.public_key, self.config.bech32_prefix)
        return ConstructionDeriveResponse(account_identifier=account)

    @translate_errors
    async def combine(
        self, request: ConstructionCombineRequest
    ) -> ConstructionCombineResponse:
        raise EndpointNotImplemented("combine is not supported")

    @translate_errors
    async def hash(
        self, request: ConstructionHashRequest
    ) -> TransactionIdentifierResponse:
        raise EndpointNotImplemented("hash is not supported")

    @translate_errors
    async def parse(
        self, request: ConstructionParseRequest
    ) -> ConstructionParseResponse:
        raise EndpointNotImplemented("parse is not supported")

    @translate_errors
    async def submit(
        self, request: ConstructionSubmitRequest
    ) -> TransactionIdentifierResponse:
        raise EndpointNotImplemented("submit is not supported")
