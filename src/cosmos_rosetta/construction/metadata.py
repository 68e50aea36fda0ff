"""
Metadata Resolver - assembles transaction metadata from live chain state.

Merges the account number and sequence of the signer and the network's chain
id with the gas and memo hints carried by the construction options.
"""

import asyncio
from typing import Awaitable, Optional, TypeVar

import structlog

from cosmos_rosetta.errors import (
    ChainCommunicationError,
    InvalidAddress,
    InvalidMemo,
    MissingGasOption,
)
from cosmos_rosetta.models import ConstructionOptions, TransactionMetadata
from cosmos_rosetta.node.interface import ChainClient

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class MetadataResolver:
    """
    Resolves construction options into transaction metadata.

    Options are validated in a fixed order around the account lookup:
    address, (account lookup), gas, memo, (node status). Emptiness of the raw
    options map is checked by the caller before conversion.
    Chain failures are not retried.
    """

    def __init__(self, client: ChainClient, timeout: Optional[float] = None):
        """
        Initialize the resolver.

        Args:
            client: Chain client to query
            timeout: Per-call timeout in seconds, no limit when None
        """
        self.client = client
        self.timeout = timeout

    async def resolve(self, options: ConstructionOptions) -> TransactionMetadata:
        """
        Resolve options into metadata.

        Args:
            options: Options produced by Preprocess

        Returns:
            Complete transaction metadata

        Raises:
            InvalidAddress: If the address option is missing
            MissingGasOption: If the gas option is missing
            InvalidMemo: If the memo option is missing
            ChainCommunicationError: If a chain query fails or times out
        """
        if not options.address:
            raise InvalidAddress("address option not set")

        # Latest height
        account = await self._call(
            "account_info",
            self.client.account_info(options.address, None),
        )

        if options.gas is None:
            raise MissingGasOption("gas not set")

        if options.memo is None:
            raise InvalidMemo("memo not set")

        status = await self._call("status", self.client.status())

        logger.info(
            "metadata_resolved",
            address=options.address[:16] + "...",
            account_number=account.account_number,
            sequence=account.sequence,
            chain_id=status.network,
        )

        return TransactionMetadata(
            account_number=account.account_number,
            sequence=account.sequence,
            chain_id=status.network,
            gas=options.gas,
            memo=options.memo,
        )

    async def _call(self, name: str, call: Awaitable[T]) -> T:
        """Await a chain call under the timeout, translating any failure."""
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("chain_call_timeout", call=name, timeout=self.timeout)
            raise ChainCommunicationError(f"{name} timed out after {self.timeout}s")
        except Exception as e:
            logger.error("chain_call_failed", call=name, error=str(e))
            raise ChainCommunicationError(f"{name} failed: {e}")
