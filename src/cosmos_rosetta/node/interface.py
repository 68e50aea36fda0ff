"""
Abstract interface for chain node access.

Defines the contract for blockchain access that all chain clients must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from cosmos_rosetta.tx.signing import TxConfig


@dataclass
class AccountInfo:
    """Replay-protection state of an account."""
    address: str
    account_number: int
    sequence: int


@dataclass
class NodeStatus:
    """Identity of the node and the network it runs."""
    network: str                       # Chain id
    moniker: str = ""
    version: str = ""


class ChainClient(ABC):
    """
    Abstract interface for chain access.

    This interface defines all chain operations needed by the construction API:
    - Account lookup (account number and sequence)
    - Node status (chain id)
    - Transaction config (sign-mode handler and encoder)
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Establish connection to the node.

        Raises:
            NodeConnectionError: If connection cannot be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection to the node."""
        pass

    @abstractmethod
    async def account_info(
        self,
        address: str,
        height: Optional[int] = None,
    ) -> AccountInfo:
        """
        Get account number and sequence of an account.

        Args:
            address: Bech32 encoded address
            height: Block height to query at, latest when None

        Returns:
            Account info at the requested height

        Raises:
            NodeConnectionError: If the query fails or the account is unknown
        """
        pass

    @abstractmethod
    async def status(self) -> NodeStatus:
        """
        Get node status.

        Returns:
            Node identity including the network (chain id)

        Raises:
            NodeConnectionError: If the query fails
        """
        pass

    @abstractmethod
    def get_tx_config(self) -> "TxConfig":
        """
        Get the transaction config of the chain.

        Returns:
            Sign-mode handler and transaction encoder
        """
        pass


class NodeConnectionError(Exception):
    """Raised when communication with the node fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
