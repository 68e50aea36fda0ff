"""
Cosmos SDK REST (LCD) adapter for chain access.

Provides account and node queries via the gRPC-gateway REST endpoints.
"""

from typing import Any, Dict, Optional

import httpx
import structlog

from cosmos_rosetta.config import RosettaConfig, get_config
from cosmos_rosetta.node.interface import (
    AccountInfo,
    ChainClient,
    NodeConnectionError,
    NodeStatus,
)
from cosmos_rosetta.tx.signing import TxConfig, default_tx_config

logger = structlog.get_logger(__name__)

HEIGHT_HEADER = "x-cosmos-block-height"

# Keys under which wrapped account types nest their base account
_NESTED_ACCOUNT_KEYS = ("base_account", "base_vesting_account")


class LcdClient(ChainClient):
    """
    Cosmos REST adapter.

    Implements the ChainClient using the node's LCD REST API.
    """

    def __init__(
        self,
        config: Optional[RosettaConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        tx_config: Optional[TxConfig] = None,
    ):
        """
        Initialize the LCD client.

        Args:
            config: Service configuration. Uses global config if not provided.
            transport: Custom httpx transport (used by tests)
            tx_config: Tx config to hand out; amino JSON when not provided
        """
        self.config = config or get_config()
        self.base_url = self.config.node_url.rstrip("/")
        self._transport = transport
        self._tx_config = tx_config or default_tx_config()
        self._client: Optional[httpx.AsyncClient] = None

    async def connect(self) -> None:
        """Establish connection (create HTTP client)."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Accept": "application/json"},
            timeout=self.config.request_timeout_seconds,
            transport=self._transport,
        )
        logger.info("lcd_client_connected", base_url=self.base_url)

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("lcd_client_disconnected")

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs,
    ) -> Any:
        """Make an API request."""
        if not self._client:
            await self.connect()

        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("lcd_request_error", path=path, error=str(e))
            raise NodeConnectionError(f"LCD request failed: {e}")

        if response.status_code == 404:
            return None

        if response.status_code != 200:
            error_msg = response.text
            logger.error(
                "lcd_request_failed",
                path=path,
                status=response.status_code,
                error=error_msg,
            )
            raise NodeConnectionError(
                f"LCD API error: {error_msg}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise NodeConnectionError(f"LCD returned invalid JSON for {path}: {e}")

    async def account_info(
        self,
        address: str,
        height: Optional[int] = None,
    ) -> AccountInfo:
        """Get account number and sequence."""
        headers = {HEIGHT_HEADER: str(height)} if height is not None else None
        data = await self._request(
            "GET",
            f"/cosmos/auth/v1beta1/accounts/{address}",
            headers=headers,
        )

        if not data or "account" not in data:
            raise NodeConnectionError(f"account {address} not found", status_code=404)

        base = _find_base_account(data["account"])
        try:
            info = AccountInfo(
                address=base.get("address") or address,
                account_number=int(base.get("account_number", 0)),
                sequence=int(base.get("sequence", 0)),
            )
        except (TypeError, ValueError) as e:
            raise NodeConnectionError(f"malformed account response for {address}: {e}")

        logger.debug(
            "account_fetched",
            address=address[:16] + "...",
            account_number=info.account_number,
            sequence=info.sequence,
        )
        return info

    async def status(self) -> NodeStatus:
        """Get node status."""
        data = await self._request("GET", "/cosmos/base/tendermint/v1beta1/node_info")

        node_info = (data or {}).get("default_node_info")
        if not node_info or not node_info.get("network"):
            raise NodeConnectionError("node info response carries no network")

        app_version = data.get("application_version") or {}
        return NodeStatus(
            network=node_info["network"],
            moniker=node_info.get("moniker", ""),
            version=app_version.get("version", node_info.get("version", "")),
        )

    def get_tx_config(self) -> TxConfig:
        """Get the transaction config."""
        return self._tx_config


def _find_base_account(account: Dict[str, Any]) -> Dict[str, Any]:
    """Unwrap module and vesting accounts down to their base account."""
    if "account_number" in account:
        return account

    for key in _NESTED_ACCOUNT_KEYS:
        nested = account.get(key)
        if isinstance(nested, dict):
            return _find_base_account(nested)

    raise NodeConnectionError(f"unsupported account type: {account.get('@type', 'unknown')}")
