"""
Pytest configuration and shared fixtures for the test suite.
"""

import asyncio
from typing import Dict, List, Optional

import pytest
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from cosmos_rosetta.address import address_from_public_key
from cosmos_rosetta.config import RosettaConfig
from cosmos_rosetta.construction.service import ConstructionService
from cosmos_rosetta.models import Operation
from cosmos_rosetta.node.interface import (
    AccountInfo,
    ChainClient,
    NodeConnectionError,
    NodeStatus,
)
from cosmos_rosetta.tx.signing import TxConfig, default_tx_config


TEST_CHAIN_ID = "test-chain-1"


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config() -> RosettaConfig:
    """Create a test configuration."""
    return RosettaConfig(
        blockchain="cosmos",
        network=TEST_CHAIN_ID,
        node_url="http://lcd.test",
        request_timeout_seconds=1.0,
        bech32_prefix="cosmos",
        default_gas=200_000,
        log_level="DEBUG",
    )


# ============================================================================
# Test Data Generators
# ============================================================================

def generate_test_key(secret: int = 1) -> ec.EllipticCurvePrivateKey:
    """Generate a deterministic secp256k1 private key."""
    return ec.derive_private_key(secret, ec.SECP256K1())


def public_key_bytes(key: ec.EllipticCurvePrivateKey, compressed: bool = True) -> bytes:
    """SEC1 encoding of a key's public point."""
    fmt = PublicFormat.CompressedPoint if compressed else PublicFormat.UncompressedPoint
    return key.public_key().public_bytes(Encoding.X962, fmt)


def generate_test_address(secret: int = 1, prefix: str = "cosmos") -> str:
    """Generate a valid account address."""
    return address_from_public_key(public_key_bytes(generate_test_key(secret)), prefix)


def transfer_operations(
    from_address: Optional[str],
    to_address: Optional[str],
    amount: int = 100,
    denom: str = "uatom",
    debit_first: bool = True,
    op_type: str = "Transfer",
) -> List[Operation]:
    """Build a debit/credit operation pair."""

    def leg(index: int, address: Optional[str], value: int) -> Operation:
        data = {
            "operation_identifier": {"index": index},
            "type": op_type,
            "amount": {"value": str(value), "currency": {"symbol": denom, "decimals": 6}},
        }
        if address is not None:
            data["account"] = {"address": address}
        return Operation.model_validate(data)

    debit = (from_address, -amount)
    credit = (to_address, amount)
    legs = [debit, credit] if debit_first else [credit, debit]
    return [leg(i, address, value) for i, (address, value) in enumerate(legs)]


@pytest.fixture
def sender_address() -> str:
    return generate_test_address(1)


@pytest.fixture
def receiver_address() -> str:
    return generate_test_address(2)


@pytest.fixture
def transfer_ops(sender_address, receiver_address) -> List[Operation]:
    """A valid 100uatom transfer."""
    return transfer_operations(sender_address, receiver_address)


@pytest.fixture
def sample_metadata() -> Dict:
    """Metadata as returned by the Metadata call."""
    return {
        "account_number": 7,
        "sequence": 3,
        "chain_id": TEST_CHAIN_ID,
        "gas": 200_000,
        "memo": "m",
    }


# ============================================================================
# Mock Chain Client
# ============================================================================

class MockChainClient(ChainClient):
    """Mock chain client for testing."""

    def __init__(self, network: str = TEST_CHAIN_ID):
        self.network = network
        self.accounts: Dict[str, AccountInfo] = {}
        self.calls: List[tuple] = []
        self.account_error: Optional[Exception] = None
        self.status_error: Optional[Exception] = None
        self.delay_seconds: float = 0.0
        self.tx_config: TxConfig = default_tx_config()
        self._connected = False

    async def connect(self) -> None:
        self._connected = True

    async def disconnect(self) -> None:
        self._connected = False

    async def account_info(self, address: str, height: Optional[int] = None) -> AccountInfo:
        self.calls.append(("account_info", address, height))
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.account_error:
            raise self.account_error
        if address not in self.accounts:
            raise NodeConnectionError(f"account {address} not found", status_code=404)
        return self.accounts[address]

    async def status(self) -> NodeStatus:
        self.calls.append(("status",))
        if self.status_error:
            raise self.status_error
        return NodeStatus(network=self.network, moniker="mock")

    def get_tx_config(self) -> TxConfig:
        return self.tx_config

    def add_account(self, address: str, account_number: int, sequence: int) -> None:
        """Add an account to the mock."""
        self.accounts[address] = AccountInfo(
            address=address,
            account_number=account_number,
            sequence=sequence,
        )

    @property
    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def mock_client(sender_address) -> MockChainClient:
    """Create a mock chain client knowing the sender account."""
    client = MockChainClient()
    client.add_account(sender_address, account_number=7, sequence=3)
    return client


@pytest.fixture
def service(mock_client, test_config) -> ConstructionService:
    """Construction service over the mock client."""
    return ConstructionService(mock_client, test_config)
