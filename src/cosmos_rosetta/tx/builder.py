"""
Transaction Builder - constructs unsigned transfer transactions.

Turns a transfer intent plus resolved chain metadata into an unsigned
transaction, its wire bytes and the canonical bytes an external signer signs.
"""

import re
from dataclasses import dataclass, replace
from typing import Optional

import structlog

from cosmos_rosetta.address import decode_address
from cosmos_rosetta.config import RosettaConfig, get_config
from cosmos_rosetta.core.transfer import TransferIntent
from cosmos_rosetta.errors import TransactionBuildError
from cosmos_rosetta.models import TransactionMetadata
from cosmos_rosetta.node.interface import ChainClient
from cosmos_rosetta.tx.types import Coin, Fee, MsgSend, SignerData, SignMode, UnsignedTx

logger = structlog.get_logger(__name__)

DENOM_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9/:._-]{2,127}$")


@dataclass(frozen=True)
class TxFactory:
    """
    Transaction-building context.

    Immutable; ``with_sign_mode`` returns a modified copy.
    """

    account_number: int
    sequence: int
    chain_id: str
    gas: int
    memo: str = ""
    sign_mode: SignMode = SignMode.UNSPECIFIED

    @classmethod
    def from_metadata(cls, metadata: TransactionMetadata) -> "TxFactory":
        return cls(
            account_number=metadata.account_number,
            sequence=metadata.sequence,
            chain_id=metadata.chain_id,
            gas=metadata.gas_limit(),
            memo=metadata.memo,
        )

    def with_sign_mode(self, sign_mode: SignMode) -> "TxFactory":
        return replace(self, sign_mode=sign_mode)

    def signer_data(self) -> SignerData:
        return SignerData(
            chain_id=self.chain_id,
            account_number=self.account_number,
            sequence=self.sequence,
        )


@dataclass(frozen=True)
class BuiltTransaction:
    """
    Result of building a transaction.

    Attributes:
        tx: The unsigned transaction
        tx_bytes: Wire encoding of the transaction
        sign_bytes: Canonical bytes to hash and sign
        sign_mode: Sign mode the sign bytes were produced for
        signer_data: Signer data bound into the sign bytes
    """

    tx: UnsignedTx
    tx_bytes: bytes
    sign_bytes: bytes
    sign_mode: SignMode
    signer_data: SignerData

    @property
    def tx_hex(self) -> str:
        return self.tx_bytes.hex()


class TransactionBuilder:
    """
    Builds unsigned transfer transactions.

    Coordinates the message construction with the chain client's sign-mode
    handler and transaction encoder.
    """

    def __init__(
        self,
        client: ChainClient,
        config: Optional[RosettaConfig] = None,
    ):
        """
        Initialize the transaction builder.

        Args:
            client: Chain client providing the tx config
            config: Service configuration
        """
        self.client = client
        self.config = config or get_config()

    def build(
        self,
        intent: TransferIntent,
        metadata: TransactionMetadata,
        sign_mode: Optional[SignMode] = None,
    ) -> BuiltTransaction:
        """
        Build an unsigned transaction for a transfer.

        Args:
            intent: The transfer to perform
            metadata: Resolved account and chain metadata
            sign_mode: Explicit sign mode; legacy amino JSON when not given

        Returns:
            The built transaction with its wire and sign bytes

        Raises:
            TransactionBuildError: If the message cannot be built or encoded
        """
        try:
            factory = TxFactory.from_metadata(metadata)
        except ValueError as e:
            raise TransactionBuildError(f"invalid gas: {e}")
        if sign_mode is not None:
            factory = factory.with_sign_mode(sign_mode)

        msg = self.build_msg(intent)
        tx = UnsignedTx(
            msgs=[msg],
            fee=Fee(gas=factory.gas),
            memo=factory.memo,
        )

        if factory.sign_mode == SignMode.UNSPECIFIED:
            factory = factory.with_sign_mode(SignMode.LEGACY_AMINO_JSON)
        signer_data = factory.signer_data()

        try:
            tx_config = self.client.get_tx_config()
            sign_bytes = tx_config.sign_mode_handler.get_sign_bytes(
                factory.sign_mode,
                signer_data,
                tx,
            )
            tx_bytes = tx_config.tx_encoder(tx)
        except Exception as e:
            logger.error(
                "transaction_encode_failed",
                sign_mode=factory.sign_mode.value,
                error=str(e),
            )
            raise TransactionBuildError(f"Failed to encode transaction: {e}")

        logger.info(
            "transfer_transaction_built",
            from_address=intent.from_address[:16] + "...",
            chain_id=signer_data.chain_id,
            sequence=signer_data.sequence,
            sign_mode=factory.sign_mode.value,
        )

        return BuiltTransaction(
            tx=tx,
            tx_bytes=tx_bytes,
            sign_bytes=sign_bytes,
            sign_mode=factory.sign_mode,
            signer_data=signer_data,
        )

    def build_msg(self, intent: TransferIntent) -> MsgSend:
        """
        Build the bank send message of a transfer.

        Raises:
            TransactionBuildError: If addresses, amount or denom are invalid
        """
        prefix = self.config.bech32_prefix
        for role, address in (("from", intent.from_address), ("to", intent.to_address)):
            try:
                decode_address(address, prefix)
            except ValueError as e:
                raise TransactionBuildError(f"invalid {role} address: {e}")

        if intent.amount <= 0:
            raise TransactionBuildError(f"amount must be positive, got {intent.amount}")

        if not DENOM_PATTERN.match(intent.denom):
            raise TransactionBuildError(f"invalid denom: {intent.denom!r}")

        return MsgSend(
            from_address=intent.from_address,
            to_address=intent.to_address,
            amount=[Coin(denom=intent.denom, amount=intent.amount)],
        )
