"""
Sign bytes and wire encoding.

Provides the sign-mode handler and transaction encoder a chain client exposes
through its ``TxConfig``, and the hash applied to sign bytes before they are
handed to an external signer.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from hashlib import sha256
from typing import Any, Callable, Dict, List

import structlog

from cosmos_rosetta.tx.types import SignerData, SignMode, UnsignedTx

logger = structlog.get_logger(__name__)


TxEncoder = Callable[[UnsignedTx], bytes]


class SignModeError(ValueError):
    """Raised when sign bytes cannot be produced for a sign mode."""
    pass


# Characters the chain's JSON encoder escapes inside strings
_HTML_SAFE_ESCAPES = {
    ord("&"): "\\u0026",
    ord("<"): "\\u003c",
    ord(">"): "\\u003e",
    0x2028: "\\u2028",
    0x2029: "\\u2029",
}


def canonical_json(value: Any) -> bytes:
    """
    Compact JSON with sorted keys, as used for amino JSON signing.

    Output is byte-identical to the chain's sorted JSON, including its HTML
    safe escaping, so that signatures over it verify on chain.
    """
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    # These characters only occur inside string literals
    return text.translate(_HTML_SAFE_ESCAPES).encode("utf-8")


class SignModeHandler(ABC):
    """Produces the canonical bytes to sign for a transaction."""

    @property
    @abstractmethod
    def modes(self) -> List[SignMode]:
        """Sign modes this handler supports."""
        pass

    @abstractmethod
    def get_sign_bytes(
        self,
        mode: SignMode,
        signer_data: SignerData,
        tx: UnsignedTx,
    ) -> bytes:
        """
        Get the sign bytes of a transaction.

        Args:
            mode: Sign mode to canonicalize for
            signer_data: Chain id, account number and sequence of the signer
            tx: Transaction to sign

        Returns:
            Canonical bytes to be hashed and signed

        Raises:
            SignModeError: If the mode is not supported
        """
        pass


class LegacyAminoJsonHandler(SignModeHandler):
    """Sign mode handler for ``SIGN_MODE_LEGACY_AMINO_JSON``."""

    @property
    def modes(self) -> List[SignMode]:
        return [SignMode.LEGACY_AMINO_JSON]

    def sign_doc(self, signer_data: SignerData, tx: UnsignedTx) -> Dict[str, Any]:
        """Build the ``StdSignDoc`` of a transaction."""
        doc = {
            "account_number": str(signer_data.account_number),
            "chain_id": signer_data.chain_id,
            "fee": tx.fee.to_amino_json(),
            "memo": tx.memo,
            "msgs": [msg.to_amino_json() for msg in tx.msgs],
            "sequence": str(signer_data.sequence),
        }
        # omitempty on the chain side
        if tx.timeout_height:
            doc["timeout_height"] = str(tx.timeout_height)
        return doc

    def get_sign_bytes(
        self,
        mode: SignMode,
        signer_data: SignerData,
        tx: UnsignedTx,
    ) -> bytes:
        if mode not in self.modes:
            raise SignModeError(f"sign mode {mode.value} not supported by amino JSON handler")
        return canonical_json(self.sign_doc(signer_data, tx))


def encode_amino_json_tx(tx: UnsignedTx) -> bytes:
    """Encode a transaction as amino JSON ``StdTx`` bytes."""
    return canonical_json(tx.to_amino_json())


@dataclass(frozen=True)
class TxConfig:
    """Sign-mode handler and encoder pair a chain client works with."""
    sign_mode_handler: SignModeHandler
    tx_encoder: TxEncoder


def default_tx_config() -> TxConfig:
    """Tx config understood by every chain version: amino JSON throughout."""
    return TxConfig(
        sign_mode_handler=LegacyAminoJsonHandler(),
        tx_encoder=encode_amino_json_tx,
    )


def hash_for_signing(sign_bytes: bytes) -> bytes:
    """
    Hash sign bytes into the payload an external signer signs.

    The signer produces an ECDSA secp256k1 signature over this digest.
    """
    digest = sha256(sign_bytes).digest()
    logger.debug("sign_bytes_hashed", size=len(sign_bytes), digest=digest.hex()[:16] + "...")
    return digest
