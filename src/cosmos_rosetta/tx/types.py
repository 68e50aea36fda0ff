"""
Chain-native transaction types.

Mirrors the bank send message and the legacy ``StdTx`` layout of a Cosmos SDK
chain, in their amino JSON form.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


MSG_SEND_TYPE = "cosmos-sdk/MsgSend"
STD_TX_TYPE = "cosmos-sdk/StdTx"


class SignMode(str, Enum):
    """Signing modes a transaction can be signed with."""
    UNSPECIFIED = "SIGN_MODE_UNSPECIFIED"
    DIRECT = "SIGN_MODE_DIRECT"
    TEXTUAL = "SIGN_MODE_TEXTUAL"
    LEGACY_AMINO_JSON = "SIGN_MODE_LEGACY_AMINO_JSON"


@dataclass(frozen=True)
class Coin:
    """An amount of a single denomination."""
    denom: str
    amount: int

    def to_amino_json(self) -> Dict[str, Any]:
        return {"amount": str(self.amount), "denom": self.denom}


@dataclass(frozen=True)
class MsgSend:
    """Bank transfer from one account to another."""
    from_address: str
    to_address: str
    amount: List[Coin]

    @property
    def signers(self) -> List[str]:
        return [self.from_address]

    def to_amino_json(self) -> Dict[str, Any]:
        return {
            "type": MSG_SEND_TYPE,
            "value": {
                "amount": [coin.to_amino_json() for coin in self.amount],
                "from_address": self.from_address,
                "to_address": self.to_address,
            },
        }


@dataclass(frozen=True)
class Fee:
    """Fee paid for a transaction; the amount may be empty."""
    gas: int
    amount: List[Coin] = field(default_factory=list)

    def to_amino_json(self) -> Dict[str, Any]:
        return {
            "amount": [coin.to_amino_json() for coin in self.amount],
            "gas": str(self.gas),
        }


@dataclass(frozen=True)
class SignerData:
    """Per-signer data bound into the sign bytes."""
    chain_id: str
    account_number: int
    sequence: int


@dataclass
class UnsignedTx:
    """
    Transaction body populated with messages and fee, without signatures.

    Attributes:
        msgs: Messages carried by the transaction
        fee: Fee and gas limit
        memo: Free-form note
        timeout_height: Block height after which the tx is invalid (0 = none)
    """
    msgs: List[MsgSend]
    fee: Fee
    memo: str = ""
    timeout_height: int = 0

    def to_amino_json(self) -> Dict[str, Any]:
        return {
            "type": STD_TX_TYPE,
            "value": {
                "fee": self.fee.to_amino_json(),
                "memo": self.memo,
                "msg": [msg.to_amino_json() for msg in self.msgs],
                "signatures": None,
                "timeout_height": str(self.timeout_height),
            },
        }
