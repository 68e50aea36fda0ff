"""
Transfer intent model.

Represents the single value transfer described by a debit/credit operation pair.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TransferIntent:
    """
    Chain-specific description of a transfer.

    Constructed transiently from an operation pair; never persisted.

    Attributes:
        from_address: Account debited (the signer)
        to_address: Account credited
        amount: Positive amount transferred, in base units
        denom: Denomination of the amount
    """

    from_address: str
    to_address: str
    amount: int
    denom: str

