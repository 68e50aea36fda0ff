"""
Operation interpretation.

Turns a Rosetta operation pair into the transfer it describes.
"""

import re
from typing import Optional, Sequence, Tuple

from cosmos_rosetta.core.transfer import TransferIntent
from cosmos_rosetta.errors import InvalidOperation
from cosmos_rosetta.models import Operation

OPERATION_TRANSFER = "Transfer"

_INTEGER_PATTERN = re.compile(r"^-?[0-9]+$")


def is_transfer(operation: Operation) -> bool:
    """Check whether an operation is a transfer leg (case-insensitive)."""
    return operation.type.lower() == OPERATION_TRANSFER.lower()


def parse_amount(operation: Operation) -> int:
    """
    Parse the signed integer amount of an operation.

    Raises:
        InvalidOperation: If the amount is missing or not an integer
    """
    if operation.amount is None:
        raise InvalidOperation(
            f"operation {operation.operation_identifier.index} has no amount"
        )

    value = operation.amount.value.strip()
    if not _INTEGER_PATTERN.match(value):
        raise InvalidOperation(
            f"operation {operation.operation_identifier.index} amount {value!r} is not an integer"
        )
    return int(value)


def extract_transfer(operations: Sequence[Operation]) -> TransferIntent:
    """
    Extract the transfer described by a debit/credit operation pair.

    Order within the pair does not matter; the debit is the operation with
    the negative amount.

    Args:
        operations: Exactly two transfer operations

    Returns:
        The transfer intent

    Raises:
        InvalidOperation: If the operations do not form a valid transfer
    """
    if len(operations) != 2:
        raise InvalidOperation(f"expected 2 operations, got {len(operations)}")

    if not all(is_transfer(op) for op in operations):
        raise InvalidOperation("the operations are not Transfer")

    debit: Optional[Tuple[Operation, int]] = None
    credit: Optional[Tuple[Operation, int]] = None
    for op in operations:
        value = parse_amount(op)
        if value < 0 and debit is None:
            debit = (op, value)
        elif value > 0 and credit is None:
            credit = (op, value)

    if debit is None or credit is None:
        raise InvalidOperation("operations must be one debit and one credit")

    debit_op, debit_value = debit
    credit_op, credit_value = credit

    if debit_value + credit_value != 0:
        raise InvalidOperation(
            f"debit {debit_value} and credit {credit_value} do not cancel out"
        )

    debit_currency = debit_op.amount.currency
    credit_currency = credit_op.amount.currency
    if (debit_currency.symbol, debit_currency.decimals) != (credit_currency.symbol, credit_currency.decimals):
        raise InvalidOperation(
            f"currency mismatch: {debit_currency.symbol} vs {credit_currency.symbol}"
        )

    if debit_op.address == credit_op.address:
        raise InvalidOperation("sender and receiver addresses must differ")

    return TransferIntent(
        from_address=debit_op.address,
        to_address=credit_op.address,
        amount=credit_value,
        denom=credit_currency.symbol,
    )
