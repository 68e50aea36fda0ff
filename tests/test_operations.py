"""
Test suite for operation interpretation.

Tests extraction of a transfer from a debit/credit operation pair.
"""

import pytest

from cosmos_rosetta.construction.operations import extract_transfer, is_transfer, parse_amount
from cosmos_rosetta.core.transfer import TransferIntent
from cosmos_rosetta.errors import InvalidOperation
from cosmos_rosetta.models import Operation
from tests.conftest import transfer_operations


# ============================================================================
# Test Transfer Extraction
# ============================================================================

class TestExtractTransfer:
    """Tests for extracting a transfer intent."""

    def test_debit_first(self):
        """Test a debit-first pair."""
        ops = transfer_operations("addrA", "addrB", amount=100, denom="atom")

        intent = extract_transfer(ops)

        assert intent == TransferIntent(
            from_address="addrA",
            to_address="addrB",
            amount=100,
            denom="atom",
        )

    def test_credit_first(self):
        """Test that polarity comes from the sign, not the position."""
        ops = transfer_operations("addrA", "addrB", amount=250, debit_first=False)

        intent = extract_transfer(ops)

        assert intent.from_address == "addrA"
        assert intent.to_address == "addrB"
        assert intent.amount == 250

    def test_type_is_case_insensitive(self):
        """Test that TRANSFER and transfer are both accepted."""
        for op_type in ("TRANSFER", "transfer", "Transfer"):
            ops = transfer_operations("addrA", "addrB", op_type=op_type)
            assert extract_transfer(ops).from_address == "addrA"

    def test_integer_amount_values(self):
        """Test that integer amount values are normalised."""
        ops = [
            Operation.model_validate({
                "operation_identifier": {"index": 0},
                "type": "transfer",
                "account": {"address": "addrA"},
                "amount": {"value": -100, "currency": {"symbol": "atom"}},
            }),
            Operation.model_validate({
                "operation_identifier": {"index": 1},
                "type": "transfer",
                "account": {"address": "addrB"},
                "amount": {"value": 100, "currency": {"symbol": "atom"}},
            }),
        ]

        intent = extract_transfer(ops)

        assert intent.amount == 100
        assert intent.denom == "atom"

    @pytest.mark.parametrize("count", [0, 1, 3])
    def test_wrong_operation_count(self, count):
        """Test that anything but two operations is rejected."""
        ops = transfer_operations("addrA", "addrB") * 2
        with pytest.raises(InvalidOperation, match="expected 2 operations"):
            extract_transfer(ops[:count])

    def test_non_transfer_type(self):
        """Test that non-transfer operations are rejected."""
        ops = transfer_operations("addrA", "addrB", op_type="Delegate")
        with pytest.raises(InvalidOperation, match="not Transfer"):
            extract_transfer(ops)

    def test_mixed_types(self):
        """Test that one non-transfer leg is enough to reject."""
        ops = transfer_operations("addrA", "addrB")
        ops[1] = ops[1].model_copy(update={"type": "Fee"})
        with pytest.raises(InvalidOperation):
            extract_transfer(ops)

    def test_amounts_must_cancel_out(self):
        """Test that debit and credit must be additive inverses."""
        ops = transfer_operations("addrA", "addrB", amount=100)
        ops[1] = Operation.model_validate({
            **ops[1].model_dump(),
            "amount": {"value": "99", "currency": {"symbol": "uatom", "decimals": 6}},
        })
        with pytest.raises(InvalidOperation, match="do not cancel out"):
            extract_transfer(ops)

    def test_two_debits(self):
        """Test that two negative legs are rejected."""
        ops = transfer_operations("addrA", "addrB")
        ops[1] = ops[0].model_copy(update={"account": ops[1].account})
        with pytest.raises(InvalidOperation, match="one debit and one credit"):
            extract_transfer(ops)

    def test_zero_amounts(self):
        """Test that a zero transfer has no debit."""
        ops = transfer_operations("addrA", "addrB", amount=0)
        with pytest.raises(InvalidOperation, match="one debit and one credit"):
            extract_transfer(ops)

    def test_currency_mismatch(self):
        """Test that both legs must use the same currency."""
        ops = transfer_operations("addrA", "addrB", denom="uatom")
        other = transfer_operations("addrA", "addrB", denom="uosmo")
        with pytest.raises(InvalidOperation, match="currency mismatch"):
            extract_transfer([ops[0], other[1]])

    def test_decimals_mismatch(self):
        """Test that currencies differing only in decimals are rejected."""
        ops = transfer_operations("addrA", "addrB")
        credit = ops[1].model_dump()
        credit["amount"]["currency"]["decimals"] = 0
        with pytest.raises(InvalidOperation, match="currency mismatch"):
            extract_transfer([ops[0], Operation.model_validate(credit)])

    def test_same_address(self):
        """Test that a self transfer is rejected."""
        ops = transfer_operations("addrA", "addrA")
        with pytest.raises(InvalidOperation, match="must differ"):
            extract_transfer(ops)


# ============================================================================
# Test Amount Parsing
# ============================================================================

class TestParseAmount:
    """Tests for operation amount parsing."""

    def test_missing_amount(self):
        """Test that an operation without amount is rejected."""
        op = Operation.model_validate({
            "operation_identifier": {"index": 0},
            "type": "Transfer",
            "account": {"address": "addrA"},
        })
        with pytest.raises(InvalidOperation, match="has no amount"):
            parse_amount(op)

    @pytest.mark.parametrize("value", ["1.5", "abc", "", "1_000", "--1"])
    def test_non_integer_amount(self, value):
        """Test that non-integer values are rejected."""
        op = Operation.model_validate({
            "operation_identifier": {"index": 0},
            "type": "Transfer",
            "amount": {"value": value, "currency": {"symbol": "uatom"}},
        })
        with pytest.raises(InvalidOperation, match="not an integer"):
            parse_amount(op)

    def test_signed_values(self):
        """Test parsing of negative and positive values."""
        ops = transfer_operations("addrA", "addrB", amount=42)
        assert parse_amount(ops[0]) == -42
        assert parse_amount(ops[1]) == 42

    def test_is_transfer(self):
        ops = transfer_operations("addrA", "addrB", op_type="Stake")
        assert not is_transfer(ops[0])
