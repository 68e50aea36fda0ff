"""
Test suite for account derivation.

Tests address derivation from secp256k1 public keys.
"""

import pytest

from cosmos_rosetta.address import compress_public_key, decode_address, encode_address
from cosmos_rosetta.construction.keys import derive_account
from cosmos_rosetta.errors import InvalidPublicKey, UnsupportedCurve
from cosmos_rosetta.models import ConstructionDeriveRequest, PublicKey
from tests.conftest import generate_test_key, public_key_bytes


def secp256k1_key(raw: bytes) -> PublicKey:
    return PublicKey(hex_bytes=raw.hex(), curve_type="secp256k1")


# ============================================================================
# Test Address Derivation
# ============================================================================

class TestDeriveAccount:
    """Tests for deriving accounts from public keys."""

    def test_derive_compressed(self):
        """Test derivation from a compressed key."""
        compressed = public_key_bytes(generate_test_key(1))

        account = derive_account(secp256k1_key(compressed), "cosmos")

        assert account.address.startswith("cosmos1")
        assert decode_address(account.address, "cosmos") == compressed
        assert len(compressed) == 33

    def test_uncompressed_matches_compressed(self):
        """Test that the address always comes from the compressed form."""
        key = generate_test_key(5)
        compressed = derive_account(secp256k1_key(public_key_bytes(key, compressed=True)), "cosmos")
        uncompressed = derive_account(secp256k1_key(public_key_bytes(key, compressed=False)), "cosmos")

        assert compressed == uncompressed

    def test_deterministic(self):
        """Test that the same key always yields the same address."""
        raw = public_key_bytes(generate_test_key(9))

        addresses = {derive_account(secp256k1_key(raw), "cosmos").address for _ in range(3)}

        assert len(addresses) == 1

    def test_distinct_keys_distinct_addresses(self):
        first = derive_account(secp256k1_key(public_key_bytes(generate_test_key(1))), "cosmos")
        second = derive_account(secp256k1_key(public_key_bytes(generate_test_key(2))), "cosmos")

        assert first.address != second.address

    def test_prefix(self):
        """Test that the configured prefix is used."""
        account = derive_account(secp256k1_key(public_key_bytes(generate_test_key(1))), "osmo")
        assert account.address.startswith("osmo1")

    @pytest.mark.parametrize("curve", ["edwards25519", "secp256r1", "SECP256K1", ""])
    def test_unsupported_curve(self, curve):
        """Test that only secp256k1 is accepted."""
        key = PublicKey(hex_bytes=public_key_bytes(generate_test_key(1)).hex(), curve_type=curve)

        with pytest.raises(UnsupportedCurve):
            derive_account(key, "cosmos")

    def test_not_hex(self):
        with pytest.raises(InvalidPublicKey, match="not valid hex"):
            derive_account(PublicKey(hex_bytes="zz", curve_type="secp256k1"), "cosmos")

    @pytest.mark.parametrize("raw", [b"", b"\x02" + b"\x11" * 9, b"\x05" + b"\x11" * 32])
    def test_malformed_key(self, raw):
        """Test that bytes that are no curve point are rejected."""
        with pytest.raises(InvalidPublicKey, match="cannot parse"):
            derive_account(secp256k1_key(raw), "cosmos")


# ============================================================================
# Test Derive Call
# ============================================================================

class TestDeriveCall:
    """Tests for the Derive call of the service."""

    @pytest.mark.asyncio
    async def test_derive(self, service, mock_client):
        """Test that Derive needs no chain interaction."""
        raw = public_key_bytes(generate_test_key(3))

        response = await service.derive(ConstructionDeriveRequest(public_key=secp256k1_key(raw)))

        assert response.account_identifier.address == encode_address(compress_public_key(raw), "cosmos")
        assert mock_client.calls == []

    @pytest.mark.asyncio
    async def test_derive_unsupported_curve(self, service):
        request = ConstructionDeriveRequest(
            public_key=PublicKey(hex_bytes="02" * 33, curve_type="edwards25519"),
        )
        with pytest.raises(UnsupportedCurve):
            await service.derive(request)
