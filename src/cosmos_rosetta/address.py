"""
Account address encoding.

Addresses are the bech32 encoding of the 33-byte compressed secp256k1 public
key under the chain's human readable prefix.
"""

import bech32
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

COMPRESSED_PUBKEY_SIZE = 33


def compress_public_key(key_bytes: bytes) -> bytes:
    """
    Parse a secp256k1 public key and re-serialize it in compressed form.

    Args:
        key_bytes: SEC1 encoded point, compressed (33 bytes) or uncompressed (65 bytes)

    Returns:
        33-byte compressed point

    Raises:
        ValueError: If the bytes are not a valid point on the curve
    """
    public_key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), key_bytes)
    return public_key.public_bytes(Encoding.X962, PublicFormat.CompressedPoint)


def encode_address(data: bytes, prefix: str) -> str:
    """Bech32 encode raw address bytes."""
    words = bech32.convertbits(data, 8, 5)
    if words is None:
        raise ValueError("cannot convert address bytes")
    return bech32.bech32_encode(prefix, words)


def decode_address(address: str, prefix: str) -> bytes:
    """
    Decode a bech32 address and check its prefix.

    Raises:
        ValueError: If the address is malformed or has the wrong prefix
    """
    hrp, words = bech32.bech32_decode(address)
    if hrp is None or words is None:
        raise ValueError(f"invalid bech32 address: {address!r}")
    if hrp != prefix:
        raise ValueError(f"invalid address prefix {hrp!r}, expected {prefix!r}")

    data = bech32.convertbits(words, 5, 8, False)
    if not data:
        raise ValueError(f"empty address payload: {address!r}")
    return bytes(data)


def address_from_public_key(key_bytes: bytes, prefix: str) -> str:
    """Derive the account address of a secp256k1 public key."""
    return encode_address(compress_public_key(key_bytes), prefix)
