"""
Account derivation from public keys.
"""

import structlog

from cosmos_rosetta.address import address_from_public_key
from cosmos_rosetta.errors import InvalidPublicKey, UnsupportedCurve
from cosmos_rosetta.models import CURVE_SECP256K1, AccountIdentifier, PublicKey

logger = structlog.get_logger(__name__)


def derive_account(public_key: PublicKey, prefix: str) -> AccountIdentifier:
    """
    Derive the account of a secp256k1 public key.

    The key may be given compressed or uncompressed; the address is always
    derived from its compressed form.

    Args:
        public_key: Public key with its curve type
        prefix: Bech32 prefix of account addresses

    Returns:
        Account identifier of the key

    Raises:
        UnsupportedCurve: If the curve is not secp256k1
        InvalidPublicKey: If the key bytes do not parse
    """
    if public_key.curve_type != CURVE_SECP256K1:
        raise UnsupportedCurve(f"only {CURVE_SECP256K1} supported, got {public_key.curve_type!r}")

    try:
        key_bytes = public_key.to_bytes()
    except ValueError as e:
        raise InvalidPublicKey(f"public key is not valid hex: {e}")

    try:
        address = address_from_public_key(key_bytes, prefix)
    except ValueError as e:
        raise InvalidPublicKey(f"cannot parse secp256k1 public key: {e}")

    logger.debug("account_derived", address=address[:16] + "...")
    return AccountIdentifier(address=address)
