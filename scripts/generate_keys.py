#!/usr/bin/env python3
"""
Generate a secp256k1 signing key for the construction demo.

This script generates:
- Private signing key (signing.pem)
- Compressed public key (hex)
- Bech32 addresses for the configured prefixes
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    PublicFormat,
)

from cosmos_rosetta.address import address_from_public_key


def generate_keys(output_dir: str = "./keys", prefixes=("cosmos",)) -> dict:
    """
    Generate a new secp256k1 key pair.

    Args:
        output_dir: Directory to save keys
        prefixes: Bech32 prefixes to derive addresses for

    Returns:
        Dictionary with key info and addresses
    """
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    signing_key = ec.generate_private_key(ec.SECP256K1())
    public_key = signing_key.public_key().public_bytes(
        Encoding.X962, PublicFormat.CompressedPoint
    )

    skey_path = output_path / "signing.pem"
    skey_path.write_bytes(
        signing_key.private_bytes(Encoding.PEM, PrivateFormat.PKCS8, NoEncryption())
    )
    skey_path.chmod(0o600)

    info = {
        "signing_key_path": str(skey_path),
        "curve_type": "secp256k1",
        "public_key": public_key.hex(),
        "addresses": {
            prefix: address_from_public_key(public_key, prefix) for prefix in prefixes
        },
    }

    info_path = output_path / "key_info.json"
    with open(info_path, "w") as f:
        json.dump(info, f, indent=2)

    return info


def main():
    parser = argparse.ArgumentParser(description="Generate a secp256k1 signing key")
    parser.add_argument(
        "--output-dir", "-o",
        default="./keys",
        help="Output directory for keys (default: ./keys)"
    )
    parser.add_argument(
        "--prefix", "-p",
        action="append",
        help="Bech32 address prefix, repeatable (default: cosmos)"
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite existing keys"
    )

    args = parser.parse_args()

    output_path = Path(args.output_dir)
    skey_path = output_path / "signing.pem"

    if skey_path.exists() and not args.force:
        print(f"⚠️  Keys already exist at {args.output_dir}")
        print("   Use --force to overwrite")

        info_path = output_path / "key_info.json"
        if info_path.exists():
            with open(info_path) as f:
                info = json.load(f)
            print("\n📋 Existing Key Info:")
            for prefix, address in info["addresses"].items():
                print(f"   {prefix}: {address}")
        return

    print("🔑 Generating new secp256k1 key...")
    info = generate_keys(args.output_dir, tuple(args.prefix or ["cosmos"]))

    print("\n✅ Keys generated successfully!")
    print(f"\n📁 Keys saved to: {args.output_dir}/")
    print("   - signing.pem (KEEP SECRET!)")
    print("   - key_info.json")

    print(f"\n🔓 Public key: {info['public_key']}")
    print("\n📬 Addresses:")
    for prefix, address in info["addresses"].items():
        print(f"   {prefix}: {address}")

    print("\n⚠️  IMPORTANT: Keep your signing.pem file secure!")


if __name__ == "__main__":
    main()
