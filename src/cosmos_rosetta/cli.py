"""
Command-line interface for the Rosetta construction service.

Provides commands for serving the API and deriving addresses offline.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

import structlog

from cosmos_rosetta import __version__
from cosmos_rosetta.config import RosettaConfig, get_config, set_config
from cosmos_rosetta.construction.keys import derive_account
from cosmos_rosetta.errors import RosettaError
from cosmos_rosetta.models import CURVE_SECP256K1, PublicKey


def setup_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure structured logging on stderr; stdout carries command output."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if json_format
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cosmos-rosetta",
        description="Rosetta construction API for Cosmos SDK chains",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the construction API server")
    serve_parser.add_argument(
        "--node-url",
        help="Node REST (LCD) endpoint (default: from config)",
    )
    serve_parser.add_argument(
        "--network",
        help="Network identifier served (default: from config)",
    )
    serve_parser.add_argument(
        "--host",
        help="Bind address (default: from config)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        help="Listen port (default: from config)",
    )
    serve_parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from config)",
    )
    serve_parser.add_argument(
        "--log-json",
        action="store_true",
        help="Output logs in JSON format",
    )

    # Derive command (offline)
    derive_parser = subparsers.add_parser("derive", help="Derive the address of a public key")
    derive_parser.add_argument(
        "public_key",
        help="Hex encoded secp256k1 public key (compressed or uncompressed)",
    )
    derive_parser.add_argument(
        "--prefix",
        help="Bech32 address prefix (default: from config)",
    )

    return parser


def build_config(args: argparse.Namespace) -> RosettaConfig:
    """Overlay command-line overrides on the environment configuration."""
    overrides = {
        "node_url": getattr(args, "node_url", None),
        "network": getattr(args, "network", None),
        "host": getattr(args, "host", None),
        "port": getattr(args, "port", None),
        "log_level": getattr(args, "log_level", None),
        "bech32_prefix": getattr(args, "prefix", None),
    }
    if getattr(args, "log_json", False):
        overrides["log_json"] = True

    base = get_config()
    return base.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def serve(config: RosettaConfig) -> None:
    """Run the HTTP server."""
    import uvicorn

    from cosmos_rosetta.api.app import create_app

    print(f"Starting Cosmos Rosetta Construction API v{__version__}")
    print(f"Network: {config.blockchain}/{config.network}")
    print(f"Node: {config.node_url}")
    print()

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_config=None,
    )


def derive(config: RosettaConfig, public_key_hex: str) -> int:
    """Print the address of a public key."""
    try:
        account = derive_account(
            PublicKey(hex_bytes=public_key_hex, curve_type=CURVE_SECP256K1),
            config.bech32_prefix,
        )
    except RosettaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(account.address)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = build_config(args)
    set_config(config)

    # Setup logging
    setup_logging(config.log_level, config.log_json)

    # Run appropriate command
    if args.command == "serve":
        serve(config)
    elif args.command == "derive":
        sys.exit(derive(config, args.public_key))


if __name__ == "__main__":
    main()
