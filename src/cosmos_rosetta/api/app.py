"""
FastAPI/ASGI application factory.

Wires the chain client and construction service into an app serving the
construction routes. Run with: cosmos-rosetta serve
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from cosmos_rosetta import __version__
from cosmos_rosetta.api.routes import (
    request_validation_handler,
    rosetta_error_handler,
    router,
)
from cosmos_rosetta.config import RosettaConfig, get_config
from cosmos_rosetta.construction.service import ConstructionService
from cosmos_rosetta.errors import RosettaError
from cosmos_rosetta.node.interface import ChainClient
from cosmos_rosetta.node.lcd import LcdClient

logger = structlog.get_logger(__name__)


def create_app(
    config: Optional[RosettaConfig] = None,
    client: Optional[ChainClient] = None,
) -> FastAPI:
    """
    Build the ASGI app.

    Args:
        config: Service configuration. Uses global config if not provided.
        client: Chain client (an LcdClient for the configured node if not provided)

    Returns:
        Configured FastAPI app
    """
    config = config or get_config()
    client = client or LcdClient(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await client.connect()
        logger.info(
            "rosetta_server_started",
            blockchain=config.blockchain,
            network=config.network,
            node_url=config.node_url,
        )
        try:
            yield
        finally:
            await client.disconnect()
            logger.info("rosetta_server_stopped")

    app = FastAPI(
        title="Cosmos Rosetta Construction API",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.service = ConstructionService(client, config)
    app.include_router(router)
    app.add_exception_handler(RosettaError, rosetta_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    return app
