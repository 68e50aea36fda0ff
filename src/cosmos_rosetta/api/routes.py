"""
FastAPI router: POST /construction/{preprocess,metadata,payloads,derive,combine,hash,parse,submit}.

Validates request bodies into the Rosetta models and delegates to the
construction service. Protocol errors and malformed bodies are both rendered
as Rosetta error envelopes.
"""

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cosmos_rosetta.construction.interface import ConstructionAPI
from cosmos_rosetta.errors import InvalidRequest, RosettaError
from cosmos_rosetta.models import (
    ConstructionCombineRequest,
    ConstructionCombineResponse,
    ConstructionDeriveRequest,
    ConstructionDeriveResponse,
    ConstructionHashRequest,
    ConstructionMetadataRequest,
    ConstructionMetadataResponse,
    ConstructionParseRequest,
    ConstructionParseResponse,
    ConstructionPayloadsRequest,
    ConstructionPayloadsResponse,
    ConstructionPreprocessRequest,
    ConstructionPreprocessResponse,
    ConstructionSubmitRequest,
    TransactionIdentifierResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/construction", tags=["construction"])

# Rosetta returns every error with this status and an Error body
ERROR_STATUS_CODE = 500


def get_service(request: Request) -> ConstructionAPI:
    """Dependency: the construction service bound to the app."""
    return request.app.state.service


async def rosetta_error_handler(request: Request, exc: RosettaError) -> JSONResponse:
    """Render a protocol error as the Rosetta error envelope."""
    return JSONResponse(
        status_code=ERROR_STATUS_CODE,
        content=exc.to_envelope().model_dump(exclude_none=True),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render a malformed request body as an invalid request envelope."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.info("construction_request_invalid", path=request.url.path, errors=problems)
    return await rosetta_error_handler(request, InvalidRequest(f"malformed request: {problems}"))


@router.post(
    "/preprocess",
    response_model=ConstructionPreprocessResponse,
    response_model_exclude_none=True,
)
async def construction_preprocess(
    body: ConstructionPreprocessRequest,
    service: ConstructionAPI = Depends(get_service),
):
    return await service.preprocess(body)


@router.post(
    "/metadata",
    response_model=ConstructionMetadataResponse,
    response_model_exclude_none=True,
)
async def construction_metadata(
    body: ConstructionMetadataRequest,
    service: ConstructionAPI = Depends(get_service),
):
    return await service.metadata(body)


@router.post(
    "/payloads",
    response_model=ConstructionPayloadsResponse,
    response_model_exclude_none=True,
)
async def construction_payloads(
    body: ConstructionPayloadsRequest,
    service: ConstructionAPI = Depends(get_service),
):
    return await service.payloads(body)


@router.post(
    "/derive",
    response_model=ConstructionDeriveResponse,
    response_model_exclude_none=True,
)
async def construction_derive(
    body: ConstructionDeriveRequest,
    service: ConstructionAPI = Depends(get_service),
):
    return await service.derive(body)


@router.post("/combine", response_model=ConstructionCombineResponse)
async def construction_combine(
    body: ConstructionCombineRequest,
    service: ConstructionAPI = Depends(get_service),
):
    return await service.combine(body)


@router.post("/hash", response_model=TransactionIdentifierResponse)
async def construction_hash(
    body: ConstructionHashRequest,
    service: ConstructionAPI = Depends(get_service),
):
    return await service.hash(body)


@router.post("/parse", response_model=ConstructionParseResponse)
async def construction_parse(
    body: ConstructionParseRequest,
    service: ConstructionAPI = Depends(get_service),
):
    return await service.parse(body)


@router.post("/submit", response_model=TransactionIdentifierResponse)
async def construction_submit(
    body: ConstructionSubmitRequest,
    service: ConstructionAPI = Depends(get_service),
):
    return await service.submit(body)
