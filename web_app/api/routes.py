"""API routes implementation."""

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.responses import PlainTextResponse
from datetime import datetime, timezone

from .schemas import (
    ShortenRequest,
    ShortenResponse,
    RetrieveResponse,
    HealthResponse,
    ErrorResponse,
)
from shortener.errors import ShortenError, ShortenErrorReason
from shortener.common.url_builder import build_share_url

router = APIRouter()


def _not_found(identifier: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Content '{identifier}' not found",
    )


async def _retrieve(request: Request, identifier: str) -> str:
    """Look up a payload, mapping every failure to 404."""
    service = request.app.state.service

    if not service.addresser.is_valid_format(identifier):
        raise _not_found(identifier)

    try:
        return await service.retrieve(identifier)
    except ShortenError:
        # The service does not tell missing entries from store errors.
        raise _not_found(identifier)


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    responses={
        413: {"model": ErrorResponse, "description": "Payload too large"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Shorten content",
    description="Store content and return its content-derived identifier.",
)
async def shorten(request: Request, body: ShortenRequest):
    """Store content and return its identifier."""
    service = request.app.state.service
    config = request.app.state.config

    try:
        identifier = await service.shorten(body.content)
    except ShortenError as e:
        if e.reason == ShortenErrorReason.TOO_LARGE:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Content exceeds {service.max_payload_bytes} bytes",
            )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to store content",
        )

    return ShortenResponse(
        id=identifier,
        url=build_share_url(identifier, config.base_url, config.path_prefix),
        size=len(body.content.encode("utf-8")),
    )


@router.get(
    "/shorten/{identifier}",
    response_model=RetrieveResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Content not found"},
    },
    summary="Retrieve content",
    description="Get the content stored under an identifier.",
)
async def retrieve(request: Request, identifier: str):
    """Get stored content as JSON."""
    content = await _retrieve(request, identifier)
    return RetrieveResponse(id=identifier, content=content)


@router.get(
    "/raw/{identifier}",
    response_class=PlainTextResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Content not found"},
    },
    summary="Retrieve raw content",
)
async def retrieve_raw(request: Request, identifier: str):
    """Get stored content as plain text."""
    content = await _retrieve(request, identifier)
    return PlainTextResponse(content)


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service and its backing store are healthy.",
)
async def health_check(request: Request):
    """Health check endpoint for load balancers and monitoring."""
    service = request.app.state.service

    health = await service.health_check()

    return HealthResponse(
        status="healthy" if health["overall"] else "unhealthy",
        store="healthy" if health["store"] else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )


share_router = APIRouter()


@share_router.get(
    "/{identifier}",
    response_class=PlainTextResponse,
    include_in_schema=False,
)
async def follow_share_link(request: Request, identifier: str):
    """Serve the content behind a share link built by POST /api/shorten."""
    content = await _retrieve(request, identifier)
    return PlainTextResponse(content)
