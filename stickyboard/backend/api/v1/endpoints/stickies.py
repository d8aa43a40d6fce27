"""
Stickies API Endpoints.

REST API endpoints backing the sticky board's persistence client.
"""

from fastapi import APIRouter

from stickyboard.backend.core.dependencies import RequestId, Stickies
from stickyboard.backend.schemas.base import ApiResponse
from stickyboard.backend.schemas.sticky import StickyCreate, StickyResponse, StickyUpdate

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[StickyResponse],
    status_code=201,
    summary="Create a sticky",
    description="Create a sticky note. Omitted fields take their defaults.",
)
async def create_sticky(
    data: StickyCreate,
    service: Stickies,
    request_id: RequestId,
) -> ApiResponse[StickyResponse]:
    """Create a new sticky."""
    sticky = await service.create_sticky(data)
    return ApiResponse.of(StickyResponse.from_model(sticky), request_id)


@router.get(
    "",
    response_model=ApiResponse[list[StickyResponse]],
    summary="List stickies",
    description="Get every sticky on the board, lowest z-index first.",
)
async def list_stickies(
    service: Stickies,
    request_id: RequestId,
) -> ApiResponse[list[StickyResponse]]:
    """List all stickies."""
    stickies = await service.list_stickies()
    return ApiResponse.of([StickyResponse.from_model(sticky) for sticky in stickies], request_id)


@router.get(
    "/{sticky_id}",
    response_model=ApiResponse[StickyResponse],
    summary="Get a sticky",
)
async def get_sticky(
    sticky_id: str,
    service: Stickies,
    request_id: RequestId,
) -> ApiResponse[StickyResponse]:
    """Get a sticky by ID."""
    sticky = await service.get_sticky(sticky_id)
    return ApiResponse.of(StickyResponse.from_model(sticky), request_id)


@router.put(
    "/{sticky_id}",
    response_model=ApiResponse[StickyResponse],
    summary="Replace a sticky",
    description="Overwrite a sticky with a full snapshot. Idempotent.",
)
async def replace_sticky(
    sticky_id: str,
    data: StickyUpdate,
    service: Stickies,
    request_id: RequestId,
) -> ApiResponse[StickyResponse]:
    """Replace a sticky's stored state."""
    sticky = await service.replace_sticky(sticky_id, data)
    return ApiResponse.of(StickyResponse.from_model(sticky), request_id)


@router.delete(
    "/{sticky_id}",
    status_code=204,
    summary="Delete a sticky",
)
async def delete_sticky(
    sticky_id: str,
    service: Stickies,
) -> None:
    """Delete a sticky."""
    await service.delete_sticky(sticky_id)
