# Pydantic schemas package
from stickyboard.backend.schemas.base import (
    ApiResponse,
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
)
from stickyboard.backend.schemas.sticky import (
    ColorClass,
    Position,
    Size,
    StickyCreate,
    StickyResponse,
    StickyUpdate,
)

__all__ = [
    "ApiResponse",
    "ColorClass",
    "ErrorDetail",
    "ErrorResponse",
    "Position",
    "ResponseMetadata",
    "Size",
    "StickyCreate",
    "StickyResponse",
    "StickyUpdate",
]
