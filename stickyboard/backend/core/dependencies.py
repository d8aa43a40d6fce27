"""
FastAPI Dependencies.

What the stickies endpoints receive per request: a service bound to the
request's session, and the request ID echoed in the response envelope.
"""

import uuid
from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from stickyboard.backend.core.database import get_db_session
from stickyboard.backend.services.sticky import StickyService

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_sticky_service(db: DbSession) -> StickyService:
    return StickyService(db)


async def get_request_id(x_request_id: str | None = Header(None)) -> str:
    """The caller's X-Request-ID, or a fresh UUID when none was sent."""
    return x_request_id or str(uuid.uuid4())


Stickies = Annotated[StickyService, Depends(get_sticky_service)]
RequestId = Annotated[str, Depends(get_request_id)]
