"""FastAPI dependencies resolving the process services."""

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

if TYPE_CHECKING:
    from .services import AppServices


def get_services(request: Request) -> "AppServices":
    """Process services built by the application lifespan."""
    return request.app.state.services


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency to get a database session."""
    async with get_services(request).database.session() as session:
        yield session
