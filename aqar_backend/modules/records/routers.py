"""Property records API routes: bulk load, batch save and delete."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import StoreTransactionError
from ...core.logging import get_logger
from ...dependencies import get_db
from ..commons import ErrorResponse, SuccessResponse
from . import services

logger = get_logger(__name__)

router = APIRouter(
    tags=["Records"],
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@router.get("/load-data")
async def load_data(db: Annotated[AsyncSession, Depends(get_db)]) -> dict[str, Any]:
    """Every collection at once, with declared relations included."""
    try:
        return await services.load_all(db)
    except Exception as exc:
        logger.exception("Error loading data")
        raise StoreTransactionError("Failed to load data") from exc


@router.post("/save-item/{key}", response_model=SuccessResponse)
async def save_item(
    key: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    payload: Annotated[Any, Body()],
):
    """Upsert a whole collection (or the settings object) atomically."""
    await services.save_collection(db, key, payload)
    return SuccessResponse()


@router.delete("/delete-item/{key}/{id}", response_model=SuccessResponse)
async def delete_item(
    key: str,
    id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Delete one record by id."""
    await services.delete_item(db, key, id)
    return SuccessResponse()
