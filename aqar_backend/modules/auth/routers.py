"""Authentication API routes."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import AqarException, StoreTransactionError
from ...core.logging import get_logger
from ...dependencies import get_db
from . import services
from .schemas import LoginRequest, LoginResponse

logger = get_logger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Authenticate by email/password or by national ID."""
    try:
        user = await services.authenticate(
            db=db,
            login_method=login_data.login_method,
            identifier=login_data.identifier,
            password=login_data.password,
        )
    except AqarException:
        raise
    except Exception as exc:
        logger.exception(f"Login error: {type(exc).__name__}")
        raise StoreTransactionError(services.LOGIN_FAILED_MESSAGE) from exc

    return LoginResponse(success=True, user=user)
