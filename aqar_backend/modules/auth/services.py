"""Authentication resolver: email/password or national ID login."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import AuthenticationError, ClientInputError
from ...core.logging import get_logger
from ..records.crud import owner_crud, tenant_crud, user_crud
from ..records.models import User
from ..records.serializers import to_wire
from .password_service import verify_password
from .schemas import LoginMethod

logger = get_logger(__name__)

INVALID_CREDENTIALS_MESSAGE = "بيانات الدخول غير صحيحة"
WRONG_PASSWORD_MESSAGE = "كلمة المرور غير صحيحة"
UNKNOWN_NATIONAL_ID_MESSAGE = "رقم الهوية غير مسجل في النظام"
INVALID_LOGIN_METHOD_MESSAGE = "طريقة الدخول غير صحيحة"
LOGIN_FAILED_MESSAGE = "فشل تسجيل الدخول"


def sanitize_user(user: User) -> dict[str, Any]:
    """Wire form of a user, credential stripped."""
    return to_wire(user)


def password_matches(password: str | None, stored: str) -> bool:
    """bcrypt check, falling back to equality for legacy plaintext rows."""
    if password is None:
        return False
    return verify_password(password, stored) or password == stored


async def authenticate(
    db: AsyncSession,
    login_method: str | None,
    identifier: str,
    password: str | None,
) -> dict[str, Any]:
    """Resolve a login attempt to a sanitized user.

    Args:
        db: Database session
        login_method: ``email`` or ``nationalId``
        identifier: Email address or national/civil ID
        password: Credential; only checked in email mode

    Returns:
        The user record without its credential

    Raises:
        AuthenticationError: Unknown identity or wrong credential
        ClientInputError: Unknown login method
    """
    if login_method == LoginMethod.EMAIL.value:
        return await _authenticate_email(db, identifier, password)
    if login_method == LoginMethod.NATIONAL_ID.value:
        return await _authenticate_national_id(db, identifier)
    raise ClientInputError(INVALID_LOGIN_METHOD_MESSAGE)


async def _authenticate_email(
    db: AsyncSession, email: str, password: str | None
) -> dict[str, Any]:
    user = await user_crud.get_by(db, email=email)
    if user is None:
        logger.info("Email login rejected: unknown email")
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    if not password_matches(password, user.password):
        logger.info(f"Email login rejected for user {user.id}: wrong password")
        raise AuthenticationError(WRONG_PASSWORD_MESSAGE)

    logger.info(f"User {user.id} logged in by email")
    return sanitize_user(user)


async def _linked_user(db: AsyncSession, profile) -> User | None:
    if profile is None or not profile.user_id:
        return None
    return await user_crud.get(db, profile.user_id)


async def _authenticate_national_id(db: AsyncSession, national_id: str) -> dict[str, Any]:
    """Owner profiles first, then tenants. Holding the ID is enough."""
    owner = await owner_crud.get_by(db, national_id=national_id)
    user = await _linked_user(db, owner)

    if user is None:
        tenant = await tenant_crud.get_by(db, tenant_id_no=national_id)
        user = await _linked_user(db, tenant)

    if user is None:
        raise AuthenticationError(UNKNOWN_NATIONAL_ID_MESSAGE)

    logger.info(f"User {user.id} logged in by national ID")
    return sanitize_user(user)
