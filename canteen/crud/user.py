import logging
from typing import Optional

from pydantic import validate_email
from pydantic_core import PydanticCustomError
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from canteen.core.errors import ValidationError
from canteen.db import atomic
from canteen.models.user import User, UserRole
from canteen.utils.security import hash_password, verify_password

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    full_name: str,
    email: str,
    password: str,
    role=UserRole.customer,
) -> User:
    full_name = (full_name or "").strip()
    if not full_name:
        raise ValidationError("Full name is required")
    try:
        _, email = validate_email(normalize_email(email))
    except PydanticCustomError:
        raise ValidationError("A valid email address is required")
    email = normalize_email(email)
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    try:
        role = UserRole(role)
    except ValueError:
        raise ValidationError(f"Unknown role: {role!r}")

    if await get_user_by_email(db, email):
        raise ValidationError("An account with this email already exists")

    user = User(
        full_name=full_name,
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    async with atomic(db):
        db.add(user)

    log.info("user created: id=%s role=%s", user.id, role.value)
    return user


async def authenticate(db: AsyncSession, email: str, password: str) -> Optional[User]:
    user = await get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        log.warning("failed login for %s", normalize_email(email))
        return None
    return user


async def delete_user(db: AsyncSession, user_id: int) -> int:
    """Removes a user together with their orders and notifications."""
    async with atomic(db):
        result = await db.execute(
            delete(User).where(User.id == user_id).execution_options(synchronize_session="fetch")
        )
    log.info("user deleted: id=%s affected=%s", user_id, result.rowcount)
    return result.rowcount
