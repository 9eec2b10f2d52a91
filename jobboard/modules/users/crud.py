# jobboard/modules/users/crud.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from jobboard.core.errors import Conflict, NotFound
from .models import User
from .schemas import UserUpdate

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str, include_deleted: bool = False) -> User | None:
    stmt = select(User).where(User.email == email.lower().strip())
    if not include_deleted:
        stmt = stmt.where(User.deleted_at.is_(None))
    q = await db.execute(stmt)
    return q.scalar_one_or_none()


async def get_user_or_404(db: AsyncSession, user_id: int) -> User:
    q = await db.execute(select(User).where(User.id == user_id, User.deleted_at.is_(None)))
    user = q.scalar_one_or_none()
    if not user:
        raise NotFound("User not found")
    return user


async def list_users(db: AsyncSession) -> list[User]:
    res = await db.execute(select(User).where(User.deleted_at.is_(None)).order_by(User.created_at.desc(), User.id.desc()))
    return list(res.scalars().all())


async def ensure_email_available(db: AsyncSession, email: str, exclude_user_id: int | None = None) -> None:
    # a constraint unique de email não distingue soft delete, então a checagem também não
    existing = await get_user_by_email(db, email, include_deleted=True)
    if existing and existing.id != exclude_user_id:
        raise Conflict("Email already exists")


async def update_user(db: AsyncSession, user_id: int, payload: UserUpdate) -> User:
    user = await get_user_or_404(db, user_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)

    if "email" in changes:
        changes["email"] = changes["email"].lower().strip()
        if changes["email"] != user.email:
            await ensure_email_available(db, changes["email"], exclude_user_id=user.id)

    for k, v in changes.items():
        setattr(user, k, v)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise Conflict("Email already exists")
    await db.refresh(user)
    logger.info("user %s updated fields=%s", user.id, sorted(changes))
    return user


async def remove_user(db: AsyncSession, user_id: int) -> None:
    user = await get_user_or_404(db, user_id)
    user.soft_delete()
    await db.commit()
    logger.info("user %s soft-deleted", user_id)
