# jobboard/modules/applications/crud.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import joinedload

from jobboard.core.errors import NotFound
from .models import Application

logger = logging.getLogger(__name__)


def _live():
    return Application.deleted_at.is_(None)


def _newest_first(stmt):
    return stmt.order_by(Application.applied_at.desc(), Application.id.desc())


def _with_relations(stmt):
    # relações são lazy="raise": toda listagem serializada carrega user e vacancy
    return stmt.options(joinedload(Application.user), joinedload(Application.vacancy))


async def find_any_application(db: AsyncSession, user_id: int, vacancy_id: int) -> Application | None:
    # sem filtro de soft delete: espelha a constraint unique (user_id, vacancy_id)
    q = await db.execute(
        select(Application).where(Application.user_id == user_id, Application.vacancy_id == vacancy_id)
    )
    return q.scalar_one_or_none()


async def count_by_user(db: AsyncSession, user_id: int) -> int:
    q = await db.execute(select(func.count(Application.id)).where(Application.user_id == user_id, _live()))
    return int(q.scalar_one())


async def count_by_vacancy(db: AsyncSession, vacancy_id: int) -> int:
    q = await db.execute(select(func.count(Application.id)).where(Application.vacancy_id == vacancy_id, _live()))
    return int(q.scalar_one())


async def get_application_or_404(db: AsyncSession, application_id: int, with_relations: bool = False) -> Application:
    stmt = select(Application).where(Application.id == application_id, _live())
    if with_relations:
        stmt = _with_relations(stmt).execution_options(populate_existing=True)
    q = await db.execute(stmt)
    application = q.scalar_one_or_none()
    if not application:
        raise NotFound("Application not found")
    return application


async def list_all(db: AsyncSession) -> list[Application]:
    stmt = _newest_first(_with_relations(select(Application).where(_live())))
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def list_by_user(db: AsyncSession, user_id: int) -> list[Application]:
    stmt = _newest_first(_with_relations(select(Application).where(Application.user_id == user_id, _live())))
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def list_by_vacancy(db: AsyncSession, vacancy_id: int) -> list[Application]:
    stmt = _newest_first(_with_relations(select(Application).where(Application.vacancy_id == vacancy_id, _live())))
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def remove_application(db: AsyncSession, application_id: int) -> None:
    application = await get_application_or_404(db, application_id)
    application.soft_delete()
    await db.commit()
    logger.info("application %s soft-deleted (user=%s vacancy=%s)", application.id, application.user_id, application.vacancy_id)
