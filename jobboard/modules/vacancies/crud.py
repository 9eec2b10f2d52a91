# jobboard/modules/vacancies/crud.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from jobboard.core.errors import NotFound, RuleViolation
from .models import Vacancy
from .schemas import VacancyCreate, VacancyUpdate

logger = logging.getLogger(__name__)


def _live():
    return Vacancy.deleted_at.is_(None)


def _check_capacity(max_applicants: int) -> None:
    if max_applicants < 1:
        raise RuleViolation("maxApplicants must allow at least 1 applicant")


async def get_vacancy_or_404(db: AsyncSession, vacancy_id: int) -> Vacancy:
    # inclui inativas (telas administrativas), nunca as removidas
    q = await db.execute(select(Vacancy).where(Vacancy.id == vacancy_id, _live()))
    vacancy = q.scalar_one_or_none()
    if not vacancy:
        raise NotFound("Vacancy not found")
    return vacancy


async def get_active_vacancy(db: AsyncSession, vacancy_id: int, for_update: bool = False) -> Vacancy | None:
    stmt = select(Vacancy).where(Vacancy.id == vacancy_id, Vacancy.is_active.is_(True), _live())
    if for_update:
        stmt = stmt.with_for_update(of=Vacancy)
    q = await db.execute(stmt)
    return q.scalar_one_or_none()


async def list_active_vacancies(db: AsyncSession) -> list[Vacancy]:
    stmt = (
        select(Vacancy)
        .where(Vacancy.is_active.is_(True), _live())
        .order_by(Vacancy.created_at.desc(), Vacancy.id.desc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def create_vacancy(db: AsyncSession, payload: VacancyCreate) -> Vacancy:
    _check_capacity(payload.max_applicants)
    # nova vacante sempre nasce ativa
    obj = Vacancy(**payload.model_dump(), is_active=True)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    logger.info("vacancy %s created (max_applicants=%s)", obj.id, obj.max_applicants)
    return obj


async def update_vacancy(db: AsyncSession, vacancy_id: int, payload: VacancyUpdate) -> Vacancy:
    obj = await get_vacancy_or_404(db, vacancy_id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("max_applicants") is not None:
        _check_capacity(changes["max_applicants"])
    elif "max_applicants" in changes:
        raise RuleViolation("maxApplicants cannot be null")

    for k, v in changes.items():
        if k == "is_active" and v is None:
            continue
        setattr(obj, k, v)

    await db.commit()
    await db.refresh(obj)
    logger.info("vacancy %s updated fields=%s", obj.id, sorted(changes))
    return obj


async def toggle_vacancy(db: AsyncSession, vacancy_id: int) -> Vacancy:
    obj = await get_vacancy_or_404(db, vacancy_id)
    obj.is_active = not obj.is_active
    await db.commit()
    await db.refresh(obj)
    logger.info("vacancy %s is_active=%s", obj.id, obj.is_active)
    return obj


async def remove_vacancy(db: AsyncSession, vacancy_id: int) -> None:
    obj = await get_vacancy_or_404(db, vacancy_id)
    obj.soft_delete()
    await db.commit()
    logger.info("vacancy %s soft-deleted", vacancy_id)
