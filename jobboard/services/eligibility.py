# jobboard/services/eligibility.py
"""
Regras de candidatura de um CODER a uma vacante.

Checagens em ordem fixa, parando na primeira que falhar (1-4 só leem):
  1. vacante existe, não foi removida e está ativa        -> NotFound
  2. nenhuma candidatura (viva ou removida) para o par     -> Conflict
  3. candidato tem menos de MAX_ACTIVE_APPLICATIONS vivas  -> RuleViolation
  4. vacante tem menos candidaturas vivas que max_applicants -> RuleViolation
  5. grava a candidatura com applied_at = agora

Tudo roda numa única transação. A linha da vacante e a do candidato são lidas
com SELECT ... FOR UPDATE, então candidaturas concorrentes para a mesma vacante
ou do mesmo candidato serializam em bancos com lock de linha (Postgres).
"""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.errors import AppError, Conflict, NotFound, RuleViolation
from jobboard.db.base import utcnow
from jobboard.modules.applications import crud as applications_crud
from jobboard.modules.applications.models import Application
from jobboard.modules.users.models import User
from jobboard.modules.vacancies.crud import get_active_vacancy

logger = logging.getLogger(__name__)

MAX_ACTIVE_APPLICATIONS = 3

ALREADY_APPLIED = "You have already applied to this vacancy"


async def _lock_candidate(db: AsyncSession, candidate_id: int) -> None:
    q = await db.execute(
        select(User.id)
        .where(User.id == candidate_id, User.deleted_at.is_(None))
        .with_for_update()
    )
    if q.scalar_one_or_none() is None:
        raise NotFound("Candidate not found")


async def check_eligibility(db: AsyncSession, candidate_id: int, vacancy_id: int) -> None:
    """Roda as checagens 1-4; levanta o erro da primeira que falhar."""
    vacancy = await get_active_vacancy(db, vacancy_id, for_update=True)
    if vacancy is None:
        raise NotFound("Vacancy not found or inactive")

    await _lock_candidate(db, candidate_id)

    if await applications_crud.find_any_application(db, candidate_id, vacancy_id):
        raise Conflict(ALREADY_APPLIED)

    if await applications_crud.count_by_user(db, candidate_id) >= MAX_ACTIVE_APPLICATIONS:
        raise RuleViolation(f"You cannot apply to more than {MAX_ACTIVE_APPLICATIONS} active vacancies")

    if await applications_crud.count_by_vacancy(db, vacancy_id) >= vacancy.max_applicants:
        raise RuleViolation("This vacancy has reached its maximum number of applicants")


async def apply(db: AsyncSession, candidate_id: int, vacancy_id: int) -> Application:
    try:
        await check_eligibility(db, candidate_id, vacancy_id)

        application = Application(user_id=candidate_id, vacancy_id=vacancy_id, applied_at=utcnow())
        db.add(application)
        await db.commit()
    except IntegrityError:
        # corrida que passou pela checagem 2 e bateu na constraint unique
        await db.rollback()
        logger.warning("apply rejected: user=%s vacancy=%s reason=Conflict (unique constraint)", candidate_id, vacancy_id)
        raise Conflict(ALREADY_APPLIED)
    except AppError as exc:
        await db.rollback()
        logger.info("apply rejected: user=%s vacancy=%s reason=%s", candidate_id, vacancy_id, exc.kind)
        raise

    logger.info("apply accepted: application=%s user=%s vacancy=%s", application.id, candidate_id, vacancy_id)
    return await applications_crud.get_application_or_404(db, application.id, with_relations=True)
