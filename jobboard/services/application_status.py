# jobboard/services/application_status.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.errors import RuleViolation
from jobboard.modules.applications import crud as applications_crud
from jobboard.modules.applications.models import Application, ApplicationStatus

logger = logging.getLogger(__name__)

# ACCEPTED e REJECTED são finais
TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset({ApplicationStatus.REVIEWING, ApplicationStatus.REJECTED}),
    ApplicationStatus.REVIEWING: frozenset({ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED}),
    ApplicationStatus.ACCEPTED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
}


def can_transition(current: ApplicationStatus, target: ApplicationStatus) -> bool:
    return target in TRANSITIONS[current]


async def change_status(db: AsyncSession, application_id: int, target: ApplicationStatus) -> Application:
    application = await applications_crud.get_application_or_404(db, application_id)
    current = application.status
    if not can_transition(current, target):
        raise RuleViolation(f"Cannot change application status from {current.value} to {target.value}")

    application.status = target
    await db.commit()
    logger.info("application %s status %s -> %s", application.id, current.value, target.value)
    return await applications_crud.get_application_or_404(db, application.id, with_relations=True)
