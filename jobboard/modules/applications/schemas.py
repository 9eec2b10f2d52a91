from datetime import datetime
from typing import Optional


from jobboard.core.responses import CamelModel
from jobboard.modules.users.schemas import UserSummary
from jobboard.modules.vacancies.schemas import VacancySummary
from .models import ApplicationStatus


class ApplyRequest(CamelModel):
    # id inexistente, zero ou negativo cai no NotFound do motor de candidatura
    vacancy_id: int


class StatusUpdate(CamelModel):
    status: ApplicationStatus


class ApplicationOut(CamelModel):
    id: int
    user_id: int
    vacancy_id: int
    status: ApplicationStatus
    applied_at: datetime
    updated_at: datetime
    # preenchidos conforme a listagem (joinedload); None quando não carregados
    user: Optional[UserSummary] = None
    vacancy: Optional[VacancySummary] = None
