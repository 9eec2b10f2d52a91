# jobboard/modules/vacancies/schemas.py
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from jobboard.core.responses import CamelModel
from .models import Modality


class VacancyBase(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    technologies: str = Field(min_length=1, max_length=500)
    seniority: str = Field(min_length=1, max_length=50)
    soft_skills: Optional[str] = Field(default=None, max_length=500)
    location: str = Field(min_length=1, max_length=120)
    modality: Modality = Modality.office
    salary_range: str = Field(min_length=1, max_length=120)
    company: str = Field(min_length=1, max_length=200)
    max_applicants: int


class VacancyCreate(VacancyBase):
    # max_applicants < 1 vira RuleViolation no crud (não 422 do pydantic)
    pass


class VacancyUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, min_length=1)
    technologies: Optional[str] = Field(default=None, min_length=1, max_length=500)
    seniority: Optional[str] = Field(default=None, min_length=1, max_length=50)
    soft_skills: Optional[str] = Field(default=None, max_length=500)
    location: Optional[str] = Field(default=None, min_length=1, max_length=120)
    modality: Optional[Modality] = None
    salary_range: Optional[str] = Field(default=None, min_length=1, max_length=120)
    company: Optional[str] = Field(default=None, min_length=1, max_length=200)
    max_applicants: Optional[int] = None
    is_active: Optional[bool] = None

    @field_validator(
        "title", "description", "technologies", "seniority", "location", "modality", "salary_range", "company"
    )
    @classmethod
    def _not_null(cls, v):
        # campo obrigatório pode ser omitido, mas não zerado com null
        if v is None:
            raise ValueError("field cannot be null")
        return v


class VacancyOut(VacancyBase):
    id: int
    is_active: bool
    applications_count: int = 0
    created_at: datetime
    updated_at: datetime


class VacancySummary(CamelModel):
    id: int
    title: str
    company: str
    location: str
    modality: Modality
    is_active: bool
