from __future__ import annotations

from enum import Enum

from sqlalchemy import Boolean, Enum as SAEnum, Integer, String, Text, CheckConstraint, select, func
from sqlalchemy.orm import Mapped, column_property, mapped_column, relationship

from jobboard.db.base import Base, TimestampMixin, SoftDeleteMixin
from jobboard.modules.applications.models import Application


class Modality(str, Enum):
    remote = "remote"
    office = "office"
    hybrid = "hybrid"


class Vacancy(Base, TimestampMixin, SoftDeleteMixin):
    __tablename__ = "vacancies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    technologies: Mapped[str] = mapped_column(String(500), nullable=False)   # "React, Node.js, PostgreSQL"
    seniority: Mapped[str] = mapped_column(String(50), nullable=False)       # "Junior" | "Semi-Senior" | "Senior"
    soft_skills: Mapped[str | None] = mapped_column(String(500), nullable=True)
    location: Mapped[str] = mapped_column(String(120), nullable=False)
    modality: Mapped[Modality] = mapped_column(
        SAEnum(Modality, name="vacancy_modality"), nullable=False, default=Modality.office
    )
    salary_range: Mapped[str] = mapped_column(String(120), nullable=False)  # texto livre: "3M - 4M COP"
    company: Mapped[str] = mapped_column(String(200), nullable=False)
    max_applicants: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # candidaturas vivas (sem soft delete)
    applications_count: Mapped[int] = column_property(
        select(func.count(Application.id))
        .where(Application.vacancy_id == id, Application.deleted_at.is_(None))
        .correlate_except(Application)
        .scalar_subquery()
    )

    applications: Mapped[list[Application]] = relationship(
        "Application", back_populates="vacancy", lazy="raise"
    )

    __table_args__ = (
        CheckConstraint("max_applicants >= 1", name="ck_vacancy_max_applicants_positive"),
    )
