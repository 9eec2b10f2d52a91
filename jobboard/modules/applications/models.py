from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Index, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobboard.db.base import Base, SoftDeleteMixin, utcnow


class ApplicationStatus(str, Enum):
    PENDING = "PENDING"
    REVIEWING = "REVIEWING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


class Application(Base, SoftDeleteMixin):
    __tablename__ = "applications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    vacancy_id: Mapped[int] = mapped_column(ForeignKey("vacancies.id"), index=True, nullable=False)
    status: Mapped[ApplicationStatus] = mapped_column(
        SAEnum(ApplicationStatus, name="application_status"),
        nullable=False,
        default=ApplicationStatus.PENDING,
    )

    applied_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow
    )

    user: Mapped["User"] = relationship("User", back_populates="applications", lazy="raise")  # noqa: F821
    vacancy: Mapped["Vacancy"] = relationship("Vacancy", back_populates="applications", lazy="raise")  # noqa: F821

    __table_args__ = (
        # vale também para linhas soft-deleted: remover não libera nova candidatura
        UniqueConstraint("user_id", "vacancy_id", name="uq_application_user_vacancy"),
        Index("ix_applications_applied_at", "applied_at"),
    )
