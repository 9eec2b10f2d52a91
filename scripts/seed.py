# scripts/seed.py
# uso: python -m scripts.seed [--demo]
import sys, asyncio
if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

import argparse
import logging
import random

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.config import settings
from jobboard.core.errors import AppError
from jobboard.core.logging import setup_logging
from jobboard.core.permissions import Role
from jobboard.core.security import hash_password
from jobboard.db.base import Base
from jobboard.db.session import AsyncSessionLocal, engine
from jobboard.modules.users.models import User
from jobboard.modules.vacancies.models import Modality, Vacancy
from jobboard.services import eligibility

logger = logging.getLogger("scripts.seed")

DEMO_CODERS = [
    ("Ana Martínez", "ana.martinez@mail.com"),
    ("Carlos López", "carlos.lopez@mail.com"),
    ("Diana Rodríguez", "diana.rodriguez@mail.com"),
    ("Eduardo Silva", "eduardo.silva@mail.com"),
    ("Fernanda Torres", "fernanda.torres@mail.com"),
    ("Gabriel Herrera", "gabriel.herrera@mail.com"),
]

DEMO_VACANCIES = [
    dict(
        title="Data Scientist Senior",
        description="Desarrollo de modelos de machine learning para decisiones estratégicas.",
        technologies="Python, Machine Learning, SQL, Pandas, Scikit-learn",
        seniority="Senior",
        soft_skills="Análisis crítico, comunicación de insights",
        location="Bogotá",
        modality=Modality.hybrid,
        salary_range="$4,500,000 - $6,500,000 COP",
        company="DataCorp Analytics",
        max_applicants=5,
    ),
    dict(
        title="Desarrollador Backend Python",
        description="APIs REST con FastAPI y PostgreSQL para una plataforma de pagos.",
        technologies="Python, FastAPI, PostgreSQL, Docker",
        seniority="Semi-Senior",
        soft_skills="Trabajo en equipo",
        location="Medellín",
        modality=Modality.remote,
        salary_range="$3,500,000 - $5,000,000 COP",
        company="PayFlow",
        max_applicants=8,
    ),
    dict(
        title="Frontend React Junior",
        description="Construcción de interfaces accesibles en React y TypeScript.",
        technologies="React, TypeScript, CSS",
        seniority="Junior",
        soft_skills=None,
        location="Barranquilla",
        modality=Modality.office,
        salary_range="$2,000,000 - $3,000,000 COP",
        company="RIWI",
        max_applicants=3,
    ),
    dict(
        title="DevOps Engineer",
        description="Automatización de infraestructura y pipelines de CI/CD.",
        technologies="AWS, Terraform, Kubernetes, GitHub Actions",
        seniority="Senior",
        soft_skills="Autonomía, documentación",
        location="Cartagena",
        modality=Modality.hybrid,
        salary_range="$6,000,000 - $8,000,000 COP",
        company="CloudNine",
        max_applicants=2,
    ),
]


async def seed_staff(db: AsyncSession) -> None:
    # admin/gestor não podem ser criados pelo cadastro público
    res = await db.execute(select(User).where(User.role == Role.admin))
    if res.scalars().first():
        logger.info("admin user already exists, skipping staff seed")
        return

    password_hash = hash_password(settings.SEED_PASSWORD)
    db.add_all([
        User(name="Administrador", email=settings.SEED_ADMIN_EMAIL, password_hash=password_hash,
             role=Role.admin, status="active"),
        User(name="Gestor de Empleabilidad", email=settings.SEED_GESTOR_EMAIL, password_hash=password_hash,
             role=Role.gestor, status="active"),
    ])
    await db.commit()
    logger.info("staff users created: %s, %s", settings.SEED_ADMIN_EMAIL, settings.SEED_GESTOR_EMAIL)


async def seed_demo(db: AsyncSession, rng: random.Random) -> None:
    coders = []
    password_hash = hash_password("123456")
    for name, email in DEMO_CODERS:
        res = await db.execute(select(User).where(User.email == email))
        user = res.scalar_one_or_none()
        if not user:
            user = User(name=name, email=email, password_hash=password_hash, role=Role.coder)
            db.add(user)
            await db.commit()
            await db.refresh(user)
        coders.append(user)

    vacancies = []
    for data in DEMO_VACANCIES:
        res = await db.execute(select(Vacancy).where(Vacancy.title == data["title"], Vacancy.company == data["company"]))
        vacancy = res.scalar_one_or_none()
        if not vacancy:
            vacancy = Vacancy(**data, is_active=True)
            db.add(vacancy)
            await db.commit()
            await db.refresh(vacancy)
        vacancies.append(vacancy)

    # candidaturas passam pelas mesmas regras da API
    created = 0
    for coder in coders:
        for vacancy in rng.sample(vacancies, k=min(2, len(vacancies))):
            try:
                await eligibility.apply(db, coder.id, vacancy.id)
                created += 1
            except AppError as exc:
                logger.info("demo application skipped (%s): %s", exc.kind, exc.message)

    logger.info("demo data: %d coders, %d vacancies, %d applications", len(coders), len(vacancies), created)


async def main(demo: bool, seed: int) -> None:
    setup_logging()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        await seed_staff(db)
        if demo:
            await seed_demo(db, random.Random(seed))
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed staff accounts and optional demo data.")
    parser.add_argument("--demo", action="store_true", help="also create demo coders, vacancies and applications")
    parser.add_argument("--random-seed", type=int, default=42)
    args = parser.parse_args()
    asyncio.run(main(args.demo, args.random_seed))
