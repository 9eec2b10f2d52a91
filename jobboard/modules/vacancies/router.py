# jobboard/modules/vacancies/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.dependencies import get_db, authorize
from jobboard.core.permissions import Operation, Principal
from jobboard.core.responses import ApiResponse, ok
from . import crud
from .schemas import VacancyCreate, VacancyOut, VacancyUpdate

router = APIRouter()  # incluído com prefix "/vacancies"


# CREATE
@router.post("", response_model=ApiResponse[VacancyOut], status_code=status.HTTP_201_CREATED)
async def create_vacancy(
    payload: VacancyCreate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.create_vacancy)),
):
    return ok(await crud.create_vacancy(db, payload), "Vacancy created")


# LIST (público, homepage) - precisa vir antes de "/{vacancy_id}"
@router.get("/public", response_model=ApiResponse[list[VacancyOut]])
async def list_public_vacancies(
    db: AsyncSession = Depends(get_db),
    _: Optional[Principal] = Depends(authorize(Operation.list_public_vacancies)),
):
    return ok(await crud.list_active_vacancies(db), "Active vacancies")


# LIST (autenticado)
@router.get("", response_model=ApiResponse[list[VacancyOut]])
async def list_vacancies(
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.list_vacancies)),
):
    return ok(await crud.list_active_vacancies(db), "Active vacancies")


# DETAIL
@router.get("/{vacancy_id}", response_model=ApiResponse[VacancyOut])
async def get_vacancy(
    vacancy_id: int,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.read_vacancy)),
):
    return ok(await crud.get_vacancy_or_404(db, vacancy_id), "Vacancy retrieved")


# UPDATE
@router.patch("/{vacancy_id}", response_model=ApiResponse[VacancyOut])
async def update_vacancy(
    vacancy_id: int,
    payload: VacancyUpdate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.update_vacancy)),
):
    return ok(await crud.update_vacancy(db, vacancy_id, payload), "Vacancy updated")


# TOGGLE STATUS
@router.patch("/{vacancy_id}/toggle-active", response_model=ApiResponse[VacancyOut])
async def toggle_vacancy(
    vacancy_id: int,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.toggle_vacancy)),
):
    return ok(await crud.toggle_vacancy(db, vacancy_id), "Vacancy status updated")


# DELETE (soft)
@router.delete("/{vacancy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vacancy(
    vacancy_id: int,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.delete_vacancy)),
):
    await crud.remove_vacancy(db, vacancy_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
