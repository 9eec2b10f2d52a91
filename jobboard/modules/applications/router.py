from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.dependencies import get_db, authorize
from jobboard.core.permissions import Operation, Principal
from jobboard.core.responses import ApiResponse, ok
from jobboard.services import eligibility
from jobboard.services.application_status import change_status
from . import crud
from .schemas import ApplicationOut, ApplyRequest, StatusUpdate

router = APIRouter()  # incluído com prefix "/applications"


@router.post("/apply", response_model=ApiResponse[ApplicationOut], status_code=status.HTTP_201_CREATED)
async def apply_to_vacancy(
    payload: ApplyRequest,
    db: AsyncSession = Depends(get_db),
    me: Principal = Depends(authorize(Operation.apply_to_vacancy)),
):
    # o candidato vem sempre do token, nunca do body
    application = await eligibility.apply(db, me.id, payload.vacancy_id)
    return ok(application, "Application submitted successfully")


@router.get("", response_model=ApiResponse[list[ApplicationOut]])
async def list_applications(
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.list_applications)),
):
    return ok(await crud.list_all(db), "Applications retrieved")


@router.get("/my-applications", response_model=ApiResponse[list[ApplicationOut]])
async def list_my_applications(
    db: AsyncSession = Depends(get_db),
    me: Principal = Depends(authorize(Operation.list_my_applications)),
):
    return ok(await crud.list_by_user(db, me.id), "Applications retrieved")


@router.get("/vacancy/{vacancy_id}", response_model=ApiResponse[list[ApplicationOut]])
async def list_vacancy_applications(
    vacancy_id: int,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.list_vacancy_applications)),
):
    return ok(await crud.list_by_vacancy(db, vacancy_id), "Applications retrieved")


@router.patch("/{application_id}/status", response_model=ApiResponse[ApplicationOut])
async def update_application_status(
    application_id: int,
    payload: StatusUpdate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.update_application_status)),
):
    return ok(await change_status(db, application_id, payload.status), "Application status updated")


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_application(
    application_id: int,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.remove_application)),
):
    await crud.remove_application(db, application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
