from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.dependencies import get_db, authorize
from jobboard.core.permissions import Operation, Principal
from jobboard.core.responses import ApiResponse, ok
from . import crud
from .schemas import UserOut, UserUpdate

router = APIRouter()


@router.get("", response_model=ApiResponse[list[UserOut]])
async def list_users(
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.list_users)),
):
    users = await crud.list_users(db)
    return ok(users, "Users retrieved")


@router.get("/{user_id}", response_model=ApiResponse[UserOut])
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.read_user)),
):
    return ok(await crud.get_user_or_404(db, user_id), "User retrieved")


@router.patch("/{user_id}", response_model=ApiResponse[UserOut])
async def update_user(
    user_id: int,
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.update_user)),
):
    return ok(await crud.update_user(db, user_id, payload), "User updated")


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    _: Principal = Depends(authorize(Operation.delete_user)),
):
    await crud.remove_user(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
