# jobboard/api/router.py
from fastapi import APIRouter
from jobboard.modules.auth.router import router as auth_router
from jobboard.modules.users.router import router as users_router
from jobboard.modules.vacancies.router import router as vacancies_router
from jobboard.modules.applications.router import router as applications_router

api_router = APIRouter()

api_router.include_router(auth_router,         prefix="/auth",         tags=["auth"])
api_router.include_router(users_router,        prefix="/users",        tags=["users"])
api_router.include_router(vacancies_router,    prefix="/vacancies",    tags=["vacancies"])
api_router.include_router(applications_router, prefix="/applications", tags=["applications"])
