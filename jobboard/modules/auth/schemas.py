from typing import Annotated

from pydantic import BaseModel, EmailStr, Field, StringConstraints

from jobboard.modules.users.schemas import UserSummary
from jobboard.core.permissions import Role


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    # strip antes do min_length: nome só com espaços é inválido
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    email: EmailStr
    password: str = Field(min_length=6)   # hash no backend


class AuthUser(UserSummary):
    role: Role


class AuthOut(BaseModel):
    user: AuthUser


class LogoutOut(BaseModel):
    message: str
