from __future__ import annotations
from datetime import datetime
from typing import Annotated, Optional
from pydantic import EmailStr, Field, StringConstraints

from jobboard.core.permissions import Role
from jobboard.core.responses import CamelModel


class UserOut(CamelModel):
    id: int
    name: str
    email: str
    role: Role
    status: str
    created_at: datetime
    updated_at: datetime


class UserSummary(CamelModel):
    id: int
    name: str
    email: str


class UserUpdate(CamelModel):
    name: Optional[Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]] = None
    email: Optional[EmailStr] = None
    role: Optional[Role] = None
    status: Optional[str] = Field(default=None, max_length=20)   # "active" | "inactive" | "suspended"
