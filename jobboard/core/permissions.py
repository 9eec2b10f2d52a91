"""Role-based access control.

Every route declares one ``Operation``; the table below is the single source
of truth for which roles may invoke it. An empty role set means any
authenticated principal; operations in ``PUBLIC_OPERATIONS`` skip identity
proof entirely.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from jobboard.core.errors import AuthorizationFailure


class Role(str, Enum):
    admin = "admin"
    gestor = "gestor"
    coder = "coder"


class Operation(str, Enum):
    # applications
    apply_to_vacancy = "applications:apply"
    list_applications = "applications:list"
    list_my_applications = "applications:list-mine"
    list_vacancy_applications = "applications:list-by-vacancy"
    update_application_status = "applications:update-status"
    remove_application = "applications:remove"
    # vacancies
    create_vacancy = "vacancies:create"
    list_vacancies = "vacancies:list"
    list_public_vacancies = "vacancies:list-public"
    read_vacancy = "vacancies:read"
    update_vacancy = "vacancies:update"
    toggle_vacancy = "vacancies:toggle-active"
    delete_vacancy = "vacancies:delete"
    # users
    list_users = "users:list"
    read_user = "users:read"
    update_user = "users:update"
    delete_user = "users:delete"


ANY_AUTHENTICATED: frozenset[Role] = frozenset()
STAFF = frozenset({Role.admin, Role.gestor})
ADMIN_ONLY = frozenset({Role.admin})
CODER_ONLY = frozenset({Role.coder})

PERMISSIONS: dict[Operation, frozenset[Role]] = {
    Operation.apply_to_vacancy: CODER_ONLY,
    Operation.list_applications: STAFF,
    Operation.list_my_applications: CODER_ONLY,
    Operation.list_vacancy_applications: STAFF,
    Operation.update_application_status: STAFF,
    Operation.remove_application: ADMIN_ONLY,
    Operation.create_vacancy: STAFF,
    Operation.list_vacancies: ANY_AUTHENTICATED,
    Operation.list_public_vacancies: ANY_AUTHENTICATED,
    Operation.read_vacancy: ANY_AUTHENTICATED,
    Operation.update_vacancy: STAFF,
    Operation.toggle_vacancy: STAFF,
    Operation.delete_vacancy: ADMIN_ONLY,
    Operation.list_users: ADMIN_ONLY,
    Operation.read_user: ADMIN_ONLY,
    Operation.update_user: ADMIN_ONLY,
    Operation.delete_user: ADMIN_ONLY,
}

PUBLIC_OPERATIONS: frozenset[Operation] = frozenset({Operation.list_public_vacancies})


@dataclass(frozen=True)
class Principal:
    id: int
    email: str
    role: Role


def required_roles(operation: Operation) -> frozenset[Role]:
    return PERMISSIONS[operation]


def is_public(operation: Operation) -> bool:
    return operation in PUBLIC_OPERATIONS


def is_allowed(role: Role, operation: Operation) -> bool:
    roles = required_roles(operation)
    return not roles or role in roles


def check_role(principal: Principal, operation: Operation) -> Principal:
    if not is_allowed(principal.role, operation):
        raise AuthorizationFailure(
            f"Role '{principal.role.value}' is not allowed to perform '{operation.value}'"
        )
    return principal
