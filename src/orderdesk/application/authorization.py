"""Role-based access control.

Every role-gated operation is looked up in one table; the request layer
calls ``authorize()`` before invoking an application handler.
"""

from __future__ import annotations

from enum import Enum

from orderdesk.domain.exceptions import PermissionDeniedError
from orderdesk.domain.model.user import Role


class Permission(Enum):
    PRODUCTS_VIEW = "products:view"
    PRODUCTS_CREATE = "products:create"
    PRODUCTS_EDIT = "products:edit"
    PRODUCTS_DELETE = "products:delete"
    ORDERS_VIEW = "orders:view"
    ORDERS_VIEW_ALL = "orders:view_all"
    ORDERS_CREATE = "orders:create"
    ORDERS_EDIT = "orders:edit"
    ORDERS_STATUS = "orders:status"
    ORDERS_DELETE = "orders:delete"
    USERS_MANAGE = "users:manage"


_STAFF = frozenset({Role.ADMIN, Role.EMPLOYEE})
_EVERYONE = frozenset(Role)

ROLE_PERMISSIONS: dict[Permission, frozenset[Role]] = {
    Permission.PRODUCTS_VIEW: _EVERYONE,
    Permission.PRODUCTS_CREATE: _STAFF,
    Permission.PRODUCTS_EDIT: _STAFF,
    Permission.PRODUCTS_DELETE: frozenset({Role.ADMIN}),
    Permission.ORDERS_VIEW: _EVERYONE,
    Permission.ORDERS_VIEW_ALL: _STAFF,
    Permission.ORDERS_CREATE: _EVERYONE,
    Permission.ORDERS_EDIT: _EVERYONE,
    Permission.ORDERS_STATUS: _STAFF,
    Permission.ORDERS_DELETE: _STAFF,
    Permission.USERS_MANAGE: frozenset({Role.ADMIN}),
}


def is_allowed(role: Role, permission: Permission) -> bool:
    return role in ROLE_PERMISSIONS[permission]


def authorize(role: Role, permission: Permission) -> None:
    """Raise PermissionDeniedError unless ``role`` holds ``permission``."""
    if not is_allowed(role, permission):
        raise PermissionDeniedError(
            f"Access denied: role {role.value} lacks '{permission.value}'"
        )


def order_scope(role: Role, user_id: int) -> int | None:
    """Customer ID to restrict order access to, or None for staff."""
    if is_allowed(role, Permission.ORDERS_VIEW_ALL):
        return None
    return user_id
