"""Tests for the role permission table."""

import pytest

from orderdesk.application.authorization import (
    Permission,
    authorize,
    is_allowed,
    order_scope,
)
from orderdesk.domain.exceptions import PermissionDeniedError
from orderdesk.domain.model.user import Role

ADMIN_ONLY = {Permission.PRODUCTS_DELETE, Permission.USERS_MANAGE}
STAFF_ONLY = {
    Permission.PRODUCTS_CREATE,
    Permission.PRODUCTS_EDIT,
    Permission.ORDERS_VIEW_ALL,
    Permission.ORDERS_STATUS,
    Permission.ORDERS_DELETE,
}


@pytest.mark.parametrize("permission", list(Permission))
def test_admin_holds_every_permission(permission):
    assert is_allowed(Role.ADMIN, permission)


@pytest.mark.parametrize("permission", list(Permission))
def test_employee_permissions(permission):
    assert is_allowed(Role.EMPLOYEE, permission) == (permission not in ADMIN_ONLY)


@pytest.mark.parametrize("permission", list(Permission))
def test_customer_permissions(permission):
    expected = permission not in ADMIN_ONLY | STAFF_ONLY
    assert is_allowed(Role.CUSTOMER, permission) == expected


def test_authorize_raises_for_missing_permission():
    with pytest.raises(PermissionDeniedError, match="products:delete"):
        authorize(Role.EMPLOYEE, Permission.PRODUCTS_DELETE)


def test_authorize_passes_silently():
    authorize(Role.CUSTOMER, Permission.ORDERS_CREATE)


def test_order_scope():
    assert order_scope(Role.ADMIN, 1) is None
    assert order_scope(Role.EMPLOYEE, 2) is None
    assert order_scope(Role.CUSTOMER, 3) == 3
