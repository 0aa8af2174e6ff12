import pytest

from workbench_equip.services.permission_service import (
    PermissionRegistrationError,
    PermissionService,
)

IGNORE = "workbenchequiponly.ignore"


@pytest.fixture
def permissions():
    service = PermissionService()
    service.register_permission(IGNORE, "WorkbenchEquipOnly")
    return service


def test_register_requires_plugin_prefix():
    service = PermissionService()
    with pytest.raises(PermissionRegistrationError):
        service.register_permission("ignore", "WorkbenchEquipOnly")
    with pytest.raises(PermissionRegistrationError):
        service.register_permission("workbenchequiponly.", "WorkbenchEquipOnly")


def test_duplicate_registration_rejected(permissions):
    with pytest.raises(PermissionRegistrationError):
        permissions.register_permission(IGNORE.upper(), "WorkbenchEquipOnly")


def test_user_grant_and_revoke(permissions):
    assert not permissions.user_has_permission("1", IGNORE)
    assert permissions.grant_user("1", IGNORE)
    assert permissions.user_has_permission("1", IGNORE)
    permissions.revoke_user("1", IGNORE)
    assert not permissions.user_has_permission("1", IGNORE)


def test_group_grant(permissions):
    permissions.grant_group("admin", IGNORE)
    assert not permissions.user_has_permission("1", IGNORE)

    permissions.add_user_to_group("1", "admin")
    assert permissions.user_has_permission("1", IGNORE)

    permissions.remove_user_from_group("1", "admin")
    assert not permissions.user_has_permission("1", IGNORE)


def test_default_group_applies_to_everyone(permissions):
    permissions.grant_group("default", IGNORE)
    assert permissions.user_has_permission("12345", IGNORE)


def test_unknown_permission_is_never_held(permissions):
    assert not permissions.grant_user("1", "workbenchequiponly.other")
    assert not permissions.user_has_permission("1", "workbenchequiponly.other")


def test_unregister_drops_grants(permissions):
    permissions.grant_user("1", IGNORE)
    permissions.unregister_permissions("WorkbenchEquipOnly")

    assert not permissions.permission_exists(IGNORE)
    assert not permissions.user_has_permission("1", IGNORE)

    permissions.register_permission(IGNORE, "WorkbenchEquipOnly")
    assert not permissions.user_has_permission("1", IGNORE)


def test_group_revoke(permissions):
    permissions.grant_group("admin", IGNORE)
    permissions.add_user_to_group("1", "admin")
    assert permissions.user_has_permission("1", IGNORE)

    permissions.revoke_group("admin", IGNORE)
    assert not permissions.user_has_permission("1", IGNORE)

    # отзыв у несуществующей группы не падает
    permissions.revoke_group("nobody", IGNORE)
