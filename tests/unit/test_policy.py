import pytest

from contentflow.domain.entities import User
from contentflow.domain.errors import AccessDenied
from contentflow.domain.policy import PermissionChecker


@pytest.fixture
def checker(rules):
    return PermissionChecker(rules.roles)


def test_direct_capability():
    user = User(capabilities={"PUBLISH"})
    assert PermissionChecker().has("PUBLISH", user) is True
    assert PermissionChecker().has("ARCHIVE", user) is False


def test_capability_names_are_normalized():
    user = User(capabilities={" publish "})
    assert user.capabilities == frozenset({"PUBLISH"})
    assert PermissionChecker().has("Publish", user) is True


def test_empty_capabilities_denied():
    user = User(id="u1")
    with pytest.raises(AccessDenied) as exc:
        PermissionChecker().require("PUBLISH", user)

    assert exc.value.capability == "PUBLISH"
    assert exc.value.user_id == "u1"
    assert exc.value.code == "ACCESS_DENIED"


def test_no_user_denied():
    assert PermissionChecker().has("PUBLISH", None) is False
    with pytest.raises(AccessDenied):
        PermissionChecker().require("PUBLISH", None)


def test_require_passes_silently():
    user = User(capabilities={"ARCHIVE"})
    assert PermissionChecker().require("ARCHIVE", user) is None


def test_wildcard_grants_everything():
    user = User(capabilities={"*"})
    assert PermissionChecker().has("MANAGE", user) is True


def test_role_grants(checker, editor, curator):
    # rules: editor -> PUBLISH, curator -> ARCHIVE
    assert checker.has("PUBLISH", editor) is True
    assert checker.has("ARCHIVE", editor) is False
    assert checker.has("ARCHIVE", curator) is True


def test_admin_role_wildcard(checker):
    admin = User(roles={"admin"})
    assert checker.has("ANYTHING", admin) is True


def test_unknown_role_grants_nothing(checker):
    user = User(roles={"intern"})
    assert checker.effective_capabilities(user) == frozenset()


def test_effective_capabilities_union(checker):
    user = User(capabilities={"MANAGE"}, roles={"editor"})
    assert checker.effective_capabilities(user) == frozenset({"MANAGE", "PUBLISH"})
