import pytest

from fitsnap.core.security import is_admin_user, resolve_route_redirect
from fitsnap.schemas.auth import AuthUser

USER = AuthUser(id="u-1", email="lifter@example.com")
ADMIN = AuthUser(id="u-2", email="Coach@FitSnap.com")


def test_is_admin_by_email_domain():
    assert is_admin_user(ADMIN, "@fitsnap.com") is True
    assert is_admin_user(USER, "@fitsnap.com") is False


def test_is_admin_by_app_metadata():
    user = AuthUser(id="u-3", email="x@example.com", app_metadata={"is_admin": True})
    assert is_admin_user(user, "@fitsnap.com") is True


def test_anonymous_is_never_admin():
    assert is_admin_user(None, "@fitsnap.com") is False


@pytest.mark.parametrize(
    "path,user,expected",
    [
        ("/login", None, None),
        ("/login", USER, "/dashboard"),
        ("/register", USER, "/dashboard"),
        ("/dashboard", None, "/login?redirectedFrom=%2Fdashboard"),
        ("/workout/new", None, "/login?redirectedFrom=%2Fworkout%2Fnew"),
        ("/dashboard", USER, None),
        ("/admin", None, "/login?redirectedFrom=%2Fadmin"),
        ("/admin/exercises", USER, "/dashboard"),
        ("/admin/exercises", ADMIN, None),
        ("/", None, None),
        ("/about", USER, None),
    ],
)
def test_resolve_route_redirect(path, user, expected):
    assert resolve_route_redirect(path, user, "@fitsnap.com") == expected
