import pytest

from househunt.core.errors import WeakPassword
from househunt.db.models import initial_status_for_role
from househunt.services.accounts import check_password_policy

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("password", ["abcdef", "abc12", "", "12"])
def test_weak_passwords_rejected(password):
    with pytest.raises(WeakPassword):
        check_password_policy(password)


@pytest.mark.parametrize("password", ["abcdef1", "123456", "long-passphrase-9"])
def test_policy_boundary_accepts(password):
    check_password_policy(password)


@pytest.mark.parametrize(
    "role,expected",
    [("owner", "pending"), ("renter", "approved"), ("admin", "approved")],
)
def test_initial_status_for_role(role, expected):
    assert initial_status_for_role(role) == expected
