from datetime import date
from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from accounts.models import Profile, User, UserRole
from sales.models import SalesRecord, SalesTarget


def _make_user(email, division=None, role=UserRole.Role.USER, name=None):
    user = User.objects.create_user(email=email, password="testpass123")
    if division:
        Profile.objects.create(user=user, name=name or email.split("@")[0].title(), division=division)
    UserRole.objects.create(user=user, role=role)
    return user


def _bearer(user) -> str:
    return f"Bearer {RefreshToken.for_user(user).access_token}"


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def manager_user(db):
    return _make_user("manager@test.com", Profile.Division.MANAGER, name="Manager User")


@pytest.fixture
def sales_user(db):
    return _make_user("sales@test.com", Profile.Division.SALES, name="Sales User")


@pytest.fixture
def presales_user(db):
    return _make_user("presales@test.com", Profile.Division.PRESALES, name="Presales User")


@pytest.fixture
def superadmin_user(db):
    return _make_user(
        "superadmin@test.com",
        Profile.Division.SALES,
        role=UserRole.Role.SUPERADMIN,
        name="Super Admin",
    )


@pytest.fixture
def new_user(db):
    """Signed up, profile not completed yet."""
    return User.objects.create_user(email="new@test.com", password="testpass123")


@pytest.fixture
def bearer():
    """Build an ``Authorization`` header value for a user."""
    return _bearer


@pytest.fixture
def auth_client(api_client):
    def _client(user):
        api_client.credentials(HTTP_AUTHORIZATION=_bearer(user))
        return api_client

    return _client


@pytest.fixture
def yearly_target(sales_user):
    return SalesTarget.objects.create(
        user=sales_user,
        period_type=SalesTarget.PeriodType.YEARLY,
        period_year=2024,
        target_amount=Decimal("1000000.00"),
    )


@pytest.fixture
def make_sale(db):
    def _make(user, *, unit_price, cost_price=Decimal("0"), quantity=1, other_expense=Decimal("0"),
              closing_date=date(2024, 3, 15), **extra):
        return SalesRecord.objects.create(
            user=user,
            customer_name=extra.pop("customer_name", "PT Maju"),
            product_name=extra.pop("product_name", "Router"),
            quantity=quantity,
            unit_price=Decimal(str(unit_price)),
            cost_price=Decimal(str(cost_price)),
            other_expense=Decimal(str(other_expense)),
            closing_date=closing_date,
            **extra,
        )

    return _make
