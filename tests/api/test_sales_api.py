from decimal import Decimal

import pytest

from sales.models import SalesRecord, SalesTarget

RECORDS_URL = "/api/v1/sales-records/"
TARGETS_URL = "/api/v1/sales-targets/"


@pytest.mark.django_db
def test_create_record_sets_owner_and_derived_amounts(auth_client, sales_user):
    response = auth_client(sales_user).post(
        RECORDS_URL,
        {
            "customer_name": "PT Maju",
            "product_name": "Switch",
            "quantity": 2,
            "unit_price": "500.00",
            "cost_price": "300.00",
            "other_expense": "50.00",
            "closing_date": "2024-05-02",
        },
        format="json",
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["user_id"] == str(sales_user.pk)
    assert Decimal(payload["total_amount"]) == Decimal("1000.00")
    assert Decimal(payload["margin_amount"]) == Decimal("350.00")


@pytest.mark.django_db
def test_negative_price_is_rejected(auth_client, sales_user):
    response = auth_client(sales_user).post(
        RECORDS_URL,
        {"customer_name": "A", "product_name": "B", "unit_price": "-1", "closing_date": "2024-05-02"},
        format="json",
    )

    assert response.status_code == 400
    assert "unit_price" in response.json()


@pytest.mark.django_db
def test_user_without_profile_cannot_log_sales(auth_client, new_user):
    assert auth_client(new_user).get(RECORDS_URL).status_code == 403


@pytest.mark.django_db
def test_users_only_see_their_own_records(auth_client, sales_user, presales_user, make_sale):
    make_sale(sales_user, unit_price=100)
    other = make_sale(presales_user, unit_price=200)
    client = auth_client(sales_user)

    response = client.get(RECORDS_URL)

    assert response.status_code == 200
    assert response.json()["count"] == 1
    assert client.get(f"{RECORDS_URL}{other.pk}/").status_code == 404


@pytest.mark.django_db
def test_manager_reads_team_records_but_cannot_edit(auth_client, manager_user, sales_user, make_sale):
    record = make_sale(sales_user, unit_price=100)
    client = auth_client(manager_user)

    assert client.get(RECORDS_URL).json()["count"] == 1
    assert client.get(f"{RECORDS_URL}?user={sales_user.pk}").json()["count"] == 1
    assert client.get(f"{RECORDS_URL}{record.pk}/").status_code == 200
    assert client.patch(f"{RECORDS_URL}{record.pk}/", {"quantity": 5}, format="json").status_code == 404
    assert SalesRecord.objects.get(pk=record.pk).quantity == 1


@pytest.mark.django_db
def test_target_create_is_an_upsert(auth_client, sales_user):
    client = auth_client(sales_user)
    body = {"period_type": "monthly", "period_year": 2024, "period_month": 4, "target_amount": "1000.00"}

    first = client.post(TARGETS_URL, body, format="json")
    second = client.post(TARGETS_URL, {**body, "target_amount": "1500.00"}, format="json")

    assert first.status_code == 201
    assert second.status_code == 200
    assert SalesTarget.objects.filter(user=sales_user).count() == 1
    assert SalesTarget.objects.get(user=sales_user).target_amount == Decimal("1500.00")


@pytest.mark.django_db
def test_monthly_target_requires_month(auth_client, sales_user):
    response = auth_client(sales_user).post(
        TARGETS_URL,
        {"period_type": "monthly", "period_year": 2024, "target_amount": "1000.00"},
        format="json",
    )

    assert response.status_code == 400
    assert "period_month" in response.json()


@pytest.mark.django_db
def test_sales_summary_endpoint(auth_client, sales_user, make_sale):
    SalesTarget.objects.create(
        user=sales_user,
        period_type=SalesTarget.PeriodType.YEARLY,
        period_year=2024,
        target_amount=Decimal("4000"),
    )
    make_sale(sales_user, unit_price=1000)

    response = auth_client(sales_user).get("/api/v1/sales-summary/?year=2024&month=3")

    assert response.status_code == 200
    payload = response.json()
    assert payload["quarter"] == 1
    assert Decimal(payload["total_sales"]) == Decimal("1000.00")
    assert payload["yearly_achievement"] == pytest.approx(25.0)


@pytest.mark.django_db
def test_sales_summary_rejects_bad_month(auth_client, sales_user):
    response = auth_client(sales_user).get("/api/v1/sales-summary/?year=2024&month=13")

    assert response.status_code == 400
