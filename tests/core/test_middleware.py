import pytest


@pytest.mark.django_db
def test_api_responses_are_not_cached(auth_client, sales_user):
    response = auth_client(sales_user).get("/api/v1/bonus/tiers/")

    assert response.status_code == 200
    assert "no-store" in response["Cache-Control"]
    assert "private" in response["Cache-Control"]
    assert response["Pragma"] == "no-cache"


@pytest.mark.django_db
def test_error_responses_are_not_cached(api_client):
    response = api_client.post("/api/v1/accounts/delete-user/", {}, format="json")

    assert response.status_code == 401
    assert "no-store" in response["Cache-Control"]
