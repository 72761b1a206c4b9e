from datetime import date

import pytest

from accounts.models import Profile
from activities.models import Activity
from notifications.models import Notification

ACTIVITIES_URL = "/api/v1/activities/"
AVAILABILITY_URL = "/api/v1/activities/availability/"


def _payload(**overrides):
    payload = {
        "date": "2024-05-02",
        "activity_type": "visit",
        "customer_name": "PT Maju",
        "notes": "Demo of the new router line",
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
def test_activities_require_a_profile(auth_client, new_user):
    assert auth_client(new_user).get(ACTIVITIES_URL).status_code == 403


@pytest.mark.django_db
def test_create_activity_fills_author_fields(auth_client, sales_user):
    response = auth_client(sales_user).post(ACTIVITIES_URL, _payload(), format="json")

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == str(sales_user.pk)
    assert body["person_name"] == "Sales User"
    assert body["category"] == "sales"
    assert Activity.objects.filter(user=sales_user).count() == 1


@pytest.mark.django_db
def test_create_activity_with_collaborator_notifies_them(auth_client, sales_user, presales_user):
    presales_profile = Profile.objects.get(user=presales_user)

    response = auth_client(sales_user).post(
        ACTIVITIES_URL,
        _payload(collaboration={"division": "presales", "personId": str(presales_profile.pk), "personName": "Rina"}),
        format="json",
    )

    assert response.status_code == 201
    assert response.json()["collaboration"]["personId"] == str(presales_profile.pk)
    assert Notification.objects.filter(user=presales_user, activity_id=response.json()["id"]).exists()


@pytest.mark.django_db
def test_invalid_collaboration_is_rejected(auth_client, sales_user):
    response = auth_client(sales_user).post(
        ACTIVITIES_URL,
        _payload(collaboration={"division": "finance", "personName": "Rina"}),
        format="json",
    )

    assert response.status_code == 400
    assert "collaboration" in response.json()


@pytest.mark.django_db
def test_users_only_see_their_own_activities(auth_client, sales_user, presales_user, manager_user):
    Activity.objects.create(
        user=presales_user, date=date(2024, 5, 2), category="presales",
        activity_type="call", person_name="Presales User", customer_name="PT Lain",
    )
    auth_client(sales_user).post(ACTIVITIES_URL, _payload(), format="json")

    own = auth_client(sales_user).get(ACTIVITIES_URL).json()["results"]
    team = auth_client(manager_user).get(ACTIVITIES_URL).json()["results"]

    assert [row["customer_name"] for row in own] == ["PT Maju"]
    assert {row["customer_name"] for row in team} == {"PT Maju", "PT Lain"}


@pytest.mark.django_db
def test_manager_cannot_edit_someone_elses_activity(auth_client, sales_user, manager_user):
    activity_id = auth_client(sales_user).post(ACTIVITIES_URL, _payload(), format="json").json()["id"]

    response = auth_client(manager_user).patch(f"{ACTIVITIES_URL}{activity_id}/", {"notes": "x"}, format="json")

    assert response.status_code == 404
    assert Activity.objects.get(pk=activity_id).notes == "Demo of the new router line"


@pytest.mark.django_db
def test_availability_on_a_day(auth_client, sales_user, presales_user, manager_user):
    person_id = str(Profile.objects.get(user=presales_user).pk)
    created = auth_client(sales_user).post(
        ACTIVITIES_URL,
        _payload(collaboration={"division": "presales", "personId": person_id}),
        format="json",
    ).json()

    client = auth_client(manager_user)
    booked = client.get(AVAILABILITY_URL, {"person": person_id, "date": "2024-05-02"}).json()
    free = client.get(AVAILABILITY_URL, {"person": person_id, "date": "2024-05-03"}).json()

    assert booked == {"person": person_id, "date": "2024-05-02", "booked": True, "activities": [created["id"]]}
    assert free["booked"] is False
    assert free["activities"] == []


@pytest.mark.django_db
def test_availability_calendar_lists_booked_days(auth_client, sales_user, presales_user):
    person_id = str(Profile.objects.get(user=presales_user).pk)
    client = auth_client(sales_user)
    for day in ("2024-05-02", "2024-05-20", "2024-06-01"):
        client.post(
            ACTIVITIES_URL,
            _payload(date=day, collaboration={"division": "presales", "personId": person_id}),
            format="json",
        )

    response = client.get(AVAILABILITY_URL, {"person": person_id, "year": 2024, "month": 5})

    assert response.status_code == 200
    assert response.json()["booked_dates"] == ["2024-05-02", "2024-05-20"]


@pytest.mark.django_db
def test_availability_validates_query(auth_client, sales_user):
    client = auth_client(sales_user)

    assert client.get(AVAILABILITY_URL).status_code == 400
    assert client.get(AVAILABILITY_URL, {"person": "nope"}).status_code == 400
    assert client.get(AVAILABILITY_URL, {"person": str(sales_user.pk), "month": 13}).status_code == 400
