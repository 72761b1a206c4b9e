"""Manager-only delete-user and update-user-email endpoints."""
import pytest

from accounts.directory import DjangoAccountDirectory
from accounts.models import Profile, User, UserRole
from activities.models import Activity
from chat.models import Conversation, Message, MessageRead
from notifications.models import Notification
from sales.models import SalesRecord, SalesTarget

DELETE_URL = "/api/v1/accounts/delete-user/"
EMAIL_URL = "/api/v1/accounts/update-user-email/"


@pytest.fixture
def populated_sales_user(sales_user, manager_user, make_sale):
    make_sale(sales_user, unit_price=1000, cost_price=600)
    SalesTarget.objects.create(
        user=sales_user,
        period_type=SalesTarget.PeriodType.YEARLY,
        period_year=2024,
        target_amount=10000,
    )
    Activity.objects.create(
        user=sales_user,
        date="2024-03-01",
        category=Activity.Category.SALES,
        activity_type=Activity.ActivityType.VISIT,
        person_name="Sales User",
        customer_name="PT Maju",
    )
    conversation = Conversation.objects.create(type=Conversation.Type.DIRECT)
    conversation.participants.add(sales_user, manager_user)
    own_message = Message.objects.create(conversation=conversation, sender=sales_user, content="hi")
    other_message = Message.objects.create(conversation=conversation, sender=manager_user, content="hello")
    MessageRead.objects.create(message=own_message, user=manager_user)
    MessageRead.objects.create(message=other_message, user=sales_user)
    Notification.objects.create(user=sales_user, title="t", message="m")
    return sales_user


def _owned_rows(user_id):
    return {
        "roles": UserRole.objects.filter(user_id=user_id).count(),
        "profiles": Profile.objects.filter(user_id=user_id).count(),
        "activities": Activity.objects.filter(user_id=user_id).count(),
        "sales_records": SalesRecord.objects.filter(user_id=user_id).count(),
        "sales_targets": SalesTarget.objects.filter(user_id=user_id).count(),
        "messages": Message.objects.filter(sender_id=user_id).count(),
        "message_reads": MessageRead.objects.filter(user_id=user_id).count(),
        "notifications": Notification.objects.filter(user_id=user_id).count(),
        "identity": User.objects.filter(pk=user_id).count(),
    }


# ---------------------------------------------------------------------------
# delete-user
# ---------------------------------------------------------------------------

@pytest.mark.django_db
def test_manager_deletes_user_and_everything_it_owns(api_client, bearer, manager_user, populated_sales_user):
    user_id = populated_sales_user.pk

    response = api_client.post(
        DELETE_URL,
        {"targetUserId": str(user_id)},
        format="json",
        HTTP_AUTHORIZATION=bearer(manager_user),
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "User deleted successfully"}
    assert all(count == 0 for count in _owned_rows(user_id).values())
    # The manager's own data is untouched.
    assert Message.objects.filter(sender=manager_user).count() == 1
    assert User.objects.filter(pk=manager_user.pk).exists()


@pytest.mark.django_db
def test_missing_header_is_unauthorized(api_client, sales_user):
    response = api_client.post(DELETE_URL, {"targetUserId": str(sales_user.pk)}, format="json")

    assert response.status_code == 401
    assert response.json() == {"error": "No authorization header"}
    assert User.objects.filter(pk=sales_user.pk).exists()


@pytest.mark.django_db
def test_invalid_token_is_unauthorized(api_client, sales_user):
    response = api_client.post(
        DELETE_URL,
        {"targetUserId": str(sales_user.pk)},
        format="json",
        HTTP_AUTHORIZATION="Bearer not-a-jwt",
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


@pytest.mark.django_db
def test_sales_user_cannot_delete(api_client, bearer, sales_user, presales_user):
    response = api_client.post(
        DELETE_URL,
        {"targetUserId": str(presales_user.pk)},
        format="json",
        HTTP_AUTHORIZATION=bearer(sales_user),
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Only managers can delete users"}
    assert User.objects.filter(pk=presales_user.pk).exists()


@pytest.mark.django_db
def test_user_without_profile_cannot_delete(api_client, bearer, new_user, sales_user):
    response = api_client.post(
        DELETE_URL,
        {"targetUserId": str(sales_user.pk)},
        format="json",
        HTTP_AUTHORIZATION=bearer(new_user),
    )

    assert response.status_code == 403


@pytest.mark.django_db
def test_manager_cannot_delete_self(api_client, bearer, manager_user):
    response = api_client.post(
        DELETE_URL,
        {"targetUserId": str(manager_user.pk)},
        format="json",
        HTTP_AUTHORIZATION=bearer(manager_user),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Cannot delete your own account"}


@pytest.mark.django_db
def test_manager_cannot_delete_superadmin(api_client, bearer, manager_user, superadmin_user):
    response = api_client.post(
        DELETE_URL,
        {"targetUserId": str(superadmin_user.pk)},
        format="json",
        HTTP_AUTHORIZATION=bearer(manager_user),
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Cannot delete superadmin accounts"}
    assert Profile.objects.filter(user=superadmin_user).exists()


@pytest.mark.django_db
def test_missing_target_is_bad_request(api_client, bearer, manager_user):
    response = api_client.post(DELETE_URL, {}, format="json", HTTP_AUTHORIZATION=bearer(manager_user))

    assert response.status_code == 400
    assert response.json() == {"error": "Missing targetUserId"}


@pytest.mark.django_db
def test_malformed_body_is_treated_as_empty(api_client, bearer, manager_user):
    response = api_client.post(
        DELETE_URL,
        "{not json",
        content_type="application/json",
        HTTP_AUTHORIZATION=bearer(manager_user),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Missing targetUserId"}


@pytest.mark.django_db
def test_unsupported_body_without_header_is_unauthorized(api_client, sales_user):
    response = api_client.post(DELETE_URL, "x", content_type="text/plain")

    assert response.status_code == 401
    assert response.json() == {"error": "No authorization header"}
    assert User.objects.filter(pk=sales_user.pk).exists()


@pytest.mark.django_db
def test_unsupported_body_from_manager_is_missing_target(api_client, bearer, manager_user):
    response = api_client.post(
        DELETE_URL,
        "x",
        content_type="text/plain",
        HTTP_AUTHORIZATION=bearer(manager_user),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Missing targetUserId"}


@pytest.mark.django_db
def test_unsupported_body_on_email_update_without_header(api_client):
    response = api_client.post(EMAIL_URL, "x", content_type="text/plain")

    assert response.status_code == 401
    assert response.json() == {"error": "No authorization header"}


@pytest.mark.django_db
def test_unknown_target_reports_identity_error(api_client, bearer, manager_user):
    response = api_client.post(
        DELETE_URL,
        {"targetUserId": "00000000-0000-0000-0000-000000000000"},
        format="json",
        HTTP_AUTHORIZATION=bearer(manager_user),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "User not found"}


@pytest.mark.django_db
def test_failure_mid_cascade_returns_500_and_rolls_back(
    api_client, bearer, manager_user, populated_sales_user, monkeypatch
):
    user_id = populated_sales_user.pk
    before = _owned_rows(user_id)
    original = DjangoAccountDirectory.delete_rows

    def failing_delete_rows(self, table, column, target):
        if table == "profiles":
            raise RuntimeError("store unavailable")
        return original(self, table, column, target)

    monkeypatch.setattr(DjangoAccountDirectory, "delete_rows", failing_delete_rows)

    response = api_client.post(
        DELETE_URL,
        {"targetUserId": str(user_id)},
        format="json",
        HTTP_AUTHORIZATION=bearer(manager_user),
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert _owned_rows(user_id) == before


@pytest.mark.django_db
def test_cors_preflight_is_permissive(api_client):
    response = api_client.options(
        DELETE_URL,
        HTTP_ORIGIN="https://tracker.example.com",
        HTTP_ACCESS_CONTROL_REQUEST_METHOD="POST",
        HTTP_ACCESS_CONTROL_REQUEST_HEADERS="authorization, x-client-info, apikey, content-type",
    )

    assert response.status_code == 200
    assert response["Access-Control-Allow-Origin"] == "*"
    allowed = response["Access-Control-Allow-Headers"].lower()
    for header in ("authorization", "x-client-info", "apikey", "content-type"):
        assert header in allowed


@pytest.mark.django_db
def test_error_responses_carry_cors_headers(api_client):
    response = api_client.post(DELETE_URL, {}, format="json", HTTP_ORIGIN="https://tracker.example.com")

    assert response.status_code == 401
    assert response["Access-Control-Allow-Origin"] == "*"


# ---------------------------------------------------------------------------
# update-user-email
# ---------------------------------------------------------------------------

@pytest.mark.django_db
def test_manager_updates_user_email(api_client, bearer, manager_user, sales_user):
    response = api_client.post(
        EMAIL_URL,
        {"targetUserId": str(sales_user.pk), "newEmail": "renamed@test.com"},
        format="json",
        HTTP_AUTHORIZATION=bearer(manager_user),
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "user": {"id": str(sales_user.pk), "email": "renamed@test.com"},
    }
    sales_user.refresh_from_db()
    assert sales_user.email == "renamed@test.com"
    assert sales_user.email_confirmed_at is not None


@pytest.mark.django_db
def test_sales_user_cannot_update_email(api_client, bearer, sales_user, presales_user):
    response = api_client.post(
        EMAIL_URL,
        {"targetUserId": str(presales_user.pk), "newEmail": "renamed@test.com"},
        format="json",
        HTTP_AUTHORIZATION=bearer(sales_user),
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Only managers can update user emails"}


@pytest.mark.django_db
def test_update_email_rejects_malformed_address(api_client, bearer, manager_user, sales_user):
    response = api_client.post(
        EMAIL_URL,
        {"targetUserId": str(sales_user.pk), "newEmail": "not-an-email"},
        format="json",
        HTTP_AUTHORIZATION=bearer(manager_user),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email format"}


@pytest.mark.django_db
def test_update_email_rejects_address_in_use(api_client, bearer, manager_user, sales_user, presales_user):
    response = api_client.post(
        EMAIL_URL,
        {"targetUserId": str(sales_user.pk), "newEmail": presales_user.email},
        format="json",
        HTTP_AUTHORIZATION=bearer(manager_user),
    )

    assert response.status_code == 400
    assert response.json() == {"error": "A user with this email address already exists."}


@pytest.mark.django_db
def test_update_email_missing_header(api_client, sales_user):
    response = api_client.post(
        EMAIL_URL,
        {"targetUserId": str(sales_user.pk), "newEmail": "renamed@test.com"},
        format="json",
    )

    assert response.status_code == 401
