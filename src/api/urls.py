"""Main API URL router for /api/v1/."""
from django.urls import include, path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from api.v1 import account_admin_views
from api.v1 import views as v1_views
from bonus import bonus_views

router = DefaultRouter()
router.register(r"profiles", v1_views.ProfileViewSet, basename="profile")
router.register(r"manager-requests", v1_views.PendingManagerRequestViewSet, basename="manager-request")
router.register(r"activities", v1_views.ActivityViewSet, basename="activity")
router.register(r"sales-records", v1_views.SalesRecordViewSet, basename="sales-record")
router.register(r"sales-targets", v1_views.SalesTargetViewSet, basename="sales-target")
router.register(r"notifications", v1_views.NotificationViewSet, basename="notification")


app_name = "api"
urlpatterns = [
    path("", include(router.urls)),

    # Auth endpoints
    path("auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    # Account administration (managers only)
    path("accounts/delete-user/", account_admin_views.DeleteUserAPIView.as_view(), name="account-delete-user"),
    path(
        "accounts/update-user-email/",
        account_admin_views.UpdateUserEmailAPIView.as_view(),
        name="account-update-user-email",
    ),

    # Profile
    path("profile/", v1_views.MyProfileAPIView.as_view(), name="my-profile"),

    # Sales
    path("sales-summary/", v1_views.SalesSummaryAPIView.as_view(), name="sales-summary"),

    # Bonus
    path("bonus/tiers/", bonus_views.BonusTierListAPIView.as_view(), name="bonus-tiers"),
    path("bonus/summary/", bonus_views.BonusSummaryAPIView.as_view(), name="bonus-summary"),
    path("bonus/history/", bonus_views.BonusHistoryAPIView.as_view(), name="bonus-history"),
    path("bonus/awards/", bonus_views.BonusTierAwardListAPIView.as_view(), name="bonus-awards"),
]
