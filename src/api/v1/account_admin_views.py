"""Manager-only account administration endpoints.

Both views authenticate the bearer token themselves so that the error
ordering (missing header, bad token, not a manager, bad input) is decided
by the account services and not by DRF's authentication layer.
"""
import logging

from rest_framework import status
from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.exceptions import AccountAdminError
from accounts.services import delete_account, update_account_email

logger = logging.getLogger("salestrack")


class _AccountAdminAPIView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def _payload(self, request) -> dict:
        try:
            data = request.data
        except (ParseError, UnsupportedMediaType):
            # Unreadable bodies count as empty so the header checks still decide.
            return {}
        return data if hasattr(data, "get") else {}

    def _run(self, operation, request, build_response):
        try:
            result = operation(request.META.get("HTTP_AUTHORIZATION"), self._payload(request))
        except AccountAdminError as exc:
            return Response({"error": exc.message}, status=exc.status_code)
        except Exception:
            logger.exception("Account administration failed")
            return Response(
                {"error": "Internal server error"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(build_response(result), status=status.HTTP_200_OK)


class DeleteUserAPIView(_AccountAdminAPIView):
    """POST ``{"targetUserId": ...}``: delete an account and all it owns."""

    def post(self, request):
        return self._run(
            lambda auth, data: delete_account(auth, data.get("targetUserId")),
            request,
            lambda result: {"success": True, "message": "User deleted successfully"},
        )


class UpdateUserEmailAPIView(_AccountAdminAPIView):
    """POST ``{"targetUserId": ..., "newEmail": ...}``."""

    def post(self, request):
        return self._run(
            lambda auth, data: update_account_email(auth, data.get("targetUserId"), data.get("newEmail")),
            request,
            lambda user: {"success": True, "user": user},
        )
