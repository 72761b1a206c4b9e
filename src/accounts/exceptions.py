"""Errors raised by the account administration services.

Each error carries the HTTP status and the message returned to the caller.
"""


class AccountAdminError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(AccountAdminError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(AccountAdminError):
    status_code = 403
    default_message = "Forbidden"


class BadRequest(AccountAdminError):
    status_code = 400
    default_message = "Bad request"


class IdentityServiceError(AccountAdminError):
    """The identity service refused a mutation; the message is passed through."""

    status_code = 400
    default_message = "Identity service error"
