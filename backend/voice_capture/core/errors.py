"""Failure taxonomy shared by the services and the HTTP layer.

Services raise these; ``voice_capture.main`` turns them into responses of
the form ``{"detail": message}`` with the matching status code.
"""


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(ServiceError):
    status_code = 400
    default_message = "Bad request"


class Unauthenticated(ServiceError):
    status_code = 401
    default_message = "Authentication required"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class Conflict(ServiceError):
    status_code = 409
    default_message = "Conflict"


class Internal(ServiceError):
    status_code = 500
