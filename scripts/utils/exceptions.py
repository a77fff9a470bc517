from fastapi import status


class DashboardException(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(DashboardException):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class ValidationFailed(DashboardException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class AccessDenied(DashboardException):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFound(DashboardException):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(DashboardException):
    pass
