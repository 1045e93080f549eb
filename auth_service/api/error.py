from fastapi import status

from auth_service.libs.result import Error


class ApiError(Exception):
    """Use case Error raised out of a route, rendered as {"error": {...}}"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

    def to_response(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": self.base_error.message}}


class ClientError(ApiError):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(base_error)
        self.status_code = status_code


class ServerError(ApiError):
    def to_response(self) -> dict:
        # Internal detail stays in the log
        return {"error": {"code": self.base_error.code, "message": "Internal server error"}}
