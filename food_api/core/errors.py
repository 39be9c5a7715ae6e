"""
Food API — Error taxonomy

Services raise these; the exception handler in main.py maps each one to
its HTTP status and a {"message": ...} body.
"""
from fastapi import status


class FoodAPIError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal error."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidArgument(FoodAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing or invalid request data."


class Conflict(FoodAPIError):
    # The client treats a duplicate account as a plain bad request
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists."


class Unauthenticated(FoodAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized access."


class NotFound(FoodAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found."


class StoreUnavailable(FoodAPIError):
    default_message = "Document store request failed."


class AuthProviderError(FoodAPIError):
    default_message = "Identity provider request failed."
