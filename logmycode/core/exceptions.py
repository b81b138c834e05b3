from fastapi import HTTPException, status


class UserNotFoundError(LookupError):
    """Raised when a username has no row in the users table."""

    def __init__(self, username: str):
        super().__init__(f"User {username} not found")
        self.username = username


class BadRequestError(HTTPException):
    """Raised when required request parameters are missing."""

    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
        )


class InternalServerError(HTTPException):
    """Raised when persistence or another internal step fails."""

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
        )
