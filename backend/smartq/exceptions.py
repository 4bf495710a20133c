class APIError(Exception):
    """
    Base exception for all API-related errors.

    Carries a human-readable message and the HTTP status code the boundary
    layer should answer with.
    """
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

class NotFoundError(APIError):
    def __init__(self, message: str = "Resource not found.", status_code: int = 404):
        super().__init__(message, status_code)

class CapacityExceededError(APIError):
    def __init__(self, message: str = "Queue is full", status_code: int = 400):
        super().__init__(message, status_code)

class DuplicateMembershipError(APIError):
    """
    The user already holds a waiting entry in the queue.
    Cancelled and served entries do not count.
    """
    def __init__(self, message: str = "User is already waiting in this queue", status_code: int = 409):
        super().__init__(message, status_code)

class QueueClosedError(APIError):
    def __init__(self, message: str = "Queue is closed", status_code: int = 400):
        super().__init__(message, status_code)

class InvalidStatusTransitionError(APIError):
    """
    Entry status changes are one-way: waiting -> served or waiting -> cancelled.
    """
    def __init__(self, message: str = "Invalid queue entry status transition", status_code: int = 409):
        super().__init__(message, status_code)

class PermissionDeniedError(APIError):
    def __init__(self, message: str = "Not enough permissions", status_code: int = 403):
        super().__init__(message, status_code)
