class AppError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidInputError(AppError):
    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=400)


class UnauthorizedError(AppError):
    """Deliberately non-descript: callers never learn why auth failed."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status_code=401)


class ConflictError(AppError):
    # Reported as 400 to match the documented API contract.
    def __init__(self, message: str = "Already exists"):
        super().__init__(message, status_code=400)


class NotFoundError(AppError):
    def __init__(self, message: str = "Not found"):
        super().__init__(message, status_code=404)


class UpstreamError(AppError):
    def __init__(self, message: str = "Upstream request failed"):
        super().__init__(message, status_code=500)
