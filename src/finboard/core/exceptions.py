"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class CompositionError(ValidationError):
    """Raised when composite asset percentages do not sum to 100."""

    def __init__(self, total: str):
        super().__init__(f"Composition percentages must sum to 100, got {total}")
        self.code = "INVALID_COMPOSITION"


class CategoryInUseError(AppError):
    """Raised when deleting a category that still has ledger entries."""

    def __init__(self, category_id: str, count: int):
        super().__init__(
            f"Category {category_id} is used by {count} entries",
            code="CATEGORY_IN_USE",
        )
