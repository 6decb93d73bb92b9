from typing import Any, Mapping, Optional

from rest_framework import status

from apps.api.exceptions import ApplicationError


class ValidationError(ApplicationError):
    """A catalog request that cannot be repaired by falling back to defaults."""

    def __init__(
        self,
        message: str = "Invalid catalog request",
        *,
        details: Optional[Mapping[str, Any]] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(
            "VALIDATION_ERROR",
            message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=dict(details) if details else None,
            hint=hint,
        )


__all__ = ["ValidationError"]
