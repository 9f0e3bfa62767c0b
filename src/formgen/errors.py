"""Exceptions raised by formgen."""


class FormError(Exception):
    """Base class for formgen errors."""


class NotARecordError(FormError, TypeError):
    """Raised when extraction is handed something that is not a model instance."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"expected a pydantic model instance, got {type(value).__name__}"
        )


class InvalidValidationTargetError(FormError, TypeError):
    """Raised when the validator cannot validate the given target at all."""


class InvalidMethodError(FormError):
    """Raised when decoding a request that is not a POST."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Invalid Method: {method}")


class TemplateLoadError(FormError):
    """Raised when a requested template file cannot be read."""
