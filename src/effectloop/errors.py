from typing import Any


class InvalidEffectError(TypeError):
    """Exception raised when a value expected to be an effect is not one."""

    __match_args__ = ("value",)

    def __init__(self, value: Any, message: str | None = None):
        """Initialize the exception with the offending value."""
        super().__init__(message or f"Given value is not an effect instance: {value!r}")
        self.value = value
