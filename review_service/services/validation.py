"""
Field Validation

validate() on every aggregate returns a list of human-readable messages
instead of raising, so callers can decide whether to reject or warn.
ValidationErrors collects those messages with a few chainable checks that
mirror the column constraints (required text, length bounds, numeric
ranges, positive ids).

    errors = ValidationErrors()
    errors.required(review.title, "Review title is required")
    errors.in_range(review.overall_rating, 1, 5, "Overall rating must be between 1 and 5")
    return errors.messages
"""

from review_service.services.ladder import is_blank


class ValidationErrors:
    """Accumulates every violated constraint; never fails fast."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __bool__(self) -> bool:
        return bool(self.messages)

    def add_if(self, condition: bool, message: str) -> "ValidationErrors":
        if condition:
            self.messages.append(message)
        return self

    def required(self, value: str | None, message: str) -> "ValidationErrors":
        return self.add_if(is_blank(value), message)

    def max_length(self, value: str | None, limit: int, message: str) -> "ValidationErrors":
        return self.add_if(value is not None and len(value) > limit, message)

    def min_length(self, value: str | None, limit: int, message: str) -> "ValidationErrors":
        """Only checked when a value is present; emptiness is required()'s job."""
        return self.add_if(not is_blank(value) and len(value) < limit, message)

    def in_range(
        self,
        value: float | None,
        low: float,
        high: float,
        message: str,
        optional: bool = False,
    ) -> "ValidationErrors":
        if value is None:
            return self.add_if(not optional, message)
        return self.add_if(value < low or value > high, message)

    def positive_id(self, value: int | None, message: str) -> "ValidationErrors":
        return self.add_if(value is None or value <= 0, message)

    def non_negative(self, value: float | None, message: str) -> "ValidationErrors":
        return self.add_if(value is not None and value < 0, message)
