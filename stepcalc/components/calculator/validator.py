from dataclasses import dataclass

MAX_INPUT_LENGTH = 2

TOO_LONG_ERROR = "Input is too long"
NOT_NUMERIC_ERROR = "Input is not numeric"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating raw input text. An empty error means the text is valid."""

    value: int | None
    error: str

    @property
    def is_valid(self) -> bool:
        return not self.error


def validate(text: str) -> ValidationResult:
    """Validate raw input text.

    Rules are checked in order: length first, then that every character is an
    ASCII digit. Empty text has no digits to parse and is reported as not numeric.
    """
    if len(text) > MAX_INPUT_LENGTH:
        return ValidationResult(value=None, error=TOO_LONG_ERROR)
    # str.isdigit() accepts non-ASCII digits like "²", so compare ranges explicitly
    if not text or not all("0" <= ch <= "9" for ch in text):
        return ValidationResult(value=None, error=NOT_NUMERIC_ERROR)
    return ValidationResult(value=int(text), error="")
