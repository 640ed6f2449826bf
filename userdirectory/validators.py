"""Field-level validation for user supplied text."""

from __future__ import annotations

from dataclasses import dataclass

MAX_NAME_LENGTH = 100
MAX_NICK_LENGTH = 32
MAX_TECH_LENGTH = 32


class ValidationError(ValueError):
    """Base class for input that must never reach the user store."""

    code = "invalid"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def to_detail(self) -> dict[str, str]:
        return {"code": self.code, "field": self.field, "message": self.message}


class TooLong(ValidationError):
    """Raised when a text field exceeds its maximum length."""

    code = "too_long"

    def __init__(self, field: str, limit: int, length: int) -> None:
        super().__init__(field, f"{field} must be {limit} characters or fewer (got {length})")
        self.limit = limit
        self.length = length


class InvalidDate(ValidationError):
    """Raised when a date is not a real calendar date in ``YYYY-MM-DD`` form."""

    code = "invalid_date"

    def __init__(self, field: str, value: object) -> None:
        super().__init__(field, f"{field} must be a calendar date formatted as YYYY-MM-DD")
        self.value = value


class InvalidPayload(ValidationError):
    """Raised when a payload is missing a required key or has the wrong shape."""

    code = "invalid_payload"


def _check_length(field: str, value: str, limit: int) -> str:
    if len(value) > limit:
        raise TooLong(field, limit, len(value))
    return value


@dataclass(frozen=True)
class ValidatedName:
    value: str

    def __post_init__(self) -> None:
        _check_length("name", self.value, MAX_NAME_LENGTH)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidatedNick:
    value: str

    def __post_init__(self) -> None:
        _check_length("nick", self.value, MAX_NICK_LENGTH)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidatedTech:
    value: str

    def __post_init__(self) -> None:
        _check_length("stack", self.value, MAX_TECH_LENGTH)

    def __str__(self) -> str:
        return self.value


def validate_name(value: str) -> ValidatedName:
    return ValidatedName(value)


def validate_nick(value: str) -> ValidatedNick:
    return ValidatedNick(value)


def validate_tech(value: str) -> ValidatedTech:
    return ValidatedTech(value)


__all__ = [
    "InvalidDate",
    "InvalidPayload",
    "MAX_NAME_LENGTH",
    "MAX_NICK_LENGTH",
    "MAX_TECH_LENGTH",
    "TooLong",
    "ValidatedName",
    "ValidatedNick",
    "ValidatedTech",
    "ValidationError",
    "validate_name",
    "validate_nick",
    "validate_tech",
]
