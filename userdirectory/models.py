"""Domain models for the user directory and their request decoding."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from .validators import (
    InvalidDate,
    InvalidPayload,
    ValidatedName,
    ValidatedNick,
    ValidatedTech,
    ValidationError,
    validate_name,
    validate_nick,
    validate_tech,
)

_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


@dataclass(frozen=True)
class User:
    """A user record as held by the store."""

    id: uuid.UUID
    name: str
    nick: str
    birth_date: date
    stack: Optional[Tuple[str, ...]] = None


def parse_birth_date(value: object, *, field: str = "birth_date") -> date:
    """Parse ``value`` as a strict ``YYYY-MM-DD`` calendar date."""

    if not isinstance(value, str) or not _DATE_PATTERN.fullmatch(value):
        raise InvalidDate(field, value)
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDate(field, value) from exc


class NewUserRequest(BaseModel):
    name: StrictStr
    nick: StrictStr
    birth_date: date
    stack: Optional[List[StrictStr]] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_name(value).value

    @field_validator("nick")
    @classmethod
    def _check_nick(cls, value: str) -> str:
        return validate_nick(value).value

    @field_validator("birth_date", mode="before")
    @classmethod
    def _parse_birth_date(cls, value: object) -> date:
        return parse_birth_date(value)

    @field_validator("stack")
    @classmethod
    def _check_stack(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return None
        return [validate_tech(entry).value for entry in value]

    def to_new_user(self) -> "NewUser":
        return NewUser(
            name=ValidatedName(self.name),
            nick=ValidatedNick(self.nick),
            birth_date=self.birth_date,
            stack=None if self.stack is None else tuple(ValidatedTech(entry) for entry in self.stack),
        )


def first_validation_error(errors: Sequence[Mapping[str, Any]]) -> ValidationError:
    """Map pydantic error entries onto the directory's error taxonomy.

    Errors raised by our own validators are returned as-is; anything else
    (missing keys, wrong types, undecodable JSON) becomes ``InvalidPayload``.
    """

    if not errors:
        return InvalidPayload("body", "Request body is invalid")

    error = errors[0]
    original = (error.get("ctx") or {}).get("error")
    if isinstance(original, ValidationError):
        return original

    loc = tuple(error.get("loc", ()))
    if loc and loc[0] == "body":
        loc = loc[1:]
    field = loc[0] if loc and isinstance(loc[0], str) else "body"
    return InvalidPayload(field, f"{field}: {error.get('msg', 'invalid value')}")


@dataclass(frozen=True)
class NewUser:
    """Validated input for creating a user; carries no identifier yet."""

    name: ValidatedName
    nick: ValidatedNick
    birth_date: date
    stack: Optional[Tuple[ValidatedTech, ...]] = None

    @classmethod
    def from_payload(cls, payload: object) -> "NewUser":
        """Decode a creation payload, failing with the first invalid field."""

        try:
            request = NewUserRequest.model_validate(payload)
        except PydanticValidationError as exc:
            raise first_validation_error(exc.errors()) from exc
        return request.to_new_user()

    def to_user(self, identifier: uuid.UUID) -> User:
        stack = None if self.stack is None else tuple(str(tech) for tech in self.stack)
        return User(
            id=identifier,
            name=str(self.name),
            nick=str(self.nick),
            birth_date=self.birth_date,
            stack=stack,
        )


__all__ = [
    "NewUser",
    "NewUserRequest",
    "User",
    "first_validation_error",
    "parse_birth_date",
]
