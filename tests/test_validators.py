import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from userdirectory.validators import (
    MAX_NAME_LENGTH,
    MAX_NICK_LENGTH,
    MAX_TECH_LENGTH,
    TooLong,
    ValidatedName,
    ValidationError,
    validate_name,
    validate_nick,
    validate_tech,
)


@pytest.mark.parametrize(
    ("validator", "limit", "field"),
    [
        (validate_name, MAX_NAME_LENGTH, "name"),
        (validate_nick, MAX_NICK_LENGTH, "nick"),
        (validate_tech, MAX_TECH_LENGTH, "stack"),
    ],
)
def test_values_at_the_limit_are_accepted_and_one_more_is_rejected(validator, limit, field):
    accepted = validator("x" * limit)
    assert str(accepted) == "x" * limit

    with pytest.raises(TooLong) as excinfo:
        validator("x" * (limit + 1))

    assert excinfo.value.field == field
    assert excinfo.value.limit == limit
    assert excinfo.value.length == limit + 1


def test_empty_strings_are_valid():
    assert validate_name("").value == ""
    assert validate_nick("").value == ""
    assert validate_tech("").value == ""


def test_length_is_counted_in_characters():
    nick = "é" * MAX_NICK_LENGTH
    assert validate_nick(nick).value == nick


def test_wrapper_cannot_be_built_around_invalid_text():
    with pytest.raises(TooLong):
        ValidatedName("n" * (MAX_NAME_LENGTH + 1))


def test_too_long_is_a_value_error_with_detail():
    with pytest.raises(ValueError) as excinfo:
        validate_name("n" * 101)

    error = excinfo.value
    assert isinstance(error, ValidationError)
    assert error.to_detail() == {
        "code": "too_long",
        "field": "name",
        "message": "name must be 100 characters or fewer (got 101)",
    }
