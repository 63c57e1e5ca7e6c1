import pytest

from src.attendees.dtos import InvalidInputError
from src.attendees.features.submit_rsvp.validation import validate_rsvp_input


def test_valid_input_is_trimmed():
    assert validate_rsvp_input(" Ada ", " ada@example.com ", " 555 ") == (
        "Ada",
        "ada@example.com",
        "555",
        False,
    )


def test_blank_phone_becomes_none():
    assert validate_rsvp_input("Ada", "ada@example.com", "  ")[2] is None
    assert validate_rsvp_input("Ada", "ada@example.com", "")[2] is None


@pytest.mark.parametrize("email", ["ada", "ada@example", "ada @example.com", "@example.com"])
def test_malformed_email(email):
    with pytest.raises(InvalidInputError, match="Invalid email format."):
        validate_rsvp_input("Ada", email)


@pytest.mark.parametrize("name,email", [(None, "ada@example.com"), ("Ada", None), ("", "")])
def test_missing_name_or_email(name, email):
    with pytest.raises(InvalidInputError, match="Name and email are required."):
        validate_rsvp_input(name, email)


@pytest.mark.parametrize("plus_one,expected", [(None, False), (False, False), (True, True)])
def test_plus_one_is_boolean(plus_one, expected):
    assert validate_rsvp_input("Ada", "ada@example.com", plus_one=plus_one)[3] is expected


@pytest.mark.parametrize("plus_one", ["yes", 1, 0, [], {"guests": 1}])
def test_plus_one_rejects_non_boolean(plus_one):
    with pytest.raises(InvalidInputError, match="Plus one must be true or false."):
        validate_rsvp_input("Ada", "ada@example.com", plus_one=plus_one)
