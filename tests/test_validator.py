import logging

import pytest

from formstate.form.validator import (
    Alpha,
    Alphanumeric,
    ContainsDigit,
    ContainsLowercase,
    ContainsUppercase,
    Custom,
    Date,
    Email,
    ErrorKind,
    MaxLength,
    MinLength,
    NoWhiteSpaces,
    Number,
    Phone,
    Regex,
    Required,
    SpecialChar,
    Url,
    Validator,
)


def test_required():
    rule = Required()
    assert rule.is_valid("x")
    assert not rule.is_valid("")
    assert not rule.is_valid("   ")
    assert not rule.is_valid("\t\n")
    assert rule.error_kind is ErrorKind.REQUIRED
    assert rule.message == "This field is required"


def test_call_returns_message_or_none():
    rule = Required()
    assert rule("") == "This field is required"
    assert rule("value") is None


def test_lengths_interpolate_parameter():
    assert MinLength(8).message == "Minimum 8 characters required"
    assert MaxLength(3).message == "Maximum 3 characters allowed"
    assert MinLength(3).is_valid("abc")
    assert not MinLength(3).is_valid("ab")
    assert MaxLength(3).is_valid("abc")
    assert not MaxLength(3).is_valid("abcd")
    assert MinLength(8).error_kind is ErrorKind.MIN_LENGTH
    assert MaxLength(8).error_kind is ErrorKind.MAX_LENGTH


def test_message_override():
    assert MinLength(3, "Too short").message == "Too short"
    assert Email("Bad email").message == "Bad email"
    assert Required("Fill me in")("") == "Fill me in"


def test_empty_message_override_is_kept():
    assert Required("").message == ""
    assert MinLength(8, "").message == ""
    assert MaxLength(8, "").message == ""
    assert ContainsUppercase(1, "").message == ""
    assert ContainsDigit(2, "").message == ""


def test_invalid_construction_parameters():
    with pytest.raises(ValueError):
        MinLength(-1)
    with pytest.raises(ValueError):
        MaxLength(-5)
    with pytest.raises(ValueError):
        ContainsDigit(0)
    with pytest.raises(TypeError):
        Custom("not callable")


@pytest.mark.parametrize("value, expected", [
    ("user@example.com", True),
    ("first.last+tag@sub.example.org", True),
    ("not-an-email", False),
    ("user@example", False),
    ("", False),
])
def test_email(value, expected):
    assert Email().is_valid(value) is expected


@pytest.mark.parametrize("value, expected", [
    ("+12345678901", True),
    ("1234567890", True),
    ("123456789", False),
    ("1234567890123456", False),
    ("123-456-7890", False),
    ("", False),
])
def test_phone(value, expected):
    assert Phone().is_valid(value) is expected


@pytest.mark.parametrize("value, expected", [
    ("3.14", True),
    ("-2", True),
    ("1e5", True),
    (" 5 ", True),
    ("1_000", False),
    ("1_0.5", False),
    ("abc", False),
    ("", False),
])
def test_number(value, expected):
    assert Number().is_valid(value) is expected


def test_alpha_and_alphanumeric():
    assert Alpha().is_valid("abcXYZ")
    assert not Alpha().is_valid("abc1")
    assert not Alpha().is_valid("")
    assert Alphanumeric().is_valid("abc123")
    assert not Alphanumeric().is_valid("abc-123")
    assert not Alphanumeric().is_valid("")


@pytest.mark.parametrize("value, expected", [
    ("https://example.com", True),
    ("http://www.example.com/path?q=1", True),
    ("example.com", True),
    ("not a url", False),
    ("http://", False),
    ("", False),
])
def test_url(value, expected):
    assert Url().is_valid(value) is expected


def test_date_default_format_is_day_month_year():
    rule = Date()
    assert rule.is_valid("25/12/2024")
    assert not rule.is_valid("2024-12-25")
    assert not rule.is_valid("31/02/2024")
    assert not rule.is_valid("")
    assert rule.error_kind is ErrorKind.DATE


def test_date_custom_format():
    assert Date("%Y-%m-%d").is_valid("2024-12-25")
    assert not Date("%Y-%m-%d").is_valid("25/12/2024")


def test_character_counts():
    assert ContainsUppercase().is_valid("aBc")
    assert not ContainsUppercase(2).is_valid("aBc")
    assert ContainsUppercase().message == "At least one uppercase letter required"
    assert ContainsUppercase(2).message == "At least 2 uppercase letter(s) required"

    assert ContainsLowercase().is_valid("ABc")
    assert not ContainsLowercase().is_valid("ABC")
    assert ContainsLowercase().message == "At least one lowercase letter required"
    assert ContainsLowercase(3).message == "At least 3 lowercase letter(s) required"

    assert ContainsDigit(2).is_valid("a1b2")
    assert not ContainsDigit(2).is_valid("a1b")
    assert ContainsDigit().message == "At least 1 digit(s) required"
    assert ContainsDigit().error_kind is ErrorKind.CONTAINS_DIGIT


def test_special_char_and_whitespace():
    assert SpecialChar().is_valid("pass!")
    assert not SpecialChar().is_valid("pass1")
    assert not SpecialChar().is_valid("")

    assert NoWhiteSpaces().is_valid("nospace")
    assert NoWhiteSpaces().is_valid("")
    assert not NoWhiteSpaces().is_valid("has space")


def test_regex_matches_whole_value():
    rule = Regex(r"[A-Z]{3}")
    assert rule.is_valid("ABC")
    assert not rule.is_valid("ABCD")
    assert rule.error_kind is ErrorKind.PATTERN
    assert rule.message == "Invalid format"


def test_custom_rule():
    rule = Custom(lambda value: value == "yes", "Say yes", error_kind="confirmation")
    assert rule.is_valid("yes")
    assert rule("no") == "Say yes"
    assert rule.error_kind == "confirmation"


def test_custom_rule_that_raises_is_invalid(caplog):
    def explode(value):
        raise RuntimeError("boom")

    rule = Custom(explode)
    with caplog.at_level(logging.ERROR):
        assert rule.is_valid("anything") is False
    assert "Error in custom validator" in caplog.text


def test_subclassing_validator():
    class Even(Validator):
        error_kind = "even"
        default_message = "Must be even"

        def is_valid(self, value):
            return value.isdigit() and int(value) % 2 == 0

    rule = Even()
    assert rule("4") is None
    assert rule("3") == "Must be even"
    assert rule.error_kind == "even"
