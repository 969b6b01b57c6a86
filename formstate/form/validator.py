from typing import Any, Callable, Optional, Union
from enum import Enum
import datetime
import logging
import re

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMAT = "%d/%m/%Y"

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_PATTERN = re.compile(r"\+?[0-9]{10,15}")
URL_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b(?:[-a-zA-Z0-9()@:%_+.~#?&/=]*)"
)
ALPHA_PATTERN = re.compile(r"[a-zA-Z]+")
ALPHANUMERIC_PATTERN = re.compile(r"[a-zA-Z0-9]+")


class ErrorKind(str, Enum):
    """Identifies which rule rejected a value, independent of its message."""
    REQUIRED = "required"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    EMAIL = "email"
    PHONE = "phone"
    NUMBER = "number"
    ALPHA = "alpha"
    ALPHANUMERIC = "alphanumeric"
    DATE = "date"
    URL = "url"
    CONTAINS_UPPERCASE = "contains_uppercase"
    CONTAINS_LOWERCASE = "contains_lowercase"
    CONTAINS_DIGIT = "contains_digit"
    CONTAINS_SPECIAL_CHAR = "contains_special_char"
    NO_WHITE_SPACES = "no_white_spaces"
    PATTERN = "pattern"
    CUSTOM = "custom"


class Validator:
    """
    Base class for validation rules.

    A rule judges a string with ``is_valid`` and carries the ``message`` and
    ``error_kind`` reported when it fails. Calling a rule returns ``None``
    for a valid value and its message otherwise.

    Subclasses must keep ``is_valid`` total: malformed input is simply
    invalid and must never raise.
    """
    error_kind: Union[ErrorKind, str] = ErrorKind.CUSTOM
    default_message = "Invalid value"

    def __init__(self, message: Optional[str] = None):
        self.message = message if message is not None else self.default_message

    def is_valid(self, value: str) -> bool:
        raise NotImplementedError

    def __call__(self, value: str) -> Optional[str]:
        if self.is_valid(value):
            return None
        return self.message

    def __repr__(self):
        return f"{self.__class__.__name__}(message={self.message!r})"


class Required(Validator):
    error_kind = ErrorKind.REQUIRED
    default_message = "This field is required"

    def is_valid(self, value: str) -> bool:
        return bool(value) and not value.isspace()


class MinLength(Validator):
    error_kind = ErrorKind.MIN_LENGTH

    def __init__(self, min: int, message: Optional[str] = None):
        if min < 0:
            raise ValueError(f"min must be non-negative, got {min}")
        self.min = min
        super().__init__(message if message is not None else f"Minimum {min} characters required")

    def is_valid(self, value: str) -> bool:
        return len(value) >= self.min


class MaxLength(Validator):
    error_kind = ErrorKind.MAX_LENGTH

    def __init__(self, max: int, message: Optional[str] = None):
        if max < 0:
            raise ValueError(f"max must be non-negative, got {max}")
        self.max = max
        super().__init__(message if message is not None else f"Maximum {max} characters allowed")

    def is_valid(self, value: str) -> bool:
        return len(value) <= self.max


class Regex(Validator):
    """Valid when the whole value matches ``pattern``."""
    error_kind = ErrorKind.PATTERN
    default_message = "Invalid format"

    def __init__(self, pattern: Union[str, "re.Pattern"], message: Optional[str] = None):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern
        super().__init__(message)

    def is_valid(self, value: str) -> bool:
        return self.pattern.fullmatch(value) is not None


class Email(Regex):
    error_kind = ErrorKind.EMAIL
    default_message = "Invalid email format"

    def __init__(self, message: Optional[str] = None):
        super().__init__(EMAIL_PATTERN, message)


class Phone(Regex):
    error_kind = ErrorKind.PHONE
    default_message = "Invalid phone number"

    def __init__(self, message: Optional[str] = None):
        super().__init__(PHONE_PATTERN, message)


class Url(Regex):
    error_kind = ErrorKind.URL
    default_message = "Invalid URL format"

    def __init__(self, message: Optional[str] = None):
        super().__init__(URL_PATTERN, message)


class Alpha(Regex):
    error_kind = ErrorKind.ALPHA
    default_message = "Only alphabetic characters allowed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(ALPHA_PATTERN, message)


class Alphanumeric(Regex):
    error_kind = ErrorKind.ALPHANUMERIC
    default_message = "Only letters and numbers allowed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(ALPHANUMERIC_PATTERN, message)


class Number(Validator):
    error_kind = ErrorKind.NUMBER
    default_message = "Must be a number"

    def is_valid(self, value: str) -> bool:
        # Python-only literal syntax such as "1_000" is not a number here
        if "_" in value:
            return False
        try:
            float(value)
        except (ValueError, TypeError):
            return False
        return True


class Date(Validator):
    """Valid when the value parses with ``date_format`` (``strptime`` syntax)."""
    error_kind = ErrorKind.DATE
    default_message = "Invalid date format"

    def __init__(self, date_format: str = DEFAULT_DATE_FORMAT, message: Optional[str] = None):
        self.date_format = date_format
        super().__init__(message)

    def is_valid(self, value: str) -> bool:
        try:
            datetime.datetime.strptime(value, self.date_format)
        except (ValueError, TypeError):
            return False
        return True


class _CharacterCount(Validator):
    what = ""
    # wording used when a single character is required; None falls back to `what`
    what_single = None

    def __init__(self, min: int = 1, message: Optional[str] = None):
        if min < 1:
            raise ValueError(f"min must be at least 1, got {min}")
        self.min = min
        if message is None:
            if min == 1 and self.what_single:
                message = f"At least one {self.what_single} required"
            else:
                message = f"At least {min} {self.what} required"
        super().__init__(message)

    def count(self, value: str) -> int:
        raise NotImplementedError

    def is_valid(self, value: str) -> bool:
        return self.count(value) >= self.min


class ContainsUppercase(_CharacterCount):
    error_kind = ErrorKind.CONTAINS_UPPERCASE
    what = "uppercase letter(s)"
    what_single = "uppercase letter"

    def count(self, value: str) -> int:
        return sum(1 for char in value if char.isupper())


class ContainsLowercase(_CharacterCount):
    error_kind = ErrorKind.CONTAINS_LOWERCASE
    what = "lowercase letter(s)"
    what_single = "lowercase letter"

    def count(self, value: str) -> int:
        return sum(1 for char in value if char.islower())


class ContainsDigit(_CharacterCount):
    error_kind = ErrorKind.CONTAINS_DIGIT
    what = "digit(s)"

    def count(self, value: str) -> int:
        return sum(1 for char in value if char.isdigit())


class SpecialChar(Validator):
    error_kind = ErrorKind.CONTAINS_SPECIAL_CHAR
    default_message = "At least one special character required"

    def is_valid(self, value: str) -> bool:
        return any(not char.isalnum() for char in value)


class NoWhiteSpaces(Validator):
    error_kind = ErrorKind.NO_WHITE_SPACES
    default_message = "White spaces not allowed"

    def is_valid(self, value: str) -> bool:
        return " " not in value


class Custom(Validator):
    """
    Wraps a predicate ``(value) -> bool`` as a rule.

    An exception raised by the predicate is logged and the value is treated
    as invalid.
    """
    def __init__(
        self,
        predicate: Callable[[str], Any],
        message: Optional[str] = None,
        error_kind: Union[ErrorKind, str] = ErrorKind.CUSTOM,
    ):
        if not callable(predicate):
            raise TypeError(f"predicate must be callable, got {type(predicate).__name__}")
        self.predicate = predicate
        self.error_kind = error_kind
        super().__init__(message)

    def is_valid(self, value: str) -> bool:
        try:
            return bool(self.predicate(value))
        except Exception:
            logger.exception("Error in custom validator %r", self.predicate)
            return False
