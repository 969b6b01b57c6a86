from typing import Any, Callable, Dict, List, Optional, Union
import re

from formstate.form.builder import FormBuilder
from formstate.form.control import FormControl
from formstate.form.validator import (
    DEFAULT_DATE_FORMAT,
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


class FieldSchema:
    """
    Declarative definition of a single form control.
    Rules are evaluated in the order they are added.
    """
    def __init__(self, name: str):
        self.name = name
        self.validators: List[Validator] = []
        self.default_value_attr: str = ""

    def default_value(self, value: str) -> 'FieldSchema':
        """
        Sets the initial value used by `create_form` unless overridden by
        the `initial_values` passed to it.
        """
        self.default_value_attr = value
        return self

    def validator(self, validator: Validator) -> 'FieldSchema':
        """Adds any rule, built-in or user defined."""
        self.validators.append(validator)
        return self

    def required(self, error_message: str = None) -> 'FieldSchema':
        return self.validator(Required(error_message))

    def min_length(self, length: int, error_message: str = None) -> 'FieldSchema':
        return self.validator(MinLength(length, error_message))

    def max_length(self, length: int, error_message: str = None) -> 'FieldSchema':
        return self.validator(MaxLength(length, error_message))

    def email(self, error_message: str = None) -> 'FieldSchema':
        return self.validator(Email(error_message))

    def phone(self, error_message: str = None) -> 'FieldSchema':
        return self.validator(Phone(error_message))

    def number(self, error_message: str = None) -> 'FieldSchema':
        return self.validator(Number(error_message))

    def alpha(self, error_message: str = None) -> 'FieldSchema':
        return self.validator(Alpha(error_message))

    def alphanumeric(self, error_message: str = None) -> 'FieldSchema':
        return self.validator(Alphanumeric(error_message))

    def url(self, error_message: str = None) -> 'FieldSchema':
        return self.validator(Url(error_message))

    def date(self, date_format: str = DEFAULT_DATE_FORMAT, error_message: str = None) -> 'FieldSchema':
        return self.validator(Date(date_format, error_message))

    def uppercase(self, min: int = 1, error_message: str = None) -> 'FieldSchema':
        return self.validator(ContainsUppercase(min, error_message))

    def lowercase(self, min: int = 1, error_message: str = None) -> 'FieldSchema':
        return self.validator(ContainsLowercase(min, error_message))

    def digit(self, min: int = 1, error_message: str = None) -> 'FieldSchema':
        return self.validator(ContainsDigit(min, error_message))

    def special_char(self, error_message: str = None) -> 'FieldSchema':
        return self.validator(SpecialChar(error_message))

    def no_white_spaces(self, error_message: str = None) -> 'FieldSchema':
        return self.validator(NoWhiteSpaces(error_message))

    def regex(self, pattern: Union[str, "re.Pattern"], error_message: str = None) -> 'FieldSchema':
        return self.validator(Regex(pattern, error_message))

    def custom(self, predicate: Callable[[str], Any], error_message: str = None,
               error_kind: Union[ErrorKind, str] = ErrorKind.CUSTOM) -> 'FieldSchema':
        return self.validator(Custom(predicate, error_message, error_kind))

    def build(self, initial_value: Optional[str] = None) -> FormControl:
        value = self.default_value_attr if initial_value is None else initial_value
        return FormControl(value, self.validators, name=self.name)


class Schema:
    """
    Defines the controls of a form.

    Usage::

        schema = Schema()
        schema.field("email").required().email()
        schema.field("password").required().min_length(8).digit()
        form = create_form(schema)
    """
    def __init__(self):
        self.fields: Dict[str, FieldSchema] = {}

    def field(self, name: str) -> FieldSchema:
        if name in self.fields:
            raise ValueError(f"Field '{name}' is already defined")
        field_schema = FieldSchema(name)
        self.fields[name] = field_schema
        return field_schema


def create_form(form_schema: Schema, initial_values: Optional[Dict[str, str]] = None) -> FormBuilder:
    """
    Factory function to create a FormBuilder from a schema.

    Args:
        form_schema: The schema defining the form controls and their rules.
        initial_values: Optional initial values. These take precedence over
                        any `.default_value()` set in the schema.

    Returns:
        A FormBuilder with one pristine control per schema field, in
        definition order.
    """
    provided_values = initial_values or {}
    unknown = [name for name in provided_values if name not in form_schema.fields]
    if unknown:
        raise KeyError(f"Initial values for undefined fields: {', '.join(unknown)}")

    return FormBuilder({
        name: field_schema.build(provided_values.get(name))
        for name, field_schema in form_schema.fields.items()
    })
