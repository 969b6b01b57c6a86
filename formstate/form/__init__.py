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
from formstate.form.control import FormControl
from formstate.form.builder import FormBuilder
from formstate.form.schema import FieldSchema, Schema, create_form
