"""Chainable validation of configuration values."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field as dc_field
from typing import Any

# Cloud-region style geo tags, e.g. af-south-1.
GEO_TAG_REGEX = r"^[a-zA-Z\-\d]*$"
# RFC 1123 host name; segments may start with a digit.
HOST_NAME_PART = (
    r"(([a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9\-]*[a-zA-Z0-9])\.)*"
    r"([A-Za-z0-9]|[A-Za-z0-9][A-Za-z0-9\-]*[A-Za-z0-9])"
)
HOST_NAME_REGEX = "^" + HOST_NAME_PART + "$"
# Comma-separated host names, each with an optional :port.
HOST_NAMES_WITH_PORTS_REGEX1 = "^(" + HOST_NAME_PART + r"(:\d{1,5})?(\s*,\s*)?)+$"
# Must not end with a comma.
HOST_NAMES_WITH_PORTS_REGEX2 = r"^.*[^,]$"
IP_ADDRESS_REGEX = (
    r"^(([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])\.){3}"
    r"([0-9]|[1-9][0-9]|1[0-9]{2}|2[0-4][0-9]|25[0-5])$"
)
VERSION_NUMBER_REGEX = (
    r"^(v){0,1}(0|(?:[1-9]\d*))(?:\.(0|(?:[1-9]\d*))(?:\.(0|(?:[1-9]\d*)))?"
    r"(?:\-([\w][\w\.\-_]*))?)?$"
)
K8S_NAMESPACE_REGEX = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$"


class ValidationError(ValueError):
    """A value failed validation."""


def _format_list(items: Sequence[str]) -> str:
    return "[" + " ".join(items) + "]"


@dataclass
class Validator:
    """Wraps one named value; each check records the first failure in ``err``."""

    name: str
    str_value: str = ""
    str_arr: list[str] = dc_field(default_factory=list)
    int_value: int = 0
    err: Exception | None = None

    def is_not_empty(self) -> Validator:
        if self.err is None and self.str_value == "":
            self.err = ValidationError(f"'{self.name}' is empty")
        return self

    def match_regexp(self, regex: str) -> Validator:
        if self.err is not None or self.str_value == "":
            return self
        if re.search(regex, self.str_value, re.ASCII) is None:
            self.err = ValidationError(
                f"'{self.str_value}' does not match given criteria ({regex})"
            )
        return self

    def match_regexps(self, *regexes: str) -> Validator:
        """Pass when the value matches any of the expressions."""
        if self.err is not None:
            return self
        for regex in regexes:
            self.err = None
            if self.match_regexp(regex).err is None:
                return self
        return self

    def is_higher_than_zero(self) -> Validator:
        if self.err is None and self.int_value <= 0:
            self.err = ValidationError(f"'{self.name}' is less or equal to zero")
        return self

    def is_higher_or_equal_to_zero(self) -> Validator:
        if self.err is None and self.int_value < 0:
            self.err = ValidationError(f"'{self.name}' is less than zero")
        return self

    def is_less_or_equal_to(self, num: int) -> Validator:
        if self.err is None and self.int_value > num:
            self.err = ValidationError(f"'{self.name}' is higher than '{num}'")
        return self

    def is_higher_than(self, num: int) -> Validator:
        if self.err is None and self.int_value <= num:
            self.err = ValidationError(f"'{self.name}' is not higher than '{num}'")
        return self

    def has_items(self) -> Validator:
        if self.err is None and not self.str_arr:
            self.err = ValidationError(f"'{self.name}' should contain at least one item")
        return self

    def has_unique_items(self) -> Validator:
        if self.err is None and len(set(self.str_arr)) != len(self.str_arr):
            self.err = ValidationError(
                f"'{self.name}' contains redundant values '{_format_list(self.str_arr)}'"
            )
        return self

    def is_one_of(self, *items: str) -> Validator:
        if self.err is None and self.str_value not in items:
            self.err = ValidationError(
                f"'{self.name}' must be one of the values {_format_list(items)}"
            )
        return self

    def check(self) -> Validator:
        """Raise the recorded failure, if any."""
        if self.err is not None:
            raise self.err
        return self


def field(name: str, value: Any) -> Validator:
    """Create a validator for an int, a string or a list of strings."""
    validator = Validator(name=name)
    if isinstance(value, bool):
        pass
    elif isinstance(value, int):
        validator.int_value = value
        return validator
    elif isinstance(value, str):
        validator.str_value = value
        return validator
    elif isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        validator.str_arr = list(value)
        return validator
    validator.err = ValidationError(
        f"can't parse '{value}' of type '{type(value).__name__}' as int or string"
    )
    return validator


def is_not_blank(s: str) -> bool:
    """Return True when the string holds anything but spaces."""
    return s.replace(" ", "") != ""