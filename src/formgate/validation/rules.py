"""Declarative validation rules.

A rule is a named predicate with the message to report when it fails::

    Rule(name="maxLength_20", message="Unit number must not exceed 20 characters",
         predicate=lambda value: len(value) <= 20)

Only ``required`` rejects an empty value. Every other factory in this
module wraps its predicate so that a blank (empty or whitespace-only)
value passes vacuously. That is what lets an optional field stay quiet
until the user actually types something into it.

Custom rules go through ``rule()``, which applies the same wrapping::

    no_spaces = rule("noSpaces", "Username cannot contain spaces",
                     lambda value: " " not in value)
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

# Type aliases shared by the catalog and the field controllers
type Predicate = Callable[[str], bool]
type FieldType = Literal["text", "email", "password"]
type ValidationMode = Literal["required", "optional"]


@dataclass(frozen=True, slots=True)
class Rule:
    """A named predicate. ``predicate(value)`` returns True when valid."""

    name: str
    message: str
    predicate: Predicate

    def __call__(self, value: str) -> bool:
        return self.predicate(value)


@dataclass(frozen=True, slots=True)
class ValidationConfig:
    """Everything needed to validate one field.

    Built once per render from ``(enable_validation, mode)``; the
    ``required`` rule is only present when ``mode == "required"``.
    """

    field_name: str
    field_type: FieldType = "text"
    required: bool = False
    rules: tuple[Rule, ...] = ()


def is_blank(value: str | None) -> bool:
    """True for ``None``, ``""``, and whitespace-only strings."""
    return not value or not value.strip()


def _vacuous(predicate: Predicate) -> Predicate:
    def check(value: str) -> bool:
        if is_blank(value):
            return True
        return predicate(value)

    return check


def rule(name: str, message: str, predicate: Predicate) -> Rule:
    """Build a custom rule that passes on blank values."""
    return Rule(name=name, message=message, predicate=_vacuous(predicate))


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(message: str = "This field is required") -> Rule:
    """Field must be present and non-blank."""
    return Rule(name="required", message=message, predicate=lambda value: not is_blank(value))


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int, message: str | None = None) -> Rule:
    """String must be at most *n* characters."""
    return rule(
        f"maxLength_{n}",
        message or f"Must be at most {n} characters",
        lambda value: len(value) <= n,
    )


def min_length(n: int, message: str | None = None, *, strip: bool = False) -> Rule:
    """String must be at least *n* characters.

    With ``strip=True`` surrounding whitespace does not count toward the
    length (usernames, street addresses).
    """

    def check(value: str) -> bool:
        return len(value.strip() if strip else value) >= n

    return rule(f"minLength_{n}", message or f"Must be at least {n} characters", check)


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------


def matches(pattern: str, message: str | None = None, *, name: str = "pattern") -> Rule:
    """Whole value must match the given regex pattern."""
    compiled = re.compile(pattern)
    return rule(
        name,
        message or f"Must match pattern: {pattern}",
        lambda value: compiled.fullmatch(value) is not None,
    )


def contains(pattern: str, message: str, *, name: str) -> Rule:
    """Value must contain at least one match of *pattern*."""
    compiled = re.compile(pattern)
    return rule(name, message, lambda value: compiled.search(value) is not None)


def digits_only(message: str = "Must contain only numbers") -> Rule:
    """Value must consist of ASCII digits only."""
    return matches(r"[0-9]+", message, name="digitsOnly")


# Structure only; says nothing about deliverability
EMAIL_PATTERN = r"[^\s@]+@[^\s@]+\.[^\s@]+"


def email(message: str = "Must be a valid email address") -> Rule:
    """Value must be a valid email address (basic format check)."""
    return matches(EMAIL_PATTERN, message, name="validEmail")


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


def equals(expected: str, message: str, *, name: str = "match") -> Rule:
    """Value must equal *expected*.

    *expected* is captured when the rule is built. Rebuild the rule when
    the value it is compared against changes.
    """
    return rule(name, message, lambda value: value == expected)
