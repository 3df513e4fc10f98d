"""Composite password rules.

A password must satisfy length bounds and several character-class rules
at once. Each requirement is its own rule so a single value can report
all of its problems together::

    >>> validate_field("password", "abc", config).errors
    ('Password must be at least 8 characters long',
     'Password must contain at least one uppercase letter',
     'Password must contain at least one digit',
     'Password must contain at least one special character (@$!%*?&_)')
"""

import re

from formgate.validation.rules import Rule, contains, equals, matches, max_length, min_length

PASSWORD_SPECIALS = "@$!%*?&_"
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

_SPECIALS_CLASS = re.escape(PASSWORD_SPECIALS)


def password_rules(
    min_chars: int = PASSWORD_MIN_LENGTH,
    max_chars: int = PASSWORD_MAX_LENGTH,
    *,
    label: str = "Password",
) -> tuple[Rule, ...]:
    """Rules for a new password, evaluated independently of each other."""
    return (
        min_length(min_chars, f"{label} must be at least {min_chars} characters long"),
        max_length(max_chars, f"{label} must not exceed {max_chars} characters"),
        contains(
            r"[a-z]",
            f"{label} must contain at least one lowercase letter",
            name="hasLowercase",
        ),
        contains(
            r"[A-Z]",
            f"{label} must contain at least one uppercase letter",
            name="hasUppercase",
        ),
        contains(r"[0-9]", f"{label} must contain at least one digit", name="hasDigit"),
        contains(
            f"[{_SPECIALS_CLASS}]",
            f"{label} must contain at least one special character ({PASSWORD_SPECIALS})",
            name="hasSpecialChar",
        ),
        matches(
            f"[A-Za-z0-9{_SPECIALS_CLASS}]+",
            f"{label} can only contain letters, digits, and special characters"
            f" ({PASSWORD_SPECIALS})",
            name="validChars",
        ),
    )


def confirm_password_rule(original: str | None) -> Rule:
    """The confirmation must equal the password it confirms."""
    return equals(original or "", "Passwords do not match", name="passwordMatch")
