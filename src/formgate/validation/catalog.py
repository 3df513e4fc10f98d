"""Field catalog — thresholds and formats as data.

Every input in the application validates the same way: an optional
``required`` rule followed by a handful of length and format rules whose
numbers depend on the field. The catalog stores those numbers once, and
``build_config()`` turns an entry into a ``ValidationConfig``::

    config = DEFAULT_CATALOG.build_config("postalOrZipCode", mode="required")
    validate_field("postalOrZipCode", "M5H", config).errors
    # ('Postal code must be at least 5 characters long',)

Thresholds can be replaced from external configuration data without
touching any field code::

    catalog = DEFAULT_CATALOG.with_settings({"username": {"min_length": 4}})
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from formgate.errors import ConfigurationError
from formgate.validation.passwords import (
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    confirm_password_rule,
    password_rules,
)
from formgate.validation.rules import (
    EMAIL_PATTERN,
    FieldType,
    Rule,
    ValidationConfig,
    ValidationMode,
    contains,
    digits_only,
    matches,
    max_length,
    min_length,
    required,
    rule,
)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Validation data for one kind of field.

    Attributes:
        name: Field name as used by forms (``"postalOrZipCode"``).
        label: Human label, used to build messages.
        field_type: ``"text"``, ``"email"`` or ``"password"``.
        min_length: Minimum length, or ``None`` for no lower bound.
        max_length: Maximum length, or ``None`` for no upper bound.
        strip_min: Measure ``min_length`` on the stripped value.
        pattern: Full-match regex the value must satisfy.
        pattern_message: Message reported when ``pattern`` fails.
        pattern_name: Rule name for the ``pattern`` check.
        extra_rules: Rules appended after the table-driven ones.
        shape: Key into the autofill shape table; defaults to ``field_type``.
    """

    name: str
    label: str
    field_type: FieldType = "text"
    min_length: int | None = None
    max_length: int | None = None
    strip_min: bool = False
    pattern: str | None = None
    pattern_message: str | None = None
    pattern_name: str = "validFormat"
    extra_rules: tuple[Rule, ...] = ()
    shape: str | None = None

    @property
    def required_message(self) -> str:
        return f"{self.label} is required"

    def rules(self) -> tuple[Rule, ...]:
        """The non-required rules for this field, in reporting order."""
        out: list[Rule] = []
        if self.pattern is not None:
            out.append(
                matches(
                    self.pattern,
                    self.pattern_message or f"{self.label} must be valid",
                    name=self.pattern_name,
                )
            )
        if self.min_length is not None:
            out.append(
                min_length(
                    self.min_length,
                    f"{self.label} must be at least {self.min_length} characters long",
                    strip=self.strip_min,
                )
            )
        if self.max_length is not None:
            out.append(
                max_length(
                    self.max_length,
                    f"{self.label} must not exceed {self.max_length} characters",
                )
            )
        out.extend(self.extra_rules)
        return tuple(out)


# Fields whose rules build_config assembles itself
_CONFIRM_FIELD = "confirmPassword"
_PASSWORD_FIELDS = frozenset({"password"})

_SPEC_KEYS = frozenset(f.name for f in fields(FieldSpec)) - {"name", "extra_rules"}
_FIELD_TYPES = ("text", "email", "password")


def _check_setting(field: str, key: str, value: Any) -> None:
    """Reject a settings value that would only fail later, during validation."""
    match key:
        case "min_length" | "max_length":
            ok = value is None or (
                isinstance(value, int) and not isinstance(value, bool) and value >= 0
            )
            expected = "a non-negative integer or null"
        case "strip_min":
            ok = isinstance(value, bool)
            expected = "a boolean"
        case "field_type":
            ok = value in _FIELD_TYPES
            expected = "one of " + ", ".join(_FIELD_TYPES)
        case "label" | "pattern_name":
            ok = isinstance(value, str) and bool(value.strip())
            expected = "a non-empty string"
        case _:
            ok = value is None or isinstance(value, str)
            expected = "a string or null"
    if not ok:
        msg = f"Setting {key!r} for field {field!r} must be {expected}, got {value!r}"
        raise ConfigurationError(msg)
    if key == "pattern" and value is not None:
        try:
            re.compile(value)
        except re.error as exc:
            msg = f"Setting 'pattern' for field {field!r} is not a valid regex: {exc}"
            raise ConfigurationError(msg) from exc


class FieldCatalog(Mapping[str, FieldSpec]):
    """Immutable mapping of field name to ``FieldSpec``."""

    __slots__ = ("_specs",)

    def __init__(self, specs: Mapping[str, FieldSpec] | None = None) -> None:
        self._specs: dict[str, FieldSpec] = dict(specs or {})

    def __getitem__(self, name: str) -> FieldSpec:
        return self._specs[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._specs)

    def __len__(self) -> int:
        return len(self._specs)

    def __repr__(self) -> str:
        return f"FieldCatalog({sorted(self._specs)!r})"

    def spec(self, name: str) -> FieldSpec:
        """Return the spec for *name*, raising for unknown fields."""
        try:
            return self._specs[name]
        except KeyError:
            known = ", ".join(sorted(self._specs))
            msg = f"Unknown field {name!r}. Known fields: {known}"
            raise ConfigurationError(msg) from None

    def with_overrides(self, **specs: FieldSpec) -> "FieldCatalog":
        """Return a new catalog with the given specs added or replaced."""
        merged = dict(self._specs)
        merged.update(specs)
        return FieldCatalog(merged)

    def with_settings(self, data: Mapping[str, Mapping[str, Any]]) -> "FieldCatalog":
        """Return a new catalog with thresholds replaced from plain data.

        *data* maps field names to ``FieldSpec`` attribute overrides, e.g.
        the parsed contents of a TOML or JSON settings file::

            {"postalOrZipCode": {"min_length": 6, "max_length": 7}}

        Unknown field names create new text fields; a ``label`` is then
        required.

        Raises:
            ConfigurationError: An unknown setting, a value of the wrong
                type, a pattern that does not compile, or a minimum length
                above the maximum.
        """
        merged = dict(self._specs)
        for name, overrides in data.items():
            unknown = set(overrides) - _SPEC_KEYS
            if unknown:
                msg = f"Unknown settings for field {name!r}: {', '.join(sorted(unknown))}"
                raise ConfigurationError(msg)
            for key, value in overrides.items():
                _check_setting(name, key, value)
            base = merged.get(name)
            if base is None:
                if "label" not in overrides:
                    msg = f"New field {name!r} needs a label"
                    raise ConfigurationError(msg)
                merged[name] = FieldSpec(name=name, **overrides)
            else:
                merged[name] = replace(base, **overrides)
            spec = merged[name]
            if (
                spec.min_length is not None
                and spec.max_length is not None
                and spec.min_length > spec.max_length
            ):
                msg = (
                    f"Field {name!r} has min_length {spec.min_length} above "
                    f"max_length {spec.max_length}"
                )
                raise ConfigurationError(msg)
        return FieldCatalog(merged)

    def build_config(
        self,
        name: str,
        *,
        enable_validation: bool = True,
        mode: ValidationMode = "optional",
        original: str | None = None,
    ) -> ValidationConfig | None:
        """Build the ``ValidationConfig`` for *name*.

        Returns ``None`` when validation is disabled, which
        ``validate_field`` treats as always valid.

        Args:
            name: Catalog field name.
            enable_validation: When False, no config is built.
            mode: ``"required"`` prepends the ``required`` rule.
            original: Value of the field this one confirms. Only used by
                ``confirmPassword``.
        """
        if not enable_validation:
            return None
        spec = self.spec(name)
        rules: list[Rule] = []
        if mode == "required":
            rules.append(required(spec.required_message))
        if name in _PASSWORD_FIELDS:
            # length bounds belong to the composite password rules
            rules.extend(replace(spec, min_length=None, max_length=None).rules())
            rules.extend(
                password_rules(
                    spec.min_length or PASSWORD_MIN_LENGTH,
                    spec.max_length or PASSWORD_MAX_LENGTH,
                    label=spec.label,
                )
            )
        else:
            rules.extend(spec.rules())
        if name == _CONFIRM_FIELD:
            rules.append(confirm_password_rule(original))
        return ValidationConfig(
            field_name=name,
            field_type=spec.field_type,
            required=mode == "required",
            rules=tuple(rules),
        )


# ---------------------------------------------------------------------------
# Default table
# ---------------------------------------------------------------------------

_PHONE_PATTERN = r"\+?[1-9][\d\-\s().]{7,29}"

_EMAIL_RE = re.compile(EMAIL_PATTERN)
_USERNAME_RE = re.compile(r"[a-zA-Z0-9_.-]{3,}")
_STREET_START_RE = re.compile(r"[0-9]+")


def _starts_with_number(value: str) -> bool:
    return _STREET_START_RE.match(value.strip()) is not None


def _username_or_email(value: str) -> bool:
    return bool(_EMAIL_RE.fullmatch(value) or _USERNAME_RE.fullmatch(value))


DEFAULT_CATALOG = FieldCatalog(
    {
        spec.name: spec
        for spec in (
            # -- Auth ---------------------------------------------------------
            FieldSpec("username", "Username", min_length=3, max_length=50, strip_min=True),
            FieldSpec(
                "email",
                "Email",
                field_type="email",
                max_length=100,
                pattern=EMAIL_PATTERN,
                pattern_message="Email must be valid",
                pattern_name="validEmail",
            ),
            FieldSpec(
                "usernameOrEmail",
                "Username or email",
                min_length=3,
                max_length=100,
                strip_min=True,
            ),
            # password: length bounds feed password_rules() rather than the
            # generic length rules, see FieldCatalog.build_config
            FieldSpec("password", "Password", field_type="password"),
            FieldSpec("confirmPassword", "Password confirmation", field_type="password"),
            # login only checks length; composition rules apply at signup
            FieldSpec(
                "loginPassword",
                "Password",
                field_type="password",
                min_length=PASSWORD_MIN_LENGTH,
                max_length=PASSWORD_MAX_LENGTH,
            ),
            # -- Contact ------------------------------------------------------
            FieldSpec("firstName", "First name", max_length=100),
            FieldSpec("lastName", "Last name", max_length=100),
            FieldSpec(
                "phone",
                "Phone number",
                max_length=30,
                pattern=_PHONE_PATTERN,
                pattern_message="Phone number must be a valid format (e.g., +1-555-123-4567)",
            ),
            # -- Address ------------------------------------------------------
            FieldSpec("unitNumber", "Unit number", max_length=20),
            FieldSpec(
                "streetNumber",
                "Street number",
                max_length=20,
                extra_rules=(digits_only("Street number must contain only numbers"),),
            ),
            FieldSpec("streetName", "Street name", max_length=100),
            FieldSpec(
                "streetNumberName",
                "Street number and name",
                min_length=2,
                max_length=120,
                strip_min=True,
                extra_rules=(
                    contains(r"\d", "Street address must contain a number", name="mustContainNumber"),
                    rule(
                        "validFormat",
                        'Street address should start with a number (e.g., "123 Main St")',
                        _starts_with_number,
                    ),
                ),
            ),
            FieldSpec("city", "City", max_length=100),
            FieldSpec("stateOrProvince", "State or province", max_length=100),
            FieldSpec("postalOrZipCode", "Postal code", min_length=5, max_length=10),
            FieldSpec("country", "Country", max_length=100),
            # -- Project ------------------------------------------------------
            FieldSpec(
                "otherParty",
                "Other party",
                extra_rules=(
                    rule(
                        "format",
                        "Please enter a valid username or email address",
                        _username_or_email,
                    ),
                ),
            ),
        )
    }
)
