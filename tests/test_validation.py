"""Tests for formgate.validation — validate_field() and the auth entry points."""

from formgate.validation import (
    DEFAULT_CATALOG,
    VALID,
    FormValidationResult,
    ValidationConfig,
    ValidationResult,
    max_length,
    required,
    validate,
    validate_confirm_password,
    validate_email,
    validate_field,
    validate_password,
)


class TestValidationResult:
    def test_valid_is_truthy(self) -> None:
        assert VALID
        assert VALID.is_valid
        assert VALID.errors == ()

    def test_invalid_is_falsy(self) -> None:
        result = ValidationResult(errors=("bad",))
        assert not result
        assert not result.is_valid


class TestValidateField:
    def test_disabled_is_always_valid(self) -> None:
        assert validate_field("email", "not an email", None) is VALID
        assert validate_field("email", "", None) is VALID

    def test_all_failing_rules_reported_in_order(self) -> None:
        config = ValidationConfig(
            field_name="code",
            rules=(required("Code is required"), max_length(2, "Too long")),
        )
        assert validate_field("code", "abc", config).errors == ("Too long",)
        assert validate_field("code", "", config).errors == ("Code is required",)

    def test_none_validates_as_empty(self) -> None:
        config = DEFAULT_CATALOG.build_config("city", mode="required")
        assert validate_field("city", None, config).errors == ("City is required",)

    def test_optional_blank_is_valid(self) -> None:
        config = DEFAULT_CATALOG.build_config("postalOrZipCode")
        assert validate_field("postalOrZipCode", "", config) is VALID

    def test_pure(self) -> None:
        config = DEFAULT_CATALOG.build_config("email", mode="required")
        first = validate_field("email", "bad", config)
        second = validate_field("email", "bad", config)
        assert first == second


class TestCatalogFields:
    def test_postal_code_too_short(self) -> None:
        config = DEFAULT_CATALOG.build_config("postalOrZipCode", mode="required")
        assert validate_field("postalOrZipCode", "M5H", config).errors == (
            "Postal code must be at least 5 characters long",
        )

    def test_street_number_digits(self) -> None:
        config = DEFAULT_CATALOG.build_config("streetNumber")
        assert validate_field("streetNumber", "12B", config).errors == (
            "Street number must contain only numbers",
        )
        assert validate_field("streetNumber", "123", config) is VALID

    def test_phone_format(self) -> None:
        config = DEFAULT_CATALOG.build_config("phone")
        assert validate_field("phone", "+1-555-123-4567", config) is VALID
        assert validate_field("phone", "call me", config).errors == (
            "Phone number must be a valid format (e.g., +1-555-123-4567)",
        )

    def test_street_number_name(self) -> None:
        config = DEFAULT_CATALOG.build_config("streetNumberName")
        assert validate_field("streetNumberName", "123 Main St", config) is VALID
        errors = validate_field("streetNumberName", "Main St", config).errors
        assert "Street address must contain a number" in errors
        assert 'Street address should start with a number (e.g., "123 Main St")' in errors

    def test_username_strips_before_min_length(self) -> None:
        config = DEFAULT_CATALOG.build_config("username")
        assert validate_field("username", "  ab  ", config).errors == (
            "Username must be at least 3 characters long",
        )

    def test_other_party(self) -> None:
        config = DEFAULT_CATALOG.build_config("otherParty", mode="required")
        assert validate_field("otherParty", "jane.doe", config) is VALID
        assert validate_field("otherParty", "jane@example.com", config) is VALID
        assert validate_field("otherParty", "j!", config).errors == (
            "Please enter a valid username or email address",
        )


class TestValidatePassword:
    def test_strong_password(self) -> None:
        assert validate_password("Password123@") is VALID

    def test_short_password_reports_every_problem(self) -> None:
        assert validate_password("Ab1!").errors == (
            "Password must be at least 8 characters long",
        )

    def test_missing_special_character(self) -> None:
        assert validate_password("Password123").errors == (
            "Password must contain at least one special character (@$!%*?&_)",
        )

    def test_disallowed_character(self) -> None:
        assert validate_password("Password123#").errors == (
            "Password must contain at least one special character (@$!%*?&_)",
            "Password can only contain letters, digits, and special characters (@$!%*?&_)",
        )

    def test_every_special_accepted(self) -> None:
        assert validate_password("Password123@$!%*?&_") is VALID

    def test_lowercase_only(self) -> None:
        errors = validate_password("abcdefgh").errors
        assert "Password must contain at least one uppercase letter" in errors
        assert "Password must contain at least one digit" in errors
        assert "Password must contain at least one lowercase letter" not in errors

    def test_too_long(self) -> None:
        errors = validate_password("Aa1!" * 33).errors
        assert errors == ("Password must not exceed 128 characters",)

    def test_required_blank(self) -> None:
        assert validate_password("").errors == ("Password is required",)

    def test_optional_blank(self) -> None:
        assert validate_password("", mode="optional") is VALID


class TestValidateConfirmPassword:
    def test_match(self) -> None:
        assert validate_confirm_password("Secret1!", "Secret1!") is VALID

    def test_mismatch(self) -> None:
        assert validate_confirm_password("Secret1!", "Secret1?").errors == (
            "Passwords do not match",
        )

    def test_required_blank(self) -> None:
        assert validate_confirm_password("Secret1!", "").errors == (
            "Password confirmation is required",
        )

    def test_confirm_does_not_apply_password_rules(self) -> None:
        assert validate_confirm_password("abc", "abc") is VALID


class TestValidateEmail:
    def test_valid(self) -> None:
        assert validate_email("user@example.com") is VALID

    def test_invalid(self) -> None:
        assert validate_email("user@example").errors == ("Email must be valid",)

    def test_too_long(self) -> None:
        value = "a" * 95 + "@x.com"
        assert validate_email(value).errors == ("Email must not exceed 100 characters",)


class TestValidate:
    def test_collects_per_field(self) -> None:
        result = validate(
            {"email": "bad", "city": "Toronto"},
            {
                "email": DEFAULT_CATALOG.build_config("email", mode="required"),
                "city": DEFAULT_CATALOG.build_config("city", mode="required"),
                "phone": DEFAULT_CATALOG.build_config("phone"),
            },
        )
        assert isinstance(result, FormValidationResult)
        assert not result
        assert result.errors == {"email": ["Email must be valid"]}
        assert result.results["city"] is VALID
        assert result.results["phone"] is VALID

    def test_all_errors_flattened(self) -> None:
        result = validate(
            {},
            {
                "city": DEFAULT_CATALOG.build_config("city", mode="required"),
                "country": DEFAULT_CATALOG.build_config("country", mode="required"),
            },
        )
        assert result.all_errors() == ["City is required", "Country is required"]

    def test_disabled_fields_pass(self) -> None:
        result = validate({"email": "bad"}, {"email": None})
        assert result.is_valid
