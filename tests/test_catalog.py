"""Tests for formgate.validation.catalog — field data and config building."""

import pytest

from formgate.errors import ConfigurationError
from formgate.validation import DEFAULT_CATALOG, VALID, FieldCatalog, FieldSpec, validate_field


class TestLookup:
    def test_known_field(self) -> None:
        assert DEFAULT_CATALOG.spec("email").field_type == "email"

    def test_unknown_field_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown field 'nickname'"):
            DEFAULT_CATALOG.spec("nickname")

    def test_is_a_mapping(self) -> None:
        assert "postalOrZipCode" in DEFAULT_CATALOG
        assert DEFAULT_CATALOG["city"].label == "City"
        assert len(DEFAULT_CATALOG) == len(list(DEFAULT_CATALOG))


class TestBuildConfig:
    def test_disabled_returns_none(self) -> None:
        assert DEFAULT_CATALOG.build_config("email", enable_validation=False) is None

    def test_optional_has_no_required_rule(self) -> None:
        config = DEFAULT_CATALOG.build_config("email")
        assert config is not None
        assert not config.required
        assert [r.name for r in config.rules] == ["validEmail", "maxLength_100"]

    def test_password_rule_names(self) -> None:
        config = DEFAULT_CATALOG.build_config("password", mode="required")
        assert config is not None
        assert [r.name for r in config.rules] == [
            "required",
            "minLength_8",
            "maxLength_128",
            "hasLowercase",
            "hasUppercase",
            "hasDigit",
            "hasSpecialChar",
            "validChars",
        ]

    def test_login_password_only_checks_length(self) -> None:
        config = DEFAULT_CATALOG.build_config("loginPassword", mode="required")
        assert config is not None
        assert [r.name for r in config.rules] == ["required", "minLength_8", "maxLength_128"]
        assert validate_field("password", "password", config) is VALID

    def test_confirm_uses_original(self) -> None:
        config = DEFAULT_CATALOG.build_config("confirmPassword", original="Secret1!")
        assert config is not None
        assert validate_field("confirmPassword", "Secret1!", config) is VALID
        assert not validate_field("confirmPassword", "other", config)

    def test_confirm_without_original_compares_to_empty(self) -> None:
        config = DEFAULT_CATALOG.build_config("confirmPassword", mode="required")
        assert validate_field("confirmPassword", "x", config).errors == ("Passwords do not match",)


class TestWithSettings:
    def test_replaces_thresholds(self) -> None:
        catalog = DEFAULT_CATALOG.with_settings({"postalOrZipCode": {"min_length": 6}})
        config = catalog.build_config("postalOrZipCode")
        assert validate_field("postalOrZipCode", "M5H2N", config).errors == (
            "Postal code must be at least 6 characters long",
        )
        # the original catalog is unchanged
        assert DEFAULT_CATALOG["postalOrZipCode"].min_length == 5

    def test_password_bounds_feed_password_rules(self) -> None:
        catalog = DEFAULT_CATALOG.with_settings({"password": {"min_length": 10}})
        config = catalog.build_config("password")
        names = [r.name for r in config.rules]
        assert names.count("minLength_10") == 1
        assert "minLength_8" not in names

    def test_new_field_needs_label(self) -> None:
        with pytest.raises(ConfigurationError, match="needs a label"):
            DEFAULT_CATALOG.with_settings({"nickname": {"max_length": 20}})

    def test_new_field(self) -> None:
        catalog = DEFAULT_CATALOG.with_settings(
            {"nickname": {"label": "Nickname", "max_length": 20}}
        )
        config = catalog.build_config("nickname", mode="required")
        assert validate_field("nickname", "", config).errors == ("Nickname is required",)

    def test_unknown_setting_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="colour"):
            DEFAULT_CATALOG.with_settings({"city": {"colour": "blue"}})

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("min_length", "6"),
            ("min_length", True),
            ("max_length", -1),
            ("strip_min", "yes"),
            ("label", 42),
            ("label", ""),
            ("pattern_name", None),
            ("pattern_message", 3),
            ("field_type", "number"),
        ],
    )
    def test_bad_value_rejected(self, key: str, value: object) -> None:
        with pytest.raises(ConfigurationError, match=key):
            DEFAULT_CATALOG.with_settings({"postalOrZipCode": {key: value}})

    def test_bad_pattern_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="not a valid regex"):
            DEFAULT_CATALOG.with_settings({"city": {"pattern": "["}})

    def test_min_above_max_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="above max_length"):
            DEFAULT_CATALOG.with_settings({"postalOrZipCode": {"min_length": 12}})

    def test_failed_settings_leave_catalog_unchanged(self) -> None:
        with pytest.raises(ConfigurationError):
            DEFAULT_CATALOG.with_settings({"postalOrZipCode": {"min_length": "6"}})
        assert DEFAULT_CATALOG.spec("postalOrZipCode").min_length == 5


class TestWithOverrides:
    def test_adds_spec(self) -> None:
        catalog = DEFAULT_CATALOG.with_overrides(
            badge=FieldSpec("badge", "Badge", pattern=r"[A-Z]{3}", pattern_message="Bad badge")
        )
        config = catalog.build_config("badge")
        assert validate_field("badge", "abc", config).errors == ("Bad badge",)
        assert "badge" not in DEFAULT_CATALOG

    def test_empty_catalog(self) -> None:
        assert len(FieldCatalog()) == 0
