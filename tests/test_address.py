"""Tests for formgate.forms.address — address helpers and the address form."""

from formgate.forms.address import (
    ADDRESS_FIELDS,
    DEFAULT_REQUIRED_ADDRESS_FIELDS,
    address_completion_percentage,
    address_form,
    empty_address,
    format_address,
    is_address_complete,
    is_address_empty,
    parse_street_number,
)
from formgate.testing import (
    ManualScheduler,
    assert_not_submittable,
    assert_shows_no_errors,
    assert_submittable,
)

FULL = {
    "unitNumber": "4",
    "streetNumber": "100",
    "streetName": "Queen Street West",
    "city": "Toronto",
    "stateOrProvince": "Ontario",
    "postalOrZipCode": "M5H 2N2",
    "country": "Canada",
}


class TestHelpers:
    def test_empty_address(self) -> None:
        address = empty_address()
        assert tuple(address) == ADDRESS_FIELDS
        assert is_address_empty(address)

    def test_whitespace_is_empty(self) -> None:
        assert is_address_empty({"city": "  "})

    def test_complete_ignores_unit_and_postal(self) -> None:
        address = dict(FULL, unitNumber="", postalOrZipCode="")
        assert is_address_complete(address)
        assert not is_address_complete(dict(FULL, city=""))

    def test_completion(self) -> None:
        assert address_completion_percentage(FULL) == 100
        assert address_completion_percentage({"city": "Toronto"}) == 14
        assert address_completion_percentage({}) == 0

    def test_format(self) -> None:
        assert format_address(FULL) == (
            "Unit 4, 100 Queen Street West, Toronto, Ontario, M5H 2N2, Canada"
        )
        assert format_address({"city": "Toronto", "country": "Canada"}) == "Toronto, Canada"

    def test_parse_street_number(self) -> None:
        assert parse_street_number("123 Main St") == ("123", "Main St")
        assert parse_street_number("123") == ("123", "")
        assert parse_street_number("Main St") == ("Main St", "")


class TestAddressForm:
    def test_defaults(self) -> None:
        form = address_form()
        assert tuple(f.name for f in form) == ADDRESS_FIELDS
        assert form.required_fields == DEFAULT_REQUIRED_ADDRESS_FIELDS
        assert form.field("unitNumber").mode == "optional"
        assert form.field("city").mode == "required"

    def test_prefilled_is_submittable(self) -> None:
        assert_submittable(address_form(FULL))

    def test_prefilled_invalid_postal_code_blocks(self) -> None:
        form = address_form(dict(FULL, postalOrZipCode="M5"))
        assert_not_submittable(form)
        assert form.errors() == {
            "postalOrZipCode": ["Postal code must be at least 5 characters long"]
        }
        postal = form.field("postalOrZipCode")
        assert not postal.touched
        assert_shows_no_errors(postal)

    def test_fixing_prefilled_value_unblocks(self) -> None:
        form = address_form(dict(FULL, postalOrZipCode="M5"))
        form.field("postalOrZipCode").on_change("M5H 2N2")
        assert_submittable(form)

    def test_missing_city_blocks(self) -> None:
        form = address_form(dict(FULL, city=""))
        assert_not_submittable(form)

    def test_skippable_empty_address(self) -> None:
        form = address_form(skippable=True)
        assert_submittable(form)
        street_number = form.field("streetNumber")
        street_number.on_change("abc")
        street_number.on_blur()
        assert_not_submittable(form)

    def test_custom_required_fields(self) -> None:
        form = address_form(required_fields={"city"})
        form.field("city").on_change("Toronto")
        assert_submittable(form)

    def test_street_number_split(self) -> None:
        form = address_form()
        form.field("streetNumber").on_change("123 Main St")
        assert form.field("streetNumber").value == "123"
        assert form.field("streetName").value == "Main St"

    def test_split_keeps_existing_street_name(self) -> None:
        form = address_form({"streetName": "Queen St"})
        form.field("streetNumber").on_change("123 Main St")
        assert form.field("streetNumber").value == "123 Main St"
        assert form.field("streetName").value == "Queen St"

    def test_split_disabled(self) -> None:
        form = address_form(split_street_number=False)
        form.field("streetNumber").on_change("123 Main St")
        assert form.field("streetName").value == ""

    def test_split_does_not_look_like_autofill(self) -> None:
        clock = ManualScheduler()
        form = address_form(scheduler=clock)
        street_number = form.field("streetNumber")
        street_number.on_focus()
        street_number.on_change("123 Main St")
        street_name = form.field("streetName")
        assert not street_name.autofill_pending
        assert clock.pending_count == 0
        clock.advance(5)
        assert not street_name.touched
        assert street_name.value == "Main St"
