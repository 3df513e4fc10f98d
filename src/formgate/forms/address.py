"""Address forms — field list, defaults, and helpers.

An address is a plain mapping of the seven address field names to
strings. ``address_form()`` builds a ``Form`` over those fields; the
remaining helpers work on the mapping alone.
"""

import re
from collections.abc import Iterable, Mapping

from formgate.config import FormgateConfig
from formgate.fields.scheduler import Scheduler
from formgate.forms.aggregator import completion_percentage
from formgate.forms.form import Form
from formgate.validation import DEFAULT_CATALOG, FieldCatalog
from formgate.validation.rules import is_blank

ADDRESS_FIELDS: tuple[str, ...] = (
    "unitNumber",
    "streetNumber",
    "streetName",
    "city",
    "stateOrProvince",
    "postalOrZipCode",
    "country",
)

# Unit number is the only address field that is optional by default
DEFAULT_REQUIRED_ADDRESS_FIELDS: frozenset[str] = frozenset(ADDRESS_FIELDS) - {"unitNumber"}

# Fields an address needs to be deliverable; unit and postal code may be missing
_COMPLETE_FIELDS = ("streetNumber", "streetName", "city", "stateOrProvince", "country")

_STREET_RE = re.compile(r"^(\d+)\s*(.*)$")


def empty_address() -> dict[str, str]:
    return dict.fromkeys(ADDRESS_FIELDS, "")


def is_address_empty(address: Mapping[str, str | None]) -> bool:
    return all(is_blank(address.get(name)) for name in ADDRESS_FIELDS)


def is_address_complete(address: Mapping[str, str | None]) -> bool:
    """True when every field but unit number and postal code is filled."""
    return all(not is_blank(address.get(name)) for name in _COMPLETE_FIELDS)


def address_completion_percentage(address: Mapping[str, str | None]) -> int:
    """Share of the seven address fields that are filled, as a percentage."""
    return completion_percentage(address, ADDRESS_FIELDS)


def format_address(address: Mapping[str, str | None]) -> str:
    """One-line display form: ``"Unit 4, 100 Queen Street West, Toronto, ..."``."""
    parts: list[str] = []
    if address.get("unitNumber"):
        parts.append(f"Unit {address['unitNumber']}")
    street = " ".join(p for p in (address.get("streetNumber"), address.get("streetName")) if p)
    if street:
        parts.append(street)
    parts.extend(
        value
        for name in ("city", "stateOrProvince", "postalOrZipCode", "country")
        if (value := address.get(name))
    )
    return ", ".join(parts)


def parse_street_number(text: str) -> tuple[str, str]:
    """Split ``"123 Main St"`` typed into a street number input.

    Returns ``(street_number, street_name)``. Input without a leading
    number, or with nothing after it, comes back unchanged with an empty
    street name.
    """
    match = _STREET_RE.match(text)
    if match and match.group(2).strip():
        return match.group(1), match.group(2).strip()
    return text, ""


def address_form(
    address: Mapping[str, str] | None = None,
    *,
    required_fields: Iterable[str] | None = None,
    skippable: bool = False,
    enable_validation: bool | None = None,
    catalog: FieldCatalog = DEFAULT_CATALOG,
    scheduler: Scheduler | None = None,
    config: FormgateConfig | None = None,
    split_street_number: bool = True,
) -> Form:
    """Build a ``Form`` over the address fields.

    Args:
        address: Initial values; missing fields start empty.
        required_fields: Defaults to every field except ``unitNumber``.
        skippable: Multi-step flows where the address may be skipped.
        split_street_number: Move the name part of ``"123 Main St"`` typed
            into the street number into an empty street name field.
    """
    address = address or {}
    required = (
        DEFAULT_REQUIRED_ADDRESS_FIELDS if required_fields is None else frozenset(required_fields)
    )
    form = Form(
        required_fields=required,
        skippable=skippable,
        enable_validation=enable_validation,
        catalog=catalog,
        scheduler=scheduler,
        config=config,
    )
    for name in ADDRESS_FIELDS:
        form.add_field(name, value=address.get(name, ""))
    if split_street_number:
        _split_street_on_change(form)
    return form


def _split_street_on_change(form: Form) -> None:
    street_number = form.field("streetNumber")
    street_name = form.field("streetName")

    def split(value: str) -> None:
        if not is_blank(street_name.value):
            return
        number, name = parse_street_number(value)
        if name:
            street_number.set_value(number)
            street_name.set_value(name)

    street_number.subscribe(split)
