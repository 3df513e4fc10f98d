"""Form-level aggregation: submit gating, form wiring, ready-made forms."""

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
from formgate.forms.aggregator import FormValidationState, completion_percentage, is_form_submittable
from formgate.forms.auth import LOGIN_FIELDS, SIGNUP_FIELDS, login_form, signup_form
from formgate.forms.form import Form

__all__ = [
    "ADDRESS_FIELDS",
    "DEFAULT_REQUIRED_ADDRESS_FIELDS",
    "LOGIN_FIELDS",
    "SIGNUP_FIELDS",
    "Form",
    "FormValidationState",
    "address_completion_percentage",
    "address_form",
    "completion_percentage",
    "empty_address",
    "format_address",
    "is_address_complete",
    "is_address_empty",
    "is_form_submittable",
    "login_form",
    "parse_street_number",
    "signup_form",
]
