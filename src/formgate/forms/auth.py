"""Sign-up and login forms.

Both are plain ``Form`` instances with the auth fields added in the order
they are rendered. The confirmation field depends on the password, so a
password edit re-validates a confirmation the user already left.
"""

from collections.abc import Iterable, Mapping

from formgate.config import FormgateConfig
from formgate.fields.scheduler import Scheduler
from formgate.forms.form import Form
from formgate.validation import DEFAULT_CATALOG, FieldCatalog

SIGNUP_FIELDS: tuple[str, ...] = ("username", "email", "password", "confirmPassword")
LOGIN_FIELDS: tuple[str, ...] = ("usernameOrEmail", "password")


def signup_form(
    values: Mapping[str, str] | None = None,
    *,
    required_fields: Iterable[str] | None = None,
    enable_validation: bool | None = None,
    catalog: FieldCatalog = DEFAULT_CATALOG,
    scheduler: Scheduler | None = None,
    config: FormgateConfig | None = None,
) -> Form:
    """Username, email, password, and confirmation; all required by default."""
    values = values or {}
    form = Form(
        required_fields=SIGNUP_FIELDS if required_fields is None else required_fields,
        enable_validation=enable_validation,
        catalog=catalog,
        scheduler=scheduler,
        config=config,
    )
    form.add_field("username", value=values.get("username", ""))
    form.add_field("email", value=values.get("email", ""), placeholder="john@company.com")
    form.add_field("password", value=values.get("password", ""))
    form.add_field(
        "confirmPassword",
        value=values.get("confirmPassword", ""),
        depends_on="password",
        placeholder="Confirm your password",
    )
    return form


def login_form(
    values: Mapping[str, str] | None = None,
    *,
    enable_validation: bool | None = None,
    catalog: FieldCatalog = DEFAULT_CATALOG,
    scheduler: Scheduler | None = None,
    config: FormgateConfig | None = None,
) -> Form:
    """Username-or-email and password; the password only checks length."""
    values = values or {}
    form = Form(
        required_fields=LOGIN_FIELDS,
        enable_validation=enable_validation,
        catalog=catalog,
        scheduler=scheduler,
        config=config,
    )
    form.add_field(
        "usernameOrEmail",
        value=values.get("usernameOrEmail", ""),
        placeholder="username or email@company.com",
    )
    form.add_field(
        "password",
        kind="loginPassword",
        value=values.get("password", ""),
        placeholder="Enter your password",
    )
    return form
