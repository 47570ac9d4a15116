"""Mapping of pydantic validation errors to i18n message keys"""

from typing import Any, Iterable

from ..i18n import is_message_key

# Fallback keys for errors that do not carry their own message key
# (missing fields, wrong types, Field constraints)
FIELD_ERROR_KEYS = {
    "employee_id": "validation.bookingFieldsRequired",
    "client_id": "validation.bookingFieldsRequired",
    "start_time": "validation.bookingFieldsRequired",
    "end_time": "validation.bookingFieldsRequired",
    "service_ids": "validation.bookingFieldsRequired",
    "total_price": "validation.priceInvalid",
    "name": "validation.nameRequired",
    "full_name": "validation.fullNameRequired",
    "phone": "validation.phoneInvalid",
    "notes": "validation.notesTooLong",
    "duration": "validation.durationInvalid",
    "price": "validation.priceInvalid",
    "isHidden": "validation.hiddenFlagRequired",
    "username": "validation.usernameRequired",
    "password": "validation.passwordTooShort",
    "role": "validation.invalidRole",
    "slug": "validation.organizationNameSlugRequired",
    "bookingInterval": "validation.bookingIntervalInvalid",
    "displayStartTime": "validation.displayTimeInvalid",
    "displayEndTime": "validation.displayTimeInvalid",
    "timezone": "validation.timezoneInvalid",
    "clients": "validation.clientsRequired",
    "month": "validation.monthYearInvalid",
    "year": "validation.monthYearInvalid",
    "start_date": "validation.invalidDate",
    "end_date": "validation.invalidDate",
}


def _error_field(loc: Iterable[Any]) -> str:
    for part in reversed(tuple(loc or ())):
        if isinstance(part, str) and part not in ("body", "query", "path"):
            return part
    return ""


def validation_error_key(errors: list[dict]) -> str:
    """
    Pick the message key describing the first validation error.

    Validators in ``shared.validators`` raise ``ValueError(<key>)``; that key
    wins. Otherwise the failing field decides.
    """
    for error in errors:
        ctx_error = (error.get("ctx") or {}).get("error")
        if ctx_error is not None and is_message_key(str(ctx_error)):
            return str(ctx_error)

        message = str(error.get("msg", "")).removeprefix("Value error, ")
        if is_message_key(message):
            return message

        key = FIELD_ERROR_KEYS.get(_error_field(error.get("loc")))
        if key:
            return key

    return "validation.invalidRequest"
