"""Localized API messages.

Services raise ``HTTPException`` with a message key as ``detail``; the
exception handlers in ``main`` render the key in the caller's language.
"""

import logging
from typing import Optional

from fastapi import Request

from .config import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("en", "mk")

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        # Generic
        "errors.serverError": "Server error",
        "errors.routeNotFound": "That link does not exist",
        "validation.invalidRequest": "Invalid request",
        # Authentication
        "errors.noToken": "Unauthorized: No token provided",
        "errors.invalidToken": "Unauthorized: Invalid token",
        "errors.invalidCredentials": "Invalid username or password",
        "errors.organizationInactive": "Your organization is not active",
        "errors.adminOnly": "Only administrators can access this feature",
        "errors.superadminOnly": "Only superadministrators have access",
        "errors.forbidden": "You do not have access to this resource",
        "validation.organizationRequired": "Organization identifier is required",
        "success.loggedIn": "Successfully logged in!",
        "success.loggedOut": "Successfully logged out!",
        # Employees
        "errors.employeeNotFound": "Employee not found",
        "errors.employeeHasFutureBookings": "Cannot delete an employee with upcoming bookings",
        "validation.nameRequired": "Name is required",
        "validation.nameTooLong": "Name may be at most 255 characters long",
        "validation.hiddenFlagRequired": "Name and visibility fields are required",
        "validation.timeRangeRequired": "Start and end time are required",
        "success.employeeDeleted": "Employee deleted",
        "success.employeeRestored": "Employee restored",
        # Services
        "errors.serviceNotFound": "Service not found",
        "errors.serviceHasFutureBookings": "Cannot delete a service with upcoming bookings",
        "validation.durationInvalid": "Duration must be a valid number greater than 0",
        "validation.priceInvalid": "Price must be a valid number greater than or equal to 0",
        "success.serviceDeleted": "Service deleted",
        "success.serviceRestored": "Service restored",
        # Clients
        "errors.clientNotFound": "Client not found",
        "errors.clientHasFutureBookings": "Cannot delete a client with upcoming bookings",
        "errors.duplicatePhone": "A client with this phone number already exists",
        "validation.fullNameRequired": "Full name is required",
        "validation.fullNameTooLong": "Full name may be at most 255 characters long",
        "validation.phoneInvalid": "Phone is required and may contain only digits 0-9",
        "validation.notesTooLong": "Notes may be at most 100 characters long",
        "validation.clientsRequired": "A non-empty list of clients is required",
        "success.clientDeleted": "Client deleted",
        "success.clientRestored": "Client restored",
        # Bookings
        "errors.bookingNotFound": "Booking not found",
        "errors.employeeNotAvailable": "The employee is not available at the selected time",
        "errors.clientHasBooking": "The client already has a booking at the selected time",
        "validation.bookingFieldsRequired": "Employee, client, start time, end time and at least one service are required",
        "validation.invalidTimeRange": "Start time must be before end time",
        "validation.invalidDate": "Invalid date format",
        "validation.monthYearInvalid": "Month must be 1-12 and year must be a valid year",
        "success.bookingDeleted": "Booking deleted",
        # Users
        "errors.userNotFound": "User not found",
        "errors.duplicateUsername": "A user with this username already exists",
        "errors.cannotDeleteSelf": "You cannot delete yourself",
        "validation.usernameRequired": "Username is required",
        "validation.usernameTooLong": "Username may be at most 150 characters long",
        "validation.passwordTooShort": "Password must be at least 4 characters long",
        "validation.invalidRole": "Invalid role",
        "success.userDeleted": "User deleted",
        # Organizations
        "errors.organizationNotFound": "Organization not found",
        "errors.duplicateSlug": "An organization with this code already exists",
        "errors.organizationHasUsers": "Cannot delete an organization that still has users",
        "validation.organizationNameSlugRequired": "Name and code are required",
        "validation.slugInvalid": "Code may contain only lowercase letters, digits and hyphens",
        "validation.slugTooLong": "Code may be at most 100 characters long",
        "validation.bookingIntervalInvalid": "Booking interval must be 15 or 30 minutes",
        "validation.displayTimeInvalid": "Time must be in HH:MM format on a quarter hour",
        "validation.displayWindowInvalid": "Display start time must be before display end time",
        "validation.timezoneInvalid": "Unknown timezone",
        "success.organizationDeleted": "Organization deleted",
    },
    "mk": {
        "errors.serverError": "Грешка во серверот",
        "errors.routeNotFound": "Тој линк не постои",
        "validation.invalidRequest": "Невалидно барање",
        "errors.noToken": "Не е пренесен токен",
        "errors.invalidToken": "Невалиден токен",
        "errors.invalidCredentials": "Невалидно корисничко име или лозинка",
        "errors.organizationInactive": "Вашата организација не е активна",
        "errors.adminOnly": "Само администратори имаат пристап до оваа функција",
        "errors.superadminOnly": "Само суперадминистратори имаат пристап",
        "errors.forbidden": "Немате пристап до овој ресурс",
        "validation.organizationRequired": "Идентификатор на организација е задолжителен",
        "success.loggedIn": "Успешно најавување!",
        "success.loggedOut": "Успешна одјава од системот!",
        "errors.employeeNotFound": "Вработениот не е пронајден",
        "errors.employeeHasFutureBookings": "Не може да се избрише вработен со претстојни резервации",
        "validation.nameRequired": "Името е задолжително",
        "validation.nameTooLong": "Името може да има најмногу 255 знаци",
        "validation.hiddenFlagRequired": "Полињата за име и активност се задолжителни",
        "validation.timeRangeRequired": "Време на почеток и крај се задолжителни",
        "success.employeeDeleted": "Вработениот е избришан",
        "success.employeeRestored": "Вработениот е вратен",
        "errors.serviceNotFound": "Услугата не е пронајдена",
        "errors.serviceHasFutureBookings": "Не може да се избрише услуга со претстојни резервации",
        "validation.durationInvalid": "Траењето мора да биде валиден број поголем од 0",
        "validation.priceInvalid": "Цената мора да биде валиден број поголем или еднаков на 0",
        "success.serviceDeleted": "Услугата е избришана",
        "success.serviceRestored": "Услугата е вратена",
        "errors.clientNotFound": "Клиентот не е пронајден",
        "errors.clientHasFutureBookings": "Не може да се избрише клиент со претстојни резервации",
        "errors.duplicatePhone": "Веќе постои клиент со овој телефонски број",
        "validation.fullNameRequired": "Имињата се задолжителни",
        "validation.fullNameTooLong": "Имињата може да имаат најмногу 255 знаци",
        "validation.phoneInvalid": "Полето за телефон е задолжително и смее да содржи само бројки 0-9",
        "validation.notesTooLong": "Белешката може да има најмногу 100 знаци",
        "validation.clientsRequired": "Потребна е листа на клиенти",
        "success.clientDeleted": "Клиентот е избришан",
        "success.clientRestored": "Клиентот е вратен",
        "errors.bookingNotFound": "Резервацијата не е пронајдена",
        "errors.employeeNotAvailable": "Вработениот не е достапен во избраното време",
        "errors.clientHasBooking": "Клиентот веќе има резервација во избраното време",
        "validation.bookingFieldsRequired": "Вработен, клиент, почеток, крај и барем една услуга се задолжителни",
        "validation.invalidTimeRange": "Почетокот мора да биде пред крајот",
        "validation.invalidDate": "Невалиден формат на датум",
        "validation.monthYearInvalid": "Месецот мора да биде 1-12, а годината валидна",
        "success.bookingDeleted": "Резервацијата е избришана",
        "errors.userNotFound": "Корисникот не е пронајден",
        "errors.duplicateUsername": "Корисникот со ова име веќе постои",
        "errors.cannotDeleteSelf": "Не можете да се избришете самите себе",
        "validation.usernameRequired": "Корисничкото име е задолжително",
        "validation.usernameTooLong": "Корисничкото име може да има најмногу 150 знаци",
        "validation.passwordTooShort": "Лозинката мора да биде најмалку 4 карактери",
        "validation.invalidRole": "Невалидна улога",
        "success.userDeleted": "Корисникот е избришан",
        "errors.organizationNotFound": "Организацијата не е пронајдена",
        "errors.duplicateSlug": "Организација со овој код веќе постои",
        "errors.organizationHasUsers": "Не може да се избрише организација која има корисници",
        "validation.organizationNameSlugRequired": "Име и код се задолжителни",
        "validation.slugInvalid": "Кодот смее да содржи само мали букви, бројки и цртички",
        "validation.slugTooLong": "Кодот може да има најмногу 100 знаци",
        "validation.bookingIntervalInvalid": "Интервалот мора да биде 15 или 30 минути",
        "validation.displayTimeInvalid": "Времето мора да биде во формат ЧЧ:ММ на четвртина час",
        "validation.displayWindowInvalid": "Почетното време мора да биде пред крајното",
        "validation.timezoneInvalid": "Непозната временска зона",
        "success.organizationDeleted": "Организацијата е избришана",
    },
}


def resolve_language(query_lang: Optional[str], accept_language: Optional[str]) -> str:
    """Pick the response language: ``lang`` query first, then Accept-Language, then the default"""
    if query_lang and query_lang.lower() in SUPPORTED_LANGUAGES:
        return query_lang.lower()

    if accept_language:
        for part in accept_language.split(","):
            tag = part.split(";")[0].strip().lower()
            primary = tag.split("-")[0]
            if primary in SUPPORTED_LANGUAGES:
                return primary

    return DEFAULT_LANGUAGE if DEFAULT_LANGUAGE in SUPPORTED_LANGUAGES else "en"


def get_language(request: Request) -> str:
    """FastAPI dependency returning the caller's language"""
    return resolve_language(request.query_params.get("lang"), request.headers.get("accept-language"))


def is_message_key(value) -> bool:
    return isinstance(value, str) and value in MESSAGES["en"]


def translate(key: str, language: str = "en") -> str:
    """Translate ``key``; unknown keys are returned unchanged"""
    catalog = MESSAGES.get(language) or MESSAGES["en"]
    if key in catalog:
        return catalog[key]
    if key in MESSAGES["en"]:
        logger.debug(f"Missing '{language}' translation for {key}")
        return MESSAGES["en"][key]
    return key
