"""
Tests for shared validation, error-key mapping and pagination helpers
"""
import pytest
from pydantic import ValidationError

from salonbook.domain.bookings.schemas import BookingCreate
from salonbook.domain.clients.schemas import ClientCreate
from salonbook.domain.services.schemas import ServiceCreate
from salonbook.shared.errors import validation_error_key
from salonbook.shared.pagination import build_pagination, clamp_page
from salonbook.shared.validators import (
    require_text,
    validate_booking_interval,
    validate_display_time,
    validate_phone,
    validate_slug,
    validate_timezone,
)


@pytest.mark.unit
class TestPhoneValidation:
    """Tests for client phone numbers"""

    def test_digits_only(self):
        assert validate_phone("070123456") == "070123456"

    def test_leading_plus_and_whitespace(self):
        assert validate_phone("  +38970123456 ") == "+38970123456"

    @pytest.mark.parametrize("phone", ["", "   ", "070-123", "abc", "++389", "07 01", "1" * 51, None])
    def test_invalid_phones(self, phone):
        with pytest.raises(ValueError, match="validation.phoneInvalid"):
            validate_phone(phone)


@pytest.mark.unit
class TestSlugValidation:
    """Tests for organization slugs"""

    def test_slug_is_lowercased(self):
        assert validate_slug(" Salon-One ") == "salon-one"

    def test_empty_slug(self):
        with pytest.raises(ValueError, match="validation.organizationNameSlugRequired"):
            validate_slug("  ")

    @pytest.mark.parametrize("slug", ["salon one", "-salon", "salon-", "salon_one", "salon--one"])
    def test_invalid_slugs(self, slug):
        with pytest.raises(ValueError, match="validation.slugInvalid"):
            validate_slug(slug)

    def test_slug_too_long(self):
        assert validate_slug("a" * 100) == "a" * 100
        with pytest.raises(ValueError, match="validation.slugTooLong"):
            validate_slug("a" * 101)


@pytest.mark.unit
class TestCalendarSettings:
    """Tests for booking interval, display times and timezones"""

    @pytest.mark.parametrize("value", ["08:00", "09:15", "17:30", "23:45"])
    def test_quarter_hour_times(self, value):
        assert validate_display_time(value) == value

    @pytest.mark.parametrize("value", ["8:00", "08:10", "24:00", "0800", ""])
    def test_invalid_times(self, value):
        with pytest.raises(ValueError, match="validation.displayTimeInvalid"):
            validate_display_time(value)

    def test_booking_intervals(self):
        assert validate_booking_interval(15) == 15
        assert validate_booking_interval(30) == 30
        with pytest.raises(ValueError, match="validation.bookingIntervalInvalid"):
            validate_booking_interval(20)

    def test_timezones(self):
        assert validate_timezone("Europe/Skopje") == "Europe/Skopje"
        with pytest.raises(ValueError, match="validation.timezoneInvalid"):
            validate_timezone("Mars/Olympus")

    def test_require_text_strips(self):
        assert require_text("  Ana ", "validation.nameRequired") == "Ana"
        with pytest.raises(ValueError, match="validation.nameRequired"):
            require_text(" ", "validation.nameRequired")

    def test_require_text_length_limit(self):
        assert require_text(" " + "x" * 255 + " ", "validation.nameRequired", 255, "validation.nameTooLong") == "x" * 255
        with pytest.raises(ValueError, match="validation.nameTooLong"):
            require_text("x" * 256, "validation.nameRequired", 255, "validation.nameTooLong")


@pytest.mark.unit
class TestValidationErrorKeys:
    """Pydantic errors are reduced to one message key"""

    def _key(self, model, **data):
        with pytest.raises(ValidationError) as exc_info:
            model(**data)
        return validation_error_key(exc_info.value.errors())

    def test_validator_key_wins(self):
        assert self._key(ClientCreate, full_name="Ana", phone="12ab") == "validation.phoneInvalid"

    def test_missing_field_uses_field_key(self):
        assert self._key(ClientCreate, phone="070123456") == "validation.fullNameRequired"

    def test_notes_too_long(self):
        key = self._key(ClientCreate, full_name="Ana", phone="070123456", notes="x" * 101)
        assert key == "validation.notesTooLong"

    def test_field_constraint(self):
        assert self._key(ServiceCreate, name="Cut", duration=0, price=10) == "validation.durationInvalid"
        assert self._key(ServiceCreate, name="Cut", duration=30, price=-1) == "validation.priceInvalid"

    def test_empty_service_ids(self):
        key = self._key(
            BookingCreate,
            employee_id=1,
            client_id=1,
            start_time="2030-01-01T10:00:00",
            end_time="2030-01-01T10:30:00",
            service_ids=[],
        )
        assert key == "validation.bookingFieldsRequired"

    def test_unknown_field_falls_back(self):
        errors = [{"type": "missing", "loc": ("body", "whatever"), "msg": "Field required"}]
        assert validation_error_key(errors) == "validation.invalidRequest"


@pytest.mark.unit
class TestPagination:
    """Tests for page/limit clamping"""

    def test_defaults(self):
        assert clamp_page(None, None, 50, 200) == (1, 50)

    def test_clamping(self):
        assert clamp_page(-3, 1000, 50, 200) == (1, 200)
        assert clamp_page(2, -5, 50, 200) == (2, 1)

    def test_build_pagination(self):
        pagination = build_pagination(page=2, limit=10, total=25)
        assert pagination.totalPages == 3
        assert pagination.hasMore is True
        assert build_pagination(page=3, limit=10, total=25).hasMore is False
