"""Tests for the clock, error payloads and request validation formatting."""

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest

from shelflife.api.errors import format_validation_errors
from shelflife.core.clock import FixedClock, SystemClock, get_clock, init_clock
from shelflife.core.exceptions import (
    DateError,
    DuplicateKeyError,
    DuplicateRecordError,
    ExpiryComputationError,
    NotFoundError,
    ShelfLifeError,
    StoreUnavailableError,
    ValidationError,
)


class TestClock:
    def test_fixed_clock_today(self):
        clock = FixedClock(date(2024, 6, 25))
        assert clock.today() == date(2024, 6, 25)
        clock.set_date(date(2024, 7, 1))
        assert clock.today() == date(2024, 7, 1)

    def test_system_clock_is_timezone_aware(self):
        now = SystemClock("UTC").now()
        assert now.tzinfo is not None
        assert SystemClock("UTC").today() == now.date()

    def test_init_and_get_clock(self):
        state = MagicMock()
        clock = init_clock(state, "UTC")
        request = MagicMock()
        request.app.state.clock = clock
        assert get_clock(request) is clock

    def test_get_clock_uninitialized(self):
        request = MagicMock()
        request.app.state.clock = None
        with pytest.raises(RuntimeError):
            get_clock(request)


class TestErrorPayloads:
    @pytest.mark.parametrize(
        "error, status, code",
        [
            (ValidationError("shelf_life", "bad"), 400, "VALIDATION_ERROR"),
            (DateError("x"), 400, "INVALID_DATE"),
            (ExpiryComputationError("bad"), 400, "EXPIRY_COMPUTATION_ERROR"),
            (NotFoundError("Product", "10001"), 404, "NOT_FOUND"),
            (DuplicateKeyError("10001"), 409, "DUPLICATE_KEY"),
            (DuplicateRecordError("10001", "2024-01-01"), 409, "DUPLICATE_RECORD"),
            (StoreUnavailableError("timeout"), 503, "STORE_UNAVAILABLE"),
        ],
    )
    def test_status_and_code(self, error, status, code):
        assert isinstance(error, ShelfLifeError)
        assert error.status_code == status
        payload = error.to_payload()
        assert payload["code"] == code
        assert payload["error"]

    def test_validation_error_names_field(self):
        payload = ValidationError("reminder_days", "too long").to_payload()
        assert payload["details"] == "field: reminder_days"

    def test_computation_error_has_no_details(self):
        assert "details" not in ExpiryComputationError("bad").to_payload()

    def test_date_error_keeps_value(self):
        assert DateError(datetime(2024, 1, 1)).value == datetime(2024, 1, 1)


class TestValidationFormatting:
    def test_strips_location_prefix(self):
        errors = [
            {"loc": ("body", "shelf_life"), "msg": "Input should be greater than 0"},
            {"loc": ("body", "name"), "msg": "Field required"},
        ]
        assert format_validation_errors(errors) == (
            "shelf_life: Input should be greater than 0; name: Field required"
        )

    def test_model_level_error_is_request(self):
        assert format_validation_errors([{"loc": ("body",), "msg": "bad"}]) == "request: bad"
