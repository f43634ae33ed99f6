"""Test the booking guard applied before appointments are stored."""
import pytest
from datetime import datetime

from app.domain.scheduling import (
    AppointmentRequest,
    BookingValidationError,
    generate_time_slots,
    validate_appointment_request,
)

NOW = datetime(2025, 6, 1, 9, 0)


def make_request(**overrides) -> AppointmentRequest:
    fields = {"subject_id": "user-1", "date": "2025-06-10", "time": "10:30", "doctor_id": "d1"}
    fields.update(overrides)
    return AppointmentRequest(**fields)


def test_future_request_is_returned_unchanged():
    request = make_request()

    result = validate_appointment_request(request, NOW)

    assert result is request
    assert result == make_request()


@pytest.mark.parametrize("field", ["date", "time", "doctor_id"])
@pytest.mark.parametrize("empty", [None, ""])
def test_missing_field_is_rejected(field, empty):
    with pytest.raises(BookingValidationError) as exc_info:
        validate_appointment_request(make_request(**{field: empty}), NOW)

    assert exc_info.value.reason == "missing field"


def test_earlier_same_day_is_rejected():
    """08:00 on the day, validated at 09:00."""
    request = make_request(date="2025-06-01", time="08:00")

    with pytest.raises(BookingValidationError) as exc_info:
        validate_appointment_request(request, NOW)

    assert exc_info.value.reason == "past datetime"


def test_exactly_now_is_rejected():
    """The slot must be strictly after now."""
    request = make_request(date="2025-06-01", time="09:00")

    with pytest.raises(BookingValidationError) as exc_info:
        validate_appointment_request(request, NOW)

    assert str(exc_info.value) == "past datetime"


def test_one_minute_ahead_is_accepted():
    request = make_request(date="2025-06-01", time="09:01")

    assert validate_appointment_request(request, NOW) is request


def test_past_date_is_rejected():
    with pytest.raises(BookingValidationError) as exc_info:
        validate_appointment_request(make_request(date="2025-05-20"), NOW)

    assert exc_info.value.reason == "past datetime"


@pytest.mark.parametrize(
    "date_value,time_value",
    [("2025-13-01", "10:00"), ("next tuesday", "10:00"), ("2025-06-10", "25:00"), ("2025-06-10", "noon")],
)
def test_unparseable_datetime_is_rejected(date_value, time_value):
    request = make_request(date=date_value, time=time_value)

    with pytest.raises(BookingValidationError) as exc_info:
        validate_appointment_request(request, NOW)

    assert exc_info.value.reason == "invalid datetime"


def test_missing_field_checked_before_datetime():
    request = make_request(date="not-a-date", doctor_id="")

    with pytest.raises(BookingValidationError) as exc_info:
        validate_appointment_request(request, NOW)

    assert exc_info.value.reason == "missing field"


def test_first_same_day_slot_is_already_past():
    """The current minute is offered as a slot, but booking it is rejected."""
    now = datetime(2025, 6, 1, 14, 12, 30)
    slots = generate_time_slots(now.date(), now)

    assert slots[0] == "14:12"
    with pytest.raises(BookingValidationError) as exc_info:
        validate_appointment_request(make_request(date="2025-06-01", time=slots[0]), now)
    assert exc_info.value.reason == "past datetime"

    accepted = make_request(date="2025-06-01", time=slots[1])
    assert validate_appointment_request(accepted, now) is accepted
