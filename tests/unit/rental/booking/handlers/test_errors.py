import json

import pytest

from rental.booking.domain.enum import BookingStatus
from rental.booking.domain.exception import (
    AlreadyCancelledException,
    InvalidWindowException,
    SchedulingConflictException,
    WindowInPastException,
)
from rental.booking.handlers.errors import error_response
from rental.shared.domain.exception import (
    OptimisticLockException,
    PersistenceUnavailableException,
    ResourceNotFoundException,
    UnauthorizedException,
)


class TestErrorResponse:
    @pytest.mark.parametrize(
        "error, status_code",
        [
            (InvalidWindowException("bad"), 400),
            (WindowInPastException("past"), 400),
            (ValueError("bad value"), 400),
            (SchedulingConflictException(), 409),
            (AlreadyCancelledException("booking-1", BookingStatus.CANCELLED), 409),
            (OptimisticLockException("busy"), 409),
            (UnauthorizedException(), 403),
            (ResourceNotFoundException("missing"), 404),
            (PersistenceUnavailableException("timeout"), 503),
            (RuntimeError("boom"), 500),
        ],
    )
    def test_status_codes(self, error, status_code):
        assert error_response(error)["statusCode"] == status_code

    def test_internal_details_are_not_exposed(self):
        response = error_response(PersistenceUnavailableException("table xyz timed out"))
        assert "xyz" not in response["body"]

    def test_unauthorized_message_is_fixed(self):
        body = json.loads(error_response(UnauthorizedException())["body"])
        assert body["message"] == "Not allowed to perform this operation"

    def test_unavailable_suggests_retry(self):
        response = error_response(PersistenceUnavailableException("timeout"))
        assert response["headers"]["Retry-After"] == "1"
