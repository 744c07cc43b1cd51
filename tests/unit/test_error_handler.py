from reservations.errors import (
    ConflictError,
    ErrorCode,
    InternalError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from roomapp.error_handler import GENERIC_ERROR_MESSAGE, ErrorHandler


def test_domain_errors_map_to_status_hints():
    cases = [
        (ValidationError("bad date", code=ErrorCode.OUT_OF_WINDOW), 400, "out_of_window"),
        (NotFoundError("room", 9), 404, "not_found"),
        (ConflictError("taken"), 409, "slot_taken"),
        (ConflictError("full", code=ErrorCode.WAITLIST_FULL), 409, "waitlist_full"),
    ]
    for error, status, code in cases:
        response = ErrorHandler.to_response(error, "create_reservation")
        assert response == {
            'success': False,
            'code': code,
            'message': error.message,
            'status': status,
        }


def test_internal_errors_hide_detail():
    storage = ErrorHandler.to_response(StorageError("Could not write reservations.json"))
    unexpected = ErrorHandler.to_response(KeyError("secret"))

    assert storage['status'] == 500
    assert storage['code'] == "storage_failure"
    assert storage['message'] == GENERIC_ERROR_MESSAGE
    assert unexpected['code'] == "internal"
    assert "secret" not in unexpected['message']
    assert ErrorHandler.to_response(InternalError())['status'] == 500


def test_not_found_error_details():
    error = NotFoundError("reservation", "abc")

    assert error.kind == "reservation"
    assert error.identifier == "abc"
    assert str(error) == "[not_found] Reservation abc not found"


def test_success_payload():
    assert ErrorHandler.success({'id': 1}) == {
        'success': True,
        'message': "OK",
        'data': {'id': 1},
        'status': 200,
    }
