import pytest
from werkzeug.exceptions import MethodNotAllowed, NotFound

from bookkeeping.api.error_mapping import map_exception_to_status
from bookkeeping.core.exceptions import (
    ConflictError,
    DatabaseError,
    DataIntegrityError,
    NotFoundError,
    SystemError,
    ValidationError,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (ValidationError("bad"), 400),
        (NotFoundError("missing"), 404),
        (ConflictError("duplicate"), 409),
        (DataIntegrityError(), 500),
        (DatabaseError(), 500),
        (SystemError("boom"), 500),
        (NotFound(), 404),
        (MethodNotAllowed(), 405),
        (RuntimeError("boom"), 500),
    ],
)
def test_map_exception_to_status(error: Exception, expected: int) -> None:
    assert map_exception_to_status(error) == expected
