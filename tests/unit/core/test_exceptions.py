import pytest

from bookkeeping.constants.system_constants import ErrorCategory, ErrorSeverity
from bookkeeping.core.exceptions import DataIntegrityError, NotFoundError, ValidationError


@pytest.mark.unit
def test_validation_error_builds_pointer_from_field() -> None:
    error = ValidationError('"query.filter.tag.operation" must be one of [and, or]', field="query.filter.tag.operation")

    assert error.pointer == "/data/attributes/query/filter/tag/operation"
    assert error.extra["field"] == "query.filter.tag.operation"
    assert error.recoverable is True


@pytest.mark.unit
def test_validation_error_without_field_has_no_pointer() -> None:
    assert ValidationError("bad").pointer is None


@pytest.mark.unit
def test_not_found_error_for_entity_formats_message() -> None:
    error = NotFoundError.for_entity("Log", 42)

    assert str(error) == "Log with this id (42) could not be found"


@pytest.mark.unit
def test_data_integrity_error_is_critical() -> None:
    error = DataIntegrityError(extra={"reason": "cycle"})

    assert error.category == ErrorCategory.DATA_INTEGRITY
    assert error.severity == ErrorSeverity.CRITICAL
    assert error.recoverable is False
