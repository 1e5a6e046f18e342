import pytest
from werkzeug.exceptions import NotFound

from bookkeeping.core.exceptions import ConflictError, DataIntegrityError, NotFoundError, ValidationError
from bookkeeping.utils.response_utils import unified_error_response, unified_success_response


@pytest.mark.unit
def test_unified_success_response_omits_empty_meta() -> None:
    payload, status = unified_success_response({"id": 1})

    assert payload == {"data": {"id": 1}}
    assert status == 200


@pytest.mark.unit
def test_unified_success_response_includes_meta() -> None:
    payload, status = unified_success_response([], status=201, meta={"page": {"pageCount": 0, "totalCount": 0}})

    assert payload == {"data": [], "meta": {"page": {"pageCount": 0, "totalCount": 0}}}
    assert status == 201


@pytest.mark.unit
def test_unified_error_response_for_validation_error_has_pointer() -> None:
    error = ValidationError('"query.page.limit" must be less than or equal to 100', field="query.page.limit")

    payload, status = unified_error_response(error)

    assert status == 400
    assert payload == {
        "errors": [
            {
                "status": "400",
                "title": "Invalid Attribute",
                "detail": '"query.page.limit" must be less than or equal to 100',
                "source": {"pointer": "/data/attributes/query/page/limit"},
            },
        ],
    }


@pytest.mark.unit
def test_unified_error_response_for_not_found_and_conflict() -> None:
    payload, status = unified_error_response(NotFoundError.for_entity("Tag", 9))
    assert status == 404
    assert payload["errors"][0] == {"status": "404", "title": "Tag with this id (9) could not be found"}

    payload, status = unified_error_response(ConflictError("The provided entity already exists"))
    assert status == 409
    assert payload["errors"][0]["title"] == "The provided entity already exists"


@pytest.mark.unit
def test_unified_error_response_hides_internal_details() -> None:
    payload, status = unified_error_response(DataIntegrityError(extra={"reason": "cycle"}))
    assert status == 500
    assert payload == {"errors": [{"status": "500", "title": "Internal Server Error"}]}

    payload, status = unified_error_response(RuntimeError("secret"))
    assert status == 500
    assert payload["errors"][0]["title"] == "Internal Server Error"


@pytest.mark.unit
def test_unified_error_response_keeps_http_exception_code() -> None:
    payload, status = unified_error_response(NotFound())

    assert status == 404
    assert payload["errors"][0]["title"] == "Not Found"
