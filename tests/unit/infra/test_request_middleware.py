import pytest
from werkzeug.datastructures import MultiDict

from bookkeeping.infra.logging.request_middleware import resolve_request_id, summarize_query_groups


@pytest.mark.unit
def test_resolve_request_id_keeps_valid_upstream_value() -> None:
    assert resolve_request_id("  gateway-42.a:b  ") == "gateway-42.a:b"


@pytest.mark.unit
@pytest.mark.parametrize("raw", [None, "", "   ", "-leading-dash", "has space", "x" * 129])
def test_resolve_request_id_generates_for_invalid_values(raw) -> None:
    request_id = resolve_request_id(raw)

    assert request_id.startswith("req_")
    assert len(request_id) == len("req_") + 32


@pytest.mark.unit
def test_summarize_query_groups_drops_values_and_nesting() -> None:
    args = MultiDict(
        [
            ("page[limit]", "10"),
            ("filter[tag][values]", "1,2"),
            ("filter[tag][operation]", "and"),
            ("sort[createdAt]", "desc"),
        ],
    )

    assert summarize_query_groups(args) == ["filter", "page", "sort"]


@pytest.mark.unit
def test_response_generates_request_id_when_missing(client) -> None:
    response = client.get("/api/status")

    assert response.headers["X-Request-ID"].startswith("req_")
