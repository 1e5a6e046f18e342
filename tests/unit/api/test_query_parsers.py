import pytest
from werkzeug.datastructures import MultiDict

from bookkeeping.api.v1.resources.query_parsers import parse_deep_object, parse_json_body
from bookkeeping.core.exceptions import ValidationError


@pytest.mark.unit
def test_parse_deep_object_builds_nested_mapping() -> None:
    args = MultiDict(
        [
            ("page[limit]", "10"),
            ("filter[tag][values]", "1,2"),
            ("filter[tag][operation]", "and"),
            ("sort[createdAt]", "desc"),
            ("sort[id]", "asc"),
        ],
    )

    parsed = parse_deep_object(args)

    assert parsed == {
        "page": {"limit": "10"},
        "filter": {"tag": {"values": "1,2", "operation": "and"}},
        "sort": {"createdAt": "desc", "id": "asc"},
    }
    assert list(parsed["sort"]) == ["createdAt", "id"]


@pytest.mark.unit
def test_parse_deep_object_keeps_repeated_values_as_list() -> None:
    parsed = parse_deep_object(MultiDict([("filter[tag][values]", "1"), ("filter[tag][values]", "2")]))

    assert parsed == {"filter": {"tag": {"values": ["1", "2"]}}}


@pytest.mark.unit
def test_parse_deep_object_keeps_malformed_key_literal() -> None:
    assert parse_deep_object(MultiDict([("page[limit", "5")])) == {"page[limit": "5"}


@pytest.mark.unit
def test_parse_deep_object_rejects_scalar_and_object_on_same_path() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_deep_object(MultiDict([("page", "1"), ("page[limit]", "5")]))

    assert excinfo.value.field == "query.page"


@pytest.mark.unit
def test_parse_json_body_requires_object() -> None:
    assert parse_json_body(None) == {}
    assert parse_json_body({"a": 1}) == {"a": 1}

    with pytest.raises(ValidationError):
        parse_json_body([1, 2])
