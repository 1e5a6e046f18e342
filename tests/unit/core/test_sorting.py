import pytest

from bookkeeping.core.exceptions import ValidationError
from bookkeeping.core.query import LOG_SORT_FIELDS, RUN_SORT_FIELDS, resolve_sort
from bookkeeping.core.types.query import SortKey


@pytest.mark.unit
def test_resolve_sort_preserves_mapping_order() -> None:
    keys = resolve_sort({"createdAt": "desc", "id": "asc"}, LOG_SORT_FIELDS)

    assert keys == (SortKey("createdAt", "desc"), SortKey("id", "asc"))


@pytest.mark.unit
def test_resolve_sort_normalizes_direction() -> None:
    keys = resolve_sort({"title": "  DESC "}, LOG_SORT_FIELDS)

    assert keys == (SortKey("title", "desc"),)


@pytest.mark.unit
@pytest.mark.parametrize("mapping", [None, {}])
def test_resolve_sort_returns_empty_tuple_without_mapping(mapping) -> None:
    assert resolve_sort(mapping, LOG_SORT_FIELDS) == ()


@pytest.mark.unit
def test_resolve_sort_rejects_field_outside_allow_list() -> None:
    with pytest.raises(ValidationError) as excinfo:
        resolve_sort({"title": "asc"}, RUN_SORT_FIELDS)

    assert str(excinfo.value) == '"query.sort.title" is not allowed'
    assert excinfo.value.field == "query.sort.title"


@pytest.mark.unit
def test_resolve_sort_rejects_unknown_direction() -> None:
    with pytest.raises(ValidationError) as excinfo:
        resolve_sort({"id": "up"}, LOG_SORT_FIELDS)

    assert str(excinfo.value) == '"query.sort.id" must be one of [asc, desc]'
