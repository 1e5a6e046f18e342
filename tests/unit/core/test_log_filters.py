from datetime import UTC, datetime

import pytest

from bookkeeping.core.exceptions import ValidationError
from bookkeeping.core.query import compile_log_filter, compile_log_query
from bookkeeping.core.types.logs import LogFilterCriteria
from bookkeeping.core.types.query import Comparison, Conjunction, Disjunction, Operator, SortKey
from bookkeeping.types.listing import PageRequest


@pytest.mark.unit
def test_compile_log_filter_without_criteria_matches_everything() -> None:
    assert compile_log_filter(None) is None
    assert compile_log_filter(LogFilterCriteria()) is None


@pytest.mark.unit
def test_compile_log_filter_single_subfilter_is_not_wrapped() -> None:
    predicate = compile_log_filter(LogFilterCriteria(author="jan"))

    assert predicate == Comparison("author.name", Operator.ICONTAINS, "jan")


@pytest.mark.unit
def test_compile_log_filter_ignores_blank_text() -> None:
    assert compile_log_filter(LogFilterCriteria(author="   ", title="")) is None


@pytest.mark.unit
def test_compile_log_filter_combines_subfilters_with_and() -> None:
    created_from = datetime(2024, 1, 1, tzinfo=UTC)
    created_to = datetime(2024, 1, 2, tzinfo=UTC)

    predicate = compile_log_filter(
        LogFilterCriteria(
            title="beam",
            created_from=created_from,
            created_to=created_to,
            origin="process",
            parent_log=3,
            root_log=1,
        ),
    )

    assert predicate == Conjunction(
        (
            Comparison("title", Operator.ICONTAINS, "beam"),
            Comparison("createdAt", Operator.GTE, created_from),
            Comparison("createdAt", Operator.LTE, created_to),
            Comparison("origin", Operator.EQ, "process"),
            Comparison("parentLogId", Operator.EQ, 3),
            Comparison("rootLogId", Operator.EQ, 1),
        ),
    )


@pytest.mark.unit
def test_compile_log_filter_tag_and_builds_conjunction_without_duplicates() -> None:
    predicate = compile_log_filter(LogFilterCriteria(tag_values=(1, 2, 1), tag_operation="and"))

    assert predicate == Conjunction(
        (
            Comparison("tags.id", Operator.HAS, 1),
            Comparison("tags.id", Operator.HAS, 2),
        ),
    )


@pytest.mark.unit
def test_compile_log_filter_tag_or_builds_disjunction() -> None:
    predicate = compile_log_filter(LogFilterCriteria(tag_values=(2, 3), tag_operation="or"))

    assert isinstance(predicate, Disjunction)
    assert [operand.value for operand in predicate.operands] == [2, 3]


@pytest.mark.unit
def test_compile_log_filter_single_tag_collapses_to_comparison() -> None:
    predicate = compile_log_filter(LogFilterCriteria(tag_values=(4, 4), tag_operation="or"))

    assert predicate == Comparison("tags.id", Operator.HAS, 4)


@pytest.mark.unit
def test_compile_log_filter_empty_tag_values_ignore_operation() -> None:
    assert compile_log_filter(LogFilterCriteria(tag_values=(), tag_operation="xor")) is None


@pytest.mark.unit
def test_compile_log_filter_rejects_unknown_tag_operation() -> None:
    with pytest.raises(ValidationError) as excinfo:
        compile_log_filter(LogFilterCriteria(tag_values=(1, 2), tag_operation="xor"))

    assert excinfo.value.field == "query.filter.tag.operation"


@pytest.mark.unit
def test_compile_log_filter_rejects_inverted_created_range() -> None:
    with pytest.raises(ValidationError) as excinfo:
        compile_log_filter(
            LogFilterCriteria(
                created_from=datetime(2024, 1, 2, tzinfo=UTC),
                created_to=datetime(2024, 1, 1, tzinfo=UTC),
            ),
        )

    assert excinfo.value.field == "query.filter.created.to"


@pytest.mark.unit
@pytest.mark.parametrize("title", ["ab", "x" * 141])
def test_compile_log_filter_rejects_title_length_outside_bounds(title: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        compile_log_filter(LogFilterCriteria(title=title))

    assert excinfo.value.field == "query.filter.title"


@pytest.mark.unit
def test_compile_log_filter_rejects_unknown_origin() -> None:
    with pytest.raises(ValidationError) as excinfo:
        compile_log_filter(LogFilterCriteria(origin="robot"))

    assert excinfo.value.field == "query.filter.origin"


@pytest.mark.unit
def test_compile_log_filter_rejects_non_positive_reference() -> None:
    with pytest.raises(ValidationError) as excinfo:
        compile_log_filter(LogFilterCriteria(parent_log=0))

    assert excinfo.value.field == "query.filter.parentLog"


@pytest.mark.unit
def test_compile_log_filter_is_deterministic() -> None:
    criteria = LogFilterCriteria(author="doe", tag_values=(5, 1, 5), tag_operation="and", origin="human")

    first = compile_log_filter(criteria)
    second = compile_log_filter(criteria)

    assert first == second
    assert hash(first) == hash(second)


@pytest.mark.unit
def test_compile_log_query_bundles_predicate_sort_and_page() -> None:
    query = compile_log_query(
        LogFilterCriteria(author="doe"),
        {"createdAt": "desc"},
        PageRequest(limit=10, offset=20),
    )

    assert query.predicate == Comparison("author.name", Operator.ICONTAINS, "doe")
    assert query.sort == (SortKey("createdAt", "desc"),)
    assert query.page == PageRequest(limit=10, offset=20)


@pytest.mark.unit
def test_compile_log_query_defaults_page_and_sort() -> None:
    query = compile_log_query(None)

    assert query.predicate is None
    assert query.sort == ()
    assert query.page == PageRequest(limit=100, offset=0)


@pytest.mark.unit
def test_compile_log_query_rejects_unknown_sort_field() -> None:
    with pytest.raises(ValidationError) as excinfo:
        compile_log_query(None, {"text": "asc"})

    assert excinfo.value.field == "query.sort.text"
