import sys

import pytest

from bookkeeping import db
from bookkeeping.core.exceptions import DataIntegrityError, NotFoundError, ValidationError
from bookkeeping.core.types.logs import LogTreeNode
from bookkeeping.schemas.logs_query import LogsListQuery
from bookkeeping.services.logs.log_detail_read_service import LogDetailReadService
from bookkeeping.services.logs.log_list_service import LogListService
from bookkeeping.services.logs.log_tree_service import LogTreeService, log_tree_to_dict


@pytest.fixture
def thread(log_factory):
    root = log_factory.create("Root log")
    first = log_factory.create("First reply", parent=root)
    nested = log_factory.create("Nested reply", parent=first)
    second = log_factory.create("Second reply", parent=root)
    return root, first, nested, second


@pytest.mark.unit
def test_list_logs_reports_replies_and_meta(thread) -> None:
    root, first, nested, second = thread
    params = LogsListQuery.model_validate({"page": {"limit": "2"}, "sort": {"id": "asc"}})

    page = LogListService().list_logs(params)

    assert [log.id for log in page.logs] == [root.id, first.id]
    assert page.replies == {root.id: 3, first.id: 1}
    assert page.meta.to_dict() == {"pageCount": 2, "totalCount": 4}


@pytest.mark.unit
def test_list_logs_validates_before_querying(app) -> None:
    calls: list[object] = []

    class _Repository:
        def list_logs(self, query):
            calls.append(query)
            raise AssertionError("repository must not be called")

    params = LogsListQuery.model_validate({"page": {"limit": "500"}})

    with pytest.raises(ValidationError):
        LogListService(repository=_Repository()).list_logs(params)
    assert calls == []


@pytest.mark.unit
def test_get_log_counts_all_descendants(thread) -> None:
    root, first, nested, _ = thread
    service = LogDetailReadService()

    assert service.get_log(root.id).replies == 3
    assert service.get_log(first.id).replies == 1
    assert service.get_log(nested.id).replies == 0


@pytest.mark.unit
def test_get_log_missing_raises_not_found(app) -> None:
    with pytest.raises(NotFoundError):
        LogDetailReadService().get_log(404)


@pytest.mark.unit
def test_get_tree_from_any_thread_member_returns_whole_thread(thread) -> None:
    root, first, nested, second = thread

    tree = LogTreeService().get_tree(nested.id)
    payload = log_tree_to_dict(tree)

    assert payload["id"] == root.id
    assert payload["replies"] == 3
    assert [child["id"] for child in payload["children"]] == [first.id, second.id]
    assert payload["children"][0]["children"][0]["id"] == nested.id
    assert payload["children"][1]["children"] == []


@pytest.mark.unit
def test_get_tree_reports_corrupted_thread(thread) -> None:
    root, first, _, _ = thread
    first.parent_log_id = 9999
    db.session.flush()

    with pytest.raises(DataIntegrityError):
        LogTreeService().get_tree(root.id)


@pytest.mark.unit
def test_log_tree_to_dict_serializes_deep_reply_chain() -> None:
    class _Log:
        def __init__(self, log_id: int) -> None:
            self.id = log_id

        def to_dict(self, *, replies: int) -> dict:
            return {"id": self.id, "replies": replies}

    depth = sys.getrecursionlimit() + 500
    node = LogTreeNode(log=_Log(depth))
    for log_id in range(depth - 1, 0, -1):
        node = LogTreeNode(log=_Log(log_id), children=(node,), descendants=node.descendants + 1)

    payload = log_tree_to_dict(node)

    assert payload["replies"] == depth - 1
    current = payload
    seen = 1
    while current["children"]:
        (current,) = current["children"]
        seen += 1
    assert seen == depth
    assert current == {"id": depth, "replies": 0, "children": []}
