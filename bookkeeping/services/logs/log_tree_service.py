"""日志树读取 Service.

获取指定日志所在线程的完整日志集合,组装为以根日志为起点的树.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bookkeeping.core.log_tree import assemble_log_tree
from bookkeeping.repositories.logs_repository import LogsRepository
from bookkeeping.services.logs.log_detail_read_service import LogDetailReadService

if TYPE_CHECKING:
    from bookkeeping.core.types.logs import LogTreeNode
    from bookkeeping.models.log import Log


def _node_payload(node: LogTreeNode[Log]) -> dict:
    payload = node.log.to_dict(replies=node.descendants)
    payload["children"] = []
    return payload


def log_tree_to_dict(node: LogTreeNode[Log]) -> dict:
    """序列化日志树节点,``children`` 始终为列表.

    使用显式栈逐层展开,深层回复链不会触发 RecursionError.
    """
    root_payload = _node_payload(node)
    stack = [(node, root_payload)]
    while stack:
        current, payload = stack.pop()
        for child in current.children:
            child_payload = _node_payload(child)
            payload["children"].append(child_payload)
            stack.append((child, child_payload))
    return root_payload


class LogTreeService:
    """日志树服务."""

    def __init__(self, repository: LogsRepository | None = None) -> None:
        self._repository = repository or LogsRepository()
        self._detail_service = LogDetailReadService(self._repository)

    def get_tree(self, log_id: int) -> LogTreeNode[Log]:
        """返回日志所在线程的树.

        Raises:
            NotFoundError: 日志不存在.
            DataIntegrityError: 线程数据违反父子关系不变式(环、父日志缺失等).

        """
        log = self._detail_service.require_log(log_id)
        root_log_id = log.root_log_id if log.root_log_id is not None else log.id
        thread = self._repository.list_thread(root_log_id)
        return assemble_log_tree(thread, root_log_id)
