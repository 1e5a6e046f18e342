"""日志树组装.

输入为同一 ``root_log_id`` 下的完整扁平日志集合(根日志及全部后代),
输出以根日志为起点的嵌套树. 本模块不做任何 I/O.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from typing import TypeVar

from bookkeeping.core.exceptions import DataIntegrityError
from bookkeeping.core.types.logs import LogTreeNode, SupportsThreadLink
from bookkeeping.utils.time_utils import time_utils

LogT = TypeVar("LogT", bound=SupportsThreadLink)


def _group_children(logs: Iterable[LogT]) -> dict[int | None, list[LogT]]:
    grouped: dict[int | None, list[LogT]] = defaultdict(list)
    for log in logs:
        grouped[log.parent_log_id].append(log)
    for siblings in grouped.values():
        siblings.sort(key=lambda item: (time_utils.to_utc(item.created_at), item.id))
    return grouped


def assemble_log_tree(logs: Sequence[LogT], root_log_id: int) -> LogTreeNode[LogT]:
    """将扁平日志集合组装为以根日志为起点的树.

    子节点按 ``(created_at, id)`` 升序排列;没有回复的日志 ``children`` 为空元组.

    Args:
        logs: 同一线程的全部日志记录.
        root_log_id: 根日志 id.

    Returns:
        LogTreeNode: 根节点.

    Raises:
        DataIntegrityError: 根日志缺失、根日志带有父日志、记录属于其他线程、
            父日志不在集合内或存在环时抛出.

    """
    by_id: dict[int, LogT] = {}
    for log in logs:
        if log.root_log_id != root_log_id:
            raise DataIntegrityError(
                extra={"log_id": log.id, "root_log_id": log.root_log_id, "expected_root_log_id": root_log_id},
            )
        if log.id in by_id:
            raise DataIntegrityError(extra={"log_id": log.id, "reason": "duplicate_log"})
        by_id[log.id] = log

    root = by_id.get(root_log_id)
    if root is None:
        raise DataIntegrityError(extra={"root_log_id": root_log_id, "reason": "root_missing"})
    if root.parent_log_id is not None:
        raise DataIntegrityError(
            extra={"root_log_id": root_log_id, "parent_log_id": root.parent_log_id, "reason": "root_has_parent"},
        )
    for log in by_id.values():
        if log.parent_log_id is not None and log.parent_log_id not in by_id:
            raise DataIntegrityError(
                extra={"log_id": log.id, "parent_log_id": log.parent_log_id, "reason": "parent_missing"},
            )

    children_by_parent = _group_children(by_id.values())
    post_order = _walk_post_order(root, children_by_parent)
    if len(post_order) != len(by_id):
        # 环上的日志无法从根到达
        reachable = {log.id for log in post_order}
        unreachable = sorted(set(by_id) - reachable)
        raise DataIntegrityError(extra={"log_ids": unreachable, "reason": "cycle"})

    # 后序保证子节点先于父节点构建,线程深度不受递归栈限制
    built: dict[int, LogTreeNode[LogT]] = {}
    for log in post_order:
        children = tuple(built.pop(child.id) for child in children_by_parent.get(log.id, ()))
        descendants = sum(1 + child.descendants for child in children)
        built[log.id] = LogTreeNode(log=log, children=children, descendants=descendants)
    return built[root.id]


def _walk_post_order(root: LogT, children_by_parent: dict[int | None, list[LogT]]) -> list[LogT]:
    visited: set[int] = {root.id}
    ordered: list[LogT] = []
    stack: list[tuple[LogT, bool]] = [(root, False)]
    while stack:
        log, expanded = stack.pop()
        if expanded:
            ordered.append(log)
            continue
        stack.append((log, True))
        for child in reversed(children_by_parent.get(log.id, ())):
            # 自引用或环路会使某个 id 被再次访问
            if child.id in visited:
                raise DataIntegrityError(extra={"log_id": child.id, "reason": "cycle"})
            visited.add(child.id)
            stack.append((child, False))
    return ordered


def count_descendants(links: Iterable[SupportsThreadLink]) -> dict[int, int]:
    """统计每条日志的后代数量(用于 ``replies`` 字段).

    输入可以混合多个线程. 环路不会导致死循环,环上节点只计入一次.
    """
    grouped: dict[int | None, list[int]] = defaultdict(list)
    ids: list[int] = []
    for link in links:
        grouped[link.parent_log_id].append(link.id)
        ids.append(link.id)

    counts: dict[int, int] = {}
    for log_id in ids:
        if log_id in counts:
            continue
        seen: set[int] = {log_id}
        stack = list(grouped.get(log_id, ()))
        total = 0
        while stack:
            current = stack.pop()
            if current in seen:
                continue
            seen.add(current)
            total += 1
            stack.extend(grouped.get(current, ()))
        counts[log_id] = total
    return counts
