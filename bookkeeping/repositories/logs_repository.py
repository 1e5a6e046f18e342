"""日志 Repository.

职责:
- 仅负责 Query 组装与数据库读写
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import selectinload

from bookkeeping import db
from bookkeeping.core.types.logs import ThreadLink
from bookkeeping.core.types.query import LogListQuery
from bookkeeping.models.log import Log, log_tags
from bookkeeping.repositories.query_translation import (
    LOG_SORT_EXPRESSIONS,
    build_log_criterion,
    build_order_by,
    paginate_query,
)
from bookkeeping.types.listing import PaginatedResult


def _log_query():
    return db.session.query(Log).options(
        selectinload(Log.tags),
        selectinload(Log.runs),
        selectinload(Log.subsystems),
        selectinload(Log.attachments),
    )


class LogsRepository:
    """日志查询/写入 Repository."""

    def list_logs(self, query: LogListQuery) -> PaginatedResult[Log]:
        """按描述符查询日志列表(总数 + 当前页)."""
        base = _log_query()
        criterion = build_log_criterion(query.predicate)
        if criterion is not None:
            base = base.filter(criterion)
        order_by = build_order_by(query.sort, LOG_SORT_EXPRESSIONS)
        if order_by:
            base = base.order_by(*order_by)
        return paginate_query(base, query.page)

    @staticmethod
    def get_log(log_id: int) -> Log | None:
        return _log_query().filter(Log.id == log_id).one_or_none()

    @staticmethod
    def list_thread(root_log_id: int) -> list[Log]:
        """获取同一线程(根日志 + 全部后代)的日志."""
        return list(_log_query().filter(Log.root_log_id == root_log_id).all())

    @staticmethod
    def list_thread_links(root_log_ids: Iterable[int]) -> list[ThreadLink]:
        """按根日志 id 批量获取线程结构(仅 id/父子关系/创建时间)."""
        ids = sorted(set(root_log_ids))
        if not ids:
            return []
        rows = (
            db.session.query(Log.id, Log.parent_log_id, Log.root_log_id, Log.created_at)
            .filter(Log.root_log_id.in_(ids))
            .all()
        )
        return [
            ThreadLink(id=row.id, parent_log_id=row.parent_log_id, root_log_id=row.root_log_id, created_at=row.created_at)
            for row in rows
        ]

    @staticmethod
    def list_logs_by_tag(tag_id: int) -> list[Log]:
        """获取挂载指定标签的日志(按 id 升序)."""
        tagged = db.exists().where(log_tags.c.log_id == Log.id, log_tags.c.tag_id == tag_id)
        return list(_log_query().filter(tagged).order_by(Log.id.asc()).all())

    @staticmethod
    def add(log: Log) -> Log:
        db.session.add(log)
        db.session.flush()
        return log
