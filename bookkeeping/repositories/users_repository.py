"""用户 Repository(不 commit)."""

from __future__ import annotations

from bookkeeping import db
from bookkeeping.models.user import User


class UsersRepository:
    """用户查询/写入 Repository."""

    @staticmethod
    def get_by_external_id(external_id: int) -> User | None:
        return db.session.query(User).filter(User.external_id == external_id).one_or_none()

    @staticmethod
    def add(user: User) -> User:
        db.session.add(user)
        db.session.flush()
        return user
