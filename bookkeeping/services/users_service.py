"""用户 Service.

认证不在本服务范围内, 写操作统一归属于配置的默认操作员.
"""

from __future__ import annotations

from flask import current_app

from bookkeeping.models.user import User
from bookkeeping.repositories.users_repository import UsersRepository
from bookkeeping.settings import DEFAULT_AUTHOR_EXTERNAL_ID, DEFAULT_AUTHOR_NAME
from bookkeeping.utils.structlog_config import log_info


class UsersService:
    """用户服务."""

    def __init__(self, repository: UsersRepository | None = None) -> None:
        self._repository = repository or UsersRepository()

    def get_or_create(self, external_id: int, name: str) -> User:
        user = self._repository.get_by_external_id(external_id)
        if user is not None:
            return user
        user = self._repository.add(User(external_id=external_id, name=name))
        log_info("创建默认作者", module="users", user_id=user.id, external_id=external_id)
        return user

    def get_default_author(self) -> User:
        """获取(首次使用时创建)配置的默认操作员."""
        external_id = int(current_app.config.get("DEFAULT_AUTHOR_EXTERNAL_ID", DEFAULT_AUTHOR_EXTERNAL_ID))
        name = str(current_app.config.get("DEFAULT_AUTHOR_NAME", DEFAULT_AUTHOR_NAME))
        return self.get_or_create(external_id, name)
