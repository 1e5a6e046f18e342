"""输入校验/阈值常量.

集中管理 schema/core/API 中的业务阈值, 避免 magic number 分散在各层.
"""

from __future__ import annotations

from typing import Final

# Pagination
PAGINATION_LIMIT_MIN: Final[int] = 1
PAGINATION_LIMIT_MAX: Final[int] = 100
PAGINATION_LIMIT_DEFAULT: Final[int] = 100
PAGINATION_OFFSET_MIN: Final[int] = 0
PAGINATION_OFFSET_MAX: Final[int] = 2**63 - 1
PAGINATION_OFFSET_DEFAULT: Final[int] = 0

# Log(write path + title filter)
LOG_TITLE_MIN_LENGTH: Final[int] = 3
LOG_TITLE_MAX_LENGTH: Final[int] = 140
LOG_TEXT_MIN_LENGTH: Final[int] = 3

# Label entities
TAG_TEXT_MAX_LENGTH: Final[int] = 255
SUBSYSTEM_NAME_MAX_LENGTH: Final[int] = 255
USER_NAME_MAX_LENGTH: Final[int] = 255

# Entity ids
ENTITY_ID_MIN: Final[int] = 1
