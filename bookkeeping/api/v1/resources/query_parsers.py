"""API query/body 参数解析工具.

约束:
- 仅用于 API 层(`request.args` / `request.get_json`)
- query 采用 deepObject 风格: ``page[limit]=10&filter[tag][values]=1,2``
- 解析结果交给 `schemas` 中的 pydantic 模型做类型与白名单校验
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Final

from bookkeeping.core.exceptions import ValidationError

if TYPE_CHECKING:
    from werkzeug.datastructures import MultiDict

_DEEP_OBJECT_KEY: Final = re.compile(r"^(?P<root>[^\[\]]+)(?P<path>(?:\[[^\[\]]*\])*)$")
_SEGMENT: Final = re.compile(r"\[([^\[\]]*)\]")


def _split_key(key: str) -> list[str]:
    """``filter[tag][values]`` -> ``['filter', 'tag', 'values']``; 格式不合法时原样返回."""
    match = _DEEP_OBJECT_KEY.match(key)
    if match is None:
        return [key]
    return [match.group("root"), *_SEGMENT.findall(match.group("path"))]


def parse_deep_object(args: MultiDict[str, str]) -> dict[str, Any]:
    """将 query 参数展开为嵌套 dict.

    同名参数出现多次时保留为列表; 同一路径既作为标量又作为对象时抛出 ValidationError.
    """
    result: dict[str, Any] = {}
    for key in args:
        values = args.getlist(key)
        value: Any = values[0] if len(values) == 1 else values
        segments = _split_key(key)

        node = result
        for depth, segment in enumerate(segments[:-1]):
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                field = ".".join(["query", *segments[: depth + 1]])
                raise ValidationError(f'"{field}" must be of type object', field=field)
            node = child

        leaf = segments[-1]
        if isinstance(node.get(leaf), dict):
            field = ".".join(["query", *segments])
            raise ValidationError(f'"{field}" must be of type object', field=field)
        node[leaf] = value
    return result


def parse_json_body(raw: object) -> dict[str, Any]:
    """JSON body 必须是对象; 缺失时视为空对象(由 schema 报告必填字段)."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValidationError('"body" must be of type object', field="body")
    return raw
