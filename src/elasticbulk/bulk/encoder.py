"""批量动作编码模块.

将 BulkAction 编码为 Bulk API 所需的 NDJSON 记录：
一行头部（操作类型及元数据），可选地跟随一行文档内容。

头部格式:
    {"<operation>":{"_index":...,"_type":...,"_id":...,"_parent":...,
     "_routing":...,"_version":...,"refresh":...,"wait_for_active_shards":...}}

未设置的字段不会出现在头部中（不会输出为 null）。

注意:
    source 会原样作为第二行输出，不做解析和校验。调用方需保证其为合法的
    单行 JSON 文本，包含换行符的 source 会破坏按行分隔的格式，
    只有在引擎拒绝该请求时才会暴露。
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import BulkAction

# (属性名, 头部中的键名)，顺序即输出顺序
HEADER_FIELDS: tuple[tuple[str, str], ...] = (
    ("index", "_index"),
    ("type", "_type"),
    ("id", "_id"),
    ("parent", "_parent"),
    ("routing", "_routing"),
    ("version", "_version"),
    ("refresh", "refresh"),
    ("wait_for_active_shards", "wait_for_active_shards"),
)


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def encode_header(action: BulkAction) -> str:
    """编码动作的头部行."""
    metadata: dict[str, Any] = {}
    for attribute, key in HEADER_FIELDS:
        value = getattr(action, attribute)
        if value is not None:
            metadata[key] = value
    return _dumps({action.operation.value: metadata})


def encode(action: BulkAction) -> tuple[str, str | None]:
    """将动作编码为 (头部行, 文档行) 元组.

    未设置 source 时文档行为 None。该函数不会抛出异常，
    对同一个动作多次调用总是得到相同的结果。

    Args:
        action: 批量动作

    Returns:
        头部行和可选的文档行（均不含结尾换行符）

    Examples:
        >>> action = BulkAction.builder().operation("delete").index("docs").id("42").build()
        >>> encode(action)
        ('{"delete":{"_index":"docs","_id":"42"}}', None)
    """
    return encode_header(action), action.source


def encode_lines(action: BulkAction) -> list[str]:
    """将动作编码为一行或两行文本."""
    header, body = encode(action)
    if body is None:
        return [header]
    return [header, body]


def encode_payload(actions: Iterable[BulkAction]) -> str:
    """将一组动作编码为完整的 Bulk API 请求体.

    每一行（包括最后一行）都以换行符结尾，动作顺序保持不变。
    空的动作序列返回空字符串。
    """
    return "".join(
        f"{line}\n" for action in actions for line in encode_lines(action)
    )
