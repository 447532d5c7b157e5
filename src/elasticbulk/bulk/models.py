"""批量动作数据模型定义模块.

提供批量请求相关的数据模型，包括：
- BulkOperationType: 操作类型枚举
- BulkAction / BulkActionBuilder: 不可变的单个批量动作及其构建器
- BulkOperation / BulkOperationBuilder: 有序的动作批次
- BulkResult / BulkErrorItem: 批量请求结果
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .encoder import encode_payload
from .exceptions import (
    BulkValidationError,
    DuplicateFieldError,
    InvalidFieldTypeError,
    InvalidOperationError,
    MissingRequiredFieldError,
)


class BulkOperationType(Enum):
    """批量操作类型枚举."""

    INDEX = "index"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def from_value(cls, value: BulkOperationType | str) -> BulkOperationType:
        """将字符串或枚举转换为操作类型.

        Raises:
            InvalidOperationError: 字符串不是支持的操作类型时抛出
            InvalidFieldTypeError: 值既不是字符串也不是枚举时抛出
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidFieldTypeError(
                f"operation 必须为字符串或 BulkOperationType，当前类型: "
                f"{type(value).__name__}"
            )
        try:
            return cls(value)
        except ValueError:
            supported = ", ".join(member.value for member in cls)
            raise InvalidOperationError(
                f"不支持的操作类型: {value!r}，支持的类型: {supported}"
            ) from None


# 可选字段及其期望类型
_OPTIONAL_FIELD_TYPES: dict[str, type] = {
    "index": str,
    "type": str,
    "id": str,
    "parent": str,
    "routing": str,
    "source": str,
    "version": int,
    "refresh": bool,
    "wait_for_active_shards": bool,
}

_FIELD_NAMES: tuple[str, ...] = ("operation", *_OPTIONAL_FIELD_TYPES)

# 序列化字典中与属性名不同的键名
_RENAMED_DICT_KEYS: dict[str, str] = {"wait_for_active_shards": "waitForActiveShards"}

# 字典键名 -> 属性名，同时接受属性名本身
_ATTRIBUTES_BY_KEY: dict[str, str] = {
    **{name: name for name in _FIELD_NAMES},
    **{key: name for name, key in _RENAMED_DICT_KEYS.items()},
}


def _check_field_type(name: str, value: Any) -> None:
    """校验可选字段的值类型，None 表示未设置."""
    if value is None:
        return
    expected = _OPTIONAL_FIELD_TYPES[name]
    # bool 是 int 的子类，version 不接受布尔值
    if expected is int and isinstance(value, bool):
        raise InvalidFieldTypeError(f"{name} 必须为 int，不能为 bool")
    if not isinstance(value, expected):
        raise InvalidFieldTypeError(
            f"{name} 必须为 {expected.__name__}，当前类型: {type(value).__name__}"
        )


@dataclass(frozen=True)
class BulkAction:
    """批量动作数据类.

    描述 Bulk API 中的一个操作条目。除 operation 外所有字段均可选，
    None 表示未设置（由请求路径上的默认值生效），与空字符串或 0 不同。

    Attributes:
        operation: 操作类型
        index: 目标索引名称
        type: 目标文档类型（旧版本概念）
        id: 目标文档ID
        parent: 父文档ID（用于路由）
        routing: 路由键，覆盖默认的分片哈希
        source: 文档内容（已序列化的单行 JSON 文本）
        version: 乐观并发控制的版本号
        refresh: 是否在执行后立即刷新
        wait_for_active_shards: 是否等待活跃分片确认

    Examples:
        >>> action = BulkAction(
        ...     operation=BulkOperationType.DELETE,
        ...     index="docs",
        ...     id="42",
        ... )
    """

    operation: BulkOperationType
    index: str | None = None
    type: str | None = None
    id: str | None = None
    parent: str | None = None
    routing: str | None = None
    source: str | None = None
    version: int | None = None
    refresh: bool | None = None
    wait_for_active_shards: bool | None = None

    def __post_init__(self) -> None:
        """校验字段类型并将字符串操作类型转换为枚举."""
        if self.operation is None:
            raise MissingRequiredFieldError("operation")
        object.__setattr__(
            self, "operation", BulkOperationType.from_value(self.operation)
        )
        for name in _OPTIONAL_FIELD_TYPES:
            _check_field_type(name, getattr(self, name))

    @staticmethod
    def builder() -> BulkActionBuilder:
        """创建一个新的动作构建器."""
        return BulkActionBuilder()

    def with_(self, **changes: Any) -> BulkAction:
        """返回替换了指定字段的新动作.

        传入 None 会清除对应的可选字段。

        Raises:
            BulkValidationError: 字段名未知或值不合法时抛出
        """
        unknown = set(changes) - set(_FIELD_NAMES)
        if unknown:
            raise BulkValidationError(f"未知字段: {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典，仅包含已设置的字段."""
        data: dict[str, Any] = {"operation": self.operation.value}
        for name in _OPTIONAL_FIELD_TYPES:
            value = getattr(self, name)
            if value is not None:
                data[_RENAMED_DICT_KEYS.get(name, name)] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BulkAction:
        """从字典构建动作，校验规则与构建器一致.

        同时接受 waitForActiveShards 和 wait_for_active_shards。

        Raises:
            BulkValidationError: 包含未知字段或字段值不合法时抛出
        """
        builder = cls.builder()
        for key, value in data.items():
            name = _ATTRIBUTES_BY_KEY.get(key)
            if name is None:
                raise BulkValidationError(f"未知字段: {key}")
            getattr(builder, name)(value)
        return builder.build()


class BulkActionBuilder:
    """BulkAction 构建器.

    每个字段最多设置一次，operation 为必填项。构建器只校验字段类型和
    operation 是否存在，不做字段之间的组合校验（例如允许 delete 携带 source）。

    Examples:
        >>> action = (
        ...     BulkAction.builder()
        ...     .operation("index")
        ...     .index("docs")
        ...     .id("1")
        ...     .source('{"a":1}')
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> BulkActionBuilder:
        if value is None:
            return self
        if name in self._values:
            raise DuplicateFieldError(name)
        if name == "operation":
            value = BulkOperationType.from_value(value)
        else:
            _check_field_type(name, value)
        self._values[name] = value
        return self

    def operation(self, operation: BulkOperationType | str) -> BulkActionBuilder:
        return self._set("operation", operation)

    def index(self, index: str | None) -> BulkActionBuilder:
        return self._set("index", index)

    def type(self, doc_type: str | None) -> BulkActionBuilder:
        return self._set("type", doc_type)

    def id(self, doc_id: str | None) -> BulkActionBuilder:
        return self._set("id", doc_id)

    def parent(self, parent: str | None) -> BulkActionBuilder:
        return self._set("parent", parent)

    def routing(self, routing: str | None) -> BulkActionBuilder:
        return self._set("routing", routing)

    def source(self, source: str | None) -> BulkActionBuilder:
        """设置文档内容.

        source 必须是单行 JSON 文本，编码时原样输出，不做解析和校验。
        """
        return self._set("source", source)

    def version(self, version: int | None) -> BulkActionBuilder:
        return self._set("version", version)

    def refresh(self, refresh: bool | None) -> BulkActionBuilder:
        return self._set("refresh", refresh)

    def wait_for_active_shards(
        self, wait_for_active_shards: bool | None
    ) -> BulkActionBuilder:
        return self._set("wait_for_active_shards", wait_for_active_shards)

    def build(self) -> BulkAction:
        """构建动作.

        Raises:
            MissingRequiredFieldError: 未设置 operation 时抛出
        """
        if "operation" not in self._values:
            raise MissingRequiredFieldError("operation")
        return BulkAction(**self._values)


@dataclass(frozen=True)
class BulkOperation:
    """批量请求批次数据类.

    按顺序保存一组 BulkAction，可生成完整的 NDJSON 请求体。
    动作数量和请求体大小供外部的刷新队列判断何时提交。

    Attributes:
        actions: 动作元组，保持添加顺序
    """

    actions: tuple[BulkAction, ...]

    def __post_init__(self) -> None:
        """校验批次中的动作."""
        actions = tuple(self.actions)
        if not actions:
            raise BulkValidationError("批次中至少需要一个动作")
        for action in actions:
            if not isinstance(action, BulkAction):
                raise InvalidFieldTypeError(
                    f"批次只能包含 BulkAction，当前类型: {type(action).__name__}"
                )
        object.__setattr__(self, "actions", actions)

    @staticmethod
    def builder() -> BulkOperationBuilder:
        """创建一个新的批次构建器."""
        return BulkOperationBuilder()

    @property
    def num_actions(self) -> int:
        """批次中的动作数量."""
        return len(self.actions)

    def payload(self) -> str:
        """生成 Bulk API 请求体（每行以换行符结尾）."""
        return encode_payload(self.actions)

    def estimated_size(self) -> int:
        """请求体的 UTF-8 字节长度."""
        return len(self.payload().encode("utf-8"))


class BulkOperationBuilder:
    """BulkOperation 构建器."""

    def __init__(self) -> None:
        self._actions: list[BulkAction] = []

    def add_action(self, action: BulkAction) -> BulkOperationBuilder:
        self._actions.append(action)
        return self

    def add_actions(self, actions: Iterable[BulkAction]) -> BulkOperationBuilder:
        self._actions.extend(actions)
        return self

    def build(self) -> BulkOperation:
        """构建批次.

        Raises:
            BulkValidationError: 未添加任何动作时抛出
        """
        return BulkOperation(actions=tuple(self._actions))


@dataclass
class BulkErrorItem:
    """批量请求失败项数据类.

    Attributes:
        index_name: 索引名称
        doc_id: 文档ID
        error_type: 错误类型
        error_reason: 错误原因
        status: HTTP状态码
        caused_by: 根本原因
        operation: 失败的操作类型
    """

    index_name: str
    doc_id: str | None
    error_type: str
    error_reason: str
    status: int
    caused_by: str | None = None
    operation: BulkOperationType | None = None


@dataclass
class BulkResult:
    """批量请求结果数据类.

    Attributes:
        total: 总动作数
        success: 成功数
        failed: 失败数
        took: 引擎端耗时（毫秒）
        errors: 错误详情列表
        items: 响应中的原始条目列表
    """

    total: int = 0
    success: int = 0
    failed: int = 0
    took: int = 0
    errors: list[BulkErrorItem] = field(default_factory=list)
    items: list[dict[str, Any]] = field(default_factory=list)

    def is_success(self) -> bool:
        """判断操作是否全部成功."""
        return self.failed == 0

    def add_error(
        self,
        index_name: str,
        doc_id: str | None,
        error_type: str,
        error_reason: str,
        status: int,
        caused_by: str | None = None,
        operation: BulkOperationType | None = None,
    ) -> None:
        """添加错误项."""
        self.errors.append(
            BulkErrorItem(
                index_name=index_name,
                doc_id=doc_id,
                error_type=error_type,
                error_reason=error_reason,
                status=status,
                caused_by=caused_by,
                operation=operation,
            )
        )

    def get_error_summary(self) -> str:
        """获取错误摘要."""
        if not self.errors:
            return "No errors"
        summary = f"Total errors: {len(self.errors)}\n"
        for i, error in enumerate(self.errors[:10], 1):  # 只显示前10个错误
            summary += (
                f"{i}. [{error.operation.value if error.operation else 'unknown'}] "
                f"Index: {error.index_name}, DocID: {error.doc_id}, "
                f"Status: {error.status}, Reason: {error.error_reason}\n"
            )
        if len(self.errors) > 10:
            summary += f"... and {len(self.errors) - 10} more errors\n"
        return summary
