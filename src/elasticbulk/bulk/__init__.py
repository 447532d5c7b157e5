"""批量动作模块.

该模块提供 Elasticsearch Bulk API 的动作模型和编码功能，包括：
- 不可变的批量动作（index、create、update、delete）及其构建器
- 动作到 NDJSON 头部行与文档行的编码
- 有序的动作批次与完整请求体的生成
- 通过 Elasticsearch 客户端提交批次

示例用法:
    >>> from elasticbulk.bulk import BulkAction, encode
    >>> action = BulkAction.builder().operation("delete").index("docs").id("42").build()
    >>> header, body = encode(action)
    >>> print(header)
    {"delete":{"_index":"docs","_id":"42"}}
"""

from .encoder import (
    HEADER_FIELDS,
    encode,
    encode_header,
    encode_lines,
    encode_payload,
)
from .models import (
    BulkAction,
    BulkActionBuilder,
    BulkErrorItem,
    BulkOperation,
    BulkOperationBuilder,
    BulkOperationType,
    BulkResult,
)
from .tool import BulkOperationTool
from .exceptions import (
    BulkActionError,
    BulkSubmitError,
    BulkValidationError,
    DuplicateFieldError,
    InvalidFieldTypeError,
    InvalidOperationError,
    MissingRequiredFieldError,
)

__all__ = [
    "HEADER_FIELDS",
    "encode",
    "encode_header",
    "encode_lines",
    "encode_payload",
    "BulkAction",
    "BulkActionBuilder",
    "BulkErrorItem",
    "BulkOperation",
    "BulkOperationBuilder",
    "BulkOperationType",
    "BulkResult",
    "BulkOperationTool",
    "BulkActionError",
    "BulkSubmitError",
    "BulkValidationError",
    "DuplicateFieldError",
    "InvalidFieldTypeError",
    "InvalidOperationError",
    "MissingRequiredFieldError",
]
