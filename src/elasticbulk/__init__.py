"""elasticbulk - Elasticsearch Bulk API 动作模型与编码工具.

这是一个用于描述和编码 Elasticsearch 批量（_bulk）请求的 Python 库。

主要功能:
    - BulkAction: 不可变的批量动作模型（index/create/update/delete）
    - encode: 将动作编码为 NDJSON 的头部行和可选的文档行
    - BulkOperation: 有序的动作批次，可生成完整的请求体
    - BulkOperationTool: 通过 Elasticsearch 客户端提交批次

使用示例:
    from elasticbulk import BulkAction, encode

    action = (
        BulkAction.builder()
        .operation("index")
        .index("docs")
        .id("1")
        .source('{"a":1}')
        .build()
    )
    header, body = encode(action)
"""

__version__ = "0.1.0"

# 导出批量动作模型与编码器
from elasticbulk.bulk import (
    BulkAction,
    BulkActionBuilder,
    BulkOperation,
    BulkOperationBuilder,
    BulkOperationTool,
    BulkOperationType,
    BulkResult,
    encode,
    encode_lines,
    encode_payload,
)

# 导出异常
from elasticbulk.bulk.exceptions import (
    BulkActionError,
    BulkSubmitError,
    BulkValidationError,
    DuplicateFieldError,
    InvalidFieldTypeError,
    InvalidOperationError,
    MissingRequiredFieldError,
)
from elasticbulk.exceptions import ElasticBulkError

__all__ = [
    # 版本
    "__version__",
    # 模型
    "BulkOperationType",
    "BulkAction",
    "BulkActionBuilder",
    "BulkOperation",
    "BulkOperationBuilder",
    "BulkResult",
    # 编码器
    "encode",
    "encode_lines",
    "encode_payload",
    # 工具
    "BulkOperationTool",
    # 异常
    "ElasticBulkError",
    "BulkActionError",
    "BulkValidationError",
    "MissingRequiredFieldError",
    "DuplicateFieldError",
    "InvalidOperationError",
    "InvalidFieldTypeError",
    "BulkSubmitError",
]
