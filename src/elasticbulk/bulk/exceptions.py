"""批量动作异常定义模块."""

from ..exceptions import ElasticBulkError


class BulkActionError(ElasticBulkError):
    """批量动作基础异常类."""

    pass


class BulkValidationError(BulkActionError):
    """批量动作验证异常."""

    pass


class MissingRequiredFieldError(BulkValidationError):
    """缺少必填字段异常.

    构建动作时未设置 operation 字段时抛出。

    Attributes:
        field_name: 缺失的字段名
    """

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"缺少必填字段: {field_name}")


class DuplicateFieldError(BulkValidationError):
    """同一构建器中重复设置字段异常."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"字段 {field_name} 只能设置一次")


class InvalidOperationError(BulkValidationError):
    """不支持的操作类型异常."""

    pass


class InvalidFieldTypeError(BulkValidationError, TypeError):
    """字段类型不正确异常."""

    pass


class BulkSubmitError(BulkActionError):
    """批量请求提交失败或存在失败项时的异常."""

    pass
