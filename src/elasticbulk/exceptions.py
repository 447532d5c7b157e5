"""elasticbulk 异常定义模块."""


class ElasticBulkError(Exception):
    """elasticbulk 基础异常类."""

    pass
