"""批量请求提交工具类."""

import logging
from typing import Any
from collections.abc import Iterable
from elasticsearch import Elasticsearch
from elasticsearch.exceptions import ApiError, TransportError
from elasticsearch.exceptions import ConnectionError as ESConnectionError

from .models import BulkAction, BulkOperation, BulkOperationType, BulkResult
from .exceptions import BulkSubmitError

logger = logging.getLogger(__name__)


class BulkOperationTool:
    """批量请求提交工具类.

    将 BulkOperation 编码为 NDJSON 请求体，通过 Elasticsearch 客户端
    一次性提交，并把响应解析为 BulkResult。该工具不拆分批次、不重试、
    也不调整动作顺序。

    Args:
        es_client: Elasticsearch 客户端实例
        raise_on_error: 存在失败项时是否抛出异常，默认为 False
        refresh: 请求路径上的 refresh 参数，默认不设置
    """

    def __init__(
        self,
        es_client: Elasticsearch,
        raise_on_error: bool = False,
        refresh: bool | str | None = None,
    ):
        self.es_client = es_client
        self.raise_on_error = raise_on_error
        self.refresh = refresh
        logger.info(
            f"初始化批量请求工具: raise_on_error={raise_on_error}, refresh={refresh}"
        )

    def execute(
        self,
        operation: BulkOperation,
        index: str | None = None,
        routing: str | None = None,
    ) -> BulkResult:
        """提交一个批次.

        Args:
            operation: 要提交的批次
            index: 请求路径上的默认索引，动作未指定索引时生效
            routing: 请求路径上的默认路由键

        Returns:
            批量请求结果

        Raises:
            BulkSubmitError: 请求失败，或 raise_on_error 为 True 且存在失败项时抛出

        Example:
            >>> bulk_tool = BulkOperationTool(es_client)
            >>> operation = (
            ...     BulkOperation.builder()
            ...     .add_action(
            ...         BulkAction.builder()
            ...         .operation("index")
            ...         .index("users")
            ...         .id("1")
            ...         .source('{"name":"Alice"}')
            ...         .build()
            ...     )
            ...     .build()
            ... )
            >>> result = bulk_tool.execute(operation)
        """
        kwargs: dict[str, Any] = {"operations": operation.payload()}
        if index is not None:
            kwargs["index"] = index
        if routing is not None:
            kwargs["routing"] = routing
        if self.refresh is not None:
            kwargs["refresh"] = self.refresh

        try:
            response = self.es_client.bulk(**kwargs)
        except (ApiError, TransportError, ESConnectionError) as e:
            logger.error(f"批量请求提交失败: {str(e)}")
            raise BulkSubmitError(f"批量请求提交失败: {str(e)}") from e

        result = self._parse_response(operation, response)

        if result.failed > 0:
            logger.warning(
                f"批量请求完成: 成功 {result.success}, 失败 {result.failed}"
            )
            if self.raise_on_error:
                raise BulkSubmitError(
                    f"批量请求完成，但有 {result.failed} 个失败: "
                    f"{result.get_error_summary()}"
                )
        else:
            logger.info(
                f"批量请求完成: 全部成功 ({result.success}), 耗时 {result.took}ms"
            )

        return result

    def execute_actions(
        self,
        actions: Iterable[BulkAction],
        index: str | None = None,
        routing: str | None = None,
    ) -> BulkResult:
        """将一组动作组成批次后提交."""
        operation = BulkOperation.builder().add_actions(actions).build()
        return self.execute(operation, index=index, routing=routing)

    def _parse_response(
        self,
        operation: BulkOperation,
        response: Any,
    ) -> BulkResult:
        """将 Bulk API 响应解析为 BulkResult.

        Args:
            operation: 已提交的批次
            response: 客户端返回的响应（ObjectApiResponse 或字典）

        Returns:
            批量请求结果
        """
        body = getattr(response, "body", response)
        result = BulkResult(total=operation.num_actions, took=body.get("took", 0))

        for item in body.get("items", []):
            result.items.append(item)
            for op_type, info in item.items():
                status = info.get("status", 0)
                if "error" not in info and status < 300:
                    result.success += 1
                    continue

                result.failed += 1
                error_info = info.get("error", {})
                if isinstance(error_info, str):
                    error_info = {"reason": error_info}

                caused_by = None
                if "caused_by" in error_info:
                    caused_by_info = error_info["caused_by"]
                    caused_by = (
                        f"{caused_by_info.get('type', '')}: "
                        f"{caused_by_info.get('reason', '')}"
                    )

                try:
                    operation_type = BulkOperationType(op_type)
                except ValueError:
                    operation_type = None

                result.add_error(
                    index_name=info.get("_index", ""),
                    doc_id=info.get("_id"),
                    error_type=error_info.get("type", "unknown"),
                    error_reason=error_info.get("reason", "unknown error"),
                    status=status,
                    caused_by=caused_by,
                    operation=operation_type,
                )

        return result

    def set_config(
        self,
        raise_on_error: bool | None = None,
        refresh: bool | str | None = None,
    ) -> None:
        """更新工具配置.

        Args:
            raise_on_error: 存在失败项时是否抛出异常
            refresh: 请求路径上的 refresh 参数
        """
        if raise_on_error is not None:
            self.raise_on_error = raise_on_error
        if refresh is not None:
            self.refresh = refresh

        logger.info(
            f"更新配置: raise_on_error={self.raise_on_error}, refresh={self.refresh}"
        )
