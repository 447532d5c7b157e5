"""批量动作使用示例.

本文件展示了如何构建批量动作、编码为 NDJSON 请求体，并通过
BulkOperationTool 提交到 Elasticsearch。
"""

from elasticbulk.bulk import (
    BulkAction,
    BulkOperation,
    BulkOperationTool,
    encode,
)
from elasticbulk.connection import ClusterConfig, ESClientFactory


# ==================== 示例1：构建并编码单个动作 ====================
def example_encode_action():
    """构建 index 动作并查看编码结果."""
    action = (
        BulkAction.builder()
        .operation("index")
        .index("users")
        .id("1")
        .source('{"name":"张三","age":25}')
        .build()
    )

    header, body = encode(action)
    print(f"头部行: {header}")
    print(f"文档行: {body}")

    # 修改字段会得到新的动作
    delete = action.with_(operation="delete", source=None)
    print(f"删除动作: {encode(delete)}")


# ==================== 示例2：组成批次并提交 ====================
def example_submit_operation():
    """组成批次并提交."""
    documents = {
        "1": '{"name":"张三","city":"北京"}',
        "2": '{"name":"李四","city":"上海"}',
    }

    builder = BulkOperation.builder()
    for doc_id, source in documents.items():
        builder.add_action(
            BulkAction.builder().operation("index").id(doc_id).source(source).build()
        )
    builder.add_action(BulkAction.builder().operation("delete").id("3").build())
    operation = builder.build()

    print(f"动作数量: {operation.num_actions}")
    print(f"请求体大小: {operation.estimated_size()} 字节")
    print(operation.payload())

    with ESClientFactory(ClusterConfig(hosts=["http://localhost:9200"])) as factory:
        bulk_tool = BulkOperationTool(factory.get_client(), refresh="wait_for")
        result = bulk_tool.execute(operation, index="users")

        print(f"  总数: {result.total}")
        print(f"  成功: {result.success}")
        print(f"  失败: {result.failed}")
        if result.failed > 0:
            print(f"  错误摘要:\n{result.get_error_summary()}")


if __name__ == "__main__":
    example_encode_action()
    example_submit_operation()
