"""ES 客户端工厂模块 - 管理提交批量请求所用 Elasticsearch 客户端的配置和生命周期.

主要组件:
    - ESClientFactory: 客户端工厂
    - ClusterConfig: 集群配置模型
    - ConnectionConfig: 连接配置模型

使用示例:
    from elasticbulk.connection import ESClientFactory, ClusterConfig

    factory = ESClientFactory(ClusterConfig(hosts=["http://localhost:9200"]))
    client = factory.get_client()
"""

from .exceptions import ConnectionConfigError, ESClientFactoryError
from .models import ClusterConfig, ConnectionConfig
from .tool import ESClientFactory

__all__ = [
    # 工厂
    "ESClientFactory",
    # 模型
    "ClusterConfig",
    "ConnectionConfig",
    # 异常
    "ESClientFactoryError",
    "ConnectionConfigError",
]
