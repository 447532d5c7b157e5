"""ESClientFactory 单元测试.

覆盖客户端创建与缓存、认证方式和生命周期管理（上下文管理器、close）。
"""

from unittest.mock import MagicMock, patch

import pytest

from elasticbulk.connection.models import ClusterConfig, ConnectionConfig
from elasticbulk.connection.tool import ESClientFactory


# ============================================================
# 辅助 fixtures
# ============================================================


@pytest.fixture
def cluster() -> ClusterConfig:
    """创建集群配置."""
    return ClusterConfig(hosts=["http://localhost:9200"])


ES_PATCH_PATH = "elasticbulk.connection.tool.Elasticsearch"


# ============================================================
# 客户端创建测试
# ============================================================


class TestGetClient:
    """get_client 方法测试."""

    @patch(ES_PATCH_PATH)
    def test_default_connection_config(self, mock_es, cluster) -> None:
        """测试默认连接配置传递到 Elasticsearch 构造函数."""
        ESClientFactory(cluster).get_client()
        call_kwargs = mock_es.call_args[1]
        assert call_kwargs["hosts"] == ["http://localhost:9200"]
        assert call_kwargs["max_retries"] == 3
        assert call_kwargs["retry_on_timeout"] is True
        assert call_kwargs["request_timeout"] == 30
        assert call_kwargs["http_compress"] is True

    @patch(ES_PATCH_PATH)
    def test_custom_connection_config(self, mock_es, cluster) -> None:
        """测试自定义连接配置."""
        factory = ESClientFactory(
            cluster,
            connection_config=ConnectionConfig(max_retries=0, request_timeout=60),
        )
        factory.get_client()
        call_kwargs = mock_es.call_args[1]
        assert call_kwargs["max_retries"] == 0
        assert call_kwargs["request_timeout"] == 60

    @patch(ES_PATCH_PATH)
    def test_client_lazy_caching(self, mock_es, cluster) -> None:
        """测试客户端惰性创建并缓存."""
        factory = ESClientFactory(cluster)
        mock_es.assert_not_called()

        first = factory.get_client()
        second = factory.get_client()

        assert first is second
        mock_es.assert_called_once()


# ============================================================
# 多认证方式测试
# ============================================================


class TestAuthentication:
    """多认证方式测试."""

    @patch(ES_PATCH_PATH)
    def test_basic_auth(self, mock_es) -> None:
        """测试 Basic Auth 传递到 Elasticsearch 构造函数."""
        config = ClusterConfig(
            hosts=["http://localhost:9200"],
            username="elastic",
            password="changeme",
        )
        ESClientFactory(config).get_client()
        assert mock_es.call_args[1]["basic_auth"] == ("elastic", "changeme")

    @patch(ES_PATCH_PATH)
    def test_username_without_password(self, mock_es) -> None:
        """测试只有用户名时不设置 Basic Auth."""
        config = ClusterConfig(hosts=["http://localhost:9200"], username="elastic")
        ESClientFactory(config).get_client()
        assert "basic_auth" not in mock_es.call_args[1]

    @patch(ES_PATCH_PATH)
    def test_api_key(self, mock_es) -> None:
        """测试 API Key 元组传递."""
        config = ClusterConfig(
            hosts=["http://localhost:9200"],
            api_key=("id", "api_key"),
        )
        ESClientFactory(config).get_client()
        assert mock_es.call_args[1]["api_key"] == ("id", "api_key")

    @patch(ES_PATCH_PATH)
    def test_bearer_token(self, mock_es) -> None:
        """测试 Bearer Token 传递."""
        config = ClusterConfig(
            hosts=["http://localhost:9200"],
            bearer_token="my_token",
        )
        ESClientFactory(config).get_client()
        assert mock_es.call_args[1]["bearer_auth"] == "my_token"

    @patch(ES_PATCH_PATH)
    def test_no_auth(self, mock_es, cluster) -> None:
        """测试无认证的客户端."""
        ESClientFactory(cluster).get_client()
        call_kwargs = mock_es.call_args[1]
        assert "basic_auth" not in call_kwargs
        assert "api_key" not in call_kwargs
        assert "bearer_auth" not in call_kwargs

    @patch(ES_PATCH_PATH)
    def test_ssl_config(self, mock_es) -> None:
        """测试 SSL 配置传递."""
        config = ClusterConfig(
            hosts=["https://localhost:9200"],
            ca_certs="/path/to/ca.crt",
            verify_certs=False,
        )
        ESClientFactory(config).get_client()
        call_kwargs = mock_es.call_args[1]
        assert call_kwargs["ca_certs"] == "/path/to/ca.crt"
        assert call_kwargs["verify_certs"] is False


# ============================================================
# 生命周期管理测试
# ============================================================


class TestLifecycle:
    """上下文管理器与 close 方法测试."""

    @patch(ES_PATCH_PATH)
    def test_context_manager_closes_client(self, mock_es, cluster) -> None:
        """测试上下文管理器退出时关闭客户端."""
        mock_client = MagicMock()
        mock_es.return_value = mock_client

        with ESClientFactory(cluster) as factory:
            assert isinstance(factory, ESClientFactory)
            factory.get_client()

        mock_client.close.assert_called_once()
        assert factory._client is None

    @patch(ES_PATCH_PATH)
    def test_close_without_client(self, mock_es, cluster) -> None:
        """测试未创建客户端时 close 不做任何操作."""
        factory = ESClientFactory(cluster)
        factory.close()
        mock_es.assert_not_called()

    @patch(ES_PATCH_PATH)
    def test_close_ignores_client_error(self, mock_es, cluster) -> None:
        """测试关闭客户端出错时仍清空缓存."""
        mock_client = MagicMock()
        mock_client.close.side_effect = RuntimeError("boom")
        mock_es.return_value = mock_client

        factory = ESClientFactory(cluster)
        factory.get_client()
        factory.close()

        assert factory._client is None

    @patch(ES_PATCH_PATH)
    def test_get_client_after_close_creates_new_client(self, mock_es, cluster) -> None:
        """测试关闭后再次获取会重新创建客户端."""
        factory = ESClientFactory(cluster)
        factory.get_client()
        factory.close()
        factory.get_client()

        assert mock_es.call_count == 2
