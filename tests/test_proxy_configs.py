"""
Tests for proxy config snapshots.
"""

from urllib.parse import parse_qs, urlsplit

import pytest

from porta_client import APIError
from porta_client.api.proxy_configs import PROXY_CONFIGS_PER_PAGE


def proxy_config(config_id, version=1, environment="sandbox"):
    return {"proxy_config": {
        "id": config_id,
        "version": version,
        "environment": environment,
        "content": {"id": 10, "proxy": {"hosts": ["api.example.com"]}},
    }}


class TestProductProxyConfigs:
    """Tests for proxy configs of a single product."""

    def test_get(self, make_client):
        """Test reading one version."""
        client, adapter = make_client((200, proxy_config(1, version=3)))
        config = client.proxy_configs.get(10, "sandbox", 3)

        assert adapter.path() == "/admin/api/services/10/proxy/configs/sandbox/3.json"
        assert config.version == 3
        assert config.content["proxy"]["hosts"] == ["api.example.com"]

    def test_latest(self, make_client):
        """Test reading the newest version."""
        client, adapter = make_client((200, proxy_config(2, version=7, environment="production")))
        config = client.proxy_configs.latest(10, "production")

        assert adapter.path() == "/admin/api/services/10/proxy/configs/production/latest.json"
        assert config.environment == "production"

    def test_list(self, make_client):
        """Test listing versions."""
        body = {"proxy_configs": [proxy_config(1, 1), proxy_config(2, 2)]}
        client, adapter = make_client((200, body))
        configs = client.proxy_configs.list(10, "sandbox")

        assert adapter.path() == "/admin/api/services/10/proxy/configs/sandbox.json"
        assert [c.version for c in configs] == [1, 2]

    def test_promote(self, make_client):
        """Test promoting a version to production."""
        client, adapter = make_client((201, proxy_config(5, version=3, environment="production")))
        config = client.proxy_configs.promote(10, "sandbox", 3, "production")

        assert adapter.last.method == "POST"
        assert adapter.path() == "/admin/api/services/10/proxy/configs/sandbox/3/promote.json"
        assert adapter.form() == {"to": "production"}
        assert config.environment == "production"

    def test_promote_expects_created(self, make_client):
        """Test that a 200 on promote is not a success."""
        client, _ = make_client((200, proxy_config(5)))
        with pytest.raises(APIError):
            client.proxy_configs.promote(10, "sandbox", 3, "production")


class TestAccountProxyConfigs:
    """Tests for the tenant-wide proxy config listing."""

    def test_walks_all_pages(self, make_client):
        """Test that a plain listing fetches every page."""
        def handler(request):
            query = parse_qs(urlsplit(request.url).query)
            page = int(query["page"][0])
            size = PROXY_CONFIGS_PER_PAGE if page < 3 else 51
            return 200, {"proxy_configs": [proxy_config(page * 1000 + i) for i in range(size)]}

        client, adapter = make_client(handler)
        configs = client.proxy_configs.list_for_account("production")

        assert len(adapter.requests) == 3
        assert len(configs) == 2 * PROXY_CONFIGS_PER_PAGE + 51
        assert adapter.path() == "/admin/api/account/proxy_configs/production.json"
        assert adapter.query(0) == {"page": "1", "per_page": str(PROXY_CONFIGS_PER_PAGE)}

    def test_filters(self, make_client):
        """Test that filters are sent sorted and kept on every page."""
        client, adapter = make_client((200, {"proxy_configs": []}))
        client.proxy_configs.list_for_account("sandbox", version="latest", host="example.com")

        assert len(adapter.requests) == 1
        assert urlsplit(adapter.last.url).query == (
            f"host=example.com&page=1&per_page={PROXY_CONFIGS_PER_PAGE}&version=latest"
        )

    def test_single_page(self, make_client):
        """Test explicit paging."""
        client, adapter = make_client((200, {"proxy_configs": [proxy_config(1)]}))
        configs = client.proxy_configs.list_for_account("sandbox", page=2, per_page=1)

        assert len(adapter.requests) == 1
        assert adapter.query() == {"page": "2", "per_page": "1"}
        assert len(configs) == 1

    def test_empty_collection(self, make_client):
        """Test a null collection decodes as no configs."""
        client, _ = make_client((200, {"proxy_configs": None}))
        configs = client.proxy_configs.list_for_account("sandbox", page=1)

        assert len(configs) == 0
