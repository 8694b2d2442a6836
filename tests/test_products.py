"""
Tests for products and everything configured under them.
"""

import json
from urllib.parse import parse_qs, urlsplit

import pytest

from porta_client.api.models import OIDCConfiguration, PolicyConfig, PolicyConfigList
from porta_client.api.products import PRODUCTS_PER_PAGE


class TestProducts:
    """Tests for product CRUD."""

    def test_list_walks_all_pages(self, make_client):
        """Test that a plain list fetches every page."""
        def handler(request):
            query = parse_qs(urlsplit(request.url).query)
            page = int(query["page"][0])
            size = PRODUCTS_PER_PAGE if page < 3 else 51
            return 200, {"services": [{"service": {"id": page * 1000 + i}} for i in range(size)]}

        client, adapter = make_client(handler)
        products = client.products.list()

        assert len(adapter.requests) == 3
        assert len(products) == 2 * PRODUCTS_PER_PAGE + 51
        assert products[0].id == 1000

    def test_list_single_page(self, make_client):
        """Test explicit paging."""
        client, adapter = make_client((200, {"services": [{"service": {"id": 1}}, {"service": {"id": 2}}]}))
        products = client.products.list(page=1, per_page=2)

        assert len(adapter.requests) == 1
        assert adapter.query() == {"page": "1", "per_page": "2"}
        assert len(products) == 2

    def test_get(self, make_client):
        """Test reading a product."""
        body = {"service": {"id": 98765, "name": "API", "system_name": "api", "backend_version": "1"}}
        client, adapter = make_client((200, body))
        product = client.products.get(98765)

        assert adapter.path() == "/admin/api/services/98765.json"
        assert product.system_name == "api"
        assert product.backend_version == "1"

    def test_create(self, make_client):
        """Test creating a product."""
        client, adapter = make_client((201, {"service": {"id": 1, "name": "API"}}))
        product = client.products.create("API", {"system_name": "api"})

        assert adapter.last.method == "POST"
        assert adapter.path() == "/admin/api/services.json"
        assert adapter.form() == {"name": "API", "system_name": "api"}
        assert product.name == "API"

    def test_update(self, make_client):
        """Test updating a product."""
        client, adapter = make_client((200, {"service": {"id": 1, "description": "new"}}))
        product = client.products.update(1, {"description": "new"})

        assert adapter.last.method == "PUT"
        assert product.description == "new"

    def test_delete(self, make_client):
        """Test deleting a product."""
        client, adapter = make_client((200, ""))
        client.products.delete(1)

        assert adapter.last.method == "DELETE"
        assert adapter.path() == "/admin/api/services/1.json"


class TestProductChildren:
    """Tests for metrics, methods and mapping rules of a product."""

    def test_list_metrics(self, make_client):
        """Test listing metrics."""
        body = {"metrics": [{"metric": {"id": 1, "system_name": "hits", "unit": "hit"}}]}
        client, adapter = make_client((200, body))
        metrics = client.products.list_metrics(10)

        assert adapter.path() == "/admin/api/services/10/metrics.json"
        assert metrics[0].system_name == "hits"

    def test_metric_crud(self, make_client):
        """Test metric create, read, update and delete paths and verbs."""
        client, adapter = make_client(
            lambda r: (201 if r.method == "POST" else 200, {"metric": {"id": 2, "friendly_name": "Calls"}})
        )

        metric = client.products.create_metric(10, {"friendly_name": "Calls", "unit": "call"})
        client.products.get_metric(10, 2)
        client.products.update_metric(10, 2, {"description": "d"})
        client.products.delete_metric(10, 2)

        assert metric.friendly_name == "Calls"
        assert [r.method for r in adapter.requests] == ["POST", "GET", "PUT", "DELETE"]
        assert adapter.path(0) == "/admin/api/services/10/metrics.json"
        assert {adapter.path(i) for i in range(1, 4)} == {"/admin/api/services/10/metrics/2.json"}

    def test_methods(self, make_client):
        """Test method paths under the hits metric."""
        def handler(request):
            if request.method == "GET" and request.url.endswith("methods.json"):
                return 200, {"methods": [{"method": {"id": 5, "parent_id": 1}}]}
            return (201 if request.method == "POST" else 200), {"method": {"id": 5, "parent_id": 1}}

        client, adapter = make_client(handler)

        methods = client.products.list_methods(10, 1)
        client.products.create_method(10, 1, {"friendly_name": "Search"})
        method = client.products.get_method(10, 1, 5)
        client.products.update_method(10, 1, 5, {"friendly_name": "Find"})
        client.products.delete_method(10, 1, 5)

        assert methods[0].parent_id == 1
        assert method.id == 5
        assert adapter.path(0) == "/admin/api/services/10/metrics/1/methods.json"
        assert adapter.path(1) == "/admin/api/services/10/metrics/1/methods.json"
        assert adapter.path(2) == "/admin/api/services/10/metrics/1/methods/5.json"
        assert [r.method for r in adapter.requests] == ["GET", "POST", "GET", "PUT", "DELETE"]

    def test_mapping_rules(self, make_client):
        """Test mapping rule paths under the proxy."""
        rule = {"mapping_rule": {"id": 3, "http_method": "GET", "pattern": "/", "delta": 1, "last": False}}

        def handler(request):
            if request.method == "GET" and request.url.endswith("mapping_rules.json"):
                return 200, {"mapping_rules": [rule]}
            return (201 if request.method == "POST" else 200), rule

        client, adapter = make_client(handler)

        rules = client.products.list_mapping_rules(10)
        created = client.products.create_mapping_rule(
            10, {"http_method": "GET", "pattern": "/", "delta": 1, "metric_id": 1}
        )
        client.products.get_mapping_rule(10, 3)
        client.products.update_mapping_rule(10, 3, {"delta": 2})
        client.products.delete_mapping_rule(10, 3)

        assert rules[0].pattern == "/"
        assert created.delta == 1
        assert created.last is False
        assert adapter.form(1) == {"delta": "1", "http_method": "GET", "metric_id": "1", "pattern": "/"}
        assert adapter.path(2) == "/admin/api/services/10/proxy/mapping_rules/3.json"
        assert [r.method for r in adapter.requests] == ["GET", "POST", "GET", "PUT", "DELETE"]


class TestProductProxy:
    """Tests for proxy, policies and OIDC settings."""

    def test_get_proxy(self, make_client):
        """Test reading gateway settings."""
        body = {"proxy": {"service_id": 10, "endpoint": "https://api.example.com:443", "error_status_no_match": 404}}
        client, adapter = make_client((200, body))
        proxy = client.products.get_proxy(10)

        assert adapter.path() == "/admin/api/services/10/proxy.json"
        assert proxy.endpoint == "https://api.example.com:443"
        assert proxy.error_status_no_match == 404

    def test_update_proxy(self, make_client):
        """Test updating gateway settings."""
        client, adapter = make_client((200, {"proxy": {"endpoint": "https://prod.example.com"}}))
        proxy = client.products.update_proxy(10, {"endpoint": "https://prod.example.com"})

        assert adapter.last.method == "PUT"
        assert adapter.form() == {"endpoint": "https://prod.example.com"}
        assert proxy.endpoint == "https://prod.example.com"

    def test_deploy_proxy(self, make_client):
        """Test deploying gateway settings to staging."""
        client, adapter = make_client((201, {"proxy": {"sandbox_endpoint": "https://staging.example.com"}}))
        proxy = client.products.deploy_proxy(10)

        assert adapter.last.method == "POST"
        assert adapter.path() == "/admin/api/services/10/proxy/deploy.json"
        assert proxy.sandbox_endpoint == "https://staging.example.com"

    def test_get_policies(self, make_client):
        """Test reading the policy chain."""
        body = {"policies_config": [
            {"name": "apicast", "version": "builtin", "configuration": {"prop1": "value1"}, "enabled": True},
        ]}
        client, adapter = make_client((200, body))
        policies = client.products.get_policies(10)

        assert adapter.path() == "/admin/api/services/10/proxy/policies.json"
        assert policies.items == [
            PolicyConfig(name="apicast", version="builtin", configuration={"prop1": "value1"}, enabled=True)
        ]

    def test_update_policies(self, make_client):
        """Test replacing the policy chain round-trips the same chain."""
        chain = PolicyConfigList(items=[
            PolicyConfig(name="apicast", version="builtin", configuration={}, enabled=True),
        ])

        def handler(request):
            sent = parse_qs(request.body)["policies_config"][0]
            return 200, {"policies_config": json.loads(sent)}

        client, adapter = make_client(handler)
        result = client.products.update_policies(10, chain)

        assert adapter.last.method == "PUT"
        assert json.loads(adapter.form()["policies_config"]) == [
            {"name": "apicast", "version": "builtin", "configuration": {}, "enabled": True}
        ]
        assert result == chain

    def test_policies_ignore_formatting(self, make_client):
        """Test that chains differing only in whitespace decode equal."""
        compact = '{"policies_config": [{"name": "apicast", "configuration": {"a": "1", "b": "2"}}]}'
        spaced = '{"policies_config": [{"name": "apicast", "configuration": {\n  "a":     "1",\n "b": "2"}}]}'

        client_a, _ = make_client((200, compact))
        client_b, _ = make_client((200, spaced))

        assert client_a.products.get_policies(1) == client_b.products.get_policies(1)

    def test_oidc_configuration(self, make_client):
        """Test reading and patching OIDC flows."""
        body = {"oidc_configuration": {
            "id": 1,
            "standard_flow_enabled": True,
            "implicit_flow_enabled": False,
            "service_accounts_enabled": False,
            "direct_access_grants_enabled": True,
        }}
        client, adapter = make_client((200, body))

        config = client.products.get_oidc_configuration(10)
        client.products.update_oidc_configuration(
            10, OIDCConfiguration(standard_flow_enabled=False, implicit_flow_enabled=True)
        )

        assert config.direct_access_grants_enabled is True
        assert adapter.path(0) == "/admin/api/services/10/proxy/oidc_configuration.json"
        assert adapter.last.method == "PATCH"
        assert adapter.form() == {"implicit_flow_enabled": "true", "standard_flow_enabled": "false"}


class TestBackendUsages:
    """Tests for backend APIs bound to a product."""

    def test_list(self, make_client):
        """Test the bare array body of the usage list."""
        body = [
            {"backend_usage": {"id": 1, "path": "/v1", "service_id": 10, "backend_id": 7}},
            {"backend_usage": {"id": 2, "path": "/v2", "service_id": 10, "backend_id": 8}},
        ]
        client, adapter = make_client((200, body))
        usages = client.products.list_backend_usages(10)

        assert adapter.path() == "/admin/api/services/10/backend_usages.json"
        assert [u.backend_api_id for u in usages] == [7, 8]

    def test_create(self, make_client):
        """Test binding a backend."""
        client, adapter = make_client((201, {"backend_usage": {"id": 1, "path": "/v1", "backend_id": 7}}))
        usage = client.products.create_backend_usage(10, 7, "/v1")

        assert adapter.last.method == "POST"
        assert adapter.form() == {"backend_api_id": "7", "path": "/v1"}
        assert usage.path == "/v1"

    @pytest.mark.parametrize("call, method", [
        (lambda c: c.products.get_backend_usage(10, 1), "GET"),
        (lambda c: c.products.update_backend_usage(10, 1, {"path": "/v3"}), "PUT"),
        (lambda c: c.products.delete_backend_usage(10, 1), "DELETE"),
    ])
    def test_resource(self, make_client, call, method):
        """Test single-usage operations."""
        client, adapter = make_client((200, {"backend_usage": {"id": 1}}))
        call(client)

        assert adapter.last.method == method
        assert adapter.path() == "/admin/api/services/10/backend_usages/1.json"
