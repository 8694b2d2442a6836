"""
Products API - Products and everything configured under them.
"""

import json
from typing import Optional

from ._http import HTTPClient, Params, build_path, collect_pages, page_params
from .models import (
    BackendApiUsage,
    BackendApiUsageList,
    MappingRule,
    MappingRuleList,
    Method,
    MethodList,
    Metric,
    MetricList,
    OIDCConfiguration,
    PolicyConfigList,
    Product,
    ProductList,
    Proxy,
)

PRODUCTS_PER_PAGE = 500

PRODUCT_LIST = "/admin/api/services.json"
PRODUCT_RESOURCE = "/admin/api/services/{}.json"
PRODUCT_METRIC_LIST = "/admin/api/services/{}/metrics.json"
PRODUCT_METRIC_RESOURCE = "/admin/api/services/{}/metrics/{}.json"
PRODUCT_METHOD_LIST = "/admin/api/services/{}/metrics/{}/methods.json"
PRODUCT_METHOD_RESOURCE = "/admin/api/services/{}/metrics/{}/methods/{}.json"
PRODUCT_MAPPING_RULE_LIST = "/admin/api/services/{}/proxy/mapping_rules.json"
PRODUCT_MAPPING_RULE_RESOURCE = "/admin/api/services/{}/proxy/mapping_rules/{}.json"
PROXY_RESOURCE = "/admin/api/services/{}/proxy.json"
PROXY_DEPLOY = "/admin/api/services/{}/proxy/deploy.json"
POLICIES_RESOURCE = "/admin/api/services/{}/proxy/policies.json"
OIDC_RESOURCE = "/admin/api/services/{}/proxy/oidc_configuration.json"
BACKEND_USAGE_LIST = "/admin/api/services/{}/backend_usages.json"
BACKEND_USAGE_RESOURCE = "/admin/api/services/{}/backend_usages/{}.json"


class ProductsAPI:
    """
    API for products (services) of the tenant.

    Handles:
    - Product CRUD (paged listing)
    - Metrics, methods and mapping rules of a product
    - Gateway proxy settings, deployment and policy chain
    - OIDC flow settings
    - Backend usages (backend APIs bound to the product)
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Products API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    # ========== Products ==========

    def list(self, page: Optional[int] = None, per_page: Optional[int] = None) -> ProductList:
        """
        List products.

        Args:
            page: Page to fetch. With ``per_page``, disables the full walk.
            per_page: Page size for a single-page fetch

        Returns:
            One page when either argument is given, otherwise every product
        """
        if page is not None or per_page is not None:
            return self._list_page(page, per_page)
        return ProductList(items=collect_pages(self._list_page, PRODUCTS_PER_PAGE))

    def _list_page(self, page: Optional[int], per_page: Optional[int]) -> ProductList:
        return self._http.request("GET", PRODUCT_LIST, ProductList, params=page_params(page, per_page))

    def get(self, product_id: int) -> Product:
        """Get a product by ID."""
        return self._http.request("GET", build_path(PRODUCT_RESOURCE, product_id), Product)

    def create(self, name: str, params: Optional[Params] = None) -> Product:
        """
        Create a product.

        Args:
            name: Product name
            params: Extra fields (``system_name``, ``description``, ...)
        """
        data = dict(params or {})
        data["name"] = name
        return self._http.request("POST", PRODUCT_LIST, Product, data=data, expected_status=201)

    def update(self, product_id: int, params: Optional[Params] = None) -> Product:
        """Update a product."""
        return self._http.request("PUT", build_path(PRODUCT_RESOURCE, product_id), Product, data=params)

    def delete(self, product_id: int) -> None:
        """Delete a product."""
        self._http.request("DELETE", build_path(PRODUCT_RESOURCE, product_id))

    # ========== Metrics ==========

    def list_metrics(self, product_id: int) -> MetricList:
        """List metrics of a product, including the built-in ``hits`` metric."""
        return self._http.request("GET", build_path(PRODUCT_METRIC_LIST, product_id), MetricList)

    def get_metric(self, product_id: int, metric_id: int) -> Metric:
        return self._http.request("GET", build_path(PRODUCT_METRIC_RESOURCE, product_id, metric_id), Metric)

    def create_metric(self, product_id: int, params: Params) -> Metric:
        """
        Create a metric.

        Args:
            product_id: Product ID
            params: Metric fields, ``friendly_name`` and ``unit`` are required
        """
        return self._http.request(
            "POST", build_path(PRODUCT_METRIC_LIST, product_id), Metric, data=params, expected_status=201
        )

    def update_metric(self, product_id: int, metric_id: int, params: Params) -> Metric:
        return self._http.request(
            "PUT", build_path(PRODUCT_METRIC_RESOURCE, product_id, metric_id), Metric, data=params
        )

    def delete_metric(self, product_id: int, metric_id: int) -> None:
        self._http.request("DELETE", build_path(PRODUCT_METRIC_RESOURCE, product_id, metric_id))

    # ========== Methods ==========

    def list_methods(self, product_id: int, hits_id: int) -> MethodList:
        """
        List methods of a product.

        Args:
            product_id: Product ID
            hits_id: ID of the product's ``hits`` metric, the parent of every method
        """
        return self._http.request("GET", build_path(PRODUCT_METHOD_LIST, product_id, hits_id), MethodList)

    def get_method(self, product_id: int, hits_id: int, method_id: int) -> Method:
        return self._http.request(
            "GET", build_path(PRODUCT_METHOD_RESOURCE, product_id, hits_id, method_id), Method
        )

    def create_method(self, product_id: int, hits_id: int, params: Params) -> Method:
        return self._http.request(
            "POST",
            build_path(PRODUCT_METHOD_LIST, product_id, hits_id),
            Method,
            data=params,
            expected_status=201,
        )

    def update_method(self, product_id: int, hits_id: int, method_id: int, params: Params) -> Method:
        return self._http.request(
            "PUT", build_path(PRODUCT_METHOD_RESOURCE, product_id, hits_id, method_id), Method, data=params
        )

    def delete_method(self, product_id: int, hits_id: int, method_id: int) -> None:
        self._http.request("DELETE", build_path(PRODUCT_METHOD_RESOURCE, product_id, hits_id, method_id))

    # ========== Mapping rules ==========

    def list_mapping_rules(self, product_id: int) -> MappingRuleList:
        return self._http.request(
            "GET", build_path(PRODUCT_MAPPING_RULE_LIST, product_id), MappingRuleList
        )

    def get_mapping_rule(self, product_id: int, rule_id: int) -> MappingRule:
        return self._http.request(
            "GET", build_path(PRODUCT_MAPPING_RULE_RESOURCE, product_id, rule_id), MappingRule
        )

    def create_mapping_rule(self, product_id: int, params: Params) -> MappingRule:
        """
        Create a mapping rule.

        Args:
            product_id: Product ID
            params: ``http_method``, ``pattern``, ``delta`` and ``metric_id``
        """
        return self._http.request(
            "POST",
            build_path(PRODUCT_MAPPING_RULE_LIST, product_id),
            MappingRule,
            data=params,
            expected_status=201,
        )

    def update_mapping_rule(self, product_id: int, rule_id: int, params: Params) -> MappingRule:
        return self._http.request(
            "PUT", build_path(PRODUCT_MAPPING_RULE_RESOURCE, product_id, rule_id), MappingRule, data=params
        )

    def delete_mapping_rule(self, product_id: int, rule_id: int) -> None:
        self._http.request("DELETE", build_path(PRODUCT_MAPPING_RULE_RESOURCE, product_id, rule_id))

    # ========== Proxy ==========

    def get_proxy(self, product_id: int) -> Proxy:
        """Get the gateway settings of a product."""
        return self._http.request("GET", build_path(PROXY_RESOURCE, product_id), Proxy)

    def update_proxy(self, product_id: int, params: Params) -> Proxy:
        """Update the gateway settings of a product."""
        return self._http.request("PUT", build_path(PROXY_RESOURCE, product_id), Proxy, data=params)

    def deploy_proxy(self, product_id: int) -> Proxy:
        """Promote the current gateway settings to the staging environment."""
        return self._http.request("POST", build_path(PROXY_DEPLOY, product_id), Proxy, expected_status=201)

    # ========== Policies ==========

    def get_policies(self, product_id: int) -> PolicyConfigList:
        """Get the policy chain of a product."""
        return self._http.request("GET", build_path(POLICIES_RESOURCE, product_id), PolicyConfigList)

    def update_policies(self, product_id: int, policies: PolicyConfigList) -> PolicyConfigList:
        """
        Replace the policy chain of a product.

        The chain travels as one JSON-encoded ``policies_config`` form field.
        """
        chain = json.dumps([policy.to_dict() for policy in policies])
        return self._http.request(
            "PUT",
            build_path(POLICIES_RESOURCE, product_id),
            PolicyConfigList,
            data={"policies_config": chain},
        )

    # ========== OIDC ==========

    def get_oidc_configuration(self, product_id: int) -> OIDCConfiguration:
        return self._http.request("GET", build_path(OIDC_RESOURCE, product_id), OIDCConfiguration)

    def update_oidc_configuration(self, product_id: int, config: OIDCConfiguration) -> OIDCConfiguration:
        """Enable or disable OIDC flows; fields left as None are not sent."""
        return self._http.request(
            "PATCH", build_path(OIDC_RESOURCE, product_id), OIDCConfiguration, data=config.to_dict()
        )

    # ========== Backend usages ==========

    def list_backend_usages(self, product_id: int) -> BackendApiUsageList:
        return self._http.request("GET", build_path(BACKEND_USAGE_LIST, product_id), BackendApiUsageList)

    def get_backend_usage(self, product_id: int, usage_id: int) -> BackendApiUsage:
        return self._http.request(
            "GET", build_path(BACKEND_USAGE_RESOURCE, product_id, usage_id), BackendApiUsage
        )

    def create_backend_usage(
        self,
        product_id: int,
        backend_api_id: int,
        path: str,
        params: Optional[Params] = None,
    ) -> BackendApiUsage:
        """
        Bind a backend API to a product.

        Args:
            product_id: Product ID
            backend_api_id: Backend API to bind
            path: Public path the backend is served under, e.g. ``/v1``
            params: Extra fields
        """
        data = dict(params or {})
        data["backend_api_id"] = backend_api_id
        data["path"] = path
        return self._http.request(
            "POST", build_path(BACKEND_USAGE_LIST, product_id), BackendApiUsage, data=data, expected_status=201
        )

    def update_backend_usage(self, product_id: int, usage_id: int, params: Params) -> BackendApiUsage:
        return self._http.request(
            "PUT", build_path(BACKEND_USAGE_RESOURCE, product_id, usage_id), BackendApiUsage, data=params
        )

    def delete_backend_usage(self, product_id: int, usage_id: int) -> None:
        self._http.request("DELETE", build_path(BACKEND_USAGE_RESOURCE, product_id, usage_id))
