"""
Backend APIs API - Backends and their metrics, methods and mapping rules.
"""

from typing import Optional

from ._http import HTTPClient, Params, build_path, collect_pages, page_params
from .models import (
    BackendApi,
    BackendApiList,
    MappingRule,
    MappingRuleList,
    Method,
    MethodList,
    Metric,
    MetricList,
)

BACKENDS_PER_PAGE = 500

BACKEND_LIST = "/admin/api/backend_apis.json"
BACKEND_RESOURCE = "/admin/api/backend_apis/{}.json"
BACKEND_METRIC_LIST = "/admin/api/backend_apis/{}/metrics.json"
BACKEND_METRIC_RESOURCE = "/admin/api/backend_apis/{}/metrics/{}.json"
BACKEND_METHOD_LIST = "/admin/api/backend_apis/{}/metrics/{}/methods.json"
BACKEND_METHOD_RESOURCE = "/admin/api/backend_apis/{}/metrics/{}/methods/{}.json"
BACKEND_MAPPING_RULE_LIST = "/admin/api/backend_apis/{}/mapping_rules.json"
BACKEND_MAPPING_RULE_RESOURCE = "/admin/api/backend_apis/{}/mapping_rules/{}.json"


class BackendApisAPI:
    """
    API for backend APIs.

    Handles:
    - Backend CRUD (paged listing)
    - Metrics, methods and mapping rules of a backend
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Backend APIs API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    # ========== Backends ==========

    def list(self, page: Optional[int] = None, per_page: Optional[int] = None) -> BackendApiList:
        """
        List backend APIs.

        Args:
            page: Page to fetch. With ``per_page``, disables the full walk.
            per_page: Page size for a single-page fetch

        Returns:
            One page when either argument is given, otherwise every backend
        """
        if page is not None or per_page is not None:
            return self._list_page(page, per_page)
        return BackendApiList(items=collect_pages(self._list_page, BACKENDS_PER_PAGE))

    def _list_page(self, page: Optional[int], per_page: Optional[int]) -> BackendApiList:
        return self._http.request("GET", BACKEND_LIST, BackendApiList, params=page_params(page, per_page))

    def get(self, backend_id: int) -> BackendApi:
        return self._http.request("GET", build_path(BACKEND_RESOURCE, backend_id), BackendApi)

    def create(self, params: Params) -> BackendApi:
        """
        Create a backend API.

        Args:
            params: Backend fields, ``name`` and ``private_endpoint`` are required
        """
        return self._http.request("POST", BACKEND_LIST, BackendApi, data=params, expected_status=201)

    def update(self, backend_id: int, params: Params) -> BackendApi:
        return self._http.request("PUT", build_path(BACKEND_RESOURCE, backend_id), BackendApi, data=params)

    def delete(self, backend_id: int) -> None:
        self._http.request("DELETE", build_path(BACKEND_RESOURCE, backend_id))

    # ========== Metrics ==========

    def list_metrics(self, backend_id: int) -> MetricList:
        return self._http.request("GET", build_path(BACKEND_METRIC_LIST, backend_id), MetricList)

    def get_metric(self, backend_id: int, metric_id: int) -> Metric:
        return self._http.request("GET", build_path(BACKEND_METRIC_RESOURCE, backend_id, metric_id), Metric)

    def create_metric(self, backend_id: int, params: Params) -> Metric:
        return self._http.request(
            "POST", build_path(BACKEND_METRIC_LIST, backend_id), Metric, data=params, expected_status=201
        )

    def update_metric(self, backend_id: int, metric_id: int, params: Params) -> Metric:
        return self._http.request(
            "PUT", build_path(BACKEND_METRIC_RESOURCE, backend_id, metric_id), Metric, data=params
        )

    def delete_metric(self, backend_id: int, metric_id: int) -> None:
        self._http.request("DELETE", build_path(BACKEND_METRIC_RESOURCE, backend_id, metric_id))

    # ========== Methods ==========

    def list_methods(self, backend_id: int, hits_id: int) -> MethodList:
        """List methods under the backend's ``hits`` metric."""
        return self._http.request("GET", build_path(BACKEND_METHOD_LIST, backend_id, hits_id), MethodList)

    def get_method(self, backend_id: int, hits_id: int, method_id: int) -> Method:
        return self._http.request(
            "GET", build_path(BACKEND_METHOD_RESOURCE, backend_id, hits_id, method_id), Method
        )

    def create_method(self, backend_id: int, hits_id: int, params: Params) -> Method:
        return self._http.request(
            "POST",
            build_path(BACKEND_METHOD_LIST, backend_id, hits_id),
            Method,
            data=params,
            expected_status=201,
        )

    def update_method(self, backend_id: int, hits_id: int, method_id: int, params: Params) -> Method:
        return self._http.request(
            "PUT", build_path(BACKEND_METHOD_RESOURCE, backend_id, hits_id, method_id), Method, data=params
        )

    def delete_method(self, backend_id: int, hits_id: int, method_id: int) -> None:
        self._http.request("DELETE", build_path(BACKEND_METHOD_RESOURCE, backend_id, hits_id, method_id))

    # ========== Mapping rules ==========

    def list_mapping_rules(self, backend_id: int) -> MappingRuleList:
        return self._http.request(
            "GET", build_path(BACKEND_MAPPING_RULE_LIST, backend_id), MappingRuleList
        )

    def get_mapping_rule(self, backend_id: int, rule_id: int) -> MappingRule:
        return self._http.request(
            "GET", build_path(BACKEND_MAPPING_RULE_RESOURCE, backend_id, rule_id), MappingRule
        )

    def create_mapping_rule(self, backend_id: int, params: Params) -> MappingRule:
        return self._http.request(
            "POST",
            build_path(BACKEND_MAPPING_RULE_LIST, backend_id),
            MappingRule,
            data=params,
            expected_status=201,
        )

    def update_mapping_rule(self, backend_id: int, rule_id: int, params: Params) -> MappingRule:
        return self._http.request(
            "PUT", build_path(BACKEND_MAPPING_RULE_RESOURCE, backend_id, rule_id), MappingRule, data=params
        )

    def delete_mapping_rule(self, backend_id: int, rule_id: int) -> None:
        self._http.request("DELETE", build_path(BACKEND_MAPPING_RULE_RESOURCE, backend_id, rule_id))
