"""
Services API - Legacy XML endpoints for services, metrics, mapping rules and proxy.

Prefer :mod:`porta_client.api.products` for new code. These calls talk the
older XML generation of the API and take identifiers as strings.
"""

from typing import Optional

from ._http import XML, HTTPClient, Params, build_path
from .models import MappingRule, MappingRuleList, Metric, MetricList, Product, ProductList, Proxy

SERVICE_LIST = "/admin/api/services.xml"
SERVICE_RESOURCE = "/admin/api/services/{}.xml"
METRIC_LIST = "/admin/api/services/{}/metrics.xml"
METRIC_RESOURCE = "/admin/api/services/{}/metrics/{}.xml"
MAPPING_RULE_LIST = "/admin/api/services/{}/proxy/mapping_rules.xml"
MAPPING_RULE_RESOURCE = "/admin/api/services/{}/proxy/mapping_rules/{}.xml"
PROXY_RESOURCE = "/admin/api/services/{}/proxy.xml"


class ServicesAPI:
    """
    API for services over the XML generation.

    Handles:
    - Service listing, creation, updates and deletion
    - Service metrics
    - Proxy mapping rules
    - Proxy settings
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Services API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    # ========== Services ==========

    def list(self) -> ProductList:
        return self._http.request("GET", SERVICE_LIST, ProductList, wire=XML)

    def create(self, name: str) -> Product:
        return self._http.request(
            "POST", SERVICE_LIST, Product, wire=XML, data={"name": name}, expected_status=201
        )

    def update(self, service_id: str, params: Params) -> Product:
        return self._http.request(
            "PUT", build_path(SERVICE_RESOURCE, service_id), Product, wire=XML, data=params
        )

    def delete(self, service_id: str) -> None:
        self._http.request("DELETE", build_path(SERVICE_RESOURCE, service_id), wire=XML)

    # ========== Metrics ==========

    def list_metrics(self, service_id: str) -> MetricList:
        return self._http.request("GET", build_path(METRIC_LIST, service_id), MetricList, wire=XML)

    def create_metric(self, service_id: str, friendly_name: str, unit: str) -> Metric:
        """
        Create a metric on a service.

        Args:
            service_id: Service ID
            friendly_name: Descriptive name; the system name is derived from it
            unit: Unit of measure, e.g. ``hit``
        """
        data = {"friendly_name": friendly_name, "unit": unit}
        return self._http.request(
            "POST", build_path(METRIC_LIST, service_id), Metric, wire=XML, data=data, expected_status=201
        )

    def update_metric(self, service_id: str, metric_id: str, params: Params) -> Metric:
        return self._http.request(
            "PUT", build_path(METRIC_RESOURCE, service_id, metric_id), Metric, wire=XML, data=params
        )

    def delete_metric(self, service_id: str, metric_id: str) -> None:
        self._http.request("DELETE", build_path(METRIC_RESOURCE, service_id, metric_id), wire=XML)

    # ========== Mapping rules ==========

    def list_mapping_rules(self, service_id: str) -> MappingRuleList:
        return self._http.request(
            "GET", build_path(MAPPING_RULE_LIST, service_id), MappingRuleList, wire=XML
        )

    def create_mapping_rule(
        self,
        service_id: str,
        http_method: str,
        pattern: str,
        delta: int,
        metric_id: str,
        params: Optional[Params] = None,
    ) -> MappingRule:
        """
        Map requests matching ``http_method`` and ``pattern`` to a metric.

        Args:
            service_id: Service ID
            http_method: HTTP verb to match
            pattern: Path pattern, e.g. ``/v1/word/{word}.json``
            delta: Increment of the metric per matching request
            metric_id: Metric to increment
            params: Extra fields (``position``, ``last``)
        """
        data = dict(params or {})
        data["http_method"] = http_method
        data["pattern"] = pattern
        data["delta"] = delta
        data["metric_id"] = metric_id
        return self._http.request(
            "POST",
            build_path(MAPPING_RULE_LIST, service_id),
            MappingRule,
            wire=XML,
            data=data,
            expected_status=201,
        )

    def update_mapping_rule(self, service_id: str, rule_id: str, params: Params) -> MappingRule:
        return self._http.request(
            "PUT", build_path(MAPPING_RULE_RESOURCE, service_id, rule_id), MappingRule, wire=XML, data=params
        )

    def delete_mapping_rule(self, service_id: str, rule_id: str) -> None:
        self._http.request("DELETE", build_path(MAPPING_RULE_RESOURCE, service_id, rule_id), wire=XML)

    # ========== Proxy ==========

    def read_proxy(self, service_id: str) -> Proxy:
        return self._http.request("GET", build_path(PROXY_RESOURCE, service_id), Proxy, wire=XML)

    def update_proxy(self, service_id: str, params: Params) -> Proxy:
        return self._http.request(
            "PUT", build_path(PROXY_RESOURCE, service_id), Proxy, wire=XML, data=params
        )
