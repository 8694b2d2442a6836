"""
Application Plans API - Plans of a product with their limits and pricing rules.
"""

from typing import Optional

from ._http import XML, HTTPClient, Params, build_path
from .models import (
    ApplicationPlan,
    ApplicationPlanList,
    Limit,
    LimitList,
    PricingRule,
    PricingRuleList,
)

PLAN_LIST = "/admin/api/services/{}/application_plans.json"
PLAN_RESOURCE = "/admin/api/services/{}/application_plans/{}.json"
PLAN_LIMIT_LIST = "/admin/api/application_plans/{}/limits.json"
PLAN_METRIC_LIMIT_LIST = "/admin/api/application_plans/{}/metrics/{}/limits.json"
PLAN_METRIC_LIMIT_RESOURCE = "/admin/api/application_plans/{}/metrics/{}/limits/{}.json"
PLAN_PRICING_RULE_LIST = "/admin/api/application_plans/{}/pricing_rules.json"
PLAN_METRIC_PRICING_RULE_LIST = "/admin/api/application_plans/{}/metrics/{}/pricing_rules.json"
PLAN_METRIC_PRICING_RULE_RESOURCE = "/admin/api/application_plans/{}/metrics/{}/pricing_rules/{}.json"
END_USER_PLAN_LIMIT_LIST = "/admin/api/end_user_plans/{}/metrics/{}/limits.xml"
END_USER_PLAN_LIMIT_RESOURCE = "/admin/api/end_user_plans/{}/metrics/{}/limits/{}.xml"


class ApplicationPlansAPI:
    """
    API for application plans.

    Handles:
    - Plan CRUD within a product
    - Usage limits per plan and metric
    - Pricing rules per plan and metric
    - Limits of end user plans (XML generation only)
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Application Plans API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    # ========== Plans ==========

    def list(self, product_id: int) -> ApplicationPlanList:
        """List application plans of a product."""
        return self._http.request("GET", build_path(PLAN_LIST, product_id), ApplicationPlanList)

    def get(self, product_id: int, plan_id: int) -> ApplicationPlan:
        return self._http.request("GET", build_path(PLAN_RESOURCE, product_id, plan_id), ApplicationPlan)

    def create(self, product_id: int, params: Params) -> ApplicationPlan:
        """
        Create an application plan.

        Args:
            product_id: Product ID
            params: Plan fields, ``name`` is required
        """
        return self._http.request(
            "POST", build_path(PLAN_LIST, product_id), ApplicationPlan, data=params, expected_status=201
        )

    def update(self, product_id: int, plan_id: int, params: Params) -> ApplicationPlan:
        return self._http.request(
            "PUT", build_path(PLAN_RESOURCE, product_id, plan_id), ApplicationPlan, data=params
        )

    def delete(self, product_id: int, plan_id: int) -> None:
        self._http.request("DELETE", build_path(PLAN_RESOURCE, product_id, plan_id))

    # ========== Limits ==========

    def list_limits(self, plan_id: int) -> LimitList:
        """List limits of a plan across all of its metrics."""
        return self._http.request("GET", build_path(PLAN_LIMIT_LIST, plan_id), LimitList)

    def list_metric_limits(self, plan_id: int, metric_id: int) -> LimitList:
        return self._http.request("GET", build_path(PLAN_METRIC_LIMIT_LIST, plan_id, metric_id), LimitList)

    def get_limit(self, plan_id: int, metric_id: int, limit_id: int) -> Limit:
        return self._http.request(
            "GET", build_path(PLAN_METRIC_LIMIT_RESOURCE, plan_id, metric_id, limit_id), Limit
        )

    def create_limit(self, plan_id: int, metric_id: int, params: Params) -> Limit:
        """
        Add a limit on a metric of a plan.

        Args:
            plan_id: Application plan ID
            metric_id: Metric or method ID
            params: ``period`` (minute, hour, day, week, month, year, eternity) and ``value``
        """
        return self._http.request(
            "POST",
            build_path(PLAN_METRIC_LIMIT_LIST, plan_id, metric_id),
            Limit,
            data=params,
            expected_status=201,
        )

    def update_limit(self, plan_id: int, metric_id: int, limit_id: int, params: Params) -> Limit:
        return self._http.request(
            "PUT", build_path(PLAN_METRIC_LIMIT_RESOURCE, plan_id, metric_id, limit_id), Limit, data=params
        )

    def delete_limit(self, plan_id: int, metric_id: int, limit_id: int) -> None:
        self._http.request("DELETE", build_path(PLAN_METRIC_LIMIT_RESOURCE, plan_id, metric_id, limit_id))

    # ========== Pricing rules ==========

    def list_pricing_rules(self, plan_id: int) -> PricingRuleList:
        return self._http.request("GET", build_path(PLAN_PRICING_RULE_LIST, plan_id), PricingRuleList)

    def list_metric_pricing_rules(self, plan_id: int, metric_id: int) -> PricingRuleList:
        return self._http.request(
            "GET", build_path(PLAN_METRIC_PRICING_RULE_LIST, plan_id, metric_id), PricingRuleList
        )

    def get_pricing_rule(self, plan_id: int, metric_id: int, rule_id: int) -> PricingRule:
        return self._http.request(
            "GET", build_path(PLAN_METRIC_PRICING_RULE_RESOURCE, plan_id, metric_id, rule_id), PricingRule
        )

    def create_pricing_rule(self, plan_id: int, metric_id: int, params: Params) -> PricingRule:
        """
        Add a pricing rule on a metric of a plan.

        Args:
            plan_id: Application plan ID
            metric_id: Metric or method ID
            params: ``min``, ``max`` and ``cost_per_unit``
        """
        return self._http.request(
            "POST",
            build_path(PLAN_METRIC_PRICING_RULE_LIST, plan_id, metric_id),
            PricingRule,
            data=params,
            expected_status=201,
        )

    def update_pricing_rule(
        self, plan_id: int, metric_id: int, rule_id: int, params: Optional[Params] = None
    ) -> PricingRule:
        return self._http.request(
            "PUT",
            build_path(PLAN_METRIC_PRICING_RULE_RESOURCE, plan_id, metric_id, rule_id),
            PricingRule,
            data=params,
        )

    def delete_pricing_rule(self, plan_id: int, metric_id: int, rule_id: int) -> None:
        self._http.request(
            "DELETE", build_path(PLAN_METRIC_PRICING_RULE_RESOURCE, plan_id, metric_id, rule_id)
        )

    # ========== End user plan limits ==========

    def list_end_user_plan_limits(self, end_user_plan_id: str, metric_id: str) -> LimitList:
        return self._http.request(
            "GET", build_path(END_USER_PLAN_LIMIT_LIST, end_user_plan_id, metric_id), LimitList, wire=XML
        )

    def create_end_user_plan_limit(
        self, end_user_plan_id: str, metric_id: str, period: str, value: int
    ) -> Limit:
        """
        Add a limit on a metric of an end user plan.

        Args:
            end_user_plan_id: End user plan ID
            metric_id: Metric or method ID
            period: minute, hour, day, week, month, year or eternity
            value: Maximum usage within the period
        """
        data = {
            "end_user_plan_id": end_user_plan_id,
            "metric_id": metric_id,
            "period": period,
            "value": value,
        }
        return self._http.request(
            "POST",
            build_path(END_USER_PLAN_LIMIT_LIST, end_user_plan_id, metric_id),
            Limit,
            wire=XML,
            data=data,
            expected_status=201,
        )

    def update_end_user_plan_limit(
        self, end_user_plan_id: str, metric_id: str, limit_id: str, params: Params
    ) -> Limit:
        return self._http.request(
            "PUT",
            build_path(END_USER_PLAN_LIMIT_RESOURCE, end_user_plan_id, metric_id, limit_id),
            Limit,
            wire=XML,
            data=params,
        )

    def delete_end_user_plan_limit(self, end_user_plan_id: str, metric_id: str, limit_id: str) -> None:
        self._http.request(
            "DELETE",
            build_path(END_USER_PLAN_LIMIT_RESOURCE, end_user_plan_id, metric_id, limit_id),
            wire=XML,
        )
