"""
Policy Registry API - Custom APIcast policies of the tenant.
"""

import json
from typing import Any, Dict, Optional

from ._http import HTTPClient, Params, build_path
from .models import APIcastPolicy, APIcastPolicyList

POLICY_REGISTRY = "/admin/api/registry/policies.json"
POLICY_RESOURCE = "/admin/api/registry/policies/{}.json"


class PolicyRegistryAPI:
    """
    API for the APIcast policy registry.

    A registered policy is identified by name and version, and carries the
    JSON schema of its configuration.
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Policy Registry API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def list(self) -> APIcastPolicyList:
        return self._http.request("GET", POLICY_REGISTRY, APIcastPolicyList)

    def get(self, policy_id: int) -> APIcastPolicy:
        return self._http.request("GET", build_path(POLICY_RESOURCE, policy_id), APIcastPolicy)

    def create(
        self,
        name: str,
        version: str,
        schema: Dict[str, Any],
        params: Optional[Params] = None,
    ) -> APIcastPolicy:
        """
        Register a custom policy.

        Args:
            name: Policy name
            version: Policy version, e.g. ``0.1``
            schema: Configuration JSON schema, sent JSON-encoded
            params: Extra fields
        """
        data = dict(params or {})
        data["name"] = name
        data["version"] = version
        data["schema"] = json.dumps(schema)
        return self._http.request("POST", POLICY_REGISTRY, APIcastPolicy, data=data, expected_status=201)

    def update(self, policy_id: int, params: Params) -> APIcastPolicy:
        """
        Update a registered policy.

        A ``schema`` given as a mapping is JSON-encoded before sending.
        """
        data = dict(params)
        if isinstance(data.get("schema"), dict):
            data["schema"] = json.dumps(data["schema"])
        return self._http.request("PUT", build_path(POLICY_RESOURCE, policy_id), APIcastPolicy, data=data)

    def delete(self, policy_id: int) -> None:
        self._http.request("DELETE", build_path(POLICY_RESOURCE, policy_id))
