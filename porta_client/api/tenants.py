"""
Tenants API - Provider accounts, through the master portal.

These calls only succeed against the master admin portal with a master
credential.
"""

from typing import Optional

from ._http import HTTPClient, Params, build_path
from .models import Tenant

TENANT_CREATE = "/master/api/providers.json"
TENANT_RESOURCE = "/master/api/providers/{}.json"


class TenantsAPI:
    """API for tenants (provider accounts)."""

    def __init__(self, http: HTTPClient):
        """
        Initialize Tenants API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def create(self, org_name: str, username: str, email: str, password: str) -> Tenant:
        """
        Create a tenant with its admin user.

        Returns:
            The new provider account and the admin access token
        """
        data = {
            "org_name": org_name,
            "username": username,
            "email": email,
            "password": password,
        }
        return self._http.request("POST", TENANT_CREATE, Tenant, data=data, expected_status=201)

    def show(self, tenant_id: int) -> Tenant:
        return self._http.request("GET", build_path(TENANT_RESOURCE, tenant_id), Tenant)

    def update(self, tenant_id: int, params: Optional[Params] = None) -> Tenant:
        return self._http.request("PUT", build_path(TENANT_RESOURCE, tenant_id), Tenant, data=params)

    def delete(self, tenant_id: int) -> None:
        """Schedule a tenant for deletion."""
        self._http.request("DELETE", build_path(TENANT_RESOURCE, tenant_id))
