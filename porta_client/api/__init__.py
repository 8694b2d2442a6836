"""
3scale API Client Package.

This package provides a modular client for the 3scale Account Management API.

Structure:
    - client.py: Main ThreeScaleClient facade
    - _http.py: Endpoint resolution, auth, request building and response decoding
    - models.py: Typed resources and list results
    - accounts.py, users.py: Developer accounts and their users
    - products.py: Products with metrics, methods, mapping rules, proxy, policies, OIDC, backend usages
    - backend_apis.py: Backend APIs with metrics, methods, mapping rules
    - application_plans.py: Plans, limits and pricing rules
    - activedocs.py, policy_registry.py, proxy_configs.py, tenants.py
    - services.py, applications.py: XML generation endpoints

Usage:
    from porta_client.api import AdminPortal, ThreeScaleClient, get_client

    client = ThreeScaleClient(AdminPortal.from_url("https://example-admin.3scale.net"), "token")
    backends = client.backend_apis.list()
"""

from .client import ThreeScaleClient, get_client
from ._http import JSON, XML, AdminPortal, AuthStyle, HTTPClient, collect_pages
from .accounts import ACCOUNTS_PER_PAGE, AccountsAPI
from .activedocs import ActiveDocsAPI
from .application_plans import ApplicationPlansAPI
from .applications import ApplicationsAPI
from .backend_apis import BACKENDS_PER_PAGE, BackendApisAPI
from .policy_registry import PolicyRegistryAPI
from .products import PRODUCTS_PER_PAGE, ProductsAPI
from .proxy_configs import PROXY_CONFIGS_PER_PAGE, ProxyConfigsAPI
from .services import ServicesAPI
from .tenants import TenantsAPI
from .users import UsersAPI

__all__ = [
    # Main client
    "ThreeScaleClient",
    "get_client",
    # HTTP layer
    "AdminPortal",
    "AuthStyle",
    "HTTPClient",
    "JSON",
    "XML",
    "collect_pages",
    # Page sizes
    "ACCOUNTS_PER_PAGE",
    "BACKENDS_PER_PAGE",
    "PRODUCTS_PER_PAGE",
    "PROXY_CONFIGS_PER_PAGE",
    # Domain APIs
    "AccountsAPI",
    "ActiveDocsAPI",
    "ApplicationPlansAPI",
    "ApplicationsAPI",
    "BackendApisAPI",
    "PolicyRegistryAPI",
    "ProductsAPI",
    "ProxyConfigsAPI",
    "ServicesAPI",
    "TenantsAPI",
    "UsersAPI",
]
