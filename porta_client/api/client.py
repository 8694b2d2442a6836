"""
3scale API Client - Main facade for all API operations.

Groups the resource families into domain-specific sub-clients that share a
single HTTP client.
"""

from typing import Optional

import requests

from ..config import ENV_ACCESS_TOKEN, ENV_ADMIN_URL, PortaConfig, get_config
from ..exceptions import ConfigurationError
from ._http import AdminPortal, HTTPClient
from .accounts import AccountsAPI
from .activedocs import ActiveDocsAPI
from .application_plans import ApplicationPlansAPI
from .applications import ApplicationsAPI
from .backend_apis import BackendApisAPI
from .policy_registry import PolicyRegistryAPI
from .products import ProductsAPI
from .proxy_configs import ProxyConfigsAPI
from .services import ServicesAPI
from .tenants import TenantsAPI
from .users import UsersAPI


class ThreeScaleClient:
    """
    Client for the 3scale Account Management API.

    Usage:
        portal = AdminPortal.from_url("https://example-admin.3scale.net")
        with ThreeScaleClient(portal, "my-access-token") as client:
            products = client.products.list()
            plans = client.application_plans.list(products[0].id)

    The portal, credential and transport are fixed at construction.
    """

    def __init__(
        self,
        portal: AdminPortal,
        credential: str,
        session: Optional[requests.Session] = None,
        *,
        timeout: Optional[float] = None,
        verify_ssl: bool = True,
    ):
        """
        Initialize the API client.

        Args:
            portal: Admin portal to talk to
            credential: Access token or provider key
            session: Transport. A plain session is created if not provided.
            timeout: Seconds to wait for the server
            verify_ssl: Whether to verify TLS certificates
        """
        self._http = HTTPClient(portal, credential, session, timeout=timeout, verify_ssl=verify_ssl)

        # Domain-specific API modules
        self.accounts = AccountsAPI(self._http)
        self.users = UsersAPI(self._http)
        self.products = ProductsAPI(self._http)
        self.backend_apis = BackendApisAPI(self._http)
        self.application_plans = ApplicationPlansAPI(self._http)
        self.activedocs = ActiveDocsAPI(self._http)
        self.policy_registry = PolicyRegistryAPI(self._http)
        self.proxy_configs = ProxyConfigsAPI(self._http)
        self.tenants = TenantsAPI(self._http)
        self.services = ServicesAPI(self._http)
        self.applications = ApplicationsAPI(self._http)

    @classmethod
    def from_config(
        cls, config: PortaConfig, session: Optional[requests.Session] = None
    ) -> "ThreeScaleClient":
        """
        Build a client from settings.

        Raises:
            ConfigurationError: If the admin portal URL is invalid
        """
        return cls(
            AdminPortal.from_url(config.admin_url),
            config.access_token,
            session,
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
        )

    @property
    def portal(self) -> AdminPortal:
        return self._http.portal

    @property
    def base_url(self) -> str:
        """Get the base URL for API requests."""
        return self._http.base_url

    @property
    def session(self) -> requests.Session:
        return self._http.session

    # ========== Context Manager ==========

    def close(self) -> None:
        """Close the HTTP session."""
        self._http.close()

    def __enter__(self) -> "ThreeScaleClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# Convenience function for quick API access
def get_client(config: Optional[PortaConfig] = None) -> ThreeScaleClient:
    """
    Get an API client instance.

    Args:
        config: Optional settings. Read from the environment if not provided.

    Returns:
        ThreeScaleClient instance

    Raises:
        ConfigurationError: If the admin portal URL or token is missing or invalid
    """
    config = config or get_config()
    if not config.is_configured():
        raise ConfigurationError(
            "Admin portal URL and access token are required",
            details=f"Set {ENV_ADMIN_URL} and {ENV_ACCESS_TOKEN}",
        )
    return ThreeScaleClient.from_config(config)
