"""
Proxy Configs API - Deployed gateway configuration snapshots.
"""

from typing import Optional

from ._http import HTTPClient, build_path, collect_pages, page_params
from .models import ProxyConfig, ProxyConfigList

PROXY_CONFIGS_PER_PAGE = 500

PROXY_CONFIG_LIST = "/admin/api/services/{}/proxy/configs/{}.json"
PROXY_CONFIG_RESOURCE = "/admin/api/services/{}/proxy/configs/{}/{}.json"
PROXY_CONFIG_LATEST = "/admin/api/services/{}/proxy/configs/{}/latest.json"
PROXY_CONFIG_PROMOTE = "/admin/api/services/{}/proxy/configs/{}/{}/promote.json"
ACCOUNT_PROXY_CONFIG_LIST = "/admin/api/account/proxy_configs/{}.json"


class ProxyConfigsAPI:
    """
    API for proxy configs.

    Every deployment of a product's gateway settings produces a new
    versioned proxy config in an environment (``sandbox`` or ``production``).
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Proxy Configs API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def get(self, product_id: int, environment: str, version: int) -> ProxyConfig:
        """Get one version of a product's proxy config."""
        return self._http.request(
            "GET", build_path(PROXY_CONFIG_RESOURCE, product_id, environment, version), ProxyConfig
        )

    def latest(self, product_id: int, environment: str) -> ProxyConfig:
        """Get the most recent proxy config of an environment."""
        return self._http.request(
            "GET", build_path(PROXY_CONFIG_LATEST, product_id, environment), ProxyConfig
        )

    def list(self, product_id: int, environment: str) -> ProxyConfigList:
        """List every proxy config version of a product in an environment."""
        return self._http.request(
            "GET", build_path(PROXY_CONFIG_LIST, product_id, environment), ProxyConfigList
        )

    def promote(self, product_id: int, environment: str, version: int, to: str) -> ProxyConfig:
        """
        Promote a proxy config to another environment.

        Args:
            product_id: Product ID
            environment: Environment the version lives in
            version: Version to promote
            to: Target environment
        """
        return self._http.request(
            "POST",
            build_path(PROXY_CONFIG_PROMOTE, product_id, environment, version),
            ProxyConfig,
            data={"to": to},
            expected_status=201,
        )

    def list_for_account(
        self,
        environment: str,
        version: Optional[str] = None,
        host: Optional[str] = None,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
    ) -> ProxyConfigList:
        """
        List proxy configs of every product of the tenant.

        Args:
            environment: ``sandbox`` or ``production``
            version: Only configs of this version (``latest`` for the newest)
            host: Only configs serving this public host
            page: Page to fetch. With ``per_page``, disables the full walk.
            per_page: Page size for a single-page fetch

        Returns:
            One page when either paging argument is given, otherwise every config
        """
        filters = {}
        if version is not None:
            filters["version"] = version
        if host is not None:
            filters["host"] = host

        def fetch_page(page: Optional[int], per_page: Optional[int]) -> ProxyConfigList:
            params = dict(filters)
            params.update(page_params(page, per_page))
            return self._http.request(
                "GET", build_path(ACCOUNT_PROXY_CONFIG_LIST, environment), ProxyConfigList, params=params
            )

        if page is not None or per_page is not None:
            return fetch_page(page, per_page)
        return ProxyConfigList(items=collect_pages(fetch_page, PROXY_CONFIGS_PER_PAGE))
