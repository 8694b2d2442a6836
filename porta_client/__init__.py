"""
Porta Client - Python client for the 3scale Account Management API.

Usage:
    from porta_client import AdminPortal, ThreeScaleClient

    portal = AdminPortal.from_url("https://example-admin.3scale.net")
    client = ThreeScaleClient(portal, "my-access-token")
    products = client.products.list()
"""

__version__ = "0.9.0"
__author__ = "Porta Client Contributors"

from .api import AdminPortal, ThreeScaleClient, get_client  # noqa: E402
from .exceptions import (  # noqa: E402
    APIError,
    ConfigurationError,
    PortaClientError,
    RequestBuildError,
)

__all__ = [
    "__version__",
    "AdminPortal",
    "ThreeScaleClient",
    "get_client",
    "PortaClientError",
    "ConfigurationError",
    "RequestBuildError",
    "APIError",
]
