"""
Applications API - Developer applications (XML generation).
"""

from ._http import XML, AuthStyle, HTTPClient, build_path
from .models import Application

APPLICATION_CREATE = "/admin/api/accounts/{}/applications.xml"


class ApplicationsAPI:
    """API for applications of developer accounts."""

    def __init__(self, http: HTTPClient):
        """
        Initialize Applications API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def create(self, account_id: str, plan_id: str, name: str, description: str) -> Application:
        """
        Create an application subscribed to a plan.

        The credential is sent as the ``access_token`` form field.

        Args:
            account_id: Developer account that owns the application
            plan_id: Application plan to subscribe to
            name: Application name
            description: Application description

        Returns:
            The created application, with its keys and plan
        """
        data = {
            "account_id": account_id,
            "plan_id": plan_id,
            "name": name,
            "description": description,
        }
        return self._http.request(
            "POST",
            build_path(APPLICATION_CREATE, account_id),
            Application,
            wire=XML,
            auth=AuthStyle.ACCESS_TOKEN,
            data=data,
            expected_status=201,
        )
