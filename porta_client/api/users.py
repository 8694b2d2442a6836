"""
Users API - Users of a developer account.
"""

from typing import Optional

from ._http import HTTPClient, Params, build_path
from .models import User, UserList

USER_LIST = "/admin/api/accounts/{}/users.json"
USER_RESOURCE = "/admin/api/accounts/{}/users/{}.json"
USER_ACTIVATE = "/admin/api/accounts/{}/users/{}/activate.json"
USER_SUSPEND = "/admin/api/accounts/{}/users/{}/suspend.json"
USER_UNSUSPEND = "/admin/api/accounts/{}/users/{}/unsuspend.json"
USER_ADMIN = "/admin/api/accounts/{}/users/{}/admin.json"
USER_MEMBER = "/admin/api/accounts/{}/users/{}/member.json"


class UsersAPI:
    """
    API for the users of a developer account.

    Handles:
    - User CRUD
    - State transitions (activate, suspend, unsuspend)
    - Role management
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Users API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def list(self, account_id: int, params: Optional[Params] = None) -> UserList:
        """
        List users of an account.

        Args:
            account_id: Developer account ID
            params: Filters such as ``state`` or ``role``
        """
        return self._http.request("GET", build_path(USER_LIST, account_id), UserList, params=params)

    def get(self, account_id: int, user_id: int) -> User:
        """Get a user by ID."""
        return self._http.request("GET", build_path(USER_RESOURCE, account_id, user_id), User)

    def create(self, account_id: int, username: str, email: str, params: Optional[Params] = None) -> User:
        """
        Create a user in an account.

        Args:
            account_id: Developer account ID
            username: Username
            email: Email address
            params: Extra fields, e.g. ``password``

        Returns:
            The created user, in ``pending`` state
        """
        data = dict(params or {})
        data["username"] = username
        data["email"] = email
        return self._http.request(
            "POST", build_path(USER_LIST, account_id), User, data=data, expected_status=201
        )

    def update(self, account_id: int, user_id: int, params: Optional[Params] = None) -> User:
        """Update a user."""
        return self._http.request(
            "PUT", build_path(USER_RESOURCE, account_id, user_id), User, data=params
        )

    def delete(self, account_id: int, user_id: int) -> None:
        """Delete a user."""
        self._http.request("DELETE", build_path(USER_RESOURCE, account_id, user_id))

    def activate(self, account_id: int, user_id: int) -> User:
        """Move a user from ``pending`` to ``active``."""
        return self._transition(USER_ACTIVATE, account_id, user_id)

    def suspend(self, account_id: int, user_id: int) -> User:
        return self._transition(USER_SUSPEND, account_id, user_id)

    def unsuspend(self, account_id: int, user_id: int) -> User:
        return self._transition(USER_UNSUSPEND, account_id, user_id)

    def change_role_to_admin(self, account_id: int, user_id: int) -> User:
        return self._transition(USER_ADMIN, account_id, user_id)

    def change_role_to_member(self, account_id: int, user_id: int) -> User:
        return self._transition(USER_MEMBER, account_id, user_id)

    def _transition(self, template: str, account_id: int, user_id: int) -> User:
        return self._http.request("PUT", build_path(template, account_id, user_id), User)
