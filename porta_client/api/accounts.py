"""
Accounts API - Developer account operations.
"""

from typing import Optional

from ._http import HTTPClient, Params, build_path, collect_pages, page_params
from .models import Account, AccountList

ACCOUNTS_PER_PAGE = 500

ACCOUNT_LIST = "/admin/api/accounts.json"
ACCOUNT_RESOURCE = "/admin/api/accounts/{}.json"
ACCOUNT_FIND = "/admin/api/accounts/find.json"
SIGNUP = "/admin/api/signup.json"


class AccountsAPI:
    """
    API for developer accounts of the tenant.

    Handles:
    - Account listing (paged), reads, updates and deletion
    - Lookup by username, email or user id
    - Developer signup
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Accounts API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def list(self, page: Optional[int] = None, per_page: Optional[int] = None) -> AccountList:
        """
        List developer accounts.

        Args:
            page: Page to fetch. With ``per_page``, disables the full walk.
            per_page: Page size for a single-page fetch

        Returns:
            One page when either argument is given, otherwise every account
        """
        if page is not None or per_page is not None:
            return self._list_page(page, per_page)
        return AccountList(items=collect_pages(self._list_page, ACCOUNTS_PER_PAGE))

    def _list_page(self, page: Optional[int], per_page: Optional[int]) -> AccountList:
        return self._http.request("GET", ACCOUNT_LIST, AccountList, params=page_params(page, per_page))

    def get(self, account_id: int) -> Account:
        """Get a developer account by ID."""
        return self._http.request("GET", build_path(ACCOUNT_RESOURCE, account_id), Account)

    def update(self, account_id: int, params: Optional[Params] = None) -> Account:
        """Update a developer account."""
        return self._http.request(
            "PUT", build_path(ACCOUNT_RESOURCE, account_id), Account, data=params
        )

    def delete(self, account_id: int) -> None:
        """Delete a developer account."""
        self._http.request("DELETE", build_path(ACCOUNT_RESOURCE, account_id))

    def find(self, params: Params) -> Account:
        """
        Find an account by one of its users.

        Args:
            params: One of ``username``, ``email`` or ``user_id``

        Raises:
            APIError: 404 when no account matches
        """
        return self._http.request("GET", ACCOUNT_FIND, Account, params=params)

    def signup(self, org_name: str, username: str, params: Optional[Params] = None) -> Account:
        """
        Sign up a new developer account with its first admin user.

        Args:
            org_name: Organization name of the account
            username: Username of the admin user
            params: Extra fields (``email``, ``password``, plan ids, ...)
        """
        data = dict(params or {})
        data["org_name"] = org_name
        data["username"] = username
        return self._http.request("POST", SIGNUP, Account, data=data, expected_status=201)
