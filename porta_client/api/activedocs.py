"""
ActiveDocs API - OpenAPI documents shown in the developer portal.
"""

from typing import Optional

from ._http import HTTPClient, Params, build_path
from .models import ActiveDoc, ActiveDocList

ACTIVEDOC_LIST = "/admin/api/active_docs.json"
ACTIVEDOC_RESOURCE = "/admin/api/active_docs/{}.json"


class ActiveDocsAPI:
    """API for ActiveDocs specifications."""

    def __init__(self, http: HTTPClient):
        """
        Initialize ActiveDocs API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def list(self) -> ActiveDocList:
        return self._http.request("GET", ACTIVEDOC_LIST, ActiveDocList)

    def get(self, doc_id: int) -> ActiveDoc:
        return self._http.request("GET", build_path(ACTIVEDOC_RESOURCE, doc_id), ActiveDoc)

    def create(self, name: str, body: str, params: Optional[Params] = None) -> ActiveDoc:
        """
        Publish a new specification.

        Args:
            name: Display name
            body: OpenAPI document, serialized as JSON
            params: Extra fields (``system_name``, ``service_id``, ``published``, ...)
        """
        data = dict(params or {})
        data["name"] = name
        data["body"] = body
        return self._http.request("POST", ACTIVEDOC_LIST, ActiveDoc, data=data, expected_status=201)

    def update(self, doc_id: int, params: Params) -> ActiveDoc:
        return self._http.request("PUT", build_path(ACTIVEDOC_RESOURCE, doc_id), ActiveDoc, data=params)

    def delete(self, doc_id: int) -> None:
        self._http.request("DELETE", build_path(ACTIVEDOC_RESOURCE, doc_id))

    def unbind_from_product(self, doc_id: int) -> ActiveDoc:
        """Detach a specification from its product; an empty ``service_id`` clears the link."""
        return self._http.request(
            "PUT", build_path(ACTIVEDOC_RESOURCE, doc_id), ActiveDoc, data={"service_id": ""}
        )
