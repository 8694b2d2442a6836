"""
Base HTTP client for the 3scale Account Management API.

Handles endpoint resolution, authentication, request building, response
decoding and page walking for list endpoints.
"""

import base64
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type, TypeVar
from urllib.parse import quote, urlencode, urljoin, urlsplit, urlunsplit
from xml.etree import ElementTree as ET

import requests

from .. import __version__
from ..exceptions import APIError, ConfigurationError, RequestBuildError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Params = Dict[str, str]

SUPPORTED_SCHEMES = ("http", "https")
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Raised by the codecs and by model construction on malformed bodies
DECODE_ERRORS = (ValueError, TypeError, KeyError, ET.ParseError)


@dataclass(frozen=True)
class AdminPortal:
    """
    Location of a 3scale admin portal.

    Any path on the portal URL is kept as a prefix for every resource path,
    so ``https://host/example/`` resolves ``/admin/api/services.json`` to
    ``https://host/example/admin/api/services.json``.
    """
    scheme: str
    host: str
    port: Optional[int] = None
    path: str = ""

    def __post_init__(self):
        if self.scheme not in SUPPORTED_SCHEMES:
            raise ConfigurationError(
                f"unsupported schema {self.scheme!r} passed to admin portal",
                details=f"Supported schemes: {', '.join(SUPPORTED_SCHEMES)}",
            )
        if not self.host:
            raise ConfigurationError("admin portal URL has no host")
        if self.port == 0:
            object.__setattr__(self, "port", None)
        if self.port is not None and not 1 <= self.port <= 65535:
            raise ConfigurationError(f"admin portal port {self.port} is out of range 1-65535")
        if self.path.endswith("/"):
            object.__setattr__(self, "path", self.path[:-1])

    @classmethod
    def from_url(cls, url: str) -> "AdminPortal":
        """
        Build an admin portal from a single URL string.

        Args:
            url: Portal URL, e.g. ``https://example-admin.3scale.net:443/prefix/``

        Raises:
            ConfigurationError: If the URL cannot be parsed or uses another scheme
        """
        try:
            parts = urlsplit(url)
            port = parts.port
        except ValueError as e:
            raise ConfigurationError(f"invalid admin portal URL {url!r}", details=str(e))

        return cls(parts.scheme, parts.hostname or "", port, parts.path)

    @property
    def netloc(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{host}:{self.port}" if self.port else host

    @property
    def base_url(self) -> str:
        """Normalised portal URL, without a trailing slash."""
        return urlunsplit((self.scheme, self.netloc, self.path, "", ""))

    def resolve(self, path: str) -> str:
        """Resolve a resource path against the portal, keeping its path prefix."""
        return urljoin(self.base_url + "/", path.lstrip("/"))


class AuthStyle(Enum):
    """How the credential travels with a request."""
    BASIC = "basic"
    ACCESS_TOKEN = "access_token"


class WireFormat:
    """Codec for one generation of the API (XML or JSON bodies)."""

    name = ""
    media_type = ""

    def decode(self, content: bytes, into: Type[T]) -> T:
        raise NotImplementedError

    def error_reason(self, content: bytes) -> str:
        raise NotImplementedError


class JSONFormat(WireFormat):
    name = "json"
    media_type = "application/json"

    def decode(self, content: bytes, into: Type[T]) -> T:
        return into.from_json(json.loads(content))

    def error_reason(self, content: bytes) -> str:
        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return " - ".join(["error"] + list(_flatten_errors(data)))


class XMLFormat(WireFormat):
    name = "xml"
    media_type = "application/xml"

    def decode(self, content: bytes, into: Type[T]) -> T:
        return into.from_xml(ET.fromstring(content.strip()))

    def error_reason(self, content: bytes) -> str:
        root = ET.fromstring(content.strip())
        if len(root):
            return "; ".join((child.text or "").strip() for child in root)
        return (root.text or "").strip()


JSON = JSONFormat()
XML = XMLFormat()


def _flatten_errors(data: Mapping[str, Any]):
    for key, value in data.items():
        if isinstance(value, dict):
            yield from _flatten_errors(value)
            continue
        if isinstance(value, list):
            value = ", ".join(str(item) for item in value)
        yield str(value) if key == "error" else f"{key}: {value}"


def basic_auth(username: str, password: str) -> str:
    """Base64 value for an HTTP Basic ``Authorization`` header."""
    return base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")


def wire_value(value: Any) -> str:
    """Render a parameter value the way the API expects it in forms and queries."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_values(values: Mapping[str, Any]) -> str:
    """Form-encode values with keys sorted, so the wire form is stable."""
    return urlencode(sorted((k, wire_value(v)) for k, v in values.items()))


def build_path(template: str, *ids: Any) -> str:
    """Fill a resource path template with URL-quoted identifiers."""
    return template.format(*(quote(str(i), safe="") for i in ids))


def page_params(page: Optional[int], per_page: Optional[int]) -> Params:
    params: Params = {}
    if page is not None:
        params["page"] = str(page)
    if per_page is not None:
        params["per_page"] = str(per_page)
    return params


def decoding_error_message(error: Exception) -> str:
    return f"decoding error - {error}"


def handle_response(
    response: requests.Response,
    expected_status: int,
    wire: WireFormat,
    into: Optional[Type[T]] = None,
) -> Optional[T]:
    """
    Check a response status and decode its body.

    Args:
        response: Response to inspect
        expected_status: Status code the endpoint answers with on success
        wire: Codec of the endpoint
        into: Type to decode the body into; None skips decoding

    Returns:
        Decoded object, or None when ``into`` is None

    Raises:
        APIError: On a status mismatch or a body that does not decode
    """
    if response.status_code != expected_status:
        try:
            reason = wire.error_reason(response.content)
        except DECODE_ERRORS as e:
            reason = decoding_error_message(e)
        raise APIError(response.status_code, reason)

    if into is None:
        return None

    try:
        return wire.decode(response.content, into)
    except DECODE_ERRORS as e:
        raise APIError(response.status_code, decoding_error_message(e)) from e


def collect_pages(fetch_page: Callable[[int, int], Sequence[T]], per_page: int) -> List[T]:
    """
    Walk a paginated list endpoint.

    Requests pages 1, 2, ... of ``per_page`` items until a page comes back
    short. Items keep server order. Any failing page aborts the walk.
    """
    items: List[T] = []
    page = 1
    while True:
        batch = fetch_page(page, per_page)
        items.extend(batch)
        if len(batch) < per_page:
            return items
        page += 1


class HTTPClient:
    """
    Base HTTP client for the 3scale Account Management API.

    Handles:
    - Endpoint resolution against the admin portal
    - Authentication (Basic header or access_token parameter)
    - Form and query encoding
    - Status checking and body decoding
    """

    WRITE_METHODS = ("POST", "PUT", "PATCH", "DELETE")

    def __init__(
        self,
        portal: AdminPortal,
        credential: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        verify_ssl: bool = True,
    ):
        """
        Initialize the HTTP client.

        Args:
            portal: Admin portal to talk to
            credential: Access token or provider key
            session: Transport. A plain session is created if not provided.
            timeout: Seconds to wait for the server; None waits indefinitely
            verify_ssl: Whether to verify TLS certificates. False overrides the session setting.
        """
        self._portal = portal
        self._credential = credential
        self._session = session if session is not None else self._default_session()
        self._timeout = timeout
        self._verify_ssl = verify_ssl

    @staticmethod
    def _default_session() -> requests.Session:
        session = requests.Session()
        session.headers.update({"User-Agent": f"porta-client/{__version__}"})
        return session

    @property
    def portal(self) -> AdminPortal:
        return self._portal

    @property
    def session(self) -> requests.Session:
        return self._session

    @property
    def base_url(self) -> str:
        """Get the base URL for API requests."""
        return self._portal.base_url

    def _build_request(
        self,
        method: str,
        path: str,
        wire: WireFormat,
        auth: AuthStyle,
        params: Optional[Mapping[str, Any]],
        data: Optional[Mapping[str, Any]],
    ) -> requests.PreparedRequest:
        method = method.upper()
        is_write = method in self.WRITE_METHODS

        headers = {"Accept": wire.media_type}
        query = dict(params or {})
        form = dict(data or {})

        if auth is AuthStyle.BASIC:
            headers["Authorization"] = f"Basic {basic_auth('', self._credential)}"
        elif is_write:
            form["access_token"] = self._credential
        else:
            query["access_token"] = self._credential

        body = None
        if is_write:
            headers["Content-Type"] = FORM_CONTENT_TYPE
            body = encode_values(form)

        url = self._portal.resolve(path)
        request = requests.Request(
            method,
            url,
            headers=headers,
            params=sorted((k, wire_value(v)) for k, v in query.items()),
            data=body,
        )

        try:
            return self._session.prepare_request(request)
        except (requests.exceptions.RequestException, ValueError) as e:
            raise RequestBuildError(f"error building http request for {url}", details=str(e)) from e

    def request(
        self,
        method: str,
        path: str,
        into: Optional[Type[T]] = None,
        *,
        wire: WireFormat = JSON,
        auth: AuthStyle = AuthStyle.BASIC,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        expected_status: int = 200,
    ) -> Optional[T]:
        """
        Make an API request.

        Args:
            method: HTTP method
            path: Resource path (absolute, relative to the portal)
            into: Type to decode a successful body into; None for no body
            wire: Codec of the endpoint generation (JSON or XML)
            auth: How the credential is sent
            params: Query parameters
            data: Form fields (write methods only)
            expected_status: Status code of a successful call

        Returns:
            Decoded response, or None when ``into`` is None

        Raises:
            RequestBuildError: If the request cannot be prepared
            APIError: On an unexpected status or an undecodable body
            requests.exceptions.RequestException: On transport failure
        """
        prepared = self._build_request(method, path, wire, auth, params, data)
        # A caller-configured session keeps its own verify setting (CA bundle path or False)
        verify = self._session.verify if self._verify_ssl else False
        settings = self._session.merge_environment_settings(prepared.url, {}, None, verify, None)

        logger.debug("Request: %s %s", prepared.method, urlsplit(prepared.url).path)

        with self._session.send(prepared, timeout=self._timeout, **settings) as response:
            logger.debug("Response: %s", response.status_code)
            return handle_response(response, expected_status, wire, into)

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
