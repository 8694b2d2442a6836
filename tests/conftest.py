"""
Shared fixtures: a fake transport mounted on a real requests session.
"""

import io
import json
from urllib.parse import parse_qsl, urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter

from porta_client import AdminPortal, ThreeScaleClient
from porta_client.api import HTTPClient

CREDENTIAL = "someAccessToken"


class FakeResponse(requests.Response):
    """Canned response that remembers whether it was closed."""

    def __init__(self, status_code, body, request):
        super().__init__()
        self.status_code = status_code
        self.raw = io.BytesIO(body)
        self.request = request
        self.url = request.url
        self.closed = False

    def close(self):
        self.closed = True
        super().close()


class FakeAdapter(BaseAdapter):
    """
    Transport that records every prepared request and answers from a handler.

    The handler receives the PreparedRequest and returns ``(status, body)``;
    a dict or list body is JSON-encoded, a str body is UTF-8 encoded.
    """

    def __init__(self, handler):
        super().__init__()
        self.handler = handler
        self.requests = []
        self.responses = []
        self.send_kwargs = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.send_kwargs.append({"timeout": timeout, "verify": verify})
        status, body = self.handler(request)
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        response = FakeResponse(status, body, request)
        self.responses.append(response)
        return response

    def close(self):
        pass

    @property
    def last(self):
        return self.requests[-1]

    def query(self, index=-1):
        return dict(parse_qsl(urlsplit(self.requests[index].url).query, keep_blank_values=True))

    def form(self, index=-1):
        return dict(parse_qsl(self.requests[index].body or "", keep_blank_values=True))

    def path(self, index=-1):
        return urlsplit(self.requests[index].url).path


def mount(adapter):
    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _as_handler(handler):
    if callable(handler):
        return handler
    return lambda request: handler


@pytest.fixture
def credential():
    return CREDENTIAL


@pytest.fixture
def portal():
    """Admin portal without a path prefix."""
    return AdminPortal.from_url("https://www.example.com")


@pytest.fixture
def make_client(portal):
    """
    Build a client over a fake transport.

    Accepts a handler callable or a constant ``(status, body)`` pair and
    returns ``(client, adapter)``.
    """
    def factory(handler, portal=portal, credential=CREDENTIAL):
        adapter = FakeAdapter(_as_handler(handler))
        return ThreeScaleClient(portal, credential, mount(adapter)), adapter

    return factory


@pytest.fixture
def make_http(portal):
    """Like ``make_client`` but returns the bare ``(HTTPClient, adapter)``."""
    def factory(handler, portal=portal, credential=CREDENTIAL, **kwargs):
        adapter = FakeAdapter(_as_handler(handler))
        return HTTPClient(portal, credential, mount(adapter), **kwargs), adapter

    return factory
