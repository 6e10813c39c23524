"""
Publish generated API documentation to Confluence wiki.

Copyright 2022-2026, Levente Hunyadi
"""

import logging
from types import TracebackType
from typing import Any, TypeVar
from urllib.parse import urlencode, urlparse, urlunparse

import requests
from cattrs import BaseValidationError

from .api_base import PageGateway
from .api_types import (
    ConfluenceNewPage,
    ConfluencePage,
    ConfluencePageIdentity,
    ConfluencePageSearchResult,
    ConfluencePageSummary,
    ConfluenceUpdatePageRequest,
)
from .environment import ConnectionProperties, DecodeError, ProtocolError, TransportError
from .extra import override
from .serializer import json_to_object, object_to_json_payload

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def build_url(base_url: str, query: dict[str, str] | None = None) -> str:
    "Builds a URL with scheme, host, port, path and query string parameters."

    scheme, netloc, path, params, query_str, fragment = urlparse(base_url)

    if params:
        raise ValueError("expected: url with no parameters")
    if query_str:
        raise ValueError("expected: url with no query string")
    if fragment:
        raise ValueError("expected: url with no fragment")

    url_parts = (scheme, netloc, path, None, urlencode(query) if query else None, None)
    return urlunparse(url_parts)


def response_cast(response_type: type[T], response: requests.Response) -> T:
    "Converts a response body into the expected type."

    try:
        return json_to_object(response_type, response.json())
    except (ValueError, BaseValidationError) as e:
        raise DecodeError(f"cannot map response from {response.url} to {response_type.__name__}: {e}") from e


class ConfluenceAPI:
    """
    Represents an active connection to a Confluence server.
    """

    properties: ConnectionProperties
    session: "ConfluenceSession | None" = None

    def __init__(self, properties: ConnectionProperties | None = None) -> None:
        self.properties = properties or ConnectionProperties()

    def __enter__(self) -> "ConfluenceSession":
        session = requests.Session()
        if self.properties.user_name:
            session.auth = (self.properties.user_name, self.properties.api_key)
        else:
            session.headers.update({"Authorization": f"Bearer {self.properties.api_key}"})

        if self.properties.headers:
            session.headers.update(self.properties.headers)

        self.session = ConfluenceSession(session, api_url=self.properties.api_url)
        return self.session

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None


class ConfluenceSession(PageGateway):
    """
    Information about an open session to a Confluence server.

    Invokes the classic Confluence REST API (`rest/api/content`), which both Confluence Server/Data Center and Confluence Cloud support.
    """

    _session: requests.Session
    _api_url: str

    def __init__(self, session: requests.Session, *, api_url: str) -> None:
        """
        :param session: HTTP session with authentication set up.
        :param api_url: Confluence REST API root URL, ending with `/`.
        """

        self._session = session
        self._api_url = api_url
        LOGGER.info("Configured Confluence REST API URL: %s", self._api_url)

    def close(self) -> None:
        self._session.close()
        self._session = requests.Session()

    def _build_url(self, path: str, query: dict[str, str] | None = None) -> str:
        """
        Builds a full URL for invoking the Confluence API.

        :param path: Path of API endpoint to invoke, relative to the REST API root.
        :param query: Query parameters to pass to the API endpoint.
        :returns: A full URL.
        """

        base_url = f"{self._api_url}{path}"
        return build_url(base_url, query)

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        "Executes an HTTP request, translating transport and HTTP status failures."

        try:
            response = self._session.request(method, url, verify=True, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"cannot perform {method} request to {url}: {e}") from e

        if response.text:
            LOGGER.debug("Received HTTP payload:\n%s", response.text)
        if not response.ok:
            raise ProtocolError(f"{method} request to {url} failed", status_code=response.status_code, body=response.text)
        return response

    def _get(self, path: str, response_type: type[T], *, query: dict[str, str] | None = None) -> T:
        "Retrieves an object via Confluence REST API."

        url = self._build_url(path, query)
        response = self._request("GET", url, headers={"Accept": "application/json"})
        return response_cast(response_type, response)

    def _send(self, method: str, path: str, body: Any, response_type: type[T]) -> T:
        "Submits an object via Confluence REST API."

        url = self._build_url(path)
        data = object_to_json_payload(body)
        LOGGER.debug("Sending HTTP payload:\n%s", data.decode("utf-8"))
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        response = self._request(method, url, data=data, headers=headers)
        return response_cast(response_type, response)

    @override
    def find_page_by_title(self, title: str, space_key: str) -> ConfluencePageSummary | None:
        LOGGER.info("Looking up page with title %r in space %s", title, space_key)
        query = {"title": title, "spaceKey": space_key, "type": "page"}
        data = self._get("content", ConfluencePageSearchResult, query=query)

        if not data.results:
            LOGGER.info("No page found with title: %s", title)
            return None
        if len(data.results) > 1:
            LOGGER.warning("Multiple pages found with title %r: %s", title, ", ".join(page.id for page in data.results))

        return data.results[0]

    @override
    def get_page(self, page_id: str) -> ConfluencePage | None:
        path = f"content/{page_id}"
        query = {"expand": "body.storage,version,space,ancestors"}
        try:
            page = self._get(path, ConfluencePage, query=query)
        except ProtocolError as e:
            if e.status_code == 404:
                LOGGER.info("No page found with ID: %s", page_id)
                return None
            raise

        LOGGER.debug("Fetched page %s with title %r at version %d", page.id, page.title, page.version.number)
        return page

    @override
    def create_page(self, page: ConfluenceNewPage) -> str:
        LOGGER.info("Creating page %r under parent: %s", page.title, ", ".join(ancestor.id for ancestor in page.ancestors))
        identity = self._send("POST", "content", page, ConfluencePageIdentity)
        return identity.id

    @override
    def update_page(self, page: ConfluencePage) -> str:
        LOGGER.info("Updating page %s to version %d", page.id, page.version.number)
        request = ConfluenceUpdatePageRequest(
            id=page.id,
            type=page.type,
            title=page.title,
            space=page.space,
            body=page.body,
            version=page.version,
            # keep the immediate parent; more distant ancestors are implied
            ancestors=page.ancestors[-1:],
        )
        identity = self._send("PUT", f"content/{page.id}", request, ConfluencePageIdentity)
        return identity.id
