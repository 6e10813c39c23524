"""
Publish generated API documentation to Confluence wiki.

Copyright 2022-2026, Levente Hunyadi
"""

import os


class ArgumentError(ValueError):
    "Raised when wrong arguments are passed to a function call."


class PageError(ValueError):
    "Raised in case there is an issue with a Confluence page."


class DocumentError(ValueError):
    "Raised when a local document cannot be read or removed."


class ConfluenceError(RuntimeError):
    "Raised when a Confluence API call fails."


class TransportError(ConfluenceError):
    "Raised when an HTTP exchange with Confluence cannot be completed."


class ProtocolError(ConfluenceError):
    """
    Raised when Confluence responds with a non-success HTTP status code.

    :param status_code: HTTP status code.
    :param body: Raw response body, kept for diagnosis.
    """

    status_code: int
    body: str

    def __init__(self, message: str, *, status_code: int, body: str) -> None:
        super().__init__(f"{message}: HTTP {status_code}: {body}" if body else f"{message}: HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class DecodeError(ConfluenceError):
    "Raised when a Confluence response cannot be parsed into the expected shape."


class SynchronizationError(ConfluenceError):
    """
    Raised when one or more child pages failed to synchronize.

    :param parent_id: Confluence page ID of the parent page the children belong to.
    :param failures: Maps page titles to the exception raised while synchronizing that page.
    """

    parent_id: str
    failures: dict[str, Exception]

    def __init__(self, parent_id: str, failures: dict[str, Exception]) -> None:
        messages = "\n".join(f"{title}: {error}" for title, error in failures.items())
        super().__init__(f"errors while synchronizing children of parent page {parent_id}:\n{messages}")
        self.parent_id = parent_id
        self.failures = failures


def _validate_domain(domain: str) -> str:
    if domain.startswith(("http://", "https://")) or domain.endswith("/"):
        raise ArgumentError("Confluence domain looks like a URL; only host name required")

    return domain


def _validate_base_path(base_path: str) -> str:
    if not base_path.startswith("/") or not base_path.endswith("/"):
        raise ArgumentError("Confluence base path must start and end with a '/'")

    return base_path


def _validate_scheme(scheme: str) -> str:
    if scheme not in ("http", "https"):
        raise ArgumentError(f"expected: URL scheme `http` or `https`; got: {scheme}")

    return scheme


def _validate_port(port: int | str) -> int:
    try:
        value = int(port)
    except ValueError:
        raise ArgumentError(f"expected: integer port number; got: {port}") from None

    if not 0 < value < 65536:
        raise ArgumentError(f"port number out of range: {value}")

    return value


def _validate_api_url(api_url: str) -> str:
    if not api_url.startswith(("http://", "https://")):
        raise ArgumentError("Confluence API URL must start with `http://` or `https://`")

    if not api_url.endswith("/"):
        api_url = f"{api_url}/"

    return api_url


class ConnectionProperties:
    """
    Properties related to connecting to Confluence.

    Each value not passed explicitly is looked up in the environment.

    :param api_url: Confluence REST API root URL, e.g. `https://wiki.example.com/rest/api/`. Takes precedence over the individual URL parts.
    :param scheme: URL scheme of the Confluence server (default: `http`).
    :param domain: Host name of the Confluence server, e.g. `wiki.example.com`.
    :param port: Port of the Confluence server (default: 8080).
    :param base_path: Base path for Confluence site (default: `/`).
    :param user_name: Confluence user name.
    :param api_key: Confluence password or API token.
    :param space_key: Confluence space key for pages to be published.
    :param headers: Additional HTTP headers to pass to Confluence REST API calls.
    """

    api_url: str
    user_name: str | None
    api_key: str
    space_key: str | None
    headers: dict[str, str] | None

    def __init__(
        self,
        *,
        api_url: str | None = None,
        scheme: str | None = None,
        domain: str | None = None,
        port: int | None = None,
        base_path: str | None = None,
        user_name: str | None = None,
        api_key: str | None = None,
        space_key: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        opt_api_url = api_url or os.getenv("CONFLUENCE_API_URL")
        opt_scheme = scheme or os.getenv("CONFLUENCE_SCHEME") or "http"
        opt_domain = domain or os.getenv("CONFLUENCE_DOMAIN")
        opt_port = port or os.getenv("CONFLUENCE_PORT") or 8080
        opt_base_path = base_path or os.getenv("CONFLUENCE_PATH") or "/"
        opt_user_name = user_name or os.getenv("CONFLUENCE_USER_NAME")
        opt_api_key = api_key or os.getenv("CONFLUENCE_API_KEY")
        opt_space_key = space_key or os.getenv("CONFLUENCE_SPACE_KEY")

        if not opt_api_key:
            raise ArgumentError("Confluence API key not specified")

        if opt_api_url:
            self.api_url = _validate_api_url(opt_api_url)
        elif opt_domain:
            domain = _validate_domain(opt_domain)
            scheme = _validate_scheme(opt_scheme)
            port = _validate_port(opt_port)
            base_path = _validate_base_path(opt_base_path)
            self.api_url = f"{scheme}://{domain}:{port}{base_path}rest/api/"
        else:
            raise ArgumentError("Confluence API URL or domain required")

        self.user_name = opt_user_name
        self.api_key = opt_api_key
        self.space_key = opt_space_key
        self.headers = headers
