"""
Resource fetching.

Loads the bytes behind a URL. Local files are read directly; http and https
go through a requests session with a retrying connection adapter.
"""

import logging
import urllib.parse
from dataclasses import dataclass, field
from typing import Dict, Optional

import certifi
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..errors import PuppyError
from ..utils.config import Config, DEFAULT_CONFIG
from ..utils.url import url_to_path

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ('file', 'http', 'https')


class FetchError(PuppyError):
    """Base class for failures to load a resource."""


class URLParseError(FetchError):
    """The URL could not be parsed."""


class URLSchemeUnsupportedError(FetchError):
    """The URL uses a scheme that cannot be fetched."""

    def __init__(self, scheme: str):
        self.scheme = scheme
        super().__init__(f"unsupported URL scheme: {scheme!r}")


class NetworkError(FetchError):
    """Transport or I/O failure while loading a resource."""


@dataclass
class Request:
    url: str
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class Response:
    """
    A fetched resource.

    Attributes:
        url: Final URL of the resource, after redirects
        status: HTTP status code, 200 for local files
        headers: Response headers
        data: Raw body
    """

    url: str
    status: int
    headers: Dict[str, str]
    data: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 400


def create_session(config: Optional[Config] = None) -> requests.Session:
    """
    Create a requests session with retries and certifi's CA bundle.

    Args:
        config: Configuration for retry count and user agent

    Returns:
        requests.Session: The configured session
    """
    network = DEFAULT_CONFIG["network"]
    retries = config.get("network.retries", network["retries"]) if config else network["retries"]
    user_agent = config.get("network.user_agent", network["user_agent"]) if config else network["user_agent"]

    session = requests.Session()

    retry_strategy = Retry(
        total=retries,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET", "HEAD"]
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.verify = certifi.where()
    session.headers.update({
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
    })

    return session


def fetch(request: Request,
          config: Optional[Config] = None,
          session: Optional[requests.Session] = None) -> Response:
    """
    Fetch a resource.

    Args:
        request: The request to perform
        config: Configuration for timeouts and retries
        session: Session to reuse for http and https, a new one by default

    Returns:
        Response: The fetched resource

    Raises:
        URLParseError: If the URL cannot be parsed
        URLSchemeUnsupportedError: If the scheme is not file, http or https
        NetworkError: If reading or transferring the resource fails
    """
    try:
        parsed = urllib.parse.urlparse(request.url)
    except ValueError as e:
        raise URLParseError(f"invalid URL {request.url!r}: {e}") from e

    scheme = parsed.scheme.lower()
    if not scheme:
        raise URLParseError(f"URL has no scheme: {request.url!r}")
    if scheme not in SUPPORTED_SCHEMES:
        raise URLSchemeUnsupportedError(scheme)

    logger.debug(f"Fetching {request.url}")
    if scheme == 'file':
        return _fetch_file(request)
    return _fetch_http(request, config, session)


def _fetch_file(request: Request) -> Response:
    path = url_to_path(request.url)
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise NetworkError(f"failed to read {path}: {e}") from e

    return Response(request.url, 200, {"Content-Length": str(len(data))}, data)


def _fetch_http(request: Request,
                config: Optional[Config],
                session: Optional[requests.Session]) -> Response:
    timeout = config.get("network.timeout", DEFAULT_CONFIG["network"]["timeout"]) if config \
        else DEFAULT_CONFIG["network"]["timeout"]
    owns_session = session is None
    if owns_session:
        session = create_session(config)

    try:
        http_response = session.get(request.url, headers=request.headers, timeout=timeout)
    except requests.exceptions.InvalidURL as e:
        raise URLParseError(f"invalid URL {request.url!r}: {e}") from e
    except requests.exceptions.RequestException as e:
        raise NetworkError(f"failed to fetch {request.url}: {e}") from e
    finally:
        if owns_session:
            session.close()

    logger.debug(f"Fetched {http_response.url} ({http_response.status_code}, "
                 f"{len(http_response.content)} bytes)")
    return Response(http_response.url, http_response.status_code,
                    dict(http_response.headers), http_response.content)


def fetch_url(url: str, config: Optional[Config] = None) -> Response:
    return fetch(Request(url), config)
