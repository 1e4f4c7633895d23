"""
Network access for the engine.
"""

from .fetch import (Request, Response, FetchError, NetworkError, URLParseError,
                    URLSchemeUnsupportedError, create_session, fetch, fetch_url)

__all__ = [
    'Request', 'Response', 'FetchError', 'NetworkError', 'URLParseError',
    'URLSchemeUnsupportedError', 'create_session', 'fetch', 'fetch_url'
]
