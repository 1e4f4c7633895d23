"""
Core engine implementation.
This module ties the pipeline together: fetch, HTML parse, style resolution
and layout, and keeps the current document between renders.
"""

import logging
from typing import Callable, List, Optional, Union

import requests

from ..dom import Document
from ..errors import HTMLParseError, NoDocumentError
from ..html import parse as parse_html
from ..layout import LayoutDocument, to_layout_document
from ..network import FetchError, Request, create_session, fetch
from ..rendering import render, render_text
from ..style import StyledDocument, to_styled_document
from ..utils.config import Config
from ..utils.logging import PerformanceLogger, log_exception
from ..utils.url import join_url, normalize_url

logger = logging.getLogger(__name__)


class Engine:
    """
    Main engine that coordinates the pipeline stages.

    Collaborators that change the page (scripts, tests, tools) mutate
    engine.document directly and call render() to rebuild the styled and
    layout trees.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the engine.

        Args:
            config: Configuration, loaded from the default location when omitted
        """
        self.config = config if config is not None else Config()
        self.session: Optional[requests.Session] = None

        # Current page state
        self.url: Optional[str] = None
        self.document: Optional[Document] = None
        self.styled_document: Optional[StyledDocument] = None
        self.layout_document: Optional[LayoutDocument] = None

        self.performance = PerformanceLogger(logger, "engine")
        self.render_callbacks: List[Callable[[LayoutDocument], None]] = []

        logger.debug("Engine initialized")

    def navigate(self, url: str, cwd: Optional[str] = None) -> LayoutDocument:
        """
        Fetch, parse and render a URL.

        Args:
            url: URL, host name or file path to open
            cwd: Directory relative file paths are resolved against

        Returns:
            LayoutDocument: The box tree of the new page

        Raises:
            FetchError: If the resource cannot be loaded
            HTMLParseError: If the markup is malformed
        """
        url = normalize_url(url, cwd)
        logger.info(f"Navigating to {url}")

        if self.session is None:
            self.session = create_session(self.config)

        try:
            with self.performance.measure("fetch"):
                response = fetch(Request(url), self.config, self.session)
        except FetchError as e:
            log_exception(logger, e, f"Failed to fetch {url}")
            raise

        return self.load(response.url, response.data, document_uri=url)

    def resolve_url(self, href: str) -> str:
        """
        Resolve a link target against the current page URL.

        Args:
            href: Absolute or relative link target

        Returns:
            str: Absolute URL

        Raises:
            NoDocumentError: If nothing has been loaded yet
        """
        if self.url is None:
            raise NoDocumentError()
        return join_url(self.url, href)

    def follow_link(self, href: str) -> LayoutDocument:
        """
        Navigate to a link target, relative to the current page.

        Args:
            href: Value of a link's href attribute

        Returns:
            LayoutDocument: The box tree of the new page
        """
        url = self.resolve_url(href)
        logger.debug(f"Following link {href} to {url}")
        return self.navigate(url)

    def load(self,
             url: str,
             data: Union[bytes, str],
             document_uri: Optional[str] = None) -> LayoutDocument:
        """
        Parse and render already fetched markup.

        Args:
            url: URL the markup was loaded from
            data: UTF-8 markup
            document_uri: URI the page was requested as; defaults to url

        Returns:
            LayoutDocument: The box tree of the new page

        Raises:
            HTMLParseError: If the markup is malformed
        """
        try:
            with self.performance.measure("parse"):
                document = parse_html(data, url, document_uri)
        except HTMLParseError as e:
            logger.error(f"Failed to load {url}: {e}")
            raise

        self.url = url
        self.document = document
        logger.info(f"Loaded {url}" + (f" ({document.title})" if document.title else ""))
        return self.render()

    def render(self) -> LayoutDocument:
        """
        Rebuild the styled and layout trees from the current document.

        Returns:
            LayoutDocument: The new box tree

        Raises:
            NoDocumentError: If nothing has been loaded yet
        """
        if self.document is None:
            raise NoDocumentError()

        use_ua_stylesheet = self.config.get("style.user_agent_stylesheet", True)
        with self.performance.measure("style"):
            self.styled_document = to_styled_document(
                self.document, user_agent_stylesheet=use_ua_stylesheet)
        with self.performance.measure("layout"):
            self.layout_document = to_layout_document(self.styled_document)

        self._notify_rendered()
        return self.layout_document

    def get_plain_text(self) -> str:
        """Plain-text rendering of the current page."""
        if self.layout_document is None:
            raise NoDocumentError()
        return render_text(self.layout_document.top_box)

    def get_outline(self) -> str:
        """Box tree outline of the current page."""
        if self.layout_document is None:
            raise NoDocumentError()
        return render(self.layout_document.top_box)

    def register_render_callback(self, callback: Callable[[LayoutDocument], None]) -> None:
        """
        Register a callback called after every render.

        Args:
            callback: Function receiving the new layout document
        """
        self.render_callbacks.append(callback)

    def _notify_rendered(self) -> None:
        for callback in self.render_callbacks:
            callback(self.layout_document)

    def close(self) -> None:
        """Release the network session."""
        if self.session is not None:
            self.session.close()
            self.session = None
        logger.debug("Engine closed")
