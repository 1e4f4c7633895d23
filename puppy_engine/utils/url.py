"""
URL helpers for turning user input into absolute URLs.
"""

import logging
import os
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Schemes that are complete without a "//" authority part
SPECIAL_SCHEMES = {'about', 'data', 'file'}


def normalize_url(text: str, cwd: Optional[str] = None) -> str:
    """
    Normalize user input into an absolute URL.

    Args:
        text: A URL, a host name without scheme, or a local file path
        cwd: Directory relative file paths are resolved against

    Returns:
        str: Absolute URL
    """
    text = text.strip()
    if not text:
        return "about:blank"

    if any(text.startswith(f"{scheme}:") for scheme in SPECIAL_SCHEMES):
        return text

    if "://" in text:
        return text

    # Local file path
    if text.startswith(("/", "./", "../", "~")) or os.path.exists(os.path.join(cwd or os.getcwd(), text)):
        path = os.path.expanduser(text)
        if not os.path.isabs(path):
            path = os.path.join(cwd or os.getcwd(), path)
        url = Path(os.path.normpath(path)).as_uri()
        logger.debug(f"Normalized path {text} to {url}")
        return url

    url = "http://" + text
    logger.debug(f"Normalized {text} to {url}")
    return url


def join_url(base: str, ref: str) -> str:
    """
    Resolve a reference against a base URL.

    Args:
        base: Absolute base URL
        ref: Relative or absolute reference

    Returns:
        str: Absolute URL
    """
    if not ref:
        return base
    return urllib.parse.urljoin(base, ref)



def url_to_path(url: str) -> str:
    """
    Convert a file: URL to a local path.

    Args:
        url: file: URL

    Returns:
        str: Local file system path
    """
    parsed = urllib.parse.urlparse(url)
    return urllib.request.url2pathname(parsed.path)
