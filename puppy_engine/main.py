#!/usr/bin/env python3
"""
puppy-engine - Command line entry point.

    puppy-engine open [URL]
    puppy-engine dump [URL] --stage dom|style|layout
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .core import Engine
from .errors import PuppyError
from .rendering import render, render_styled
from .utils.config import Config
from .utils.logging import get_default_log_file, setup_logging

logger = logging.getLogger(__name__)

STAGES = ("dom", "style", "layout")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="puppy-engine",
                                     description="A small web document engine")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=str, default=None, help="Path to the config file")
    parser.add_argument("--version", action="version", version=f"puppy-engine {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    open_parser = subparsers.add_parser("open", help="Print a page as plain text")
    open_parser.add_argument("url", nargs="?", default=None,
                             help="URL or file to open; the configured home page by default")

    dump_parser = subparsers.add_parser("dump", help="Print one of the page's trees")
    dump_parser.add_argument("url", nargs="?", default=None,
                             help="URL or file to open; the configured home page by default")
    dump_parser.add_argument("--stage", choices=STAGES, default="layout",
                             help="Tree to print (default: layout)")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    args = parse_args(argv)

    # Errors are printed below; tracebacks go to the log file
    setup_logging(log_file=get_default_log_file(),
                  console_level="DEBUG" if args.debug else "CRITICAL")

    config = Config(args.config)
    url = args.url or config.get("browser.home_page")

    engine = Engine(config)
    try:
        engine.navigate(url, cwd=os.getcwd())
        if args.command == "open":
            output = engine.get_plain_text()
        elif args.stage == "dom":
            output = engine.document.to_html()
        elif args.stage == "style":
            output = render_styled(engine.styled_document.document_element)
        else:
            output = render(engine.layout_document.top_box)
    except PuppyError as e:
        logger.debug(f"Command {args.command} failed", exc_info=True)
        print(f"puppy-engine: {e}", file=sys.stderr)
        return 1
    finally:
        engine.close()

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
