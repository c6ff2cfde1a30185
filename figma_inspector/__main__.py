"""Command line entry point: Figma node URL → Slint snippet.

Usage:
    python -m figma_inspector "https://www.figma.com/design/xxx/yyy?node-id=123-456"

    # Literal values only (no theme globals):
    python -m figma_inspector --no-variables "<figma-url>"

    # Write to a file instead of stdout:
    python -m figma_inspector --output card.slint "<figma-url>"

Requires:
    - FIGMA_TOKEN env var set (or --token)
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import settings
from .integrations import FigmaClient, FigmaClientError, load_snapshot, parse_figma_url
from .logging_config import get_cli_logger
from .snippet import generate_slint_snippet

logger = logging.getLogger("figma_inspector.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="figma_inspector",
        description="Generate a Slint markup snippet for a Figma node",
    )
    parser.add_argument("url", help="Figma design URL including a node-id parameter")
    parser.add_argument(
        "--no-variables", dest="use_variables", action="store_false",
        default=settings.SNIPPET_USE_VARIABLES,
        help="Emit literal values instead of variable references",
    )
    parser.add_argument(
        "--output", "-o", default=None,
        help="Write the snippet to this file (default: stdout)",
    )
    parser.add_argument(
        "--token", default=None,
        help="Figma Personal Access Token (default: FIGMA_TOKEN env var)",
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> str:
    file_key, node_id = parse_figma_url(args.url)
    async with FigmaClient(token=args.token) as client:
        node, host = await load_snapshot(client, file_key, node_id, args.use_variables)
    return await generate_slint_snippet(node, host, use_variables=args.use_variables)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    get_cli_logger()
    try:
        snippet = asyncio.run(run(args))
    except FigmaClientError as e:
        logger.error(f"Figma request failed: {e}")
        return 1

    if args.output:
        Path(args.output).write_text(snippet + "\n", encoding="utf-8")
        logger.info(f"Snippet written to {args.output}")
    else:
        print(snippet)
    return 0


if __name__ == "__main__":
    sys.exit(main())
