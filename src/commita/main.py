"""
Main entry point for script execution.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .cache import JsonFileStore
from .consts import DEFAULT_WIDTH
from .errors import CommitaError, InvalidUsernameError
from .service import get_analysis
from .settings import GITHUB_TOKEN
from .svg import write_cards

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .cache import TTLStore
    from .consts import ThemeName

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def setup_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commita",
        description="Render a GitHub user's commit insights as an SVG card.",
    )
    parser.add_argument("username", help="GitHub login to analyze")
    parser.add_argument(
        "--theme",
        choices=("light", "dark", "both"),
        default="both",
        help="card palette (default: both)",
    )
    parser.add_argument(
        "--width", type=int, default=DEFAULT_WIDTH, help="card width in pixels"
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=Path(),
        help="directory the cards are written to",
    )
    parser.add_argument(
        "--json", action="store_true", help="print the raw analysis as JSON instead"
    )
    parser.add_argument(
        "--public",
        action="store_true",
        help="ignore GITHUB_TOKEN and only read public data",
    )
    parser.add_argument("--no-cache", action="store_true", help="skip the result cache")
    parser.add_argument("--verbose", "-v", action="store_true", help="log progress")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Execute script.

    Args:
        argv: Command-line arguments, `sys.argv[1:]` if not provided.

    Return:
        int: Exit status. 0 on success, 1 on retrieval or output failure,
             2 on bad input.

    """

    args = setup_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.width <= 0:
        print("Error: --width must be a positive integer", file=sys.stderr)
        return 2

    token: str | None = None if args.public else GITHUB_TOKEN
    store: TTLStore | None = None if args.no_cache else JsonFileStore()

    try:
        analysis, authenticated = get_analysis(args.username, token=token, store=store)
    except InvalidUsernameError as e:
        print(f"Error: {e!s}", file=sys.stderr)
        return 2
    except CommitaError as e:
        logger.debug("Analysis failed", exc_info=True)
        print(f"Error: {e!s}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False))
        return 0

    themes: tuple[ThemeName, ...] = (
        ("light", "dark") if args.theme == "both" else (args.theme,)
    )

    try:
        paths = write_cards(analysis, args.output_dir, themes, args.width)
    except CommitaError as e:
        print(f"Error: {e!s}", file=sys.stderr)
        return 1

    source = "public + private" if authenticated else "public"
    print(f"Analyzed {analysis.total_commits} commits ({source} data)")
    for path in paths:
        print(f"  wrote {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
