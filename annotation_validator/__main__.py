#!/usr/bin/env python3
r"""Annotation Validator CLI.

Commands:
    python -m annotation_validator --version     Show version
    python -m annotation_validator info          Show detailed version and system info
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional


def cmd_info(args: argparse.Namespace) -> int:
    """Show detailed version and system information."""
    from ._version import print_version_info

    print_version_info()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for annotation-validator."""
    from ._version import __version__

    parser = argparse.ArgumentParser(
        prog="python -m annotation_validator",
        description="Annotation Validator - declarative annotation assertions for tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m annotation_validator --version      Show version
  python -m annotation_validator info           Show detailed system info
        """,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"annotation-validator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    info_parser = subparsers.add_parser(
        "info",
        help="Show detailed version and system information",
        description="Display version, Python, platform, and dependency information.",
    )
    info_parser.set_defaults(func=cmd_info)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
