#!/usr/bin/env python3
"""Command-line interface for struct-infer.

`struct-infer [generate] [FILE]` is the default command; `struct-infer config`
manages the configuration file.
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .. import __version__
from ..exceptions import StructInferError
from .colors import RED, RESET
from .config import add_config_subcommand, cmd_config
from .generate import add_generate_subcommand, cmd_generate

SUBCOMMANDS = ("generate", "config")


def build_parser() -> argparse.ArgumentParser:
    from ..helpfmt import ColorDefaultsFormatter

    parser = argparse.ArgumentParser(
        prog="struct-infer",
        description="Infer structural types from JSON data and generate declarations",
        formatter_class=ColorDefaultsFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        metavar="{generate,config}",
    )
    add_generate_subcommand(subparsers)
    add_config_subcommand(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    argv = list(sys.argv[1:] if argv is None else argv)

    # Bare invocation and plain file arguments mean "generate"
    if not argv or argv[0] not in SUBCOMMANDS + ("-h", "--help", "--version"):
        argv = ["generate"] + argv

    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "generate":
            cmd_generate(args)
        elif args.command == "config":
            cmd_config(args)
        else:
            parser.print_help()
            return 1

        return 0
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except StructInferError as e:
        print(f"{RED}Error: {e}{RESET}", file=sys.stderr)
        return 1


__all__ = [
    "main",
    "build_parser",
    "cmd_generate",
    "cmd_config",
]
