#!/usr/bin/env python3
"""Config command implementation for struct-infer CLI.

`config show` prints the effective settings, `config init` writes a YAML
config file with the defaults.
"""
from __future__ import annotations

from pathlib import Path

from ..cli_config import StructInferSettings
from ..exceptions import ArgumentError
from .colors import dim_text, section_header


def add_config_subcommand(subparsers) -> None:
    """Add config subcommand to the parser."""
    config_parser = subparsers.add_parser(
        "config",
        help="Show or initialize configuration",
        description="Display effective settings or create a config file.",
    )
    config_subparsers = config_parser.add_subparsers(
        dest="config_action", metavar="{show,init}"
    )

    show_parser = config_subparsers.add_parser(
        "show", help="Show effective configuration"
    )
    show_parser.add_argument(
        "--config", metavar="PATH", help="Path to config file (default: auto-discover)"
    )

    init_parser = config_subparsers.add_parser(
        "init", help="Create a config file with default values"
    )
    init_parser.add_argument(
        "config_path",
        nargs="?",
        default="struct-infer.yml",
        help="Path for the new config file",
    )
    init_parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing config file"
    )


def cmd_config(args) -> None:
    """Execute the config command."""
    if args.config_action == "show":
        _config_show(args)
    elif args.config_action == "init":
        _config_init(args)
    else:
        raise ArgumentError(
            "Missing config action", argument_name="action", argument_value="show|init"
        )


def _config_show(args) -> None:
    settings = StructInferSettings.load(args.config)

    print(section_header("Current struct-infer configuration:"))
    for key, value in settings.to_dict().items():
        print(f"  {key}: {value}")

    config_file = args.config or StructInferSettings.find_config_file()
    if config_file:
        print(dim_text(f"\nConfig file: {config_file}"))
    else:
        print(dim_text("\nNo config file found (using defaults)"))


def _config_init(args) -> None:
    config_path = Path(args.config_path)
    if config_path.exists() and not args.force:
        raise ArgumentError(
            f"Config file {config_path} already exists. Use --force to overwrite.",
            argument_name="config_path",
            argument_value=str(config_path),
        )

    StructInferSettings().save(str(config_path))
    print(f"Created config file: {config_path}")
