#!/usr/bin/env python3
"""Generate command implementation for struct-infer CLI.

Reads JSON documents, infers their structure and prints declarations.
"""
from __future__ import annotations

import argparse
import sys

from ..cli_config import StructInferSettings
from ..constants import STDIN_PATH, SUPPORTED_OUTPUT_FORMATS
from ..decoder import load_documents
from ..generator import generate_declarations, get_format_description
from ..highlight import colorize
from ..infer import infer_documents
from ..logging_config import StructInferLogger, get_logger, log_performance
from ..output_utils import print_output_success, write_output_file

logger = get_logger(__name__)


def add_generate_subcommand(subparsers) -> None:
    """Add generate subcommand to the parser."""
    formats = "\n".join(
        f"  {fmt:<12} {get_format_description(fmt)}" for fmt in SUPPORTED_OUTPUT_FORMATS
    )
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate declarations from JSON data (default command)",
        description=(
            "Infer a structural type from JSON data and print declarations for it.\n"
            "Several top-level documents are wrapped into one array.\n\n"
            f"Output formats:\n{formats}"
        ),
    )

    # Positional arguments
    generate_parser.add_argument(
        "input",
        nargs="?",
        default=STDIN_PATH,
        help="JSON file to read, '-' for standard input (gzip is detected)",
    )

    # Output options
    generate_parser.add_argument(
        "--format",
        choices=SUPPORTED_OUTPUT_FORMATS,
        default=None,
        help="Output format (default from config, else go)",
    )
    generate_parser.add_argument(
        "--output", "-o", metavar="PATH", help="Write declarations to PATH instead of stdout"
    )
    generate_parser.add_argument(
        "--color",
        choices=("auto", "always", "never"),
        default=None,
        help="Syntax highlighting of stdout output",
    )
    generate_parser.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const="never",
        help="Same as --color never",
    )

    # Inference options
    generate_parser.add_argument(
        "--optional-fields",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Mark fields missing from some objects as optional",
    )
    generate_parser.add_argument(
        "--numeric-strings",
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Treat strings holding numbers ("42", "4.2") as numbers',
    )
    generate_parser.add_argument(
        "--record-prefix", metavar="PFX", help="Prefix of generated record names"
    )

    # Configuration and logging
    generate_parser.add_argument(
        "--config", metavar="PATH", help="Path to config file (default: auto-discover)"
    )
    generate_parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        type=str.upper,
        default=None,
        help="Log level for messages on stderr",
    )
    generate_parser.add_argument("--log-file", metavar="PATH", help="Also log to PATH")


@log_performance
def cmd_generate(args) -> None:
    """Execute the generate command."""
    settings = StructInferSettings.load(args.config).apply_overrides(
        output_format=args.format,
        color_mode=args.color,
        optional_fields=args.optional_fields,
        coerce_numeric_strings=args.numeric_strings,
        record_prefix=args.record_prefix,
        log_level=args.log_level,
    )

    StructInferLogger.set_level(settings.log_level)
    if args.log_file:
        StructInferLogger.add_file_handler(args.log_file)

    documents = load_documents(args.input)
    result = infer_documents(documents, settings.to_config())
    output = generate_declarations(result, format=settings.output_format)

    if args.output:
        output_path = write_output_file(output, args.output)
        print_output_success(output_path)
        logger.info("Wrote %s declarations to %s", settings.output_format, output_path)
    else:
        sys.stdout.write(colorize(output, settings.output_format, settings.color_mode))
