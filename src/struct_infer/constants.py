#!/usr/bin/env python3
"""Constants for struct-infer operations.

This module centralizes default values and configuration constants used
throughout the struct-infer codebase.
"""
from __future__ import annotations

# ──────────────────────────────────────────────────────────────────────────────
# Type Inference
# ──────────────────────────────────────────────────────────────────────────────

# Bounds of the integer type emitted for integral literals
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Prefix and zero-padded width of canonical record names (S001, S002, ...)
DEFAULT_RECORD_PREFIX = "S"
RECORD_NAME_WIDTH = 3

# Regex for a JSON number literal held in a string
JSON_NUMBER_PATTERN = r"-?(?:0|[1-9][0-9]*)(?P<frac>\.[0-9]+)?(?P<exp>[eE][+-]?[0-9]+)?"

# ──────────────────────────────────────────────────────────────────────────────
# Output and Formatting
# ──────────────────────────────────────────────────────────────────────────────

# Output format used when none is requested
DEFAULT_OUTPUT_FORMAT = "go"

# Supported output formats, in help order
SUPPORTED_OUTPUT_FORMATS = ("go", "pydantic", "json_schema")

# Name of the root declaration in generated code
ROOT_DECLARATION_NAME = "data"

# Color modes accepted by --color and the config file
COLOR_MODES = ("auto", "always", "never")

# JSON Schema version to use for generation
DEFAULT_JSON_SCHEMA_VERSION = "http://json-schema.org/draft-07/schema#"

# Default indentation for generated JSON
DEFAULT_INDENT_SIZE = 2

# ──────────────────────────────────────────────────────────────────────────────
# File and I/O Operations
# ──────────────────────────────────────────────────────────────────────────────

# Path that means "read standard input"
STDIN_PATH = "-"

# Gzip magic bytes
GZIP_MAGIC = b"\x1f\x8b"

# Config file locations searched in order
CONFIG_FILE_CANDIDATES = (
    "struct-infer.yml",
    "struct-infer.yaml",
    ".struct-infer.yml",
    ".struct-infer.yaml",
    "~/.struct-infer.yml",
    "~/.struct-infer.yaml",
    "~/.config/struct-infer/config.yml",
    "~/.config/struct-infer/config.yaml",
)

# ──────────────────────────────────────────────────────────────────────────────
# Logging and Debugging
# ──────────────────────────────────────────────────────────────────────────────

# Default log level (stdout carries generated code, so stay quiet)
DEFAULT_LOG_LEVEL = "WARNING"

# Maximum log file size in MB
MAX_LOG_FILE_SIZE = 50

# Number of log files to keep in rotation
LOG_FILE_BACKUP_COUNT = 5

# Log format string
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# ──────────────────────────────────────────────────────────────────────────────
# Export all constants
# ──────────────────────────────────────────────────────────────────────────────

__all__ = [
    # Type Inference
    "INT64_MIN",
    "INT64_MAX",
    "DEFAULT_RECORD_PREFIX",
    "RECORD_NAME_WIDTH",
    "JSON_NUMBER_PATTERN",
    # Output and Formatting
    "DEFAULT_OUTPUT_FORMAT",
    "SUPPORTED_OUTPUT_FORMATS",
    "ROOT_DECLARATION_NAME",
    "COLOR_MODES",
    "DEFAULT_JSON_SCHEMA_VERSION",
    "DEFAULT_INDENT_SIZE",
    # File and I/O Operations
    "STDIN_PATH",
    "GZIP_MAGIC",
    "CONFIG_FILE_CANDIDATES",
    # Logging and Debugging
    "DEFAULT_LOG_LEVEL",
    "MAX_LOG_FILE_SIZE",
    "LOG_FILE_BACKUP_COUNT",
    "DEFAULT_LOG_FORMAT",
]
