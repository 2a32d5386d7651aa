#!/usr/bin/env python3
"""
Exception hierarchy for struct-infer operations.

The inference core (inferer, unifier, interner) never raises: every value maps
to some type. These exceptions belong to the surrounding host layers, i.e.
decoding input, loading configuration, rendering declarations and the CLI.
The CLI prints any StructInferError as one `Error: ...` line and exits 1.
"""
from __future__ import annotations

import functools
import json
from typing import Any, Dict, Optional

import ijson


def _details(**values: Any) -> Dict[str, Any]:
    """Keep the detail entries that were actually given."""
    return {k: v for k, v in values.items() if v is not None and v != ""}


class StructInferError(Exception):
    """
    Root of all struct-infer errors.

    `details` are shown after the message as `(key=value, ...)`; `cause` is
    the lower-level exception this one was translated from, if any.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if not self.details:
            return self.message
        shown = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({shown})"


# ──────────────────────────────────────────────────────────────────────────────
# Input
# ──────────────────────────────────────────────────────────────────────────────


class ParseError(StructInferError):
    """Input could not be decoded."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        line_number: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message,
            _details(file_path=file_path, line_number=line_number or None),
            cause,
        )
        self.file_path = file_path
        self.line_number = line_number


class DataFormatError(ParseError):
    """Input bytes are not valid (or not complete) JSON, or a broken gzip stream."""


class NoInputError(StructInferError):
    """The input held zero top-level JSON documents."""

    def __init__(
        self,
        message: str = "no JSON data",
        source: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, _details(source=source), cause)
        self.source = source


# ──────────────────────────────────────────────────────────────────────────────
# Settings and files
# ──────────────────────────────────────────────────────────────────────────────


class ConfigurationError(StructInferError):
    """A setting from a config file, the environment or a flag is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message, _details(config_key=config_key, config_value=config_value), cause
        )
        self.config_key = config_key
        self.config_value = config_value


class FileOperationError(StructInferError):
    """Reading input or writing output failed at the OS level."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message, _details(file_path=file_path, operation=operation), cause
        )
        self.file_path = file_path
        self.operation = operation


# ──────────────────────────────────────────────────────────────────────────────
# Rendering
# ──────────────────────────────────────────────────────────────────────────────


class RenderError(StructInferError):
    """A declaration cannot be written in the target syntax."""

    def __init__(
        self,
        message: str,
        target_format: Optional[str] = None,
        identifier: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        # repr so that empty and whitespace identifiers stay visible
        shown = None if identifier is None else repr(identifier)
        super().__init__(
            message, _details(target_format=target_format, identifier=shown), cause
        )
        self.target_format = target_format
        self.identifier = identifier


# ──────────────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────────────


class CLIError(StructInferError):
    """A command was invoked in a way it cannot run."""


class ArgumentError(CLIError):
    """A command-line argument is missing or conflicts with the filesystem."""

    def __init__(
        self,
        message: str,
        argument_name: Optional[str] = None,
        argument_value: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(
            message, _details(argument=argument_name, value=argument_value), cause
        )
        self.argument_name = argument_name
        self.argument_value = argument_value


# ──────────────────────────────────────────────────────────────────────────────
# Translation of foreign exceptions
# ──────────────────────────────────────────────────────────────────────────────


def wrap_exception(
    exc: Exception,
    message: Optional[str] = None,
    exception_class: type[StructInferError] = StructInferError,
    **kwargs,
) -> StructInferError:
    """
    Translate `exc` into `exception_class`, keeping it as the cause.

    A StructInferError is returned unchanged. `message` defaults to str(exc);
    extra keyword arguments go to the exception class.
    """
    if isinstance(exc, StructInferError):
        return exc
    return exception_class(message or str(exc), cause=exc, **kwargs)


def handle_known_exceptions(func):
    """
    Decorator for input functions: translates OS, JSON and encoding errors.

    Any OSError (missing file, no permission, a directory, device errors)
    becomes FileOperationError; ijson and json decoding errors and invalid
    UTF-8 become DataFormatError. Other exceptions propagate unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except StructInferError:
            raise
        except FileNotFoundError as e:
            raise _file_error(e, f"File not found: {e.filename}") from e
        except PermissionError as e:
            raise _file_error(e, f"Permission denied: {e.filename}", "access") from e
        except OSError as e:
            # directories, device and I/O errors
            raise _file_error(e, f"Cannot read input: {e.strerror or e}") from e
        except json.JSONDecodeError as e:
            raise DataFormatError(
                f"Invalid JSON: {e.msg}", line_number=e.lineno, cause=e
            ) from e
        except ijson.JSONError as e:
            raise DataFormatError(f"Invalid JSON: {e}", cause=e) from e
        except UnicodeDecodeError as e:
            raise DataFormatError(f"Input is not valid UTF-8: {e.reason}", cause=e) from e

    return wrapper


def _file_error(e: OSError, message: str, operation: str = "read") -> StructInferError:
    return wrap_exception(
        e,
        message,
        FileOperationError,
        file_path=None if e.filename is None else str(e.filename),
        operation=operation,
    )


__all__ = [
    "StructInferError",
    "ParseError",
    "DataFormatError",
    "NoInputError",
    "ConfigurationError",
    "FileOperationError",
    "RenderError",
    "CLIError",
    "ArgumentError",
    "wrap_exception",
    "handle_known_exceptions",
]
