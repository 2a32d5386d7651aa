"""File output helpers for generated declarations."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Union

from .exceptions import FileOperationError, wrap_exception


def write_output_file(content: str, path: Union[str, Path]) -> Path:
    """Write content to `path`, creating parent directories as needed.

    Returns:
        Path to the written file
    """
    output_path = Path(path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise wrap_exception(
            e,
            f"Cannot write output: {e.strerror}",
            FileOperationError,
            file_path=str(output_path),
            operation="write",
        ) from e

    return output_path


def print_output_success(output_path: Path, description: str = "Declarations") -> None:
    """Print a standardized success message for file output to stderr."""
    from .cli.colors import GREEN, RESET

    print(f"{GREEN}{description} written to: {output_path}{RESET}", file=sys.stderr)
