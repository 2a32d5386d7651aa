"""
JSON decoding front-end.

Reads every whitespace-separated top-level JSON document from a file, stdin
or an in-memory buffer. Decoding goes through ijson, which keeps the lexical
shape of numbers: integer literals arrive as `int` and fractional or exponent
literals as `decimal.Decimal`, so nothing is pre-rounded to float before the
inferer classifies it.
"""
from __future__ import annotations

import gzip
import io
import sys
from collections.abc import Iterator
from typing import IO, Any, Optional, Union

import ijson

from .constants import GZIP_MAGIC, STDIN_PATH
from .exceptions import DataFormatError, handle_known_exceptions
from .logging_config import get_logger

logger = get_logger(__name__)

__all__ = [
    "iter_documents",
    "load_documents",
    "loads_documents",
]


def _maybe_gunzip(f: IO[bytes]) -> IO[bytes]:
    """Wrap `f` in a GzipFile when it starts with the gzip magic bytes."""
    if hasattr(f, "peek"):
        head = f.peek(2)[:2]
    elif f.seekable():
        head = f.read(2)
        f.seek(0)
    else:
        return f
    if head == GZIP_MAGIC:
        return gzip.GzipFile(fileobj=f)  # type: ignore[return-value]
    return f


def iter_documents(stream: IO[bytes]) -> Iterator[Any]:
    """Yield each top-level JSON document in a binary `stream`, in order."""
    yield from ijson.items(stream, "", multiple_values=True)


@handle_known_exceptions
def load_documents(path: Optional[str] = None) -> list[Any]:
    """
    Decode all documents from `path`; None or "-" reads standard input.
    Gzip-compressed input is detected by its magic bytes.

    Raises
    ------
    FileOperationError
        If the file does not exist or cannot be read.
    DataFormatError
        If the input is malformed or truncated JSON.
    """
    if path is None or path == STDIN_PATH:
        docs = _decode(_maybe_gunzip(sys.stdin.buffer), STDIN_PATH)
    else:
        with open(path, "rb") as raw:
            docs = _decode(_maybe_gunzip(raw), path)
    logger.info("Decoded %d JSON document(s) from %s", len(docs), path or STDIN_PATH)
    return docs


@handle_known_exceptions
def loads_documents(data: Union[str, bytes]) -> list[Any]:
    """Decode all documents held in `data`."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return _decode(_maybe_gunzip(io.BufferedReader(io.BytesIO(data))), "<string>")


class _ContentSniffer:
    """Pass-through reader noting whether any non-whitespace byte went by."""

    def __init__(self, stream: IO[bytes]):
        self._stream = stream
        self.saw_content = False

    def read(self, size: int = -1) -> bytes:
        chunk = self._stream.read(size)
        if not self.saw_content and chunk.strip():
            self.saw_content = True
        return chunk


def _decode(stream: IO[bytes], source: str) -> list[Any]:
    sniffer = _ContentSniffer(stream)
    docs: list[Any] = []
    try:
        for doc in iter_documents(sniffer):  # type: ignore[arg-type]
            docs.append(doc)
    except ijson.IncompleteJSONError as e:
        # Whitespace-only input holds zero documents
        if not docs and not sniffer.saw_content:
            return docs
        raise DataFormatError(f"Invalid JSON: {e}", file_path=source, cause=e) from e
    except ijson.JSONError as e:
        raise DataFormatError(f"Invalid JSON: {e}", file_path=source, cause=e) from e
    except (gzip.BadGzipFile, EOFError) as e:
        raise DataFormatError(
            f"Invalid gzip stream: {e}", file_path=source, cause=e
        ) from e
    return docs
