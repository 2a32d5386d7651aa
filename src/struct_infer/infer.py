#!/usr/bin/env python3
"""
Value → type inference.

The inferer walks a decoded JSON value depth first and builds its structural
type bottom-up. Objects become interned records, arrays fold their element
types with the unifier in index order, scalars map onto lattice leaves:

- null, {}                 -> UNDEFINED
- true/false               -> BOOL
- integer literal          -> INT64 (FLOAT64 when outside the int64 range)
- fractional literal       -> FLOAT64
- "42" / "4.2"             -> INT64 / FLOAT64 (numeric strings are numbers)
- other strings            -> STRING
- []                       -> [UNDEFINED]
- anything unrecognized    -> ANY

Inference is total. A value that cannot be described precisely degrades to
ANY instead of raising. Recursion depth equals the nesting depth of the input.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .config import Config
from .constants import INT64_MAX, INT64_MIN, JSON_NUMBER_PATTERN
from .exceptions import NoInputError
from .interner import RecordTable
from .logging_config import get_logger
from .models import (
    ANY,
    BOOL,
    FLOAT64,
    INT64,
    STRING,
    UNDEFINED,
    ArrayType,
    Declaration,
    RecordField,
    RecordRef,
    RecordType,
    Type,
)
from .naming import to_identifier
from .unify import TypeUnifier

logger = get_logger(__name__)

JSON_NUMBER_RE = re.compile(JSON_NUMBER_PATTERN)


def classify_integer(n: int) -> Type:
    """INT64 when `n` fits a signed 64-bit integer, FLOAT64 otherwise."""
    return INT64 if INT64_MIN <= n <= INT64_MAX else FLOAT64


def classify_number_text(text: str) -> Optional[Type]:
    """Type of a JSON number literal held as text, or None if it is not one."""
    m = JSON_NUMBER_RE.fullmatch(text)
    if m is None:
        return None
    if m.group("frac") is None and m.group("exp") is None:
        return classify_integer(int(text))
    return FLOAT64


class SchemaInferer:
    """Infers types for one run, interning records into `table`."""

    def __init__(
        self, table: Optional[RecordTable] = None, config: Optional[Config] = None
    ):
        self.config = config or Config()
        self.table = (
            table if table is not None else RecordTable(prefix=self.config.record_prefix)
        )
        self.unifier = TypeUnifier(self.table, self.config)

    def infer(self, value: Any) -> Type:
        # bool before int: bool is a subclass of int
        if value is None:
            return UNDEFINED
        if isinstance(value, bool):
            return BOOL
        if isinstance(value, int):
            return classify_integer(value)
        if isinstance(value, (float, Decimal)):
            return FLOAT64
        if isinstance(value, str):
            return self._infer_string(value)
        if isinstance(value, Mapping):
            return self._infer_object(value)
        if isinstance(value, (list, tuple)):
            return self._infer_array(value)

        logger.debug("Unsupported value of type %s; using any", type(value).__name__)
        return ANY

    def _infer_string(self, text: str) -> Type:
        if self.config.coerce_numeric_strings:
            number_type = classify_number_text(text)
            if number_type is not None:
                return number_type
        return STRING

    def _infer_array(self, items: Sequence[Any]) -> Type:
        element = UNDEFINED
        for index, item in enumerate(items):
            element = self.unifier.unify(element, self.infer(item))
            if element == ANY:
                logger.debug(
                    "Array element %d of %d widened to any", index, len(items)
                )
                break
        return ArrayType(element=element)

    def _infer_object(self, obj: Mapping[Any, Any]) -> Type:
        if not obj:
            return UNDEFINED

        names: Dict[str, str] = {}
        for key in obj:
            if not isinstance(key, str):
                logger.debug("Non-string key %r; object degraded to any", key)
                return ANY
            name = to_identifier(key)
            if name in names:
                logger.info(
                    "Keys %r and %r both convert to %r; object degraded to any",
                    names[name],
                    key,
                    name,
                )
                return ANY
            names[name] = key

        fields = [
            RecordField(converted_name=name, original_name=key, type=self.infer(obj[key]))
            for name, key in names.items()
        ]
        return self.table.intern(fields)


@dataclass
class InferenceResult:
    """Root type of one run plus the records it declares, ready for rendering."""

    root: Type
    table: RecordTable
    declarations: List[Declaration] = field(init=False)

    def __post_init__(self) -> None:
        self.declarations = self.table.declarations(self.root)
        self._names = {d.ref.id: d.name for d in self.declarations}

    def name_of(self, ref: RecordRef) -> str:
        return self._names[ref.id]

    def record(self, ref: RecordRef) -> RecordType:
        return self.table.get(ref)


def infer_value(value: Any, config: Optional[Config] = None) -> InferenceResult:
    """Infer the type of one value with a fresh, isolated record table."""
    inferer = SchemaInferer(config=config)
    root = inferer.infer(value)
    result = InferenceResult(root=root, table=inferer.table)
    logger.info(
        "Inferred %s with %d declared records (%d interned)",
        root,
        len(result.declarations),
        len(inferer.table),
    )
    return result


def infer_documents(
    documents: Sequence[Any], config: Optional[Config] = None
) -> InferenceResult:
    """Infer the type of a document stream.

    A single document is inferred as is; several documents are wrapped into
    one array so their shapes are unified.
    """
    if not documents:
        raise NoInputError()
    if len(documents) == 1:
        return infer_value(documents[0], config)
    return infer_value(list(documents), config)


__all__ = [
    "SchemaInferer",
    "InferenceResult",
    "classify_integer",
    "classify_number_text",
    "infer_value",
    "infer_documents",
]
