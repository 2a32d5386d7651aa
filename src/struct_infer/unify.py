#!/usr/bin/env python3
"""
Type unification.

`unify(a, b)` returns the least type in the lattice that can represent values
of both `a` and `b`. The rules are checked in this order:

1. ANY with anything           -> ANY
2. identical types             -> that type
3. UNDEFINED with T            -> T
4. INT64 with FLOAT64          -> FLOAT64
5. INT64/FLOAT64 with STRING   -> STRING
6. [A] with [B]                -> [unify(A, B)]
7. record with record          -> merged record (interned)
8. anything else               -> ANY

Unification never fails; losing precision to ANY is the worst case.
"""
from __future__ import annotations

from typing import Dict, Optional

from .config import Config
from .interner import RecordTable
from .logging_config import get_logger
from .models import (
    ANY,
    FLOAT64,
    NUMERIC_TYPES,
    STRING,
    UNDEFINED,
    ArrayType,
    OptionalType,
    RecordField,
    RecordRef,
    Type,
    make_optional,
    strip_optional,
)

logger = get_logger(__name__)


class TypeUnifier:
    """Unifies types against one run's record table."""

    def __init__(self, table: RecordTable, config: Optional[Config] = None):
        self.table = table
        self.config = config or Config()

    def unify(self, a: Type, b: Type) -> Type:
        if a == ANY or b == ANY:
            return ANY
        if a == b:
            return a
        if a == UNDEFINED:
            return b
        if b == UNDEFINED:
            return a

        if isinstance(a, OptionalType) or isinstance(b, OptionalType):
            inner = self.unify(strip_optional(a), strip_optional(b))
            return make_optional(inner)

        if a in NUMERIC_TYPES and b in NUMERIC_TYPES:
            return FLOAT64
        if (a in NUMERIC_TYPES and b == STRING) or (a == STRING and b in NUMERIC_TYPES):
            return STRING

        if isinstance(a, ArrayType) and isinstance(b, ArrayType):
            return ArrayType(element=self.unify(a.element, b.element))

        if isinstance(a, RecordRef) and isinstance(b, RecordRef):
            return self._merge_records(a, b)

        logger.debug("No common type for %s and %s; using any", a, b)
        return ANY

    def _merge_records(self, a: RecordRef, b: RecordRef) -> RecordRef:
        left = self.table.get(a)
        right = self.table.get(b)

        merged: Dict[str, RecordField] = {f.converted_name: f for f in left.fields}
        for f in right.fields:
            existing = merged.get(f.converted_name)
            if existing is None:
                merged[f.converted_name] = self._one_sided(f)
            else:
                # The left side's key wins; both keys convert to the same name
                merged[f.converted_name] = RecordField(
                    converted_name=f.converted_name,
                    original_name=existing.original_name,
                    type=self.unify(existing.type, f.type),
                )

        if self.config.optional_fields:
            right_names = set(right.field_names())
            for name in left.field_names():
                if name not in right_names:
                    merged[name] = self._one_sided(merged[name])

        return self.table.intern(merged.values())

    def _one_sided(self, f: RecordField) -> RecordField:
        """A field seen in only one of the merged shapes."""
        if not self.config.optional_fields:
            return f
        return RecordField(
            converted_name=f.converted_name,
            original_name=f.original_name,
            type=make_optional(f.type),
        )


def unify(
    a: Type, b: Type, table: RecordTable, config: Optional[Config] = None
) -> Type:
    """Unify two types against `table`; see the module docstring for the rules."""
    return TypeUnifier(table, config).unify(a, b)
