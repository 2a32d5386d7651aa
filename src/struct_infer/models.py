#!/usr/bin/env python3
"""
Structural type lattice for struct-infer.

Types are immutable pydantic models compared by value, so two independently
built types with the same shape are equal and hash alike.

Lattice, from bottom to top:
- UNDEFINED: nothing observed yet (null, empty object, element of an empty array)
- BOOL, INT64, FLOAT64, STRING: scalar leaves
- ArrayType(element)
- RecordRef(id): handle of an interned RecordType in the run's RecordTable
- ANY: fully dynamic

OptionalType(inner) only appears when optional field tracking is enabled.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterator, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict


class TypeKind(str, Enum):
    """Scalar kinds, including the lattice top and bottom."""

    ANY = "any"
    UNDEFINED = "undefined"
    BOOL = "bool"
    INT64 = "int64"
    FLOAT64 = "float64"
    STRING = "string"


class SchemaType(BaseModel):
    """Base class for all inferred types."""

    model_config = ConfigDict(frozen=True)


class ScalarType(SchemaType):
    """A scalar leaf, or the ANY/UNDEFINED extremes of the lattice."""

    kind: TypeKind

    def __str__(self) -> str:
        return self.kind.value


class ArrayType(SchemaType):
    """Homogeneous sequence of `element`."""

    element: Type

    def __str__(self) -> str:
        return f"[{self.element}]"


class RecordRef(SchemaType):
    """Handle of an interned record; equal handles mean equal shapes."""

    id: int

    def __str__(self) -> str:
        return f"record#{self.id}"


class OptionalType(SchemaType):
    """A record field that was absent from some of the merged shapes."""

    inner: Type

    def __str__(self) -> str:
        return f"optional({self.inner})"


Type = Union[ScalarType, ArrayType, RecordRef, OptionalType]


class RecordField(SchemaType):
    """One field of a record.

    `converted_name` is the identifier used in generated code, `original_name`
    the JSON key it (de)serializes from.
    """

    converted_name: str
    original_name: str
    type: Type


class RecordType(SchemaType):
    """Arena entry of the record table; fields are sorted by converted name."""

    fields: Tuple[RecordField, ...] = ()

    def field_names(self) -> list[str]:
        return [f.converted_name for f in self.fields]

    def get(self, converted_name: str) -> Optional[RecordField]:
        for f in self.fields:
            if f.converted_name == converted_name:
                return f
        return None


class Declaration(SchemaType):
    """A named record reachable from the root, as handed to renderers."""

    name: str
    ref: RecordRef
    record: RecordType

    @property
    def fields(self) -> Tuple[RecordField, ...]:
        return self.record.fields


ArrayType.model_rebuild()
OptionalType.model_rebuild()
RecordField.model_rebuild()
RecordType.model_rebuild()
Declaration.model_rebuild()


ANY = ScalarType(kind=TypeKind.ANY)
UNDEFINED = ScalarType(kind=TypeKind.UNDEFINED)
BOOL = ScalarType(kind=TypeKind.BOOL)
INT64 = ScalarType(kind=TypeKind.INT64)
FLOAT64 = ScalarType(kind=TypeKind.FLOAT64)
STRING = ScalarType(kind=TypeKind.STRING)

NUMERIC_TYPES = frozenset({INT64, FLOAT64})


def make_optional(t: Type) -> Type:
    """Wrap `t` as optional unless it already is, or is ANY/UNDEFINED."""
    if isinstance(t, OptionalType) or t == ANY or t == UNDEFINED:
        return t
    return OptionalType(inner=t)


def strip_optional(t: Type) -> Type:
    return t.inner if isinstance(t, OptionalType) else t


def iter_record_refs(t: Type) -> Iterator[RecordRef]:
    """Yield the record handles directly reachable from `t` (not through records)."""
    if isinstance(t, RecordRef):
        yield t
    elif isinstance(t, ArrayType):
        yield from iter_record_refs(t.element)
    elif isinstance(t, OptionalType):
        yield from iter_record_refs(t.inner)


__all__ = [
    "TypeKind",
    "SchemaType",
    "ScalarType",
    "ArrayType",
    "RecordRef",
    "OptionalType",
    "Type",
    "RecordField",
    "RecordType",
    "Declaration",
    "ANY",
    "UNDEFINED",
    "BOOL",
    "INT64",
    "FLOAT64",
    "STRING",
    "NUMERIC_TYPES",
    "make_optional",
    "strip_optional",
    "iter_record_refs",
]
