#!/usr/bin/env python3
"""
Record interning.

A RecordTable is the arena of every record shape seen during one inference
run. Each distinct shape is stored once and addressed by an integer handle
(RecordRef) assigned in discovery order, so structurally equal records, no
matter where they occur in the input, share one handle.

Canonical names are assigned only when the table is exported for rendering:
records reachable from the root type are named S001, S002, ... in
breadth-first order, the order in which a reader meets them in the output.
Intermediate shapes produced while folding arrays stay in the arena but are
not declared.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Iterable, Iterator, List, Optional

from .constants import DEFAULT_RECORD_PREFIX, RECORD_NAME_WIDTH
from .logging_config import get_logger
from .models import (
    Declaration,
    RecordField,
    RecordRef,
    RecordType,
    Type,
    iter_record_refs,
)

logger = get_logger(__name__)


class RecordTable:
    """Append-only, run-scoped arena of interned record shapes."""

    def __init__(self, prefix: str = DEFAULT_RECORD_PREFIX):
        self.prefix = prefix
        self._records: List[RecordType] = []
        self._ids: Dict[RecordType, int] = {}

    def intern(self, fields: Iterable[RecordField]) -> RecordRef:
        """Return the handle for the record made of `fields`, adding it if new.

        Fields are sorted by converted name first, so key order in the source
        object does not affect identity.
        """
        record = RecordType(
            fields=tuple(sorted(fields, key=lambda f: f.converted_name))
        )
        existing = self._ids.get(record)
        if existing is not None:
            return RecordRef(id=existing)

        record_id = len(self._records)
        self._records.append(record)
        self._ids[record] = record_id
        logger.debug(
            "Interned record #%d with fields %s", record_id, record.field_names()
        )
        return RecordRef(id=record_id)

    def get(self, ref: RecordRef) -> RecordType:
        return self._records[ref.id]

    def lookup(self, record: RecordType) -> Optional[RecordRef]:
        record_id = self._ids.get(record)
        return None if record_id is None else RecordRef(id=record_id)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[RecordType]:
        return iter(self._records)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, RecordRef):
            return 0 <= item.id < len(self._records)
        return item in self._ids

    def format_name(self, index: int) -> str:
        """Canonical name of the `index`-th declaration (1-based)."""
        return f"{self.prefix}{index:0{RECORD_NAME_WIDTH}d}"

    def declarations(self, root: Type) -> List[Declaration]:
        """Name and list every record reachable from `root`, breadth first."""
        order: List[RecordRef] = []
        seen = set()
        queue: Deque[RecordRef] = deque()

        def visit(t: Type) -> None:
            for ref in iter_record_refs(t):
                if ref.id not in seen:
                    seen.add(ref.id)
                    order.append(ref)
                    queue.append(ref)

        visit(root)
        while queue:
            for f in self.get(queue.popleft()).fields:
                visit(f.type)

        decls = [
            Declaration(name=self.format_name(i), ref=ref, record=self.get(ref))
            for i, ref in enumerate(order, 1)
        ]
        logger.debug(
            "%d of %d interned records reachable from root", len(decls), len(self)
        )
        return decls
