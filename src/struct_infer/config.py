from dataclasses import dataclass

from .constants import DEFAULT_RECORD_PREFIX


@dataclass(frozen=True)
class Config:
    optional_fields: bool = False  # wrap fields missing from some merged shapes
    coerce_numeric_strings: bool = True  # "42" -> int64, "4.2" -> float64
    record_prefix: str = DEFAULT_RECORD_PREFIX
