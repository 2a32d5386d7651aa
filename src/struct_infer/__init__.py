"""Infer structural types from JSON data and generate declarations for them."""

__version__ = "0.1.0"

from .config import Config
from .decoder import load_documents, loads_documents
from .exceptions import StructInferError
from .generator import generate_declarations
from .infer import InferenceResult, SchemaInferer, infer_documents, infer_value
from .interner import RecordTable
from .unify import TypeUnifier, unify

__all__ = [
    "__version__",
    "Config",
    "InferenceResult",
    "RecordTable",
    "SchemaInferer",
    "StructInferError",
    "TypeUnifier",
    "generate_declarations",
    "infer_documents",
    "infer_value",
    "load_documents",
    "loads_documents",
    "unify",
]
