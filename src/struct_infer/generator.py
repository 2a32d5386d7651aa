#!/usr/bin/env python3
"""
Declaration generation for struct-infer.

Renders an InferenceResult (root type + named record declarations) as:
- Go type declarations with encoding/json struct tags
- pydantic models
- JSON Schema (draft-07)

Renderers only read the result; all inference happens before this point.
Identifiers that cannot be expressed in the target syntax raise RenderError.
"""
from __future__ import annotations

import json
import keyword
from typing import Any, Callable, Dict, List, Optional, Tuple

import jsonschema

from .constants import (
    DEFAULT_INDENT_SIZE,
    DEFAULT_JSON_SCHEMA_VERSION,
    DEFAULT_OUTPUT_FORMAT,
    ROOT_DECLARATION_NAME,
    SUPPORTED_OUTPUT_FORMATS,
)
from .exceptions import RenderError
from .infer import InferenceResult
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
    OptionalType,
    RecordRef,
    Type,
    iter_record_refs,
)

logger = get_logger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Go
# ──────────────────────────────────────────────────────────────────────────────

GO_SCALARS = {
    ANY: "any",
    UNDEFINED: "struct{}",
    BOOL: "bool",
    INT64: "int64",
    FLOAT64: "float64",
    STRING: "string",
}

GO_KEYWORDS = frozenset(
    """break case chan const continue default defer else fallthrough for func go
    goto if import interface map package range return select struct switch type var""".split()
)

# Punctuation encoding/json accepts in a tag name besides letters and digits
GO_TAG_PUNCTUATION = frozenset("!#$%&()*+-./:;<=>?@[]^_{|}~ ")


def _check_go_field_name(name: str) -> None:
    if not name.isidentifier() or name in GO_KEYWORDS:
        raise RenderError(
            "Field name is not a valid Go identifier",
            target_format="go",
            identifier=name,
        )
    if not name[0].isupper():
        raise RenderError(
            "Field name is not exported, encoding/json would ignore it",
            target_format="go",
            identifier=name,
        )


def _go_json_tag(key: str) -> str:
    if not key or not all(
        c in GO_TAG_PUNCTUATION or c.isalpha() or c.isdigit() for c in key
    ):
        raise RenderError(
            "JSON key cannot be expressed as an encoding/json tag",
            target_format="go",
            identifier=key,
        )
    return f'`json:"{key},omitempty"`'


def _go_type(t: Type, result: InferenceResult) -> str:
    if isinstance(t, RecordRef):
        return "*" + result.name_of(t)
    if isinstance(t, ArrayType):
        return "[]" + _go_type(t.element, result)
    if isinstance(t, OptionalType):
        inner = _go_type(t.inner, result)
        # Records are pointers and slices are nilable already
        if isinstance(t.inner, (RecordRef, ArrayType)):
            return inner
        return "*" + inner
    return GO_SCALARS[t]


def _generate_go(result: InferenceResult) -> str:
    # Nothing observed at the top (null, {}): unmarshal into an interface
    root = "any" if result.root == UNDEFINED else _go_type(result.root, result)
    lines = [f"var {ROOT_DECLARATION_NAME} {root} // Unmarshal into this type."]

    for decl in result.declarations:
        rows = []
        for f in decl.fields:
            _check_go_field_name(f.converted_name)
            rows.append(
                (f.converted_name, _go_type(f.type, result), _go_json_tag(f.original_name))
            )

        # gofmt-style column alignment
        name_width = max(len(r[0]) for r in rows)
        type_width = max(len(r[1]) for r in rows)

        lines.append("")
        lines.append(f"type {decl.name} struct {{")
        for name, go_type, tag in rows:
            lines.append(f"\t{name.ljust(name_width)} {go_type.ljust(type_width)} {tag}")
        lines.append("}")

    return "\n".join(lines) + "\n"


# ──────────────────────────────────────────────────────────────────────────────
# pydantic
# ──────────────────────────────────────────────────────────────────────────────

PYTHON_SCALARS = {
    ANY: "typing.Any",
    UNDEFINED: "typing.Any",
    BOOL: "bool",
    INT64: "int",
    FLOAT64: "float",
    STRING: "str",
}

PYDANTIC_ROOT_ALIAS = "Data"


def _python_type(t: Type, result: InferenceResult) -> str:
    if isinstance(t, RecordRef):
        return result.name_of(t)
    if isinstance(t, ArrayType):
        return f"list[{_python_type(t.element, result)}]"
    if isinstance(t, OptionalType):
        return f"typing.Optional[{_python_type(t.inner, result)}]"
    return PYTHON_SCALARS[t]


def _check_python_field_name(name: str, class_names: set) -> None:
    if not name.isidentifier() or keyword.iskeyword(name):
        raise RenderError(
            "Field name is not a valid Python identifier",
            target_format="pydantic",
            identifier=name,
        )
    if name in class_names or name == PYDANTIC_ROOT_ALIAS:
        raise RenderError(
            "Field name shadows a generated model name",
            target_format="pydantic",
            identifier=name,
        )


def _dependency_order(result: InferenceResult) -> List[Declaration]:
    """Declarations ordered so every model is defined before it is referenced."""
    by_id = {d.ref.id: d for d in result.declarations}
    ordered: List[Declaration] = []
    done = set()

    def visit(decl: Declaration) -> None:
        if decl.ref.id in done:
            return
        done.add(decl.ref.id)
        for f in decl.fields:
            for ref in iter_record_refs(f.type):
                visit(by_id[ref.id])
        ordered.append(decl)

    for decl in result.declarations:
        visit(decl)
    return ordered


def _generate_pydantic(result: InferenceResult) -> str:
    class_names = {d.name for d in result.declarations}
    lines = [
        "# Generated by struct-infer.",
        "",
        "import typing",
        "",
        "import pydantic",
    ]

    for decl in _dependency_order(result):
        lines.extend(["", "", f"class {decl.name}(pydantic.BaseModel):"])
        for f in decl.fields:
            _check_python_field_name(f.converted_name, class_names)
            annotation = _python_type(f.type, result)
            default = "default=None, " if isinstance(f.type, OptionalType) else ""
            lines.append(
                f"    {f.converted_name}: {annotation} = "
                f"pydantic.Field({default}alias={json.dumps(f.original_name)})"
            )

    lines.extend(["", "", f"{PYDANTIC_ROOT_ALIAS} = {_python_type(result.root, result)}"])
    return "\n".join(lines) + "\n"


# ──────────────────────────────────────────────────────────────────────────────
# JSON Schema
# ──────────────────────────────────────────────────────────────────────────────

JSON_SCHEMA_SCALARS: Dict[Type, Dict[str, Any]] = {
    ANY: {},
    UNDEFINED: {"$comment": "no values observed"},
    BOOL: {"type": "boolean"},
    INT64: {"type": "integer"},
    FLOAT64: {"type": "number"},
    STRING: {"type": "string"},
}


def _json_schema_type(t: Type, result: InferenceResult) -> Dict[str, Any]:
    if isinstance(t, RecordRef):
        return {"$ref": f"#/definitions/{result.name_of(t)}"}
    if isinstance(t, ArrayType):
        return {"type": "array", "items": _json_schema_type(t.element, result)}
    if isinstance(t, OptionalType):
        return _json_schema_type(t.inner, result)
    return dict(JSON_SCHEMA_SCALARS[t])


def _build_json_schema(result: InferenceResult) -> Dict[str, Any]:
    definitions: Dict[str, Any] = {}
    for decl in result.declarations:
        properties = {
            f.original_name: _json_schema_type(f.type, result) for f in decl.fields
        }
        required = [
            f.original_name for f in decl.fields if not isinstance(f.type, OptionalType)
        ]
        definition: Dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            definition["required"] = required
        definitions[decl.name] = definition

    schema: Dict[str, Any] = {
        "$schema": DEFAULT_JSON_SCHEMA_VERSION,
        "title": ROOT_DECLARATION_NAME,
    }
    root = _json_schema_type(result.root, result)
    if "$ref" in root:
        # Keywords beside $ref are ignored in draft-07
        schema["allOf"] = [root]
    else:
        schema.update(root)
    if definitions:
        schema["definitions"] = definitions
    return schema


def _generate_json_schema(result: InferenceResult) -> str:
    return json.dumps(
        _build_json_schema(result), indent=DEFAULT_INDENT_SIZE, ensure_ascii=False
    ) + "\n"


def validate_json_schema(schema_str: str) -> Tuple[bool, Optional[str]]:
    """Check generated JSON Schema text against the draft-07 meta-schema."""
    try:
        schema = json.loads(schema_str)
    except json.JSONDecodeError as e:
        return False, f"Invalid JSON: {e.msg}"

    try:
        jsonschema.Draft7Validator.check_schema(schema)
    except jsonschema.exceptions.SchemaError as e:
        return False, f"JSON Schema validation error: {e.message}"
    return True, None


# ──────────────────────────────────────────────────────────────────────────────
# Dispatch
# ──────────────────────────────────────────────────────────────────────────────

_GENERATORS: Dict[str, Callable[[InferenceResult], str]] = {
    "go": _generate_go,
    "pydantic": _generate_pydantic,
    "json_schema": _generate_json_schema,
}

_VALIDATORS: Dict[str, Callable[[str], Tuple[bool, Optional[str]]]] = {
    "json_schema": validate_json_schema,
}

_DESCRIPTIONS = {
    "go": "Go type declarations with encoding/json struct tags",
    "pydantic": "pydantic v2 models with aliases for the original JSON keys",
    "json_schema": "JSON Schema (draft-07) with records under definitions",
}


def generate_declarations(
    result: InferenceResult,
    format: str = DEFAULT_OUTPUT_FORMAT,
    validate: bool = True,
) -> str:
    """Render `result` in `format`.

    Raises
    ------
    RenderError
        If the format is unknown, an identifier is not valid in the target
        syntax, or validation of the generated output fails.
    """
    generator = _GENERATORS.get(format)
    if generator is None:
        raise RenderError(
            f"Unsupported output format: {format}",
            target_format=format,
        )

    output = generator(result)
    logger.debug(
        "Rendered %d declaration(s) as %s", len(result.declarations), format
    )

    validator = _VALIDATORS.get(format)
    if validate and validator is not None:
        ok, error = validator(output)
        if not ok:
            raise RenderError(
                f"Generated {format} failed validation: {error}",
                target_format=format,
            )
    return output


def get_supported_formats() -> List[str]:
    """Get list of supported output formats."""
    return list(SUPPORTED_OUTPUT_FORMATS)


def get_format_description(format: str) -> str:
    """Get a one-line description of an output format."""
    return _DESCRIPTIONS.get(format, "Unknown format")


__all__ = [
    "generate_declarations",
    "validate_json_schema",
    "get_supported_formats",
    "get_format_description",
]
