"""Type Descriptor Table - builtin semantic types to OpenAPI schema fragments.

Invariants:
    - Lookup is a flat table keyed by canonical type name
    - Unknown names are never an error: they become component $refs
    - Every call returns a fresh dict (callers may extend the fragment)
"""

from typing import Any

from app.core.api_schema import TypeRef
from app.core.domain_types import Builtin


SCHEMA_REF_PREFIX = "#/components/schemas/"

_BUILTIN_SCHEMAS: dict[str, dict[str, Any]] = {
    Builtin.BOOLEAN.value: {"type": "boolean"},
    Builtin.UINT8.value: {"type": "integer", "format": "uint8"},
    Builtin.UINT16.value: {"type": "integer", "format": "uint16"},
    Builtin.UINT32.value: {"type": "integer", "format": "uint32"},
    Builtin.UINT64.value: {"type": "integer", "format": "uint64"},
    Builtin.INT8.value: {"type": "integer", "format": "int8"},
    Builtin.INT16.value: {"type": "integer", "format": "int16"},
    Builtin.INT32.value: {"type": "integer", "format": "int32"},
    Builtin.INT64.value: {"type": "integer", "format": "int64"},
    Builtin.FLOAT.value: {"type": "number", "format": "float"},
    Builtin.DOUBLE.value: {"type": "number", "format": "double"},
    Builtin.NUMBER.value: {"type": "number"},
    Builtin.STRING.value: {"type": "string"},
    Builtin.OBJECT.value: {"type": "object"},
}


def schema_ref(name: str) -> dict[str, str]:
    """Reference fragment to a schema in components.schemas."""
    return {"$ref": f"{SCHEMA_REF_PREFIX}{name}"}


def type_schema(ref: TypeRef | None) -> dict[str, Any]:
    """Resolve a TypeRef to an inline builtin fragment or a named $ref.

    None resolves to the unconstrained schema `{}`.
    """
    if ref is None:
        return {}
    if ref.name == Builtin.ARRAY.value:
        return {"type": "array", "items": type_schema(ref.items)}
    fragment = _BUILTIN_SCHEMAS.get(ref.name)
    if fragment is None:
        return schema_ref(ref.name)
    return dict(fragment)


def referenced_names(ref: TypeRef | None) -> list[str]:
    """Component names a TypeRef points at (array elements included)."""
    if ref is None:
        return []
    if ref.name == Builtin.ARRAY.value:
        return referenced_names(ref.items)
    if ref.name in _BUILTIN_SCHEMAS:
        return []
    return [ref.name]
