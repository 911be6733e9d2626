"""Domain Types - enums and identity types shared by the schema layer and components.

Invariants:
    - Location values are the OpenAPI `in` strings (plus body/session/none)
    - Builtin values are the canonical type names used as TypeRef keys
    - All valid states encoded as Enums - no raw string matching

Design Decisions:
    - str Enums: serialize to JSON and compare equal to their wire value
    - NewType for identifiers: zero runtime cost, type-checker support
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

StudyId = NewType("StudyId", str)
ResearcherId = NewType("ResearcherId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Location(str, Enum):
    """Request source a route parameter is extracted from."""
    PATH = "path"
    QUERY = "query"
    BODY = "body"
    HEADER = "header"
    COOKIE = "cookie"
    SESSION = "session"
    NONE = "none"


class HttpMethod(str, Enum):
    """HTTP methods a route may be bound to."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class Builtin(str, Enum):
    """Builtin semantic types with a fixed wire-schema mapping."""
    BOOLEAN = "Boolean"
    UINT8 = "UInt8"
    UINT16 = "UInt16"
    UINT32 = "UInt32"
    UINT64 = "UInt64"
    INT8 = "Int8"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    FLOAT = "Float"
    DOUBLE = "Double"
    NUMBER = "Number"
    STRING = "String"
    ARRAY = "Array"
    OBJECT = "Object"


# Auth credentials can only be carried where OpenAPI apiKey schemes allow.
AUTH_LOCATIONS = frozenset({Location.HEADER, Location.QUERY, Location.COOKIE})
