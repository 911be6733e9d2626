"""OpenAPI Synthesis - builds one OpenAPI 3.0 document from the API schema.

Invariants:
    - PURE and deterministic: same components + info -> identical dict, and
      render_openapi_json() of it is byte-identical across runs
    - Field insertion order depends only on component/route declaration order
    - Reserved schemas (Error, Timestamp, Identifier) seeded once, first;
      a component with a reserved name is skipped
    - Paths keep brace syntax; routes sharing a path share one path item
    - Only Body inputs go to requestBody; None-location inputs are not emitted
    - Every declared throw status references the Error schema

Design Decisions:
    - Success response key is the route's declared status (201 for creates),
      not a fixed 200; clients generated from the document see the real code
    - Throws sharing a status collapse into one response whose description
      joins both in declaration order; the later one does not erase the earlier
    - Security schemes accumulate across all components (first declaration of
      a name wins), so every operation's requirement resolves
    - The success key and scheme accumulation knowingly change the emitted
      document compared with a fixed-200 layout that resets schemes per
      component
"""

import json
from typing import Any, Iterable, Mapping

from app.core.api_schema import AuthRequirement, Component, Parameter, Route
from app.core.domain_types import Location
from app.core.enforce_schema import RESERVED_SCHEMA_NAMES
from app.core.type_descriptors import schema_ref, type_schema


OPENAPI_VERSION = "3.0.0"
JSON_MEDIA_TYPE = "application/json"
SUCCESS_DESCRIPTION = "Success"


def reserved_schemas() -> dict[str, dict[str, Any]]:
    """Fixed auxiliary schemas present in every document."""
    return {
        "Error": {
            "type": "object",
            "properties": {"error": {"type": "string"}},
        },
        "Timestamp": {"type": "integer", "format": "int64"},
        "Identifier": {"type": "string"},
    }


def _described(description: str | None, fragment: dict[str, Any]) -> dict[str, Any]:
    if description is None:
        return fragment
    return {"description": description, **fragment}


def _json_content(schema: dict[str, Any]) -> dict[str, Any]:
    return {JSON_MEDIA_TYPE: {"schema": schema}}


# ─── Schemas ─────────────────────────────────────────────────────

def component_schema(component: Component) -> dict[str, Any]:
    """Object schema for a component's own properties."""
    return _described(component.description, {
        "type": "object",
        "properties": {
            prop.name: _described(prop.description, type_schema(prop.type))
            for prop in component.properties
        },
    })


# ─── Operations ──────────────────────────────────────────────────

def parameter_object(param: Parameter) -> dict[str, Any]:
    return _described(param.description, {
        "name": param.name,
        "in": param.location.value,
        "required": True,
        "schema": type_schema(param.type),
    })


def request_body(route: Route) -> dict[str, Any] | None:
    """Single unnamed body -> direct schema; otherwise inline object of named fields."""
    body = route.body_parameters()
    if not body:
        return None
    if len(body) == 1 and not body[0].name:
        schema = type_schema(body[0].type)
    else:
        schema = {
            "type": "object",
            "properties": {
                param.name: _described(param.description, type_schema(param.type))
                for param in body if param.name
            },
        }
    return {"required": True, "content": _json_content(schema)}


def responses(route: Route) -> dict[str, Any]:
    result: dict[str, Any] = {
        str(route.status): {
            "description": SUCCESS_DESCRIPTION,
            "content": _json_content(type_schema(route.output)),
        },
    }
    declared: set[str] = set()
    for mapping in route.throws:
        key = str(mapping.status)
        description = mapping.description or mapping.error_kind.__name__
        if key in declared:
            description = f"{result[key]['description']}; {description}"
        declared.add(key)
        result[key] = {
            "description": description,
            "content": _json_content(schema_ref("Error")),
        }
    return result


def security_requirement(route: Route) -> list[dict[str, list]]:
    if route.authorization is None:
        return []
    return [{route.authorization.name: []}]


def security_scheme(auth: AuthRequirement) -> dict[str, str]:
    return {"type": "apiKey", "name": auth.name, "in": auth.location.value}


def operation_object(component: Component, route: Route) -> dict[str, Any]:
    operation: dict[str, Any] = {"operationId": component.operation_id(route)}
    if route.description is not None:
        operation["description"] = route.description
    operation["tags"] = [component.name]
    operation["parameters"] = [
        parameter_object(p)
        for p in route.non_body_parameters()
        if p.location != Location.NONE
    ]
    body = request_body(route)
    if body is not None:
        operation["requestBody"] = body
    operation["responses"] = responses(route)
    operation["security"] = security_requirement(route)
    return operation


# ─── Document ────────────────────────────────────────────────────

def build_openapi_document(
    components: Iterable[Component], info: Mapping[str, Any],
) -> dict[str, Any]:
    """Synthesize the full document in one pass over the components."""
    schemas = reserved_schemas()
    security_schemes: dict[str, Any] = {}
    paths: dict[str, dict[str, Any]] = {}

    for component in components:
        if component.name not in RESERVED_SCHEMA_NAMES:
            schemas[component.name] = component_schema(component)
        for route in component.routes:
            item = paths.setdefault(route.path, {})
            item[route.method.value.lower()] = operation_object(component, route)
            auth = route.authorization
            if auth is not None and auth.name not in security_schemes:
                security_schemes[auth.name] = security_scheme(auth)

    return {
        "openapi": OPENAPI_VERSION,
        "info": dict(info),
        "paths": paths,
        "components": {
            "schemas": schemas,
            "securitySchemes": security_schemes,
        },
    }


def render_openapi_json(document: Mapping[str, Any]) -> str:
    """Serialize a document deterministically (stable across runs)."""
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
