"""OpenAPI Synthesis - tests for the pure document builder.

Tests cover:
    - Document envelope and reserved schemas
    - Component schemas and reserved-name skipping
    - Operation ids, tags, parameters (non-body, non-none, all required)
    - requestBody: $ref for a single unnamed body, inline object otherwise
    - Responses: success entry, Error refs per throw status, shared statuses
    - Security requirements and accumulated security schemes
    - Shared paths accumulate methods
    - Determinism of the dict and of its JSON rendering
"""

import json

from app.core.api_schema import (
    AuthRequirement, Component, ExceptionMapping, Parameter, Property, Route,
    TypeRef, array_of, type_ref,
)
from app.core.domain_types import Builtin, HttpMethod, Location
from app.core.openapi_document import (
    OPENAPI_VERSION,
    build_openapi_document,
    render_openapi_json,
    request_body,
    reserved_schemas,
    responses,
)


INFO = {"title": "Test API", "version": "0.1.0"}
TOKEN = AuthRequirement("Authorization", Location.HEADER)


class NotFound(Exception):
    pass


class Gone(Exception):
    pass


def _study_component() -> Component:
    return Component(
        name="Study",
        description="A study.",
        properties=(
            Property("id", type_ref("Identifier"), "Study id"),
            Property("name", type_ref(Builtin.STRING)),
        ),
        routes=(
            Route(
                "view", HttpMethod.GET, "/study/{study_id}",
                output=type_ref("Study"),
                input=(Parameter(Location.PATH, type_ref("Identifier"), name="study_id"),),
                throws=(ExceptionMapping(NotFound, 404, "Study not found"),),
                authorization=TOKEN,
                description="Get a study.",
            ),
            Route(
                "update", HttpMethod.PUT, "/study/{study_id}",
                output=type_ref("Identifier"),
                input=(
                    Parameter(Location.PATH, type_ref("Identifier"), name="study_id"),
                    Parameter(Location.BODY, type_ref("Study")),
                ),
            ),
        ),
    )


def _document(*components: Component) -> dict:
    return build_openapi_document(components or [_study_component()], INFO)


# ─── envelope & schemas ──────────────────────────────────────────

def test_document_envelope():
    doc = _document()
    assert doc["openapi"] == OPENAPI_VERSION == "3.0.0"
    assert doc["info"] == INFO
    assert set(doc) == {"openapi", "info", "paths", "components"}
    assert set(doc["components"]) == {"schemas", "securitySchemes"}


def test_reserved_schemas_seeded_first():
    schemas = _document()["components"]["schemas"]
    assert list(schemas)[:3] == ["Error", "Timestamp", "Identifier"]
    assert schemas["Error"] == {
        "type": "object", "properties": {"error": {"type": "string"}},
    }
    assert schemas["Timestamp"] == {"type": "integer", "format": "int64"}
    assert schemas["Identifier"] == {"type": "string"}


def test_reserved_schemas_present_without_components():
    doc = build_openapi_document([], INFO)
    assert doc["components"]["schemas"] == reserved_schemas()
    assert doc["paths"] == {}


def test_component_schema_resolves_properties():
    assert _document()["components"]["schemas"]["Study"] == {
        "description": "A study.",
        "type": "object",
        "properties": {
            "id": {
                "description": "Study id",
                "$ref": "#/components/schemas/Identifier",
            },
            "name": {"type": "string"},
        },
    }


def test_component_with_reserved_name_loses_its_shape():
    error = Component("Error", properties=(Property("code", type_ref(Builtin.INT32)),))
    schemas = _document(error)["components"]["schemas"]
    assert schemas["Error"] == reserved_schemas()["Error"]


def test_component_without_routes_still_has_schema():
    widget = Component("Widget", properties=(Property("size", type_ref(Builtin.UINT8)),))
    doc = _document(widget)
    assert doc["components"]["schemas"]["Widget"]["properties"]["size"] == {
        "type": "integer", "format": "uint8",
    }
    assert doc["paths"] == {}


# ─── operations ──────────────────────────────────────────────────

def test_shared_path_accumulates_methods():
    item = _document()["paths"]["/study/{study_id}"]
    assert list(item) == ["get", "put"]


def test_operation_fields():
    op = _document()["paths"]["/study/{study_id}"]["get"]
    assert op["operationId"] == "Study::view"
    assert op["description"] == "Get a study."
    assert op["tags"] == ["Study"]
    assert op["parameters"] == [{
        "name": "study_id",
        "in": "path",
        "required": True,
        "schema": {"$ref": "#/components/schemas/Identifier"},
    }]
    assert "requestBody" not in op


def test_parameters_exclude_body_and_none_locations():
    route = Route(
        "search", HttpMethod.POST, "/search", type_ref(Builtin.OBJECT),
        input=(
            Parameter(Location.QUERY, type_ref(Builtin.STRING), name="q"),
            Parameter(Location.NONE),
            Parameter(Location.HEADER, type_ref(Builtin.STRING), name="X-Trace"),
            Parameter(Location.COOKIE, type_ref(Builtin.STRING), name="sid"),
            Parameter(Location.BODY, type_ref(Builtin.INT32), name="limit"),
        ),
    )
    doc = _document(Component("Search", routes=(route,)))
    params = doc["paths"]["/search"]["post"]["parameters"]
    assert [(p["name"], p["in"]) for p in params] == [
        ("q", "query"), ("X-Trace", "header"), ("sid", "cookie"),
    ]
    assert all(p["required"] is True for p in params)


def test_single_unnamed_body_is_direct_ref():
    op = _document()["paths"]["/study/{study_id}"]["put"]
    assert op["requestBody"] == {
        "required": True,
        "content": {
            "application/json": {
                "schema": {"$ref": "#/components/schemas/Study"},
            },
        },
    }


def test_named_body_parameters_become_inline_object():
    route = Route(
        "rename", HttpMethod.POST, "/rename", type_ref(Builtin.BOOLEAN),
        input=(
            Parameter(Location.BODY, type_ref(Builtin.STRING), name="name",
                      description="New name"),
            Parameter(Location.BODY, array_of(Builtin.STRING), name="tags"),
        ),
    )
    body = request_body(route)
    schema = body["content"]["application/json"]["schema"]
    assert schema["type"] == "object"
    assert set(schema["properties"]) == {"name", "tags"}
    assert schema["properties"]["name"] == {
        "description": "New name", "type": "string",
    }
    assert schema["properties"]["tags"] == {
        "type": "array", "items": {"type": "string"},
    }


def test_no_body_parameters_means_no_request_body():
    route = Route("all", HttpMethod.GET, "/study", array_of("Study"))
    assert request_body(route) is None


# ─── responses ───────────────────────────────────────────────────

def test_success_and_declared_failures():
    op = _document()["paths"]["/study/{study_id}"]["get"]
    assert op["responses"] == {
        "200": {
            "description": "Success",
            "content": {"application/json": {
                "schema": {"$ref": "#/components/schemas/Study"},
            }},
        },
        "404": {
            "description": "Study not found",
            "content": {"application/json": {
                "schema": {"$ref": "#/components/schemas/Error"},
            }},
        },
    }


def test_failure_description_defaults_to_kind_name():
    route = Route(
        "x", HttpMethod.GET, "/x", type_ref(Builtin.STRING),
        throws=(ExceptionMapping(Gone, 410),),
    )
    assert responses(route)["410"]["description"] == "Gone"


def test_shared_status_joins_descriptions():
    route = Route(
        "x", HttpMethod.GET, "/x", type_ref(Builtin.STRING),
        throws=(
            ExceptionMapping(NotFound, 404, "Missing"),
            ExceptionMapping(Gone, 404),
        ),
    )
    result = responses(route)
    assert list(result) == ["200", "404"]
    assert result["404"]["description"] == "Missing; Gone"


def test_success_key_follows_route_status():
    route = Route(
        "create", HttpMethod.POST, "/x", type_ref("Identifier"), status=201,
    )
    assert list(responses(route)) == ["201"]


def test_array_output_resolves_items():
    route = Route("all", HttpMethod.GET, "/study", array_of("Study"))
    schema = responses(route)["200"]["content"]["application/json"]["schema"]
    assert schema == {
        "type": "array", "items": {"$ref": "#/components/schemas/Study"},
    }


# ─── security ────────────────────────────────────────────────────

def test_security_requirement_per_route():
    item = _document()["paths"]["/study/{study_id}"]
    assert item["get"]["security"] == [{"Authorization": []}]
    assert item["put"]["security"] == []


def test_security_schemes_accumulate_across_components():
    other = Component(
        "Activity",
        routes=(Route(
            "all", HttpMethod.GET, "/activity", array_of("Activity"),
            authorization=AuthRequirement("api_key", Location.QUERY),
        ),),
    )
    plain = Component("Plain", routes=(Route("ping", HttpMethod.GET, "/ping", type_ref(Builtin.STRING)),))
    doc = _document(_study_component(), other, plain)
    assert doc["components"]["securitySchemes"] == {
        "Authorization": {"type": "apiKey", "name": "Authorization", "in": "header"},
        "api_key": {"type": "apiKey", "name": "api_key", "in": "query"},
    }


# ─── determinism ─────────────────────────────────────────────────

def test_synthesis_is_idempotent():
    components = [_study_component()]
    first = build_openapi_document(components, INFO)
    second = build_openapi_document(components, INFO)
    assert first == second
    assert render_openapi_json(first) == render_openapi_json(second)


def test_rendered_json_round_trips():
    doc = _document()
    text = render_openapi_json(doc)
    assert text.endswith("\n")
    assert json.loads(text) == doc


def test_info_is_copied():
    info = dict(INFO)
    doc = build_openapi_document([], info)
    info["title"] = "changed"
    assert doc["info"]["title"] == "Test API"
