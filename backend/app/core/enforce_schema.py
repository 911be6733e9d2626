"""Schema Enforcement - structural rules the API schema must satisfy before use.

Invariants:
    - Every check is PURE: returns violation dicts, never raises, never mutates
    - Violation shape: {"error_code", "component", "route", "message"}
    - Shell raises SchemaDefinitionError when validate_components() is non-empty
    - find_unresolved_references() is advisory: dangling refs still emit

Design Decisions:
    - One rule per function, composed by validate_components(): each rule is
      testable on its own and the full list is reported at once
    - Session-location parameters are rejected instead of resolving to null
"""

import re
from collections import Counter
from typing import Iterable

from app.core.api_schema import Component, Route
from app.core.domain_types import AUTH_LOCATIONS, Location
from app.core.type_descriptors import referenced_names


PLACEHOLDER_PATTERN = re.compile(r"{([A-Za-z_][A-Za-z0-9_]*)}")

# Schemas seeded into every document; components may not redefine them.
RESERVED_SCHEMA_NAMES = ("Error", "Timestamp", "Identifier")


def path_placeholders(path: str) -> list[str]:
    """Placeholder names in a brace-syntax path, in order of appearance."""
    return PLACEHOLDER_PATTERN.findall(path)


def _violation(
    code: str, message: str, component: str | None = None, route: str | None = None,
) -> dict:
    return {
        "error_code": code,
        "component": component,
        "route": route,
        "message": message,
    }


# ─── Component-level rules ───────────────────────────────────────

def check_unique_component_names(components: Iterable[Component]) -> list[dict]:
    counts = Counter(c.name for c in components)
    return [
        _violation(
            "DUPLICATE_COMPONENT",
            f"Component '{name}' declared {n} times", component=name,
        )
        for name, n in counts.items() if n > 1
    ]


def check_unique_route_names(component: Component) -> list[dict]:
    counts = Counter(r.name for r in component.routes)
    return [
        _violation(
            "DUPLICATE_ROUTE",
            f"{component.name}::{name} declared {n} times",
            component=component.name, route=name,
        )
        for name, n in counts.items() if n > 1
    ]


def check_handlers_bound(component: Component) -> list[dict]:
    return [
        _violation(
            "MISSING_HANDLER",
            f"{component.name}::{route.name} has no bound handler",
            component=component.name, route=route.name,
        )
        for route in component.routes
        if component.handler_for(route) is None
    ]


# ─── Route-level rules ───────────────────────────────────────────

def check_path_parameters(component: str, route: Route) -> list[dict]:
    """Placeholders in path and Path-location parameter names match exactly."""
    placeholders = path_placeholders(route.path)
    declared = [
        p.name for p in route.input if p.location == Location.PATH
    ]
    if Counter(placeholders) == Counter(declared):
        return []
    return [_violation(
        "PATH_PARAMETER_MISMATCH",
        (
            f"{component}::{route.name} path '{route.path}' has placeholders "
            f"{sorted(placeholders)} but declares path parameters "
            f"{sorted(str(n) for n in declared)}"
        ),
        component=component, route=route.name,
    )]


def check_parameter_names(component: str, route: Route) -> list[dict]:
    """Only Body and None parameters may be unnamed."""
    return [
        _violation(
            "UNNAMED_PARAMETER",
            (
                f"{component}::{route.name} parameter #{index} "
                f"({param.location.value}) has no name"
            ),
            component=component, route=route.name,
        )
        for index, param in enumerate(route.input)
        if not param.name
        and param.location not in (Location.BODY, Location.NONE)
    ]


def check_body_parameters(component: str, route: Route) -> list[dict]:
    """An unnamed Body parameter must be the route's only Body parameter."""
    body = route.body_parameters()
    unnamed = [p for p in body if not p.name]
    if not unnamed or len(body) == 1:
        return []
    return [_violation(
        "AMBIGUOUS_BODY",
        (
            f"{component}::{route.name} mixes an unnamed body parameter "
            f"with {len(body) - 1} other body parameter(s)"
        ),
        component=component, route=route.name,
    )]


def check_unique_throws(component: str, route: Route) -> list[dict]:
    counts = Counter(m.error_kind for m in route.throws)
    return [
        _violation(
            "DUPLICATE_THROWS",
            f"{component}::{route.name} maps {kind.__name__} {n} times",
            component=component, route=route.name,
        )
        for kind, n in counts.items() if n > 1
    ]


def check_supported_locations(component: str, route: Route) -> list[dict]:
    return [
        _violation(
            "UNSUPPORTED_LOCATION",
            (
                f"{component}::{route.name} parameter '{param.name}' uses "
                f"session location, which has no request source"
            ),
            component=component, route=route.name,
        )
        for param in route.input if param.location == Location.SESSION
    ]


def check_auth_location(component: str, route: Route) -> list[dict]:
    auth = route.authorization
    if auth is None or auth.location in AUTH_LOCATIONS:
        return []
    return [_violation(
        "INVALID_AUTH_LOCATION",
        (
            f"{component}::{route.name} authorization '{auth.name}' cannot be "
            f"carried in {auth.location.value}"
        ),
        component=component, route=route.name,
    )]


_ROUTE_RULES = (
    check_path_parameters,
    check_parameter_names,
    check_body_parameters,
    check_unique_throws,
    check_supported_locations,
    check_auth_location,
)


def validate_components(components: Iterable[Component]) -> list[dict]:
    """All violations across the schema, in declaration order."""
    components = list(components)
    violations = check_unique_component_names(components)
    for component in components:
        violations.extend(check_unique_route_names(component))
        violations.extend(check_handlers_bound(component))
        for route in component.routes:
            for rule in _ROUTE_RULES:
                violations.extend(rule(component.name, route))
    return violations


def find_unresolved_references(components: Iterable[Component]) -> list[str]:
    """Named TypeRefs that match no component and no reserved schema.

    Order follows first appearance; each name listed once.
    """
    components = list(components)
    known = {c.name for c in components} | set(RESERVED_SCHEMA_NAMES)
    missing: dict[str, None] = {}
    for component in components:
        refs = [p.type for p in component.properties]
        for route in component.routes:
            refs.append(route.output)
            refs.extend(p.type for p in route.input)
        for ref in refs:
            for name in referenced_names(ref):
                if name not in known:
                    missing.setdefault(name, None)
    return list(missing)
