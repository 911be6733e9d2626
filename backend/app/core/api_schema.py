"""API Schema Model - the declarative description of the whole API surface.

Invariants:
    - Every entity is a frozen dataclass: the model is immutable after startup
    - Sequences are tuples; declaration order drives both dispatch argument
      order and document field order
    - Component.handlers is the explicit route-name -> callable map, built once
      at declaration time (no getattr lookups at request time)
    - handlers is copied into a read-only MappingProxyType on construction

Design Decisions:
    - TypeRef keeps the type name only: builtins are recognised by name in
      core/type_descriptors.py, anything else is a component reference
    - ExceptionMapping stores the exception class itself as the failure kind;
      dispatch matches on exact class identity
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Union

from app.core.domain_types import Builtin, HttpMethod, Location


Handler = Callable[..., Union[Any, Awaitable[Any]]]


@dataclass(frozen=True)
class TypeRef:
    """Builtin tag or named component reference. Arrays carry an element type."""
    name: str
    items: "TypeRef | None" = None


def type_ref(value: "Builtin | str | TypeRef") -> TypeRef:
    """Coerce a Builtin, a component name, or a TypeRef into a TypeRef."""
    if isinstance(value, TypeRef):
        return value
    if isinstance(value, Builtin):
        return TypeRef(value.value)
    return TypeRef(value)


def array_of(element: "Builtin | str | TypeRef | None" = None) -> TypeRef:
    """Array TypeRef; no element means untyped items."""
    return TypeRef(
        Builtin.ARRAY.value,
        items=type_ref(element) if element is not None else None,
    )


@dataclass(frozen=True)
class Property:
    """One field of a component's own schema representation."""
    name: str
    type: TypeRef
    description: str | None = None


@dataclass(frozen=True)
class Parameter:
    """One positional input of a route, tagged with its request source.

    name may be omitted only for a Body parameter that consumes the whole
    payload, or for a None-location placeholder.
    """
    location: Location
    type: TypeRef = field(default_factory=lambda: TypeRef(Builtin.OBJECT.value))
    name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class ExceptionMapping:
    """Declared failure kind -> HTTP status for one route."""
    error_kind: type[BaseException]
    status: int
    description: str | None = None


@dataclass(frozen=True)
class AuthRequirement:
    """Named credential gating a route. Descriptive only: not enforced here."""
    name: str
    location: Location = Location.HEADER


@dataclass(frozen=True)
class Route:
    name: str
    method: HttpMethod
    path: str
    output: TypeRef
    input: tuple[Parameter, ...] = ()
    throws: tuple[ExceptionMapping, ...] = ()
    authorization: AuthRequirement | None = None
    description: str | None = None
    status: int = 200

    def body_parameters(self) -> tuple[Parameter, ...]:
        return tuple(p for p in self.input if p.location == Location.BODY)

    def non_body_parameters(self) -> tuple[Parameter, ...]:
        return tuple(p for p in self.input if p.location != Location.BODY)

    def mapping_for(self, exc: BaseException) -> ExceptionMapping | None:
        """Declared mapping whose kind is exactly type(exc), if any."""
        for mapping in self.throws:
            if type(exc) is mapping.error_kind:
                return mapping
        return None


@dataclass(frozen=True)
class Component:
    """One logical resource: its schema properties, routes and bound handlers."""
    name: str
    routes: tuple[Route, ...] = ()
    properties: tuple[Property, ...] = ()
    handlers: Mapping[str, Handler] = field(default_factory=dict)
    description: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "handlers", MappingProxyType(dict(self.handlers)))

    def operation_id(self, route: Route) -> str:
        return f"{self.name}::{route.name}"

    def handler_for(self, route: Route) -> Handler | None:
        return self.handlers.get(route.name)
