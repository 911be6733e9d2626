"""API Schema Model - tests for model helpers.

Tests cover:
    - type_ref / array_of coercion
    - Route body/non-body partition keeps declaration order
    - mapping_for matches exact exception class only
    - Component operation ids and handler lookup
    - Entities are immutable, handlers included
"""

import dataclasses

import pytest

from app.core.api_schema import (
    Component, ExceptionMapping, Parameter, Route, TypeRef, array_of, type_ref,
)
from app.core.domain_types import Builtin, HttpMethod, Location


class NotFound(Exception):
    pass


class SpecificNotFound(NotFound):
    pass


def _route(**kwargs) -> Route:
    defaults = dict(
        name="view", method=HttpMethod.GET, path="/widget/{id}",
        output=TypeRef("Widget"),
        input=(Parameter(Location.PATH, name="id"),),
    )
    defaults.update(kwargs)
    return Route(**defaults)


def test_type_ref_coercion():
    assert type_ref(Builtin.STRING) == TypeRef("String")
    assert type_ref("Widget") == TypeRef("Widget")
    ref = TypeRef("Widget")
    assert type_ref(ref) is ref


def test_array_of_element():
    assert array_of("Widget") == TypeRef("Array", TypeRef("Widget"))
    assert array_of() == TypeRef("Array")


def test_parameter_defaults_to_object_type():
    assert Parameter(Location.BODY).type == TypeRef("Object")


def test_body_partition_keeps_order():
    route = _route(input=(
        Parameter(Location.BODY, name="b"),
        Parameter(Location.PATH, name="id"),
        Parameter(Location.BODY, name="a"),
        Parameter(Location.QUERY, name="q"),
    ))
    assert [p.name for p in route.body_parameters()] == ["b", "a"]
    assert [p.name for p in route.non_body_parameters()] == ["id", "q"]


def test_mapping_for_exact_kind_only():
    mapping = ExceptionMapping(NotFound, 404)
    route = _route(throws=(mapping,))
    assert route.mapping_for(NotFound()) is mapping
    assert route.mapping_for(SpecificNotFound()) is None
    assert route.mapping_for(ValueError()) is None


def test_component_operation_id_and_handlers():
    route = _route()
    handler = lambda id: {"id": id}  # noqa: E731
    component = Component("Widget", routes=(route,), handlers={"view": handler})
    assert component.operation_id(route) == "Widget::view"
    assert component.handler_for(route) is handler
    assert component.handler_for(_route(name="other")) is None


def test_entities_are_frozen():
    route = _route()
    with pytest.raises(dataclasses.FrozenInstanceError):
        route.path = "/other"


def test_component_handlers_are_read_only_copy():
    route = _route()
    source = {"view": lambda id: id}
    component = Component("Widget", routes=(route,), handlers=source)
    source["view"] = None
    assert component.handler_for(route) is not None
    with pytest.raises(TypeError):
        component.handlers["view"] = None
