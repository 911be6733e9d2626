"""Argument Extraction - pulls a route's positional arguments out of a request.

Invariants:
    - Arguments are produced in parameter declaration order
    - Values pass through as received: no coercion, no validation
    - Every supported Location has exactly one extractor in _EXTRACTORS
    - A Location without an extractor raises ValueError (session is rejected
      at startup, so this only fires for hand-built routes)
"""

from typing import Any, Callable

from app.core.api_schema import Parameter, Route
from app.core.domain_types import Location
from app.core.repository_protocols import RequestContext


def _from_path(param: Parameter, ctx: RequestContext) -> Any:
    return ctx.path_param(param.name)


def _from_query(param: Parameter, ctx: RequestContext) -> Any:
    return ctx.query_param(param.name)


def _from_body(param: Parameter, ctx: RequestContext) -> Any:
    body = ctx.body()
    if not param.name:
        return body
    if isinstance(body, dict):
        return body.get(param.name)
    return None


def _from_header(param: Parameter, ctx: RequestContext) -> Any:
    return ctx.header(param.name)


def _from_cookie(param: Parameter, ctx: RequestContext) -> Any:
    return ctx.cookie(param.name)


def _from_nothing(param: Parameter, ctx: RequestContext) -> Any:
    return None


_EXTRACTORS: dict[Location, Callable[[Parameter, RequestContext], Any]] = {
    Location.PATH: _from_path,
    Location.QUERY: _from_query,
    Location.BODY: _from_body,
    Location.HEADER: _from_header,
    Location.COOKIE: _from_cookie,
    Location.NONE: _from_nothing,
}


def extract_argument(param: Parameter, ctx: RequestContext) -> Any:
    extractor = _EXTRACTORS.get(param.location)
    if extractor is None:
        raise ValueError(
            f"No request source for '{param.location.value}' parameter "
            f"'{param.name}'",
        )
    return extractor(param, ctx)


def extract_arguments(route: Route, ctx: RequestContext) -> list[Any]:
    return [extract_argument(param, ctx) for param in route.input]


def needs_body(route: Route) -> bool:
    """True when any input reads the request body."""
    return any(p.location == Location.BODY for p in route.input)
