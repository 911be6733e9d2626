"""Route Materialization - turns the API schema into live FastAPI routes.

Invariants:
    - Schema is validated before any route is registered; violations raise
      SchemaDefinitionError and nothing is mounted
    - One APIRouter per component with routes; components without routes
      register nothing
    - Brace placeholders become Starlette `{name:str}` so path values arrive
      as untouched strings
    - Handlers are resolved from Component.handlers once, at registration
    - Dispatch never lets a handler failure escape: declared kinds map to their
      status, anything else maps to 500, and every failure is logged first
    - Rendering the success body happens inside dispatch: an unserializable
      result (e.g. NaN) is an undeclared failure like any other
    - Materialized routes are excluded from FastAPI's own schema; the published
      document comes from core/openapi_document.py

Design Decisions:
    - Endpoint takes the raw Request: argument extraction is driven by the
      declared parameters, not by FastAPI signature introspection
    - Sync and async handlers both supported (awaitable results are awaited)
"""

import inspect
import logging
from typing import Sequence

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.api.request_context import StarletteRequestContext
from app.core.api_schema import Component, Handler, Route
from app.core.enforce_schema import PLACEHOLDER_PATTERN, validate_components
from app.core.errors import LampError, SchemaDefinitionError, failure_payload
from app.core.extract_arguments import extract_arguments, needs_body

logger = logging.getLogger(__name__)


def router_path(path: str) -> str:
    """Rewrite `{name}` placeholders into Starlette's `{name:str}` form."""
    return PLACEHOLDER_PATTERN.sub(lambda m: "{" + m.group(1) + ":str}", path)


def failure_response(
    component: Component, route: Route, exc: Exception,
) -> JSONResponse:
    """Map a handler failure to its declared status, or 500."""
    mapping = route.mapping_for(exc)
    status_code = (
        mapping.status if mapping
        else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    extra = {
        "component": component.name,
        "route": route.name,
        "status": status_code,
        "error_kind": type(exc).__name__,
    }
    if isinstance(exc, LampError):
        extra["error_code"] = exc.code
        extra["severity"] = exc.severity.value
    if mapping:
        logger.warning(
            f"{component.operation_id(route)} raised declared "
            f"{type(exc).__name__}: {exc}",
            extra=extra,
        )
    else:
        logger.error(
            f"{component.operation_id(route)} raised undeclared "
            f"{type(exc).__name__}: {exc}",
            exc_info=exc, extra=extra,
        )
    return JSONResponse(
        status_code=status_code, content=failure_payload(exc),
    )


def build_endpoint(component: Component, route: Route, handler: Handler):
    """Request handler for one route: extract, invoke, serialize."""
    read_body = needs_body(route)

    async def endpoint(request: Request) -> JSONResponse:
        try:
            ctx = await StarletteRequestContext.load(request, read_body)
            result = handler(*extract_arguments(route, ctx))
            if inspect.isawaitable(result):
                result = await result
            response = JSONResponse(
                status_code=route.status, content=jsonable_encoder(result),
            )
        except Exception as exc:
            return failure_response(component, route, exc)
        return response

    endpoint.__name__ = f"{component.name}_{route.name}"
    return endpoint


def build_router(component: Component) -> APIRouter:
    router = APIRouter(tags=[component.name])
    for route in component.routes:
        path = router_path(route.path)
        logger.info(
            f"[{component.operation_id(route)} => {route.method.value} {path}]",
            extra={"component": component.name, "route": route.name},
        )
        router.add_api_route(
            path,
            build_endpoint(component, route, component.handler_for(route)),
            methods=[route.method.value],
            name=component.operation_id(route),
            include_in_schema=False,
        )
    return router


def materialize_routes(
    app: FastAPI, components: Sequence[Component],
) -> list[APIRouter]:
    """Validate the schema and mount one router per routed component."""
    violations = validate_components(components)
    if violations:
        for v in violations:
            logger.error(v["message"], extra={"error_code": v["error_code"]})
        raise SchemaDefinitionError(violations)

    routers = []
    for component in components:
        if not component.routes:
            continue
        router = build_router(component)
        app.include_router(router)
        routers.append(router)
    logger.info(
        f"Materialized {sum(len(c.routes) for c in components)} route(s) "
        f"across {len(routers)} component(s)",
    )
    return routers
