"""Starlette Request Context - adapts a Starlette Request to core RequestContext.

Invariants:
    - The body is read at most once, and only when the route has Body inputs
    - An empty body reads as None; a non-JSON body raises InvalidInputError
"""

import json
from typing import Any

from starlette.requests import Request

from app.core.errors import InvalidInputError


class StarletteRequestContext:
    """Named per-source accessors over one incoming request."""

    def __init__(self, request: Request, body: Any = None):
        self._request = request
        self._body = body

    @classmethod
    async def load(
        cls, request: Request, read_body: bool,
    ) -> "StarletteRequestContext":
        body = None
        if read_body:
            raw = await request.body()
            if raw:
                try:
                    body = json.loads(raw)
                except ValueError as e:
                    raise InvalidInputError(
                        "Request body is not valid JSON", field="body",
                    ) from e
        return cls(request, body)

    def path_param(self, name: str) -> str | None:
        return self._request.path_params.get(name)

    def query_param(self, name: str) -> str | None:
        return self._request.query_params.get(name)

    def header(self, name: str) -> str | None:
        return self._request.headers.get(name)

    def cookie(self, name: str) -> str | None:
        return self._request.cookies.get(name)

    def body(self) -> Any:
        return self._body
