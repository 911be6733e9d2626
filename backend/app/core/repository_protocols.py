"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell - dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - RequestContext is synchronous: the shell reads the request body before
      core extraction runs, so core functions that USE it are never async
    - Repositories are async because implementations do IO
"""

from typing import Any, Protocol

from app.core.domain_types import ResearcherId, StudyId


class RequestContext(Protocol):
    """Named accessors for each request source a parameter can come from."""
    def path_param(self, name: str) -> str | None: ...
    def query_param(self, name: str) -> str | None: ...
    def header(self, name: str) -> str | None: ...
    def cookie(self, name: str) -> str | None: ...
    def body(self) -> Any: ...


class StudyRepository(Protocol):
    """Contract for study persistence - implemented by shell."""
    async def insert(self, researcher_id: ResearcherId, data: dict) -> StudyId: ...
    async def update(self, study_id: StudyId, data: dict) -> StudyId: ...
    async def delete(self, study_id: StudyId) -> StudyId: ...
    async def get(self, study_id: StudyId) -> dict | None: ...
    async def list_for_researcher(self, researcher_id: ResearcherId) -> list[dict]: ...
    async def list_all(self) -> list[dict]: ...
