"""Component Registry - the declarative API schema served by this process.

Invariants:
    - Every route -> handler mapping is visible here: no getattr, no auto-discovery
    - Adding a route requires declaring it AND binding its handler in the same
      component (enforced at startup by MISSING_HANDLER)
    - Components are built once; the result is immutable
"""

from app.core.api_schema import (
    AuthRequirement, Component, ExceptionMapping, Parameter, Property, Route,
    array_of, type_ref,
)
from app.core.domain_types import Builtin, HttpMethod, Location
from app.core.errors import DatabaseError, InvalidInputError, ResourceNotFoundError
from app.core.repository_protocols import StudyRepository
from app.infrastructure.database import session_scope
from app.services.study_handlers import StudyHandlers
from app.services.study_repository import SqlStudyRepository


AUTHORIZATION = AuthRequirement("Authorization", Location.HEADER)

IDENTIFIER = type_ref("Identifier")
STUDY = type_ref("Study")

_NOT_FOUND = ExceptionMapping(ResourceNotFoundError, 404, "Study not found")
_INVALID = ExceptionMapping(InvalidInputError, 400, "Invalid study data")
_UNAVAILABLE = ExceptionMapping(DatabaseError, 503, "Database unavailable")


def _path(name: str) -> Parameter:
    return Parameter(Location.PATH, IDENTIFIER, name=name)


def _study_body() -> Parameter:
    return Parameter(Location.BODY, STUDY, description="Study fields")


def study_component(handlers: StudyHandlers) -> Component:
    return Component(
        name="Study",
        description="A study groups participants under one researcher.",
        properties=(
            Property("id", IDENTIFIER, "Study identifier"),
            Property("researcher_id", IDENTIFIER, "Owning researcher"),
            Property("name", type_ref(Builtin.STRING), "Display name"),
            Property("settings", type_ref(Builtin.OBJECT), "Free-form settings"),
            Property("created_at", type_ref("Timestamp"), "Creation time (ms)"),
        ),
        routes=(
            Route(
                "create", HttpMethod.POST, "/researcher/{researcher_id}/study",
                output=IDENTIFIER,
                input=(_path("researcher_id"), _study_body()),
                throws=(_INVALID, _UNAVAILABLE),
                authorization=AUTHORIZATION,
                description="Create a new Study under the given Researcher.",
                status=201,
            ),
            Route(
                "update", HttpMethod.PUT, "/study/{study_id}",
                output=IDENTIFIER,
                input=(_path("study_id"), _study_body()),
                throws=(_INVALID, _NOT_FOUND, _UNAVAILABLE),
                authorization=AUTHORIZATION,
                description="Update a Study's settings.",
            ),
            Route(
                "delete", HttpMethod.DELETE, "/study/{study_id}",
                output=IDENTIFIER,
                input=(_path("study_id"),),
                throws=(_NOT_FOUND, _UNAVAILABLE),
                authorization=AUTHORIZATION,
                description="Delete a Study.",
            ),
            Route(
                "view", HttpMethod.GET, "/study/{study_id}",
                output=STUDY,
                input=(_path("study_id"),),
                throws=(_NOT_FOUND, _UNAVAILABLE),
                authorization=AUTHORIZATION,
                description="Get a single Study.",
            ),
            Route(
                "list", HttpMethod.GET, "/researcher/{researcher_id}/study",
                output=array_of(STUDY),
                input=(_path("researcher_id"),),
                throws=(_UNAVAILABLE,),
                authorization=AUTHORIZATION,
                description="Get the set of Studies under a single Researcher.",
            ),
            Route(
                "all", HttpMethod.GET, "/study",
                output=array_of(STUDY),
                throws=(_UNAVAILABLE,),
                authorization=AUTHORIZATION,
                description="Get the set of all Studies.",
            ),
        ),
        handlers={
            "create": handlers.create,
            "update": handlers.update,
            "delete": handlers.delete,
            "view": handlers.view,
            "list": handlers.list_for_researcher,
            "all": handlers.list_all,
        },
    )


def build_components(
    study_repository: StudyRepository | None = None,
) -> list[Component]:
    """All components, in document order."""
    repository = study_repository or SqlStudyRepository(session_scope)
    return [study_component(StudyHandlers(repository))]
