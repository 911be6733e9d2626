"""Study Handlers - bound implementations for the Study component's routes.

Invariants:
    - Arguments arrive positionally, untyped, exactly as extracted from the request
    - Bodies validated here via StudyInput; failures raise InvalidInputError
    - Missing studies raise ResourceNotFoundError (mapped to 404 by the schema)
"""

from typing import Any

from pydantic import ValidationError

from app.core.domain_types import ResearcherId, StudyId
from app.core.errors import InvalidInputError, ResourceNotFoundError
from app.core.repository_protocols import StudyRepository
from app.schemas.study import StudyInput


def _validate_study(payload: Any) -> dict:
    try:
        return StudyInput.model_validate(payload).model_dump()
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"]) or None
        raise InvalidInputError(
            f"Invalid study: {first['msg']}", field=field,
        ) from e


class StudyHandlers:
    """One method per Study route."""

    def __init__(self, repository: StudyRepository):
        self._repository = repository

    async def create(self, researcher_id: str, study: Any) -> StudyId:
        data = _validate_study(study)
        return await self._repository.insert(ResearcherId(researcher_id), data)

    async def update(self, study_id: str, study: Any) -> StudyId:
        data = _validate_study(study)
        return await self._repository.update(StudyId(study_id), data)

    async def delete(self, study_id: str) -> StudyId:
        return await self._repository.delete(StudyId(study_id))

    async def view(self, study_id: str) -> dict:
        study = await self._repository.get(StudyId(study_id))
        if study is None:
            raise ResourceNotFoundError("Study", study_id)
        return study

    async def list_for_researcher(self, researcher_id: str) -> list[dict]:
        return await self._repository.list_for_researcher(
            ResearcherId(researcher_id),
        )

    async def list_all(self) -> list[dict]:
        return await self._repository.list_all()
