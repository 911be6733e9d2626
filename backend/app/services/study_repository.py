"""Study Repository - SQLAlchemy implementation of the StudyRepository protocol.

Invariants:
    - Every operation runs in its own session from the injected scope
    - Soft-deleted studies behave as missing (ResourceNotFoundError)
    - Rows leave the repository as plain dicts; created_at is epoch millis
      (the document's Timestamp schema)
"""

from datetime import timezone
from typing import AsyncContextManager, Callable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import ResearcherId, StudyId
from app.core.errors import ResourceNotFoundError
from app.models.study import Study

SessionScope = Callable[[], AsyncContextManager[AsyncSession]]


def study_to_dict(study: Study) -> dict:
    created = study.created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return {
        "id": study.id,
        "researcher_id": study.researcher_id,
        "name": study.name,
        "settings": study.settings,
        "created_at": int(created.timestamp() * 1000),
    }


class SqlStudyRepository:
    """Study persistence over an async session scope."""

    def __init__(self, session_scope: SessionScope):
        self._session_scope = session_scope

    async def insert(self, researcher_id: ResearcherId, data: dict) -> StudyId:
        async with self._session_scope() as db:
            study = Study(
                researcher_id=researcher_id,
                name=data["name"],
                settings=data.get("settings", {}),
            )
            db.add(study)
            await db.commit()
            return StudyId(study.id)

    async def update(self, study_id: StudyId, data: dict) -> StudyId:
        async with self._session_scope() as db:
            study = await self._get_live(db, study_id)
            study.name = data["name"]
            study.settings = data.get("settings", {})
            await db.commit()
            return StudyId(study.id)

    async def delete(self, study_id: StudyId) -> StudyId:
        async with self._session_scope() as db:
            study = await self._get_live(db, study_id)
            study.deleted = True
            await db.commit()
            return StudyId(study.id)

    async def get(self, study_id: StudyId) -> dict | None:
        async with self._session_scope() as db:
            result = await db.execute(
                select(Study).where(
                    Study.id == study_id, Study.deleted.is_(False),
                ),
            )
            study = result.scalar_one_or_none()
            return study_to_dict(study) if study else None

    async def list_for_researcher(
        self, researcher_id: ResearcherId,
    ) -> list[dict]:
        async with self._session_scope() as db:
            result = await db.execute(
                select(Study)
                .where(
                    Study.researcher_id == researcher_id,
                    Study.deleted.is_(False),
                )
                .order_by(Study.created_at, Study.id),
            )
            return [study_to_dict(s) for s in result.scalars().all()]

    async def list_all(self) -> list[dict]:
        async with self._session_scope() as db:
            result = await db.execute(
                select(Study)
                .where(Study.deleted.is_(False))
                .order_by(Study.created_at, Study.id),
            )
            return [study_to_dict(s) for s in result.scalars().all()]

    async def _get_live(self, db: AsyncSession, study_id: StudyId) -> Study:
        result = await db.execute(
            select(Study).where(Study.id == study_id, Study.deleted.is_(False)),
        )
        study = result.scalar_one_or_none()
        if study is None:
            raise ResourceNotFoundError("Study", str(study_id))
        return study
