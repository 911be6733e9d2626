"""Study ORM - persists studies owned by a researcher.

Invariants:
    - id is a string UUID primary key (portable across SQLite and PostgreSQL)
    - deleted studies are kept with deleted=True and hidden from every query
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Study(Base):
    __tablename__ = "studies"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    researcher_id: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    deleted: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
