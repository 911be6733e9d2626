"""Study Schemas - Pydantic validation for study payloads.

Invariants:
    - name: 1-200 chars, stripped, non-empty
    - settings: free-form JSON object, defaults to {}
    - Unknown fields are ignored
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StudyInput(BaseModel):
    """Study create/update payload."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, max_length=200)
    settings: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v
