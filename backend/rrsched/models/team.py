from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    affiliation: Optional[str] = None  # School / club label, display only

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()
