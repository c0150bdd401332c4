from pydantic import BaseModel, ConfigDict, field_validator


class Venue(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    available: bool = True  # Consulted at assignment and conflict time only

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()
