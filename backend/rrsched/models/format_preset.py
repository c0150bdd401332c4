from typing import Dict

from pydantic import BaseModel, ConfigDict


class FormatPreset(BaseModel):
    """Debate format timing; only round and break durations drive auto-timing"""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    round_duration_seconds: int
    prep_duration_seconds: int = 0
    break_duration_seconds: int = 0

    @property
    def slot_seconds(self) -> int:
        return self.round_duration_seconds + self.break_duration_seconds


def _minutes(key: str, name: str, round_minutes: int, prep_minutes: int, break_minutes: int) -> FormatPreset:
    return FormatPreset(
        key=key,
        name=name,
        round_duration_seconds=round_minutes * 60,
        prep_duration_seconds=prep_minutes * 60,
        break_duration_seconds=break_minutes * 60,
    )


FORMAT_PRESETS: Dict[str, FormatPreset] = {
    "policy": _minutes("policy", "Policy", 90, 10, 15),
    "ld": _minutes("ld", "Lincoln Douglas", 45, 5, 10),
    "pf": _minutes("pf", "Public Forum", 40, 5, 10),
    "congress": _minutes("congress", "Congress", 60, 0, 15),
    "parli": _minutes("parli", "Parliamentary", 35, 15, 10),
}
