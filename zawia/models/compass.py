"""Content compass — the strategic planning document of a workspace.

Goals, personas, content pillars, tone of voice, the target content mix and
per-channel strategies. Persisted as one JSON document on the space; edited
one sub-section at a time (see ``zawia.compass.editor``).
"""

from pydantic import Field, field_validator, model_validator

from zawia.models.common import ContentType, Platform, ZawiaBase, new_uuid7
from zawia.models.post_types import post_types_for

_HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


def _new_id() -> str:
    return str(new_uuid7())


class KPI(ZawiaBase):
    id: str = Field(default_factory=_new_id)
    metric: str
    target: str


class Goal(ZawiaBase):
    objective: str = ""
    kpis: list[KPI] = Field(default_factory=list)


class Persona(ZawiaBase):
    id: str = Field(default_factory=_new_id)
    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=120)
    job_title: str = ""
    goals: str = ""
    challenges: str = ""
    preferred_platforms: str = ""
    avatar: str | None = None


class ContentPillar(ZawiaBase):
    id: str = Field(default_factory=_new_id)
    name: str = Field(..., min_length=1)
    description: str = ""
    color: str = Field(default="#888888", pattern=_HEX_COLOR)


class PillarRef(ZawiaBase):
    """Denormalized pillar reference carried on posts and ideas."""

    id: str
    name: str
    color: str = Field(default="#888888", pattern=_HEX_COLOR)


class ToneOfVoice(ZawiaBase):
    description: str = ""
    dos: list[str] = Field(default_factory=list)
    donts: list[str] = Field(default_factory=list)


class TargetMix(ZawiaBase):
    """Desired percentage of posts per content type.

    The five percentages must sum to exactly 100; construction fails
    otherwise, so no caller can persist an unbalanced mix.
    """

    educational: int = Field(default=20, ge=0, le=100)
    entertainment: int = Field(default=20, ge=0, le=100)
    inspirational: int = Field(default=20, ge=0, le=100)
    interactive: int = Field(default=20, ge=0, le=100)
    promotional: int = Field(default=20, ge=0, le=100)

    @model_validator(mode="after")
    def _sums_to_100(self) -> "TargetMix":
        total = sum(self.as_dict().values())
        if total != 100:
            raise ValueError(f"Target mix must sum to 100, got {total}.")
        return self

    def as_dict(self) -> dict[ContentType, int]:
        return {ct: getattr(self, ct.value) for ct in ContentType}


class ChecklistItem(ZawiaBase):
    id: str = Field(default_factory=_new_id)
    task: str = Field(..., min_length=1)
    completed: bool = False


class ChannelStrategy(ZawiaBase):
    """Per-platform goal, preferred post types (in preference order) and
    a publishing checklist (in insertion order)."""

    platform: Platform
    strategic_goal: str = ""
    preferred_post_types: list[str] = Field(default_factory=list)
    publishing_checklist: list[ChecklistItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def _known_post_types(self) -> "ChannelStrategy":
        known = {pt.id for pt in post_types_for(self.platform)}
        unknown = [pt for pt in self.preferred_post_types if pt not in known]
        if unknown:
            raise ValueError(
                f"Unknown post types for {self.platform.value}: {', '.join(unknown)}"
            )
        return self


class Compass(ZawiaBase):
    goals: Goal = Field(default_factory=Goal)
    personas: list[Persona] = Field(default_factory=list)
    pillars: list[ContentPillar] = Field(default_factory=list)
    tone: ToneOfVoice = Field(default_factory=ToneOfVoice)
    target_mix: TargetMix = Field(default_factory=TargetMix)
    channel_strategies: list[ChannelStrategy] = Field(default_factory=list)

    @field_validator("channel_strategies")
    @classmethod
    def _one_strategy_per_platform(
        cls, value: list[ChannelStrategy],
    ) -> list[ChannelStrategy]:
        platforms = [cs.platform for cs in value]
        if len(platforms) != len(set(platforms)):
            raise ValueError("At most one channel strategy per platform.")
        return value

    def channel_strategy_for(self, platform: Platform) -> ChannelStrategy | None:
        for strategy in self.channel_strategies:
            if strategy.platform == platform:
                return strategy
        return None

    def pillar_by_id(self, pillar_id: str) -> ContentPillar | None:
        for pillar in self.pillars:
            if pillar.id == pillar_id:
                return pillar
        return None
