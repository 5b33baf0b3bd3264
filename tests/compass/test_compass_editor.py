"""Tests for single-section compass edits."""

import pytest
from pydantic import ValidationError

from zawia.compass.editor import (
    SECTION_UPDATERS,
    initialize_compass,
    update_channel_strategies,
    update_channel_strategy,
    update_goals,
    update_personas,
    update_pillars,
    update_target_mix,
    update_tone,
)
from zawia.models.common import Platform
from zawia.models.compass import (
    KPI,
    ChannelStrategy,
    Compass,
    ContentPillar,
    Goal,
    Persona,
    TargetMix,
    ToneOfVoice,
)


@pytest.fixture
def compass() -> Compass:
    return Compass(
        goals=Goal(objective="Grow brand awareness", kpis=[KPI(metric="Followers", target="10k")]),
        personas=[Persona(name="Fatima", age=28, job_title="Designer")],
        pillars=[ContentPillar(name="Tips", color="#22AA88")],
        tone=ToneOfVoice(description="Friendly", dos=["warm"], donts=["slang"]),
        target_mix=TargetMix(educational=40, entertainment=10, inspirational=20,
                             interactive=20, promotional=10),
        channel_strategies=[
            ChannelStrategy(platform=Platform.INSTAGRAM, strategic_goal="Community",
                            preferred_post_types=["instagram-reel"]),
        ],
    )


class TestInitialize:
    def test_defaults(self) -> None:
        fresh = initialize_compass()
        assert fresh.goals.objective == ""
        assert fresh.goals.kpis == []
        assert fresh.personas == [] and fresh.pillars == []
        assert fresh.tone == ToneOfVoice()
        assert fresh.target_mix == TargetMix()
        assert fresh.channel_strategies == []

    def test_each_call_is_detached(self) -> None:
        a, b = initialize_compass(), initialize_compass()
        a.personas.append(Persona(name="X", age=30))
        assert b.personas == []


class TestSubUpdateIsolation:
    def test_update_pillars_touches_only_pillars(self, compass: Compass) -> None:
        snapshot = compass.model_copy(deep=True)
        new_pillars = [ContentPillar(name="Stories", color="#112233")]

        updated = update_pillars(compass, new_pillars)

        assert updated.pillars == new_pillars
        assert updated.goals == compass.goals
        assert updated.tone == compass.tone
        assert updated.target_mix == compass.target_mix
        assert updated.personas == compass.personas
        assert updated.channel_strategies == compass.channel_strategies
        assert compass == snapshot

    def test_untouched_sections_are_shared(self, compass: Compass) -> None:
        updated = update_tone(compass, {"description": "Formal"})
        assert updated.tone.description == "Formal"
        assert updated.goals is compass.goals
        assert updated.pillars is compass.pillars

    def test_plain_dict_patches_are_validated(self, compass: Compass) -> None:
        updated = update_goals(compass, {"objective": "Sell more", "kpis": []})
        assert updated.goals.objective == "Sell more"
        updated = update_personas(compass, [{"name": "Omar", "age": 40}])
        assert updated.personas[0].name == "Omar"

    def test_target_mix_must_sum_to_100(self, compass: Compass) -> None:
        with pytest.raises(ValidationError, match="sum to 100"):
            update_target_mix(compass, {"educational": 90})
        ok = update_target_mix(compass, {
            "educational": 20, "entertainment": 20, "inspirational": 20,
            "interactive": 20, "promotional": 20,
        })
        assert ok.target_mix == TargetMix()

    def test_duplicate_platforms_rejected(self, compass: Compass) -> None:
        with pytest.raises(ValidationError):
            update_channel_strategies(compass, [
                {"platform": "x"}, {"platform": "x"},
            ])


class TestUpdateChannelStrategy:
    def test_replaces_in_place(self, compass: Compass) -> None:
        compass = update_channel_strategy(compass, {"platform": "linkedin"})
        updated = update_channel_strategy(
            compass, {"platform": "instagram", "strategic_goal": "Sales"},
        )
        assert [s.platform for s in updated.channel_strategies] == [
            Platform.INSTAGRAM, Platform.LINKEDIN,
        ]
        assert updated.channel_strategies[0].strategic_goal == "Sales"

    def test_appends_new_platform(self, compass: Compass) -> None:
        updated = update_channel_strategy(compass, ChannelStrategy(platform=Platform.EMAIL))
        assert len(updated.channel_strategies) == 2
        assert len(compass.channel_strategies) == 1


def test_section_updaters_cover_every_section() -> None:
    assert set(SECTION_UPDATERS) == set(Compass.model_fields)
