"""Tests for Zawia domain models: compass, target mix, spaces, post types."""

import pytest
from pydantic import ValidationError
from uuid_extensions import uuid7

from zawia.models.common import CONTENT_TYPE_LABELS, ContentType, Platform
from zawia.models.compass import (
    ChannelStrategy,
    ChecklistItem,
    Compass,
    ContentPillar,
    TargetMix,
)
from zawia.models.post_types import PLATFORM_POST_TYPES, get_post_type, post_types_for
from zawia.models.workspace import MAX_TEAM_SIZE, Member, Space


def _team(*ids: str) -> list[Member]:
    return [Member(id=i, name=i.title()) for i in ids]


# ===================================================================
# Target mix
# ===================================================================


class TestTargetMix:
    """Five percentages that must sum to exactly 100."""

    def test_default_is_even_split(self) -> None:
        mix = TargetMix()
        assert set(mix.as_dict().values()) == {20}
        assert sum(mix.as_dict().values()) == 100

    def test_custom_mix_summing_to_100(self) -> None:
        mix = TargetMix(
            educational=40, entertainment=10, inspirational=20,
            interactive=20, promotional=10,
        )
        assert mix.as_dict()[ContentType.EDUCATIONAL] == 40

    def test_rejects_sum_below_100(self) -> None:
        with pytest.raises(ValidationError, match="sum to 100"):
            TargetMix(educational=10)

    def test_rejects_sum_above_100(self) -> None:
        with pytest.raises(ValidationError, match="got 130"):
            TargetMix(educational=50)

    def test_rejects_negative_values(self) -> None:
        with pytest.raises(ValidationError):
            TargetMix(educational=-20, entertainment=60)


# ===================================================================
# Compass
# ===================================================================


class TestCompass:
    def test_defaults(self) -> None:
        compass = Compass()
        assert compass.goals.objective == ""
        assert compass.personas == []
        assert compass.channel_strategies == []

    def test_pillar_color_must_be_hex(self) -> None:
        ContentPillar(name="Tips", color="#A1B2C3")
        ContentPillar(name="Tips", color="#abc")
        with pytest.raises(ValidationError):
            ContentPillar(name="Tips", color="blue")

    def test_one_strategy_per_platform(self) -> None:
        with pytest.raises(ValidationError, match="one channel strategy per platform"):
            Compass(channel_strategies=[
                ChannelStrategy(platform=Platform.X),
                ChannelStrategy(platform=Platform.X),
            ])

    def test_preferred_post_types_must_match_platform(self) -> None:
        ChannelStrategy(platform=Platform.X, preferred_post_types=["x-tweet", "x-thread"])
        with pytest.raises(ValidationError, match="Unknown post types"):
            ChannelStrategy(platform=Platform.X, preferred_post_types=["instagram-reel"])

    def test_checklist_keeps_insertion_order(self) -> None:
        strategy = ChannelStrategy(
            platform=Platform.LINKEDIN,
            publishing_checklist=[ChecklistItem(task="b"), ChecklistItem(task="a")],
        )
        assert [c.task for c in strategy.publishing_checklist] == ["b", "a"]

    def test_channel_strategy_for(self) -> None:
        compass = Compass(channel_strategies=[
            ChannelStrategy(platform=Platform.INSTAGRAM, strategic_goal="Reach"),
        ])
        assert compass.channel_strategy_for(Platform.INSTAGRAM).strategic_goal == "Reach"
        assert compass.channel_strategy_for(Platform.EMAIL) is None

    def test_json_round_trip_preserves_mix(self) -> None:
        compass = Compass(target_mix=TargetMix(educational=60, promotional=0, interactive=0))
        restored = Compass.model_validate(compass.model_dump(mode="json"))
        assert restored.target_mix == compass.target_mix


# ===================================================================
# Space
# ===================================================================


class TestSpace:
    def test_owner_is_first_member(self) -> None:
        space = Space(name="Azure", team=_team("alex", "sarah"),
                      member_ids=["alex", "sarah"], created_by="alex")
        assert space.owner.id == "alex"
        assert not space.is_full
        assert space.has_member("sarah")

    def test_full_at_max_team_size(self) -> None:
        ids = ["a", "b", "c"][:MAX_TEAM_SIZE]
        space = Space(name="S", team=_team(*ids), member_ids=ids, created_by="a")
        assert space.is_full

    def test_rejects_more_than_max_members(self) -> None:
        ids = ["a", "b", "c", "d"]
        with pytest.raises(ValidationError, match="at most"):
            Space(name="S", team=_team(*ids), member_ids=ids, created_by="a")

    def test_team_and_member_ids_must_align(self) -> None:
        with pytest.raises(ValidationError, match="same length"):
            Space(name="S", team=_team("a"), member_ids=["a", "b"], created_by="a")
        with pytest.raises(ValidationError, match="same users in order"):
            Space(name="S", team=_team("a", "b"), member_ids=["b", "a"], created_by="a")

    def test_invite_token_length(self) -> None:
        Space(space_id=uuid7(), name="S", invite_token="AZUR1234", created_by="a")
        with pytest.raises(ValidationError):
            Space(name="S", invite_token="SHORT", created_by="a")


# ===================================================================
# Post-type registry
# ===================================================================


class TestPostTypes:
    def test_every_platform_has_post_types(self) -> None:
        for platform in Platform:
            assert post_types_for(platform), platform
        assert set(PLATFORM_POST_TYPES) == set(Platform)

    def test_post_type_ids_unique_per_platform(self) -> None:
        for platform in Platform:
            ids = [pt.id for pt in post_types_for(platform)]
            assert len(ids) == len(set(ids))

    def test_get_post_type(self) -> None:
        tweet = get_post_type(Platform.X, "x-tweet")
        assert tweet is not None
        assert [f.id for f in tweet.fields] == ["text"]

    def test_get_post_type_unknown_or_empty(self) -> None:
        assert get_post_type(Platform.X, "instagram-reel") is None
        assert get_post_type(Platform.X, None) is None
        assert get_post_type(Platform.X, "") is None

    def test_content_type_labels_cover_all_types(self) -> None:
        assert set(CONTENT_TYPE_LABELS) == set(ContentType)
        assert CONTENT_TYPE_LABELS[ContentType.EDUCATIONAL] == "تعليمي"
