"""Compass editing — one sub-section at a time.

Every update returns a new Compass with exactly one sub-field replaced. The
other sub-fields are carried over as the very same objects, and the input
compass is never mutated, so callers can diff old against new.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from zawia.models.compass import (
    ChannelStrategy,
    Compass,
    ContentPillar,
    Goal,
    Persona,
    TargetMix,
    ToneOfVoice,
)


def initialize_compass() -> Compass:
    """Fresh default compass: empty sections, an even 20% content mix.

    Re-initializing discards prior edits; guarding against that is up to
    the caller.
    """
    return Compass(
        goals=Goal(objective="", kpis=[]),
        personas=[],
        pillars=[],
        tone=ToneOfVoice(description="", dos=[], donts=[]),
        target_mix=TargetMix(),
        channel_strategies=[],
    )


def _replace(compass: Compass, **changes: Any) -> Compass:
    return compass.model_copy(update=changes)


def update_goals(compass: Compass, goals: Goal | Mapping[str, Any]) -> Compass:
    return _replace(compass, goals=Goal.model_validate(goals))


def update_personas(
    compass: Compass, personas: Iterable[Persona | Mapping[str, Any]],
) -> Compass:
    return _replace(compass, personas=[Persona.model_validate(p) for p in personas])


def update_pillars(
    compass: Compass, pillars: Iterable[ContentPillar | Mapping[str, Any]],
) -> Compass:
    return _replace(compass, pillars=[ContentPillar.model_validate(p) for p in pillars])


def update_tone(compass: Compass, tone: ToneOfVoice | Mapping[str, Any]) -> Compass:
    return _replace(compass, tone=ToneOfVoice.model_validate(tone))


def update_target_mix(
    compass: Compass, target_mix: TargetMix | Mapping[str, Any],
) -> Compass:
    """Replace the content mix. Raises ValueError unless it sums to 100."""
    return _replace(compass, target_mix=TargetMix.model_validate(target_mix))


def update_channel_strategies(
    compass: Compass, strategies: Iterable[ChannelStrategy | Mapping[str, Any]],
) -> Compass:
    validated = [ChannelStrategy.model_validate(s) for s in strategies]
    # Route through the Compass validator for the one-per-platform rule.
    Compass.model_validate({"channel_strategies": validated})
    return _replace(compass, channel_strategies=validated)


def update_channel_strategy(
    compass: Compass, strategy: ChannelStrategy | Mapping[str, Any],
) -> Compass:
    """Replace the strategy for one platform in place, or append it."""
    strategy = ChannelStrategy.model_validate(strategy)
    strategies = list(compass.channel_strategies)
    for index, existing in enumerate(strategies):
        if existing.platform == strategy.platform:
            strategies[index] = strategy
            break
    else:
        strategies.append(strategy)
    return _replace(compass, channel_strategies=strategies)


SECTION_UPDATERS = {
    "goals": update_goals,
    "personas": update_personas,
    "pillars": update_pillars,
    "tone": update_tone,
    "target_mix": update_target_mix,
    "channel_strategies": update_channel_strategies,
}
