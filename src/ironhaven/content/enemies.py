"""Static enemy definitions.

The turn-resolution core only reads ``hp``, ``damage`` and ``intents``;
the remaining fields are carried for the collaborators that render
descriptions and award experience.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ironhaven.models import DamageRange, EnemyIntent


class EnemyDefinition(BaseModel):
    """Static definition of an enemy type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    description: str = ""
    hp: int = Field(ge=1)
    damage: DamageRange
    defense: int = Field(default=0, ge=0)
    xp_reward: int = Field(default=0, ge=0)
    intents: tuple[EnemyIntent, ...] = Field(min_length=1)


ENEMIES: dict[str, EnemyDefinition] = {
    definition.id: definition
    for definition in (
        EnemyDefinition(
            id="scavenger_drone",
            name="Scavenger Drone",
            description="A small autonomous collector, repurposed for violence.",
            hp=20,
            damage=DamageRange(min=5, max=8),
            xp_reward=10,
            intents=(EnemyIntent.ATTACK, EnemyIntent.ATTACK, EnemyIntent.WAIT),
        ),
        EnemyDefinition(
            id="feral_hound",
            name="Feral Hound",
            description="Once a companion. Now a predator.",
            hp=35,
            damage=DamageRange(min=8, max=12),
            defense=2,
            xp_reward=20,
            intents=(EnemyIntent.ATTACK, EnemyIntent.ATTACK, EnemyIntent.CHARGE),
        ),
        EnemyDefinition(
            id="corrupted_sentinel",
            name="Corrupted Sentinel",
            description="Security robot infected with rogue code.",
            hp=60,
            damage=DamageRange(min=10, max=18),
            defense=5,
            xp_reward=50,
            intents=(
                EnemyIntent.DEFEND,
                EnemyIntent.ATTACK,
                EnemyIntent.ATTACK,
                EnemyIntent.CHARGE,
            ),
        ),
        EnemyDefinition(
            id="raider",
            name="Wasteland Raider",
            description="Desperate survivor turned bandit.",
            hp=45,
            damage=DamageRange(min=8, max=15),
            defense=3,
            xp_reward=35,
            intents=(EnemyIntent.ATTACK, EnemyIntent.DEFEND, EnemyIntent.ATTACK),
        ),
        EnemyDefinition(
            id="proto_construct",
            name="Proto-Construct",
            description="Experimental war machine. Extremely dangerous.",
            hp=100,
            damage=DamageRange(min=15, max=25),
            defense=8,
            xp_reward=100,
            intents=(
                EnemyIntent.CHARGE,
                EnemyIntent.ATTACK,
                EnemyIntent.ATTACK,
                EnemyIntent.DEFEND,
            ),
        ),
    )
}


def get_enemy(enemy_id: str) -> EnemyDefinition | None:
    """Look up an enemy definition by id."""
    return ENEMIES.get(enemy_id)


__all__ = [
    "EnemyDefinition",
    "ENEMIES",
    "get_enemy",
]
