"""Narrative text for resolved outcomes.

The ``Narrator`` is a stateless lookup: numeric outcomes (damage ratios,
AP debt, health ratios) select a tier, and the injected dice pick one of
the tier's message variants.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ironhaven.models import ActionType, APState, ExploreOutcome

if TYPE_CHECKING:
    from ironhaven.content import ZoneDefinition
    from ironhaven.engine.dice import DiceRoller


ATTACK_MESSAGES: dict[str, tuple[str, ...]] = {
    "miss": (
        "You swing wide, hitting nothing but air.",
        "Your attack is easily sidestepped.",
        "You stumble, missing your mark.",
        "The enemy weaves away from your strike.",
    ),
    "glancing": (
        "You land a glancing blow.",
        "Your strike connects, but lacks force.",
        "You scrape the enemy's defense.",
    ),
    "light": (
        "Your hit lands solid.",
        "You strike true.",
        "A clean hit.",
    ),
    "heavy": (
        "You strike with crushing force!",
        "A devastating blow!",
        "You drive your weapon deep!",
        "The impact echoes through the chamber.",
    ),
    "critical": (
        "CRITICAL HIT! You shatter their defense!",
        "A lethal strike! Use this advantage!",
        "Perfect form. Perfect execution. Maximum damage.",
    ),
}

ENEMY_ATTACK_MESSAGES: dict[str, tuple[str, ...]] = {
    "miss": (
        "{attacker} lunges but misses!",
        "{attacker}'s attack whistles past you.",
        "{attacker} strikes the air where you stood.",
    ),
    "hit": (
        "{attacker} strikes you!",
        "{attacker} lands a blow.",
        "{attacker} attacks with ferocity.",
    ),
    "heavy": (
        "{attacker} smashes into your defenses!",
        "A heavy blow from {attacker} staggers you!",
        "{attacker} connects with brutal force.",
    ),
}

ENEMY_HESITATE_MESSAGES: tuple[str, ...] = (
    "{attacker} hesitates, watching you.",
    "{attacker} circles warily, biding its time.",
    "{attacker} holds back, gathering itself.",
)

DEFEND_MESSAGES: tuple[str, ...] = (
    "You raise your guard, eyes locked on the enemy.",
    "You brace yourself for the incoming assault.",
    "You shift into a defensive stance.",
    "You prioritize survival, ready to parry.",
)

EXPLORE_MESSAGES: dict[ExploreOutcome, tuple[str, ...]] = {
    ExploreOutcome.NOTHING: (
        "The corridor stretches on, silent and empty.",
        "Dust dampens your footsteps. Nothing here.",
        "You search the area, but find only debris.",
        "A cold wind blows through the hollow halls.",
    ),
    ExploreOutcome.ITEM: (
        "You pry open a rusted container... supplies!",
        "Glinting in the debris, you spot something useful.",
        "A hidden cache! Fortune smiles upon you.",
        "Scavenging pays off. You found something.",
    ),
    ExploreOutcome.TRAP: (
        "CLICK. The sound echoes. You freeze, too late!",
        "The floor gives way beneath you!",
        "A tripwire snaps. Pain explodes!",
        "You triggered a security measure!",
    ),
    ExploreOutcome.ENCOUNTER: (
        "Movement! Something emerges from the shadows.",
        "A low growl freezes your blood. You are not alone.",
        "Mechanical whirring starts up ahead. Hostiles!",
        "You walked right into them. Prepare for combat!",
    ),
    ExploreOutcome.AMBUSH: (
        "It's a trap! They were waiting!",
        "Attackers spring from the darkness!",
        "Ambush! Defend yourself!",
        "You are surrounded before you realize it.",
    ),
    ExploreOutcome.ZONE_CHANGE: (
        "The path winds onward into unfamiliar ground.",
    ),
}

AP_STATE_MESSAGES: dict[APState, str] = {
    APState.EXHAUSTED: "Your limbs feel like lead. Every breath is a struggle.",
    APState.WINDED: "You catch your breath, muscles burning.",
    APState.RECOVERING: "Strength slowly returns, though the strain lingers.",
    APState.READY: "You stand poised, ready to act.",
    APState.OVEREXTENDED: "You pushed too far. Your body screams for rest.",
}

AMBUSH_WARNING = "Ambush! The enemy strikes before you can act."
NO_TARGET_MESSAGE = "You strike at nothing. The enemy is gone."
QUIET_AREA_MESSAGE = "The area is quiet. Nothing stirs."
EXPLORE_BLOCKED_MESSAGE = "You cannot search while enemies stand before you."
COMBAT_BEGINS_MESSAGE = "Combat begins."
VICTORY_MESSAGE = "The last enemy falls. Silence returns."
DEATH_MESSAGE = "You collapse. Darkness takes you."

ACKNOWLEDGEMENTS: dict[ActionType, str] = {
    ActionType.INVENTORY: "You take stock of what you carry.",
    ActionType.USE: "You ready the item, turning it over in your hands.",
    ActionType.TALK: "You call out. Only the wind answers, for now.",
}


def health_description(current: int, maximum: int) -> str:
    """Describe a health pool by its fill ratio."""
    ratio = current / maximum if maximum > 0 else 0.0
    if ratio >= 0.9:
        return "unscathed"
    if ratio >= 0.7:
        return "lightly wounded"
    if ratio >= 0.4:
        return "bloodied"
    if ratio >= 0.2:
        return "grievously wounded"
    if ratio > 0:
        return "near death"
    return "dead"


def attack_tier(damage: int, target_max_hp: int) -> str:
    """Classify a player hit by its share of the target's maximum HP."""
    if damage == 0:
        return "miss"
    ratio = damage / target_max_hp
    if ratio < 0.1:
        return "glancing"
    if ratio < 0.2:
        return "light"
    if ratio < 0.4:
        return "heavy"
    return "critical"


def enemy_attack_tier(damage: int, player_max_hp: int) -> str:
    """Classify a hostile hit by its share of the character's maximum HP."""
    if damage == 0:
        return "miss"
    if damage / player_max_hp < 0.2:
        return "hit"
    return "heavy"


def overcommit_message(debt_added: float) -> str:
    """Narrate an overspend by how far past zero it went."""
    if debt_added > 2:
        return "You push beyond your limits. Pain lances through exhausted muscles."
    if debt_added > 1:
        return "You strain yourself, feeling the cost of over-commitment."
    return "You push harder than you should."


def wait_message(old_debt: float, new_debt: float, ap_gained: float) -> str:
    """Narrate a wait action by what it recovered."""
    if old_debt > 0 and new_debt == 0:
        return "You steady your breathing. The strain fades. Focus returns."
    if old_debt > new_debt:
        return "You hold position, letting exhaustion slowly ebb away."
    if ap_gained > 0:
        return "You wait, gathering your strength."
    return "You hold, watching. Waiting."


def ap_state_message(state: APState) -> str:
    """Describe how an AP state feels."""
    return AP_STATE_MESSAGES[state]


def acknowledgement(action: ActionType) -> str:
    """Acknowledge an action whose effects live outside the core."""
    return ACKNOWLEDGEMENTS.get(action, "Nothing happens.")


class Narrator:
    """Picks message variants for outcomes using injected dice."""

    def __init__(self, dice: DiceRoller) -> None:
        self._dice = dice

    def attack(self, damage: int, target_max_hp: int) -> str:
        """Flavor line for a player attack."""
        return self._dice.pick(ATTACK_MESSAGES[attack_tier(damage, target_max_hp)])

    def enemy_attack(self, attacker: str, damage: int, player_max_hp: int) -> str:
        """Flavor line for a hostile attack."""
        template = self._dice.pick(
            ENEMY_ATTACK_MESSAGES[enemy_attack_tier(damage, player_max_hp)]
        )
        return template.format(attacker=attacker)

    def enemy_hesitates(self, attacker: str) -> str:
        """Flavor line for a hostile that does not attack."""
        return self._dice.pick(ENEMY_HESITATE_MESSAGES).format(attacker=attacker)

    def defend(self) -> str:
        """Flavor line for the defend action."""
        return self._dice.pick(DEFEND_MESSAGES)

    def explore(self, outcome: ExploreOutcome) -> str:
        """Flavor line for an exploration outcome."""
        return self._dice.pick(EXPLORE_MESSAGES[outcome])

    def zone_welcome(self, zone: ZoneDefinition) -> str:
        """Arrival line for a zone."""
        return self._dice.pick(zone.welcome_messages)

    def zone_ambient(self, zone: ZoneDefinition) -> str:
        """Background line for a zone."""
        return self._dice.pick(zone.ambient_messages)


__all__ = [
    "Narrator",
    "health_description",
    "attack_tier",
    "enemy_attack_tier",
    "overcommit_message",
    "wait_message",
    "ap_state_message",
    "acknowledgement",
    "AMBUSH_WARNING",
    "NO_TARGET_MESSAGE",
    "QUIET_AREA_MESSAGE",
    "EXPLORE_BLOCKED_MESSAGE",
    "COMBAT_BEGINS_MESSAGE",
    "VICTORY_MESSAGE",
    "DEATH_MESSAGE",
]
