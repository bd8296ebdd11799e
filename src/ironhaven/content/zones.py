"""Static zone definitions.

Safe zones are settlements with no enemy table; danger zones list the
enemy types that exploration may spawn there.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ironhaven.models import ZoneType


class ZoneDefinition(BaseModel):
    """Static definition of a zone."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    type: ZoneType
    description: str
    welcome_messages: tuple[str, ...] = Field(min_length=1)
    ambient_messages: tuple[str, ...] = Field(min_length=1)
    enemy_types: tuple[str, ...] = ()


ZONES: dict[str, ZoneDefinition] = {
    zone.id: zone
    for zone in (
        # Safe zones
        ZoneDefinition(
            id="village",
            name="Dusty Hollow",
            type=ZoneType.SAFE,
            description="A small settlement of survivors. Makeshift homes huddle together for warmth.",
            welcome_messages=(
                "You arrive at Dusty Hollow. Smoke rises from scattered chimneys.",
                "The village gates creak open. Wary eyes watch from the shadows.",
                "You've reached Dusty Hollow. A child waves from behind a rusted fence.",
                "The familiar scent of cooking fires greets you. Home, for now.",
            ),
            ambient_messages=(
                "A merchant hawks salvaged goods nearby.",
                "You hear distant hammering. Someone is repairing the walls.",
                "An old woman offers you a knowing nod.",
            ),
        ),
        ZoneDefinition(
            id="town",
            name="Iron Haven",
            type=ZoneType.SAFE,
            description="A fortified trading post. Walls of scrap metal protect those within.",
            welcome_messages=(
                "You pass through the gates of Iron Haven. The marketplace buzzes with activity.",
                "Iron Haven welcomes you. Guards nod as you enter.",
                "The town's metal walls gleam in the pale light. Sanctuary at last.",
                "You've arrived at Iron Haven. The smell of oil and cooking meat fills the air.",
            ),
            ambient_messages=(
                "Traders argue over the price of power cells.",
                "A guard patrol marches past, weapons ready.",
                "Someone plays a makeshift instrument in the square.",
            ),
        ),
        ZoneDefinition(
            id="city",
            name="New Bastion",
            type=ZoneType.SAFE,
            description="The largest known settlement. Civilization clings to life here.",
            welcome_messages=(
                "The towering walls of New Bastion rise before you. Humanity's last stronghold.",
                "You enter New Bastion. The city hums with desperate purpose.",
                "Lights flicker in the city's heart. New Bastion still stands.",
                "The gates of New Bastion open. Inside, life persists against all odds.",
            ),
            ambient_messages=(
                "A newsmonger shouts headlines of distant battles.",
                "Tech scavengers display their latest finds.",
                "The Council's guards watch from elevated platforms.",
            ),
        ),
        ZoneDefinition(
            id="campfire",
            name="Wanderer's Rest",
            type=ZoneType.SAFE,
            description="A temporary camp. The fire keeps the darkness at bay.",
            welcome_messages=(
                "You find a sheltered spot and light a fire. The flames dance against the night.",
                "A campfire crackles before you. Time to rest.",
                "You set up camp. The warmth is a small comfort in this cold world.",
                "The fire springs to life. For a moment, you can pretend things are normal.",
            ),
            ambient_messages=(
                "The fire pops and sparks fly upward.",
                "Strange sounds echo in the distance, but the light keeps them away.",
                "You stare into the flames, memories flickering.",
            ),
        ),
        # Danger zones
        ZoneDefinition(
            id="catacomb",
            name="The Bone Halls",
            type=ZoneType.DANGER,
            description="Ancient tunnels beneath the earth. The dead do not rest easy here.",
            welcome_messages=(
                "You descend into The Bone Halls. The air grows cold and still.",
                "Darkness swallows you as you enter the catacombs. Your footsteps echo endlessly.",
                "The tunnels yawn before you. Something stirs in the depths.",
                "You push into The Bone Halls. Skulls watch from niches in the walls.",
            ),
            ambient_messages=(
                "Water drips somewhere in the darkness.",
                "You hear scratching sounds behind you... or was it ahead?",
                "The bones seem to shift when you're not looking.",
            ),
            enemy_types=("scavenger_drone", "corrupted_sentinel"),
        ),
        ZoneDefinition(
            id="forest",
            name="The Withered Woods",
            type=ZoneType.DANGER,
            description="Dead trees stretch toward a grey sky. Things hunt among the shadows.",
            welcome_messages=(
                "You enter The Withered Woods. Twisted branches claw at the colorless sky.",
                "The forest closes around you. Every shadow might hide teeth.",
                "Dead leaves crunch underfoot as you push into the woods.",
                "The Withered Woods welcome no one. Yet here you are.",
            ),
            ambient_messages=(
                "A branch snaps somewhere in the undergrowth.",
                "You glimpse movement between the dead trees.",
                "The wind carries sounds that might be growls... or whispers.",
            ),
            enemy_types=("feral_hound", "raider"),
        ),
        ZoneDefinition(
            id="mountain",
            name="The Iron Peaks",
            type=ZoneType.DANGER,
            description="Jagged mountains where the old machines still wander.",
            welcome_messages=(
                "You climb into The Iron Peaks. The air thins, but the danger grows thicker.",
                "The mountains loom before you, cold and unforgiving.",
                "You ascend into hostile territory. Metal glints among the rocks.",
                "The Iron Peaks test all who dare their slopes. Few return.",
            ),
            ambient_messages=(
                "Servo motors whine somewhere above you.",
                "Rocks clatter down the slope. Something disturbed them.",
                "You spot old war machines, frozen mid-stride, waiting.",
            ),
            enemy_types=("corrupted_sentinel", "proto_construct", "scavenger_drone"),
        ),
        ZoneDefinition(
            id="ruins",
            name="The Shattered District",
            type=ZoneType.DANGER,
            description="Remains of the old city. Scavengers and worse pick through the bones.",
            welcome_messages=(
                "You enter The Shattered District. Collapsed towers cast long shadows.",
                "The ruins stretch endlessly. What was once home is now a tomb.",
                "You pick your way through rubble. Every building might hold treasure... or death.",
                "The old city surrounds you. Its ghosts have not forgotten.",
            ),
            ambient_messages=(
                "Glass crunches beneath your boots.",
                "A building groans, threatening to collapse.",
                "You hear voices... but there's no one there.",
            ),
            enemy_types=("raider", "feral_hound", "scavenger_drone"),
        ),
        ZoneDefinition(
            id="wasteland",
            name="The Scorched Expanse",
            type=ZoneType.DANGER,
            description="An endless desert of ash and bone. Nothing lives here that doesn't kill.",
            welcome_messages=(
                "You venture into The Scorched Expanse. The horizon shimmers with heat.",
                "Ash crunches beneath your feet. The wasteland offers nothing but death.",
                "The sun beats down mercilessly. This is the end of all roads.",
                "You cross into the Expanse. Survival here is measured in hours.",
            ),
            ambient_messages=(
                "The wind howls, carrying stinging ash.",
                "You spot tracks in the dust... something large.",
                "A dust devil spirals in the distance, carrying debris.",
            ),
            enemy_types=("proto_construct", "raider", "corrupted_sentinel"),
        ),
    )
}


def get_zone(zone_id: str | None) -> ZoneDefinition | None:
    """Look up a zone definition by id."""
    if zone_id is None:
        return None
    return ZONES.get(zone_id)


def zones_of_type(zone_type: ZoneType | None = None) -> list[ZoneDefinition]:
    """List zones, optionally filtered by type, in table order."""
    return [z for z in ZONES.values() if zone_type is None or z.type == zone_type]


__all__ = [
    "ZoneDefinition",
    "ZONES",
    "get_zone",
    "zones_of_type",
]
