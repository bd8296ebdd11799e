"""Static definition tables consumed by the engine.

The engine reads these tables; it never designs or mutates them.
"""

from __future__ import annotations

from ironhaven.content.enemies import ENEMIES, EnemyDefinition, get_enemy
from ironhaven.content.zones import ZONES, ZoneDefinition, get_zone, zones_of_type


__all__ = [
    "ENEMIES",
    "EnemyDefinition",
    "get_enemy",
    "ZONES",
    "ZoneDefinition",
    "get_zone",
    "zones_of_type",
]
