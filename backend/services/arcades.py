"""
Arcade catalogue.

Maps the game keys used by the engine ('snake', 'chaos') to the arcade rows
their scores are filed under, and makes sure those rows exist before a score
is read or written.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional

from data_access import ensure_arcade

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArcadeDefinition:
    key: str
    slug: str
    title: str
    description: str
    category: str
    difficulty: str
    players_label: str
    streak_label: str
    href: str


SNAKE_ARCADE = ArcadeDefinition(
    key="snake",
    slug="snake-arcade",
    title="Snake Arcade Sprint",
    description="Classic snake, new leaderboard bragging rights.",
    category="Arcade",
    difficulty="Retro",
    players_label="Snake speedruns",
    streak_label="Longest tail",
    href="/snake",
)

CHAOS_ARCADE = ArcadeDefinition(
    key="chaos",
    slug="chaos-drop",
    title="Chaos Drop Sabotage",
    description="Drop junk blocks, force the AI to panic-clean.",
    category="Arcade",
    difficulty="Tactical",
    players_label="Saboteurs online",
    streak_label="Holes planted",
    href="/chaos",
)

ARCADES: Dict[str, ArcadeDefinition] = {
    SNAKE_ARCADE.key: SNAKE_ARCADE,
    CHAOS_ARCADE.key: CHAOS_ARCADE,
}

ARCADE_HREFS: Dict[str, str] = {arcade.slug: arcade.href for arcade in ARCADES.values()}


def get_arcade(game: str) -> Optional[ArcadeDefinition]:
    """Look up an arcade by game key (case-insensitive)."""
    return ARCADES.get((game or "").strip().lower())


def ensure_arcade_row(arcade: ArcadeDefinition) -> Dict[str, Any]:
    """
    Upsert the arcade's catalogue row and return it (including its id).
    """
    fields = asdict(arcade)
    fields.pop('key')
    fields.pop('href')
    row = ensure_arcade(**fields)
    logger.debug(f"Ensured arcade row {arcade.slug} (id={row.get('id')})")
    return row
