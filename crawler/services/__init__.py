# Service package init
from .monster_ai import line_of_sight, monster_turn  # noqa: F401 re-export
from .movement import Outcome, is_quit, map_direction, move, next_position  # noqa: F401 re-export

__all__ = [
    "Outcome",
    "is_quit",
    "line_of_sight",
    "map_direction",
    "monster_turn",
    "move",
    "next_position",
]
