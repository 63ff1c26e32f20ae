# Model package init
from .player import Player  # noqa: F401 re-export

__all__ = ["Player"]
