from dataclasses import dataclass
from typing import Tuple


@dataclass
class Player:
    row: int
    col: int
    treasure: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)
