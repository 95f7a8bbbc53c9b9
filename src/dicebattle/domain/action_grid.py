"""Action slots where placed tokens wait for turn resolution."""
from __future__ import annotations

from typing import List, Tuple

from dicebattle.domain.slots import SlotArray
from dicebattle.domain.tokens import TokenInstance

DEFAULT_GRID_SIZE = 9


class ActionGrid(SlotArray):
    area = "grid"

    def __init__(self, capacity: int = DEFAULT_GRID_SIZE) -> None:
        super().__init__(capacity)

    def place(self, token: TokenInstance, index: int) -> bool:
        if not self.is_valid_index(index) or self.is_occupied(index):
            return False
        self._put(token, index)
        return True

    def move(self, token: TokenInstance, index: int) -> bool:
        """Relocate a token already on the grid to another free slot."""
        if not self.is_valid_index(index) or self.is_occupied(index):
            return False
        self._pop(token)
        self._put(token, index)
        return True

    def remove(self, token: TokenInstance) -> int:
        return self._pop(token)

    def resolution_order(self) -> List[Tuple[int, TokenInstance]]:
        """Placed tokens in ascending slot order, regardless of placement order."""
        return self.occupied()
