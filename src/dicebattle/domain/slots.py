"""Fixed-capacity slot arrays holding token instances."""
from __future__ import annotations

from typing import Iterator, List, Tuple

from dicebattle.core.types import SlotArea
from dicebattle.domain.errors import HandInvariantError
from dicebattle.domain.tokens import TokenInstance, TokenLocation


class SlotArray:
    """Maps slot index -> token; each token occupies at most one slot."""

    area: SlotArea

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("Slot capacity must be at least 1.")
        self._slots: List[TokenInstance | None] = [None] * capacity

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def occupied_count(self) -> int:
        return sum(1 for token in self._slots if token is not None)

    @property
    def is_full(self) -> bool:
        return self.first_free_index() is None

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._slots)

    def is_occupied(self, index: int) -> bool:
        return self._slots[index] is not None

    def get(self, index: int) -> TokenInstance | None:
        return self._slots[index]

    def first_free_index(self) -> int | None:
        for index, token in enumerate(self._slots):
            if token is None:
                return index
        return None

    def find(self, instance_id: str) -> TokenInstance | None:
        for token in self._slots:
            if token is not None and token.instance_id == instance_id:
                return token
        return None

    def contains(self, token: TokenInstance) -> bool:
        return any(held is token for held in self._slots)

    def occupied(self) -> List[Tuple[int, TokenInstance]]:
        """Return (index, token) pairs in ascending slot order."""
        return [(index, token) for index, token in enumerate(self._slots) if token is not None]

    def tokens(self) -> List[TokenInstance]:
        return [token for token in self._slots if token is not None]

    def __iter__(self) -> Iterator[TokenInstance]:
        return iter(self.tokens())

    def __len__(self) -> int:
        return self.occupied_count

    def _put(self, token: TokenInstance, index: int) -> None:
        if self._slots[index] is not None:
            raise HandInvariantError(f"{self.area} slot {index} is already occupied.")
        if self.contains(token):
            raise HandInvariantError(f"Token {token.instance_id} is already in the {self.area}.")
        self._slots[index] = token
        token.location = TokenLocation(area=self.area, index=index)
        self.check_invariants()

    def _pop(self, token: TokenInstance) -> int:
        for index, held in enumerate(self._slots):
            if held is token:
                self._slots[index] = None
                token.location = None
                self.check_invariants()
                return index
        raise HandInvariantError(f"Token {token.instance_id} is not in the {self.area}.")

    def check_invariants(self) -> None:
        seen: set[str] = set()
        for index, token in enumerate(self._slots):
            if token is None:
                continue
            if token.instance_id in seen:
                raise HandInvariantError(f"Token {token.instance_id} occupies more than one {self.area} slot.")
            seen.add(token.instance_id)
            if token.location != TokenLocation(area=self.area, index=index):
                raise HandInvariantError(
                    f"Token {token.instance_id} records location {token.location}, "
                    f"but sits in {self.area} slot {index}."
                )
