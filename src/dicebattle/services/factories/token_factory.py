"""Factory for rolling token instances as they are drawn."""
from __future__ import annotations

from itertools import count

from dicebattle.core.rng import RNG
from dicebattle.domain.defs import TokenDef
from dicebattle.domain.tokens import TokenInstance


class TokenFactory:
    """Callable that turns a drawn definition into a rolled TokenInstance.

    Instance ids come from a per-factory sequence so that two draws of the same
    definition never collide.
    """

    def __init__(self, rng: RNG) -> None:
        self._rng = rng
        self._sequence = count(1)

    def __call__(self, token_def: TokenDef) -> TokenInstance:
        return TokenInstance(
            instance_id=f"{token_def.id}#{next(self._sequence)}",
            definition=token_def,
            roll=self._rng.roll(token_def.max_roll),
        )
