"""Draw and discard piles of token definitions."""
from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from dicebattle.core.rng import RNG
from dicebattle.domain.defs import TokenDef

logger = logging.getLogger(__name__)


class Deck:
    """Draw pile (top is the last element) plus an unordered discard pile.

    Tokens are only relocated between piles and their holders; the total number
    of definitions only changes through ``add_to_deck``.
    """

    def __init__(self, definitions: Iterable[TokenDef], rng: RNG) -> None:
        self._rng = rng
        self._definitions: List[TokenDef] = list(definitions)
        self._draw_pile: List[TokenDef] = []
        self._discard_pile: List[TokenDef] = []
        self.reset()

    @property
    def size(self) -> int:
        """Total number of definitions owned by this deck, wherever they are."""
        return len(self._definitions)

    @property
    def draw_count(self) -> int:
        return len(self._draw_pile)

    @property
    def discard_count(self) -> int:
        return len(self._discard_pile)

    @property
    def draw_pile(self) -> Tuple[TokenDef, ...]:
        return tuple(self._draw_pile)

    @property
    def discard_pile(self) -> Tuple[TokenDef, ...]:
        return tuple(self._discard_pile)

    @property
    def definitions(self) -> Tuple[TokenDef, ...]:
        return tuple(self._definitions)

    def reset(self) -> None:
        """Return every definition to a freshly shuffled draw pile."""
        self._draw_pile = list(self._definitions)
        self._discard_pile = []
        self.shuffle()
        logger.debug("Deck initialized. Draw pile: %d, discard pile: %d", self.draw_count, self.discard_count)

    def shuffle(self) -> None:
        """Fisher-Yates shuffle of the draw pile in place."""
        pile = self._draw_pile
        for i in range(len(pile) - 1, 0, -1):
            j = self._rng.randint(0, i)
            pile[i], pile[j] = pile[j], pile[i]

    def draw(self) -> TokenDef | None:
        """Pop the top definition, reshuffling the discard pile in when empty.

        Returns None without touching either pile when both are empty.
        """
        if not self._draw_pile:
            if not self._discard_pile:
                logger.warning("Draw and discard piles are empty; cannot draw.")
                return None
            logger.debug("Draw pile empty, reshuffling %d discards.", self.discard_count)
            self._draw_pile.extend(self._discard_pile)
            self._discard_pile.clear()
            self.shuffle()

        drawn = self._draw_pile.pop()
        logger.debug("Drew %s. Draw pile remaining: %d", drawn.id, self.draw_count)
        return drawn

    def discard(self, token_def: TokenDef) -> None:
        """Append to the discard pile. Callers must not discard twice."""
        self._discard_pile.append(token_def)

    def add_to_deck(self, token_def: TokenDef) -> None:
        """Grow the deck by a new definition, landing in the discard pile."""
        self._definitions.append(token_def)
        self._discard_pile.append(token_def)
        logger.info("Added %s to the deck (size %d).", token_def.id, self.size)
