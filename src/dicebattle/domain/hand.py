"""The player's hand of drawn tokens."""
from __future__ import annotations

import logging
from typing import Callable, List

from dicebattle.domain.deck import Deck
from dicebattle.domain.defs import TokenDef
from dicebattle.domain.slots import SlotArray
from dicebattle.domain.tokens import TokenInstance

logger = logging.getLogger(__name__)

TokenRoller = Callable[[TokenDef], TokenInstance]


class Hand(SlotArray):
    """Fixed number of hand slots filled from the deck in slot-index order."""

    area = "hand"

    def __init__(self, capacity: int, deck: Deck, roll_token: TokenRoller) -> None:
        super().__init__(capacity)
        self._deck = deck
        self._roll_token = roll_token

    @property
    def deck(self) -> Deck:
        return self._deck

    def discard_all(self) -> int:
        """Send every held token's definition to the discard pile."""
        discarded = 0
        for token in self.tokens():
            self._pop(token)
            self._deck.discard(token.definition)
            discarded += 1
        return discarded

    def draw_new_hand(self, count: int) -> List[TokenInstance]:
        """Discard the current hand, then draw up to ``count`` fresh tokens.

        Stops early when the deck runs dry or the slots fill up; a partial hand
        is not an error.
        """
        self.discard_all()
        drawn: List[TokenInstance] = []
        for _ in range(count):
            index = self.first_free_index()
            if index is None:
                break
            token_def = self._deck.draw()
            if token_def is None:
                logger.info("Deck exhausted after drawing %d of %d tokens.", len(drawn), count)
                break
            token = self._roll_token(token_def)
            self._put(token, index)
            drawn.append(token)
        logger.debug("Drew a hand of %d tokens.", len(drawn))
        return drawn

    def take(self, token: TokenInstance) -> int:
        """Remove a token that is leaving the hand; returns the freed slot."""
        return self._pop(token)

    def reclaim(self, token: TokenInstance) -> bool:
        """Put a token back into the first free slot. False when the hand is full."""
        index = self.first_free_index()
        if index is None:
            logger.info("No free hand slot to reclaim %s.", token.instance_id)
            return False
        self._put(token, index)
        return True
