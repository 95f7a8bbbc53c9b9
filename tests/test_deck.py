from __future__ import annotations

from itertools import permutations

from dicebattle.core.rng import RNG
from dicebattle.domain.deck import Deck
from tests.helpers.combat_builders import HighRollRNG, make_token_def


def _three_card_deck(rng: RNG | None = None) -> Deck:
    defs = [make_token_def("a"), make_token_def("b"), make_token_def("c")]
    return Deck(defs, rng or HighRollRNG())


def test_new_deck_starts_with_everything_in_draw_pile() -> None:
    deck = _three_card_deck()

    assert deck.size == 3
    assert deck.draw_count == 3
    assert deck.discard_count == 0


def test_draw_takes_from_the_top() -> None:
    deck = _three_card_deck()

    assert [deck.draw().id for _ in range(3)] == ["c", "b", "a"]


def test_draw_and_discard_conserve_deck_size() -> None:
    deck = Deck([make_token_def(f"t{i}") for i in range(6)], RNG(3))
    held = []

    for step in range(40):
        if step % 3 == 2 and held:
            deck.discard(held.pop(0))
        else:
            drawn = deck.draw()
            if drawn is not None:
                held.append(drawn)
        assert deck.draw_count + deck.discard_count + len(held) == deck.size


def test_empty_draw_pile_reshuffles_discards_before_drawing() -> None:
    deck = _three_card_deck()
    drawn = [deck.draw() for _ in range(3)]
    for token_def in drawn[:2]:
        deck.discard(token_def)

    result = deck.draw()

    assert result is not None
    assert result.id in {"b", "c"}
    assert deck.discard_count == 0
    assert deck.draw_count == 1


def test_draw_with_both_piles_empty_returns_none_without_mutation() -> None:
    deck = _three_card_deck()
    for _ in range(3):
        deck.draw()

    assert deck.draw() is None
    assert deck.draw_count == 0
    assert deck.discard_count == 0


def test_discard_is_unconditional() -> None:
    deck = _three_card_deck()
    extra = make_token_def("stray")

    deck.discard(extra)
    deck.discard(extra)

    assert deck.discard_count == 2


def test_shuffle_is_a_permutation() -> None:
    deck = Deck([make_token_def(f"t{i}") for i in range(10)], RNG(99))
    before = sorted(token_def.id for token_def in deck.draw_pile)

    deck.shuffle()

    assert sorted(token_def.id for token_def in deck.draw_pile) == before


def test_shuffle_reaches_every_ordering() -> None:
    seen = set()
    for seed in range(600):
        deck = _three_card_deck(RNG(seed))
        seen.add(tuple(token_def.id for token_def in deck.draw_pile))

    assert seen == set(permutations(("a", "b", "c")))


def test_add_to_deck_grows_size_via_discard_pile() -> None:
    deck = _three_card_deck()

    deck.add_to_deck(make_token_def("reward"))

    assert deck.size == 4
    assert deck.discard_count == 1
    assert deck.discard_pile[0].id == "reward"


def test_reset_returns_everything_to_draw_pile() -> None:
    deck = _three_card_deck()
    deck.discard(deck.draw())
    deck.draw()

    deck.reset()

    assert deck.draw_count == 3
    assert deck.discard_count == 0
