"""The thirteen suspect cards, their symbols and the deal between four players."""

from __future__ import annotations

import random
from collections.abc import Sequence
from enum import IntEnum

PLAYERS = 4
HAND_SIZE = 3


class Symbol(IntEnum):
    """The eight symbols printed on the suspect cards, in board column order."""

    PIPE = 0
    BULB = 1
    FIST = 2
    CROWN = 3
    NOTEBOOK = 4
    NECKLACE = 5
    EYE = 6
    SKULL = 7


CARD_NAMES = (
    "Sebastian Moran",
    "irene Adler",
    "inspector Lestrade",
    "inspector Gregson",
    "inspector Baynes",
    "inspector Bradstreet",
    "inspector Hopkins",
    "Sherlock Holmes",
    "John Watson",
    "Mycroft Holmes",
    "Mrs. Hudson",
    "Mary Morstan",
    "James Moriarty",
)

CARD_SYMBOLS: tuple[tuple[Symbol, ...], ...] = (
    (Symbol.SKULL, Symbol.FIST),
    (Symbol.SKULL, Symbol.BULB, Symbol.NECKLACE),
    (Symbol.CROWN, Symbol.EYE, Symbol.NOTEBOOK),
    (Symbol.CROWN, Symbol.FIST, Symbol.NOTEBOOK),
    (Symbol.CROWN, Symbol.BULB),
    (Symbol.CROWN, Symbol.FIST),
    (Symbol.CROWN, Symbol.PIPE, Symbol.EYE),
    (Symbol.PIPE, Symbol.BULB, Symbol.FIST),
    (Symbol.PIPE, Symbol.EYE, Symbol.FIST),
    (Symbol.PIPE, Symbol.BULB, Symbol.NOTEBOOK),
    (Symbol.PIPE, Symbol.NECKLACE),
    (Symbol.NOTEBOOK, Symbol.NECKLACE),
    (Symbol.SKULL, Symbol.BULB),
)

# How many cards of the whole deck carry each symbol.
SYMBOL_COUNTS = (5, 5, 5, 5, 4, 3, 3, 3)

DECK_SIZE = len(CARD_NAMES)
_SHUFFLE_SWAPS = 1000


def shuffle_deck(rng: random.Random | None = None) -> list[int]:
    """Return a new deck shuffled by a thousand random swaps."""
    if rng is None:
        rng = random.Random()
    deck = list(range(DECK_SIZE))
    for _ in range(_SHUFFLE_SWAPS):
        first = rng.randrange(DECK_SIZE)
        second = rng.randrange(DECK_SIZE)
        deck[first], deck[second] = deck[second], deck[first]
    return deck


def _check_deck(deck: Sequence[int]) -> None:
    if sorted(deck) != list(range(DECK_SIZE)):
        raise ValueError(f"a deck must hold each card 0..{DECK_SIZE - 1} once")


def hand_of(deck: Sequence[int], player: int) -> tuple[int, ...]:
    """Return the three cards dealt to ``player``."""
    if player not in range(PLAYERS):
        raise ValueError(f"no such player: {player}")
    start = player * HAND_SIZE
    return tuple(deck[start:start + HAND_SIZE])


def culprit_of(deck: Sequence[int]) -> int:
    """Return the card left out of every hand: the culprit."""
    _check_deck(deck)
    return deck[PLAYERS * HAND_SIZE]


def build_table(deck: Sequence[int]) -> list[list[int]]:
    """Count, for each player, how many of each symbol their hand shows."""
    _check_deck(deck)
    table = [[0] * len(Symbol) for _ in range(PLAYERS)]
    for player, row in enumerate(table):
        for card in hand_of(deck, player):
            for symbol in CARD_SYMBOLS[card]:
                row[symbol] += 1
    return table