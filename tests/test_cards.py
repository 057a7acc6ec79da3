import random

import pytest

from sherlock13.cards import (
    CARD_NAMES,
    CARD_SYMBOLS,
    DECK_SIZE,
    PLAYERS,
    SYMBOL_COUNTS,
    Symbol,
    build_table,
    culprit_of,
    hand_of,
    shuffle_deck,
)


@pytest.mark.parametrize("seed", [0, 1, 7, 42, 1234])
def test_shuffle_is_a_permutation(seed):
    deck = shuffle_deck(random.Random(seed))
    assert sorted(deck) == list(range(DECK_SIZE))


def test_shuffle_is_reproducible_with_a_seed():
    first = shuffle_deck(random.Random(5))
    second = shuffle_deck(random.Random(5))
    assert sorted(first) == list(range(DECK_SIZE))
    assert first == second


def test_shuffle_without_rng_gives_a_full_deck():
    assert sorted(shuffle_deck()) == list(range(DECK_SIZE))


def test_unshuffled_table_and_culprit_match_symbol_counts():
    deck = list(range(DECK_SIZE))
    table = build_table(deck)
    totals = [sum(row[symbol] for row in table) for symbol in Symbol]
    for symbol in CARD_SYMBOLS[culprit_of(deck)]:
        totals[symbol] += 1
    assert tuple(totals) == SYMBOL_COUNTS
    assert len(CARD_SYMBOLS) == len(CARD_NAMES)


def test_first_row_of_unshuffled_deck():
    table = build_table(list(range(DECK_SIZE)))
    assert table[0] == [0, 1, 1, 1, 1, 1, 1, 2]


@pytest.mark.parametrize("seed", [3, 11, 99])
def test_table_and_culprit_cover_every_symbol(seed):
    deck = shuffle_deck(random.Random(seed))
    table = build_table(deck)
    totals = [sum(row[symbol] for row in table) for symbol in Symbol]
    for symbol in CARD_SYMBOLS[culprit_of(deck)]:
        totals[symbol] += 1
    assert tuple(totals) == SYMBOL_COUNTS


@pytest.mark.parametrize("seed", [2, 8])
def test_row_sums_match_hand_symbols(seed):
    deck = shuffle_deck(random.Random(seed))
    table = build_table(deck)
    for player in range(PLAYERS):
        expected = sum(len(CARD_SYMBOLS[card]) for card in hand_of(deck, player))
        assert sum(table[player]) == expected


def test_hands_and_culprit_partition_the_deck():
    deck = shuffle_deck(random.Random(17))
    dealt = [card for player in range(PLAYERS) for card in hand_of(deck, player)]
    assert dealt + [culprit_of(deck)] == deck


def test_culprit_is_last_card():
    deck = list(range(DECK_SIZE))
    assert culprit_of(deck) == deck[-1]


@pytest.mark.parametrize("player", [-1, PLAYERS])
def test_hand_of_rejects_unknown_player(player):
    with pytest.raises(ValueError):
        hand_of(list(range(DECK_SIZE)), player)


@pytest.mark.parametrize("deck", [[0] * DECK_SIZE, list(range(DECK_SIZE - 1))])
def test_build_table_rejects_bad_deck(deck):
    with pytest.raises(ValueError):
        build_table(deck)