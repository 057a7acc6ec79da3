"""The game server: gathers four players, deals, and answers their questions."""

from __future__ import annotations

import argparse
import logging
import random
import socket
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from .cards import CARD_NAMES, PLAYERS, Symbol, build_table, culprit_of, hand_of, shuffle_deck
from .protocol import (
    PRESENT_MARK,
    ProtocolError,
    format_cell,
    format_deal,
    format_id,
    format_names,
    format_row,
    format_turn,
    parse_message,
    send_message,
)

log = logging.getLogger(__name__)

EMPTY_NAME = "-"
_READ_SIZE = 255

Sender = Callable[[str, int, str], None]


@dataclass
class RemotePlayer:
    """Where a joined player listens, and its name."""

    host: str
    port: int
    name: str


def _check(value: int, limit: int, what: str) -> int:
    if value not in range(limit):
        raise ProtocolError(f"no such {what}: {value}")
    return value


class GameServer:
    """Game state driven by one incoming message at a time."""

    def __init__(self, deck: Sequence[int], send: Sender = send_message) -> None:
        self.deck = list(deck)
        self.table = build_table(self.deck)
        self.culprit = culprit_of(self.deck)
        self.send = send
        self.players: list[RemotePlayer] = []
        self.current = 0
        self.playing = False

    @property
    def names(self) -> list[str]:
        """The four seat names, with a dash for seats not yet taken."""
        taken = [player.name for player in self.players]
        return taken + [EMPTY_NAME] * (PLAYERS - len(taken))

    def find_player(self, name: str) -> int | None:
        """Return the number of the first player with this name."""
        for index, player in enumerate(self.players):
            if player.name == name:
                return index
        return None

    def broadcast(self, text: str) -> None:
        """Send a message to every joined player."""
        for player in self.players:
            self.send(player.host, player.port, text)

    def handle(self, text: str) -> None:
        """Act on one message; messages that do not fit the phase are ignored."""
        message = parse_message(text)
        if self.playing:
            handlers = {"G": self._guess, "O": self._ask_all, "S": self._ask_one}
        else:
            handlers = {"C": self._join}
        handler = handlers.get(message.kind)
        if handler is not None:
            handler(*message.fields)

    def _join(self, host: str, port: int, name: str) -> None:
        self.players.append(RemotePlayer(host, port, name))
        log.info("players: %s", ", ".join(f"{p.name}@{p.host}:{p.port}" for p in self.players))
        player_id = self.find_player(name)
        newcomer = self.players[player_id]
        self.send(newcomer.host, newcomer.port, format_id(player_id))
        self.broadcast(format_names(self.names))
        if len(self.players) == PLAYERS:
            self._start()

    def _start(self) -> None:
        for index, player in enumerate(self.players):
            self.send(player.host, player.port, format_deal(hand_of(self.deck, index)))
            self.send(player.host, player.port, format_row(self.table[index]))
        self.broadcast(format_turn(self.current))
        self.playing = True

    def _advance(self) -> None:
        self.current = (self.current + 1) % PLAYERS
        self.broadcast(format_turn(self.current))

    def _guess(self, player: int, suspect: int) -> None:
        name = self.players[_check(player, PLAYERS, "player")].name
        if suspect == self.culprit:
            log.info("%s wins", name)
        else:
            log.info("%s, wrong guess", name)
        self._advance()

    def _ask_all(self, player: int, symbol: int) -> None:
        _check(symbol, len(Symbol), "symbol")
        for index, row in enumerate(self.table):
            if index == player:
                continue
            value = PRESENT_MARK if row[symbol] > 0 else 0
            self.broadcast(format_cell(index, symbol, value))
        self._advance()

    def _ask_one(self, player: int, target: int, symbol: int) -> None:
        _check(target, PLAYERS, "player")
        _check(symbol, len(Symbol), "symbol")
        self.broadcast(format_cell(target, symbol, self.table[target][symbol]))
        self._advance()


def serve(port: int, deck: Sequence[int] | None = None) -> None:
    """Listen on ``port`` and feed each received message to a game, forever."""
    if deck is None:
        deck = shuffle_deck(random.Random())
    game = GameServer(deck, send_message)
    for card in game.deck:
        log.info("%d %s", card, CARD_NAMES[card])
    for row in game.table:
        log.info(" ".join(f"{count:02d}" for count in row))

    with socket.create_server(("", port), backlog=5) as listener:
        while True:
            conn, (peer_host, peer_port) = listener.accept()
            with conn:
                data = conn.recv(_READ_SIZE)
            text = data.decode("utf-8", errors="replace")
            log.info("Received packet from %s:%d data [%s]", peer_host, peer_port, text.rstrip())
            try:
                game.handle(text)
            except ProtocolError as exc:
                log.warning("ignored message: %s", exc)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game server on the port given on the command line."""
    parser = argparse.ArgumentParser(prog="sherlock13-server", description="Sherlock 13 game server")
    parser.add_argument("port", type=int, help="port to listen on")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        serve(args.port)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        log.error("%s", exc)
        return 1
    return 0