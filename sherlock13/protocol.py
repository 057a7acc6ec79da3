"""Text messages exchanged between the game server and its players."""

from __future__ import annotations

import socket
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Callable, Union

Field = Union[int, str]

# Value sent in answer to a question to all players when a player has the symbol.
PRESENT_MARK = 100

DEFAULT_TIMEOUT = 10.0


class ProtocolError(ValueError):
    """Raised for a message that cannot be read or written."""


@dataclass(frozen=True)
class Message:
    """One message: a one-letter kind followed by its fields."""

    kind: str
    fields: tuple[Field, ...] = ()

    def __str__(self) -> str:
        parts = [self.kind]
        parts.extend(str(int(f)) if isinstance(f, int) else f for f in self.fields)
        return " ".join(parts)


def _int(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ProtocolError(f"expected a number, got {token!r}") from None


_SHAPES: dict[str, tuple[Callable[[str], Field], ...]] = {
    "C": (str, _int, str),
    "I": (_int,),
    "L": (str,) * 4,
    "D": (_int,) * 3,
    "M": (_int,),
    "G": (_int,) * 2,
    "O": (_int,) * 2,
    "S": (_int,) * 3,
}

_ROW_LENGTH = 8
_CELL_LENGTH = 3


def parse_message(text: str) -> Message:
    """Read one message from its text form."""
    tokens = text.replace("\x00", " ").split()
    if not tokens:
        raise ProtocolError("empty message")
    kind, rest = tokens[0], tokens[1:]
    if kind == "V":
        if len(rest) not in (_CELL_LENGTH, _ROW_LENGTH):
            raise ProtocolError(f"V takes 3 or 8 numbers, got {len(rest)}")
        return Message(kind, tuple(_int(token) for token in rest))
    shape = _SHAPES.get(kind)
    if shape is None:
        raise ProtocolError(f"unknown message kind {kind!r}")
    if len(rest) < len(shape):
        raise ProtocolError(f"{kind} takes {len(shape)} fields, got {len(rest)}")
    return Message(kind, tuple(convert(token) for convert, token in zip(shape, rest)))


def _word(value: str) -> str:
    if not value or any(ch.isspace() for ch in value):
        raise ProtocolError(f"not a single word: {value!r}")
    return value


def _numbers(kind: str, values: Iterable[int], count: int) -> str:
    numbers = tuple(int(v) for v in values)
    if len(numbers) != count:
        raise ProtocolError(f"{kind} takes {count} numbers, got {len(numbers)}")
    return str(Message(kind, numbers))


def format_connect(host: str, port: int, name: str) -> str:
    """A player asks to join, giving where it listens and its name."""
    return str(Message("C", (_word(host), int(port), _word(name))))


def format_id(player: int) -> str:
    """The server tells a player its number."""
    return str(Message("I", (int(player),)))


def format_names(names: Iterable[str]) -> str:
    """The server lists the four player names."""
    words = tuple(_word(name) for name in names)
    if len(words) != 4:
        raise ProtocolError(f"L takes 4 names, got {len(words)}")
    return str(Message("L", words))


def format_deal(cards: Iterable[int]) -> str:
    """The server deals a player its three cards."""
    return _numbers("D", cards, 3)


def format_row(values: Iterable[int]) -> str:
    """The server gives a player its own symbol counts."""
    return _numbers("V", values, _ROW_LENGTH)


def format_cell(player: int, symbol: int, value: int) -> str:
    """The server reveals one cell of the symbol table."""
    return str(Message("V", (int(player), int(symbol), int(value))))


def format_turn(player: int) -> str:
    """The server names the player whose turn it is."""
    return str(Message("M", (int(player),)))


def format_guess(player: int, suspect: int) -> str:
    """A player accuses a suspect."""
    return str(Message("G", (int(player), int(suspect))))


def format_ask_all(player: int, symbol: int) -> str:
    """A player asks every other player whether they hold a symbol."""
    return str(Message("O", (int(player), int(symbol))))


def format_ask_one(player: int, target: int, symbol: int) -> str:
    """A player asks one player how many of a symbol they hold."""
    return str(Message("S", (int(player), int(target), int(symbol))))


def send_message(host: str, port: int, text: str) -> None:
    """Open a connection, send one newline-terminated message and close it."""
    with socket.create_connection((host, port), timeout=DEFAULT_TIMEOUT) as sock:
        sock.sendall((text + "\n").encode("utf-8"))