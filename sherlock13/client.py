"""Player-side game state and the listener that receives server messages."""

from __future__ import annotations

import logging
import queue
import socket
import threading

from .cards import DECK_SIZE, PLAYERS, Symbol
from .protocol import (
    ProtocolError,
    format_ask_all,
    format_ask_one,
    format_connect,
    format_guess,
    parse_message,
)
from .server import EMPTY_NAME

log = logging.getLogger(__name__)

_READ_SIZE = 255
_ACCEPT_TIMEOUT = 0.2
_READ_TIMEOUT = 5.0

# Screen regions, as (left, top, right, bottom) with right and bottom excluded.
CONNECT_BUTTON = (0, 0, 200, 50)
PLAYER_ROWS = (0, 90, 200, 330)
SYMBOL_COLUMNS = (200, 0, 680, 90)
SUSPECT_NAMES = (100, 350, 250, 740)
SUSPECT_MARKS = (250, 350, 300, 740)
GO_BUTTON = (500, 350, 700, 450)
ROW_HEIGHT = 60
COLUMN_WIDTH = 60
SUSPECT_HEIGHT = 30


def _inside(x: int, y: int, region: tuple[int, int, int, int]) -> bool:
    left, top, right, bottom = region
    return left <= x < right and top <= y < bottom


def _in_range(value: int, limit: int, what: str) -> int:
    if value not in range(limit):
        raise ProtocolError(f"no such {what}: {value}")
    return value


class ClientState:
    """What one player knows and has selected on the board."""

    def __init__(self, name: str, host: str, port: int) -> None:
        self.name = name
        self.host = host
        self.port = port
        self.player_id = 0
        self.names = [EMPTY_NAME] * PLAYERS
        self.hand: tuple[int, ...] = ()
        self.table: list[list[int | None]] = [[None] * len(Symbol) for _ in range(PLAYERS)]
        self.crossed = [False] * DECK_SIZE
        self.selected_player: int | None = None
        self.selected_symbol: int | None = None
        self.selected_suspect: int | None = None
        self.go_enabled = False
        self.connect_enabled = True

    def apply(self, text: str) -> None:
        """Update the state from one message sent by the server."""
        message = parse_message(text)
        fields = message.fields
        if message.kind == "I":
            self.player_id = _in_range(fields[0], PLAYERS, "player")
        elif message.kind == "L":
            self.names = list(fields[:PLAYERS])
        elif message.kind == "D":
            self.hand = tuple(_in_range(card, DECK_SIZE, "card") for card in fields)
        elif message.kind == "M":
            self.go_enabled = fields[0] == self.player_id
        elif message.kind == "V":
            if len(fields) == 3:
                player, symbol, value = fields
                _in_range(player, PLAYERS, "player")
                _in_range(symbol, len(Symbol), "symbol")
                self.table[player][symbol] = value
            else:
                self.table[self.player_id] = list(fields)

    def _clear_selection(self) -> None:
        self.selected_player = None
        self.selected_symbol = None
        self.selected_suspect = None

    def click(self, x: int, y: int) -> str | None:
        """React to a mouse click; return the message to send to the server, if any."""
        if x < CONNECT_BUTTON[2] and y < CONNECT_BUTTON[3] and self.connect_enabled:
            self.connect_enabled = False
            return format_connect(self.host, self.port, self.name)
        if _inside(x, y, PLAYER_ROWS):
            self.selected_player = (y - PLAYER_ROWS[1]) // ROW_HEIGHT
            self.selected_suspect = None
        elif _inside(x, y, SYMBOL_COLUMNS):
            self.selected_symbol = (x - SYMBOL_COLUMNS[0]) // COLUMN_WIDTH
            self.selected_suspect = None
        elif _inside(x, y, SUSPECT_NAMES):
            self.selected_player = None
            self.selected_symbol = None
            self.selected_suspect = (y - SUSPECT_NAMES[1]) // SUSPECT_HEIGHT
        elif _inside(x, y, SUSPECT_MARKS):
            index = (y - SUSPECT_MARKS[1]) // SUSPECT_HEIGHT
            self.crossed[index] = not self.crossed[index]
        elif _inside(x, y, GO_BUTTON) and self.go_enabled:
            return self._go()
        else:
            self._clear_selection()
        return None

    def _go(self) -> str | None:
        log.debug(
            "go: player=%s symbol=%s suspect=%s",
            self.selected_player,
            self.selected_symbol,
            self.selected_suspect,
        )
        if self.selected_suspect is not None:
            return format_guess(self.player_id, self.selected_suspect)
        if self.selected_symbol is not None and self.selected_player is None:
            return format_ask_all(self.player_id, self.selected_symbol)
        if self.selected_symbol is not None and self.selected_player is not None:
            return format_ask_one(self.player_id, self.selected_player, self.selected_symbol)
        return None


class MessageListener:
    """Accepts connections on a port in the background and queues what they carry."""

    def __init__(self, port: int) -> None:
        self._port = port
        self._messages: queue.Queue[str] = queue.Queue()
        self._stopping = threading.Event()
        self._socket: socket.socket | None = None
        self._thread: threading.Thread | None = None

    @property
    def port(self) -> int:
        """The port listened on; the one actually bound once started."""
        return self._port

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Bind the port and begin receiving messages."""
        if self._thread is not None:
            raise RuntimeError("listener already started")
        self._socket = socket.create_server(("", self._port), backlog=5)
        self._socket.settimeout(_ACCEPT_TIMEOUT)
        self._port = self._socket.getsockname()[1]
        self._stopping.clear()
        self._thread = threading.Thread(target=self._run, name="sherlock13-listener", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        listener = self._socket
        while not self._stopping.is_set():
            try:
                conn, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            with conn:
                conn.settimeout(_READ_TIMEOUT)
                try:
                    data = conn.recv(_READ_SIZE)
                except OSError as exc:
                    log.warning("read failed: %s", exc)
                    continue
            self._messages.put(data.decode("utf-8", errors="replace"))

    def stop(self) -> None:
        """Stop receiving and release the port."""
        if self._thread is None:
            return
        self._stopping.set()
        self._thread.join()
        self._socket.close()
        self._thread = None
        self._socket = None

    def poll(self) -> str | None:
        """Return the oldest message not yet taken, or None."""
        try:
            return self._messages.get_nowait()
        except queue.Empty:
            return None

    def __enter__(self) -> MessageListener:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()