"""The player's window: draws the board and relays clicks to the server."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

import pygame

from .cards import CARD_NAMES, CARD_SYMBOLS, DECK_SIZE, PLAYERS, SYMBOL_COUNTS
from .client import ClientState, MessageListener
from .protocol import PRESENT_MARK, ProtocolError, send_message

log = logging.getLogger(__name__)

WINDOW_SIZE = (1024, 768)
FRAME_RATE = 60
FONT_FILE = "sans.ttf"
FONT_SIZE = 15

BACKGROUND = (255, 230, 230)
PLAYER_HIGHLIGHT = (255, 180, 180)
SYMBOL_HIGHLIGHT = (180, 255, 180)
SUSPECT_HIGHLIGHT = (180, 180, 255)
CROSS_COLOR = (255, 0, 0)
LINE_COLOR = (0, 0, 0)
TEXT_COLOR = (0, 0, 0)

SYMBOL_IMAGES = (
    "SH13_pipe_120x120.png",
    "SH13_ampoule_120x120.png",
    "SH13_poing_120x120.png",
    "SH13_couronne_120x120.png",
    "SH13_carnet_120x120.png",
    "SH13_collier_120x120.png",
    "SH13_oeil_120x120.png",
    "SH13_crane_120x120.png",
)
CARD_SIZE = (250, 165)
CARD_POSITIONS = ((750, 0), (750, 200), (750, 400))


def _load_image(path: Path) -> pygame.Surface | None:
    if not path.is_file():
        log.warning("missing image %s", path)
        return None
    try:
        return pygame.image.load(str(path))
    except pygame.error as exc:
        log.warning("cannot load %s: %s", path, exc)
        return None


def _load_font(path: Path, size: int) -> pygame.font.Font:
    if path.is_file():
        try:
            return pygame.font.Font(str(path), size)
        except (pygame.error, OSError) as exc:
            log.warning("cannot load %s: %s", path, exc)
    return pygame.font.Font(None, size)


class Board:
    """Draws a player's view of the game onto a surface."""

    def __init__(self, surface: pygame.Surface, assets_dir: str | Path = ".") -> None:
        if not pygame.font.get_init():
            pygame.font.init()
        self.surface = surface
        root = Path(assets_dir)
        self._cards = [_load_image(root / f"SH13_{i}.png") for i in range(DECK_SIZE)]
        self._symbols = [_load_image(root / name) for name in SYMBOL_IMAGES]
        self._go_button = _load_image(root / "gobutton.png")
        self._connect_button = _load_image(root / "connectbutton.png")
        self.font = _load_font(root / FONT_FILE, FONT_SIZE)
        self._scaled: dict[tuple[int, int, int], pygame.Surface] = {}

    def _image(self, image: pygame.Surface | None, rect: tuple[int, int, int, int]) -> None:
        if image is None:
            return
        x, y, width, height = rect
        key = (id(image), width, height)
        scaled = self._scaled.get(key)
        if scaled is None:
            scaled = pygame.transform.scale(image, (width, height))
            self._scaled[key] = scaled
        self.surface.blit(scaled, (x, y))

    def _text(self, text: str, position: tuple[int, int]) -> None:
        self.surface.blit(self.font.render(text, False, TEXT_COLOR), position)

    def _line(self, color, start, end) -> None:
        pygame.draw.line(self.surface, color, start, end)

    def draw(self, state: ClientState) -> None:
        """Draw the whole board for the given state."""
        self.surface.fill(BACKGROUND)
        self._draw_selection(state)

        for index, image in enumerate(self._symbols):
            self._image(image, (210 + index * 60, 10, 40, 40))
        for index, count in enumerate(SYMBOL_COUNTS):
            self._text(str(count), (230 + index * 60, 50))
        for index, name in enumerate(CARD_NAMES):
            self._text(name, (105, 350 + index * 30))

        for player, row in enumerate(state.table):
            for symbol, value in enumerate(row):
                if value is None:
                    continue
                label = "*" if value == PRESENT_MARK else str(value)
                self._text(label, (230 + symbol * 60, 110 + player * 60))

        for card, symbols in enumerate(CARD_SYMBOLS):
            for slot, symbol in enumerate(symbols):
                self._image(self._symbols[symbol], (slot * 30, 350 + card * 30, 30, 30))

        for index, crossed in enumerate(state.crossed):
            if crossed:
                top = 350 + index * 30
                self._line(CROSS_COLOR, (250, top), (300, top + 30))
                self._line(CROSS_COLOR, (250, top + 30), (300, top))

        self._draw_grid()

        for card, (x, y) in zip(state.hand, CARD_POSITIONS):
            self._image(self._cards[card], (x, y, *CARD_SIZE))

        if state.go_enabled:
            self._image(self._go_button, (500, 350, 200, 150))
        if state.connect_enabled:
            self._image(self._connect_button, (0, 0, 200, 50))

        for index, name in enumerate(state.names):
            if name:
                self._text(name, (10, 110 + index * 60))

    def _draw_selection(self, state: ClientState) -> None:
        if state.selected_player is not None:
            rect = (0, 90 + state.selected_player * 60, 200, 60)
            self.surface.fill(PLAYER_HIGHLIGHT, rect)
        if state.selected_symbol is not None:
            rect = (200 + state.selected_symbol * 60, 0, 60, 90)
            self.surface.fill(SYMBOL_HIGHLIGHT, rect)
        if state.selected_suspect is not None:
            rect = (100, 350 + state.selected_suspect * 30, 150, 30)
            self.surface.fill(SUSPECT_HIGHLIGHT, rect)

    def _draw_grid(self) -> None:
        for row in range(1, PLAYERS + 2):
            y = 30 + row * 60
            self._line(LINE_COLOR, (0, y), (680, y))
        for x in range(200, 681, 60):
            self._line(LINE_COLOR, (x, 0), (x, 330))
        for row in range(DECK_SIZE + 1):
            y = 350 + row * 30
            self._line(LINE_COLOR, (0, y), (300, y))
        for x in (100, 250, 300):
            self._line(LINE_COLOR, (x, 350), (x, 740))


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Read the server address, this player's address and name."""
    parser = argparse.ArgumentParser(prog="sherlock13", description="Sherlock 13 player")
    parser.add_argument("server_host", help="game server address")
    parser.add_argument("server_port", type=int, help="game server port")
    parser.add_argument("client_host", help="address the server reaches this player at")
    parser.add_argument("client_port", type=int, help="port this player listens on")
    parser.add_argument("name", help="player name")
    parser.add_argument("--assets", default=".", help="directory holding images and font")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the player window and play until it is closed."""
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    state = ClientState(args.name, args.client_host, args.client_port)
    pygame.init()
    try:
        screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption("Sherlock 13")
        board = Board(screen, args.assets)
        clock = pygame.time.Clock()
        with MessageListener(args.client_port) as listener:
            while True:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        return 0
                    if event.type == pygame.MOUSEBUTTONDOWN:
                        outgoing = state.click(*event.pos)
                        if outgoing is not None:
                            send_message(args.server_host, args.server_port, outgoing)
                while (text := listener.poll()) is not None:
                    log.info("received |%s|", text.rstrip())
                    try:
                        state.apply(text)
                    except ProtocolError as exc:
                        log.warning("ignored message: %s", exc)
                board.draw(state)
                pygame.display.flip()
                clock.tick(FRAME_RATE)
    except OSError as exc:
        log.error("%s", exc)
        return 1
    finally:
        pygame.quit()