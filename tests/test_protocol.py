import socket

import pytest

from sherlock13.cards import Symbol
from sherlock13.protocol import (
    Message,
    ProtocolError,
    format_ask_all,
    format_ask_one,
    format_cell,
    format_connect,
    format_deal,
    format_guess,
    format_id,
    format_names,
    format_row,
    format_turn,
    parse_message,
    send_message,
)


def test_connect_wire_form():
    text = format_connect("127.0.0.1", 5000, "alice")
    assert text == "C 127.0.0.1 5000 alice"
    assert parse_message(text) == Message("C", ("127.0.0.1", 5000, "alice"))


def test_cell_uses_symbol_number():
    assert format_cell(1, Symbol.CROWN, 100) == "V 1 3 100"


@pytest.mark.parametrize(
    "text, kind, fields",
    [
        (format_id(2), "I", (2,)),
        (format_names(["a", "b", "-", "-"]), "L", ("a", "b", "-", "-")),
        (format_deal([4, 0, 12]), "D", (4, 0, 12)),
        (format_row(range(8)), "V", tuple(range(8))),
        (format_cell(2, Symbol.SKULL, 0), "V", (2, int(Symbol.SKULL), 0)),
        (format_turn(Symbol.BULB), "M", (int(Symbol.BULB),)),
        (format_guess(1, 12), "G", (1, 12)),
        (format_ask_all(0, Symbol.EYE), "O", (0, int(Symbol.EYE))),
        (format_ask_one(3, 1, Symbol.PIPE), "S", (3, 1, int(Symbol.PIPE))),
    ],
)
def test_round_trip(text, kind, fields):
    message = parse_message(text)
    assert message == Message(kind, fields)
    assert str(message) == text


def test_trailing_newline_and_nuls_are_ignored():
    assert parse_message("M 3\n\x00\x00") == Message("M", (3,))


def test_extra_fields_are_ignored_for_fixed_kinds():
    assert parse_message("G 1 5 junk") == Message("G", (1, 5))


@pytest.mark.parametrize(
    "text",
    ["", "   \n", "X 1 2", "V 1 2", "V 1 2 3 4", "M x", "G 1", "C host port name", "Go 1 2"],
)
def test_bad_messages_raise(text):
    with pytest.raises(ProtocolError):
        parse_message(text)


@pytest.mark.parametrize(
    "call",
    [
        lambda: format_names(["a", "b", "c"]),
        lambda: format_names(["a b", "c", "d", "e"]),
        lambda: format_connect("host", 1, ""),
        lambda: format_deal([1, 2]),
        lambda: format_row([0] * 7),
    ],
)
def test_bad_formats_raise(call):
    with pytest.raises(ProtocolError):
        call()


def test_send_message_delivers_newline_terminated_text():
    with socket.create_server(("127.0.0.1", 0)) as listener:
        port = listener.getsockname()[1]
        send_message("127.0.0.1", port, "M 1")
        conn, _ = listener.accept()
        with conn:
            received = b""
            while chunk := conn.recv(256):
                received += chunk
    assert received == b"M 1\n"
    assert parse_message(received.decode()) == Message("M", (1,))