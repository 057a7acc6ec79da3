# sherlock13

A networked version of the Sherlock 13 deduction game for four players.
Thirteen suspect cards are shuffled. Each player holds three of them, and
the thirteenth card is the culprit. Every suspect carries a few symbols
(pipe, light bulb, fist, crown, notebook, necklace, eye, skull). Players
take turns asking about those symbols to work out who the culprit is.

## Install

```
pip install .
```

To run the tests, install the test extra and start pytest:

```
pip install ".[test]"
pytest
```

## Running a game

Start the server, giving it the TCP port number to listen on:

```
sherlock13-server 32000
```

Each of the four players then starts a client. A client needs the server's
address and port, the address and port where it listens for server
messages, and a player name:

```
sherlock13-client 127.0.0.1 32000 127.0.0.1 32001 Alice
sherlock13-client 127.0.0.1 32000 127.0.0.1 32002 Bob
sherlock13-client 127.0.0.1 32000 127.0.0.1 32003 Carol
sherlock13-client 127.0.0.1 32000 127.0.0.1 32004 Dave
```

A client looks for its card images (`SH13_0.png` to `SH13_12.png`), symbol
icons, `gobutton.png`, `connectbutton.png` and the `sans.ttf` font in the
current directory, or in the directory given with `--assets`. Missing
images are left out of the drawing, and a missing font is replaced by
pygame's default font.

## Playing

- Click **connect** (top left) to join. Once four players have joined, each
  player sees their three cards and their own symbol counts.
- On your turn the **go** button appears. Pick one of these moves before
  you press it:
  - a symbol column alone, to ask every other player whether they hold
    that symbol. Each answer is shown as `*` for yes and `0` for no;
  - a player row and a symbol column, to ask that player how many of that
    symbol they hold;
  - a suspect name, to accuse that suspect.
- The narrow column next to the suspect names lets you cross suspects off
  as you rule them out.

After every move the turn passes to the next player.

## What it does not do

The server only writes the outcome of an accusation to its log; it does
not tell the players, and the game does not end when someone names the
culprit. Turns keep passing until the server is stopped. There is no way
to leave or rejoin a game once it has started.

## Library

The server and the clients exchange short text lines over TCP, one line
per connection. The `sherlock13.protocol` module builds and parses them
with `format_connect`, `format_id`, `format_names`, `format_deal`,
`format_row`, `format_cell`, `format_turn`, `format_guess`,
`format_ask_all`, `format_ask_one` and `parse_message`, and sends one with
`send_message`. Malformed lines raise `ProtocolError`.

The cards and their symbols live in `sherlock13.cards` (`Symbol`,
`shuffle_deck`, `build_table`, `hand_of`, `culprit_of`). The turn logic is
`sherlock13.server.GameServer`, which takes a deck and a send function and
reacts to one message at a time through `handle`. On the player side,
`sherlock13.client.ClientState` holds what a player knows and turns clicks
into messages, and `MessageListener` receives server messages in a
background thread.