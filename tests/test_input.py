"""
Key decoding for the stream, tcod and scripted key sources.
"""
import io

import tcod.event

from gameboard import keys
from gameboard.keys import Key, KeyKind
from ui.input import IterableKeySource, StreamKeySource, TcodKeySource, key_from_event


def drain(source):
    out = []
    while True:
        key = source.read_key()
        if key is None:
            return out
        out.append(key)


def test_iterable_source_accepts_keys_and_characters():
    source = IterableKeySource(["a", keys.UP])
    assert drain(source) == [Key.of("a"), keys.UP]
    assert source.reads == 3
    assert source.read_key() is None


def test_stream_decodes_plain_and_escape_sequences():
    stream = io.StringIO("a\x1b[A\r\x1b[3~\x1bOP\x03\x1bx\x7f\t\x1b[15~")
    assert drain(StreamKeySource(stream)) == [
        Key.of("a"),
        keys.UP,
        keys.ENTER,
        keys.DELETE,
        Key.function(1),
        Key.ctrl("c"),
        Key.alt("x"),
        keys.BACKSPACE,
        keys.TAB,
        Key.function(5),
    ]


def test_stream_lone_escape_at_end_of_input():
    assert drain(StreamKeySource(io.StringIO("\x1b"))) == [keys.ESCAPE]


def test_stream_double_escape():
    assert drain(StreamKeySource(io.StringIO("\x1b\x1b[B"))) == [keys.ESCAPE, keys.DOWN]


def test_key_from_tcod_special_keys():
    event = tcod.event.KeyDown(sym=tcod.event.KeySym.UP, scancode=0, mod=tcod.event.Modifier.NONE)
    assert key_from_event(event) == keys.UP
    event = tcod.event.KeyDown(sym=tcod.event.KeySym.F3, scancode=0, mod=tcod.event.Modifier.NONE)
    assert key_from_event(event) == Key.function(3)


def test_key_from_tcod_text_and_modifiers():
    assert key_from_event(tcod.event.TextInput("Q")) == Key.of("Q")

    plain = tcod.event.KeyDown(sym=tcod.event.KeySym(ord("q")), scancode=0, mod=tcod.event.Modifier.NONE)
    assert key_from_event(plain) is None   # arrives as TextInput instead

    ctrl = tcod.event.KeyDown(sym=tcod.event.KeySym(ord("c")), scancode=0, mod=tcod.event.Modifier.LCTRL)
    assert key_from_event(ctrl) == Key.ctrl("c")


def test_tcod_source_quit_ends_input_after_queued_keys():
    source = TcodKeySource()
    source.feed(tcod.event.TextInput("z"))
    source.feed(tcod.event.Quit())
    assert source.read_key() == Key.of("z")
    assert source.read_key() is None


def test_key_str_and_kinds():
    assert str(Key.of("a")) == "a"
    assert str(Key.function(2)) == "F2"
    assert str(Key.ctrl("C")) == "Ctrl+c"
    assert keys.ENTER.kind is KeyKind.ENTER
