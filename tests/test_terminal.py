"""Tests for loader_menu.ui.terminal and loader_menu.keys."""

import io
import os

import pytest

from loader_menu.keys import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_ENTER,
    describe_key,
    is_back_key,
    normalize_key,
)
from loader_menu.menu.aliases import VisibleEntry
from loader_menu.menu.model import action_entry, separator
from loader_menu.ui.terminal import TerminalInput, TextRenderer
from loader_menu.ui.toggle import format_toggle_label


class TestKeys:
    def test_normalize(self):
        assert normalize_key("\n") == KEY_ENTER
        assert normalize_key("a") == "a"
        assert normalize_key("") is None
        assert normalize_key(None) is None

    def test_back_keys(self):
        assert is_back_key(KEY_BACKSPACE)
        assert is_back_key(KEY_DELETE)
        assert not is_back_key("b")

    def test_describe(self):
        assert describe_key(KEY_ENTER) == "Enter"
        assert describe_key("k") == "'k'"
        assert describe_key("\x01") == "0x01"
        assert describe_key(None) == "<none>"


def test_format_toggle_label():
    assert format_toggle_label("Verbose    :", True) == "Verbose    : On"
    assert format_toggle_label("Verbose    :", False) == "Verbose    : off"


class TestTextRenderer:
    def test_cursor_sequences(self):
        renderer = TextRenderer(io.StringIO())

        renderer.clear_screen()
        renderer.set_cursor(5, 22)
        renderer.set_cursor(0, 0)
        renderer.reset_cursor()

        assert renderer.stream.getvalue() == "\x1b[2J\x1b[22;5H\x1b[1;1H\x1b[25;1H"

    def test_render_numbers_entries_and_returns_aliases(self):
        renderer = TextRenderer(io.StringIO())
        reboot = action_entry("Reboot", lambda: None, aliases=("r",))
        visible = [
            VisibleEntry(separator("Options:"), "Options:"),
            VisibleEntry(reboot, "Reboot", 1),
        ]

        table = renderer.render(visible, "Boot Menu")

        output = renderer.stream.getvalue()
        assert "\x1b[3;4HBoot Menu" in output
        assert "\x1b[5;4HOptions:" in output
        assert "\x1b[6;4H1. Reboot" in output
        assert table.resolve("r") is reboot
        assert table.resolve("1") is reboot

    def test_render_indents_unnumbered_entries(self):
        renderer = TextRenderer(io.StringIO())
        extra = action_entry("Extra", lambda: None, aliases=("x",))

        table = renderer.render([VisibleEntry(extra, "Extra")])

        assert "\x1b[3;4H   Extra" in renderer.stream.getvalue()
        assert table.resolve("x") is extra


class TestTerminalInput:
    @pytest.fixture
    def pipe(self):
        read_fd, write_fd = os.pipe()
        reader = os.fdopen(read_fd, "r")
        yield reader, write_fd
        reader.close()
        try:
            os.close(write_fd)
        except OSError:
            pass

    def test_pending_and_read(self, pipe):
        reader, write_fd = pipe
        keyboard = TerminalInput(reader)

        with keyboard:
            assert not keyboard.has_pending_key()
            os.write(write_fd, b"k\n")
            assert keyboard.has_pending_key()
            assert keyboard.read_key() == "k"
            assert keyboard.read_key() == KEY_ENTER

    def test_closed_input_raises_eof(self, pipe):
        reader, write_fd = pipe
        os.close(write_fd)

        with pytest.raises(EOFError):
            TerminalInput(reader).read_key()
