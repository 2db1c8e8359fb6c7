"""
Tests for loader_menu.menu.autoboot.

Covers:
- parse_delay for numeric, disabled, immediate and malformed values
- Countdown cancellation, Enter, expiry and the on-screen message
"""

import pytest

from conftest import ScriptedKeyboard, screen_text
from loader_menu.keys import KEY_ENTER
from loader_menu.menu.autoboot import (
    BOOT_IMMEDIATELY,
    AutobootState,
    AutobootTimer,
    parse_delay,
)


class TestParseDelay:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("5", 5.0),
            ("0", 0.0),
            (" 3 ", 3.0),
            ("2.5", 2.5),
            (None, 10.0),
            ("soon", 10.0),
            ("", 10.0),
            ("nan", 10.0),
            ("-1", BOOT_IMMEDIATELY),
        ],
    )
    def test_values(self, raw, expected):
        assert parse_delay(raw, default=10.0, disabled_token="NO") == expected

    @pytest.mark.parametrize("raw", ["NO", "no", "No"])
    def test_disabled_is_case_insensitive(self, raw):
        assert parse_delay(raw, default=10.0, disabled_token="NO") is None

    def test_default_comes_from_settings(self):
        assert parse_delay(None) == 10


@pytest.fixture
def make_timer(renderer, boot, env, clock):
    def make(keyboard):
        return AutobootTimer(
            keyboard, renderer, boot, env, clock=clock, sleep=clock.sleep, tick=0.05
        )

    return make


def test_non_enter_key_cancels_and_is_returned(make_timer, env, clock, boot, renderer):
    env.setenv("autoboot_delay", "5")
    keyboard = ScriptedKeyboard(clock=clock, timed=[(clock.now + 2.0, "k")])

    result = make_timer(keyboard).run()

    assert result.state is AutobootState.CANCELLED
    assert result.key == "k"
    assert boot.boot_calls == 0
    assert sum(clock.sleeps) == pytest.approx(2.0, abs=0.06)
    # The message line is blanked on cancel.
    assert renderer.stream.getvalue().endswith(" " * 80 + "\x1b[25;1H")


def test_countdown_expires_and_boots(make_timer, env, clock, boot):
    env.setenv("autoboot_delay", "1")

    result = make_timer(ScriptedKeyboard(clock=clock)).run()

    assert result.state is AutobootState.EXPIRED
    assert result.key is None
    assert boot.boot_calls == 1
    assert sum(clock.sleeps) == pytest.approx(1.0, abs=0.06)


def test_enter_boots_immediately(make_timer, env, clock, boot):
    env.setenv("autoboot_delay", "10")
    keyboard = ScriptedKeyboard(clock=clock, timed=[(clock.now + 1.0, KEY_ENTER)])

    result = make_timer(keyboard).run()

    assert result.state is AutobootState.EXPIRED
    assert boot.boot_calls == 1
    assert sum(clock.sleeps) < 1.1


def test_newline_counts_as_enter(make_timer, env, clock, boot):
    env.setenv("autoboot_delay", "10")

    result = make_timer(ScriptedKeyboard(["\n"], clock=clock)).run()

    assert result.state is AutobootState.EXPIRED
    assert boot.boot_calls == 1


def test_immediate_boot_renders_nothing(make_timer, env, clock, boot, renderer):
    env.setenv("autoboot_delay", "-1")

    result = make_timer(ScriptedKeyboard(clock=clock)).run()

    assert result.state is AutobootState.EXPIRED
    assert boot.boot_calls == 1
    assert renderer.stream.getvalue() == ""
    assert clock.sleeps == []


def test_disabled_skips_countdown(make_timer, env, clock, boot, renderer):
    env.setenv("autoboot_delay", "NO")

    result = make_timer(ScriptedKeyboard(clock=clock)).run()

    assert result.state is AutobootState.DISABLED
    assert result.key is None
    assert boot.boot_calls == 0
    assert renderer.stream.getvalue() == ""


def test_missing_delay_counts_down_from_default(make_timer, clock, boot):
    result = make_timer(ScriptedKeyboard(clock=clock)).run()

    assert result.state is AutobootState.EXPIRED
    assert sum(clock.sleeps) == pytest.approx(10.0, abs=0.06)


def test_message_shows_remaining_seconds_at_position(make_timer, env, clock, renderer):
    env.setenv("autoboot_delay", "3")
    env.setenv("loader_menu_timeout_x", "7")
    env.setenv("loader_menu_timeout_y", "20")
    keyboard = ScriptedKeyboard(clock=clock, timed=[(clock.now + 1.5, " ")])

    make_timer(keyboard).run()

    output = renderer.stream.getvalue()
    assert "\x1b[20;7HAutoboot in 3 seconds, hit [Enter] to boot" in output
    assert "Autoboot in 2 seconds" in output
    assert "Autoboot in 1 seconds" not in output
    assert "\x1b[20;1H" in output


def test_bad_position_falls_back_to_defaults(make_timer, env, clock, renderer):
    env.setenv("autoboot_delay", "1")
    env.setenv("loader_menu_timeout_y", "bottom")

    make_timer(ScriptedKeyboard(["x"], clock=clock)).run()

    assert "\x1b[22;5HAutoboot in 1 seconds" in screen_text(renderer)
