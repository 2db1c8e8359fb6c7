"""Autoboot countdown shown before the root menu takes input.

The countdown polls for a key every tick instead of waiting on a timer
so the remaining seconds stay on screen while it runs.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from loader_menu.config import settings
from loader_menu.keys import KEY_ENTER, describe_key, normalize_key
from loader_menu.logging import LoggerFactory
from loader_menu.menu.interfaces import (
    BootControl,
    EnvironmentAccessor,
    InputSource,
    RenderService,
    request_boot,
)

AUTOBOOT_DELAY_VAR = "autoboot_delay"
TIMEOUT_X_VAR = "loader_menu_timeout_x"
TIMEOUT_Y_VAR = "loader_menu_timeout_y"

BOOT_IMMEDIATELY = -1

AUTOBOOT_MESSAGE = (
    "Autoboot in {remaining} seconds, hit [Enter] to boot "
    "or any other key to stop     "
)

log = LoggerFactory.for_autoboot()


class AutobootState(str, Enum):
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    DISABLED = "disabled"


@dataclass(frozen=True)
class AutobootResult:
    state: AutobootState
    # The key that cancelled the countdown, to be fed to the menu.
    key: Optional[str] = None


def parse_delay(
    raw: Optional[str],
    *,
    default: Optional[float] = None,
    disabled_token: Optional[str] = None,
) -> Optional[float]:
    """Turn the autoboot_delay variable into seconds.

    Returns None when autoboot is disabled, ``BOOT_IMMEDIATELY`` for -1,
    and ``default`` for anything missing or unparseable.
    """
    if default is None:
        default = settings.get_float("autoboot_delay", settings.DEFAULT_AUTOBOOT_DELAY)
    if disabled_token is None:
        disabled_token = str(settings.get_setting("autoboot_disabled_token", "NO"))
    if raw is None:
        return default
    value = raw.strip()
    if value.lower() == disabled_token.lower():
        return None
    try:
        delay = float(value)
    except ValueError:
        return default
    if math.isnan(delay) or math.isinf(delay):
        return default
    if delay == BOOT_IMMEDIATELY:
        return BOOT_IMMEDIATELY
    return delay


def _env_int(env: EnvironmentAccessor, name: str, default: int) -> int:
    raw = env.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class AutobootTimer:
    def __init__(
        self,
        keyboard: InputSource,
        renderer: RenderService,
        boot: BootControl,
        env: EnvironmentAccessor,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        tick: Optional[float] = None,
    ) -> None:
        self.keyboard = keyboard
        self.renderer = renderer
        self.boot = boot
        self.env = env
        self._clock = clock
        self._sleep = sleep
        self.tick = tick if tick is not None else settings.get_float(
            "autoboot_tick_seconds", settings.DEFAULT_AUTOBOOT_TICK_SECONDS
        )

    def run(self) -> AutobootResult:
        delay = parse_delay(self.env.getenv(AUTOBOOT_DELAY_VAR))
        if delay is None:
            log.info("Autoboot disabled")
            return AutobootResult(AutobootState.DISABLED)
        if delay == BOOT_IMMEDIATELY:
            log.info("Autoboot delay is -1, skipping countdown")
            request_boot(self.boot, "autoboot")
            return AutobootResult(AutobootState.EXPIRED)
        return self._countdown(delay)

    def _countdown(self, delay: float) -> AutobootResult:
        x = _env_int(
            self.env,
            TIMEOUT_X_VAR,
            settings.get_int("autoboot_timeout_x", settings.DEFAULT_AUTOBOOT_TIMEOUT_X),
        )
        y = _env_int(
            self.env,
            TIMEOUT_Y_VAR,
            settings.get_int("autoboot_timeout_y", settings.DEFAULT_AUTOBOOT_TIMEOUT_Y),
        )
        log.debug(f"Autoboot countdown from {delay:g}s")
        deadline = self._clock() + delay

        while True:
            remaining = deadline - self._clock()
            self._show(x, y, remaining)
            if self.keyboard.has_pending_key():
                key = normalize_key(self.keyboard.read_key())
                if key == KEY_ENTER:
                    log.info("Enter pressed during countdown")
                    break
                if key is not None:
                    self._erase(y)
                    log.info(f"Autoboot cancelled by {describe_key(key)}")
                    return AutobootResult(AutobootState.CANCELLED, key)
            if remaining <= 0:
                log.info("Autoboot countdown expired")
                break
            self._sleep(self.tick)

        request_boot(self.boot, "autoboot")
        return AutobootResult(AutobootState.EXPIRED)

    def _show(self, x: int, y: int, remaining: float) -> None:
        seconds = max(0, math.ceil(remaining))
        self.renderer.set_cursor(x, y)
        self.renderer.write(AUTOBOOT_MESSAGE.format(remaining=seconds))
        self.renderer.reset_cursor()

    def _erase(self, y: int) -> None:
        width = settings.get_int("screen_width", settings.DEFAULT_SCREEN_WIDTH)
        self.renderer.set_cursor(0, y)
        self.renderer.write(" " * width)
        self.renderer.reset_cursor()
