"""
Pytest configuration and shared fixtures for loader-menu tests.

The fakes here stand in for the keyboard, clock and boot control so the
menu engine can be driven key by key without a terminal.
"""

import io
from collections import deque
from typing import List, Optional

import pytest
from loguru import logger

from loader_menu.loader.environment import Environment
from loader_menu.menu.carousel import CarouselStore
from loader_menu.ui.terminal import TextRenderer


class ScriptExhausted(Exception):
    """Raised when the engine asks for more keys than the test supplied."""


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedKeyboard:
    """Keys queued up front, plus keys that arrive once the clock reaches them."""

    def __init__(self, keys=(), *, clock: Optional[FakeClock] = None, timed=()) -> None:
        self.keys = deque(keys)
        self.clock = clock
        self.timed = deque(sorted(timed))
        self.reads = 0

    def _release(self) -> None:
        while self.timed and self.clock is not None and self.clock() >= self.timed[0][0]:
            self.keys.append(self.timed.popleft()[1])

    def has_pending_key(self) -> bool:
        self._release()
        return bool(self.keys)

    def read_key(self) -> str:
        self._release()
        if not self.keys:
            raise ScriptExhausted()
        self.reads += 1
        return self.keys.popleft()


class RecordingBootControl:
    """Boot control whose boot() comes back, as a failed boot attempt would."""

    def __init__(self) -> None:
        self.boot_calls = 0
        self.reboot_calls = 0
        self.single_user = False
        self.single_user_boot = False
        self.safe_mode = False
        self.verbose = False
        self.acpi = True
        self.kernels = ["kernel", "kernel.old"]
        self.bootenvs = ["zroot/ROOT/default", "zroot/ROOT/previous"]

    def boot(self):
        self.boot_calls += 1

    def reboot(self):
        self.reboot_calls += 1

    def set_single_user(self, value=None):
        self.single_user = (not self.single_user) if value is None else value

    def set_safe_mode(self, value=None):
        self.safe_mode = (not self.safe_mode) if value is None else value

    def set_verbose(self, value=None):
        self.verbose = (not self.verbose) if value is None else value

    def set_acpi(self, value=None):
        self.acpi = (not self.acpi) if value is None else value

    def set_defaults(self):
        self.single_user = self.safe_mode = self.verbose = False

    def is_single_user(self):
        return self.single_user

    def is_safe_mode(self):
        return self.safe_mode

    def is_verbose(self):
        return self.verbose

    def is_acpi(self):
        return self.acpi

    def is_single_user_boot(self):
        return self.single_user_boot

    def is_system_386(self):
        return False

    def is_zfs_boot(self):
        return True

    def bootenv_list(self):
        return list(self.bootenvs)

    def kernel_list(self):
        return list(self.kernels)

    def bootenv_default(self):
        return self.bootenvs[0]


class RecordingConfig:
    def __init__(self) -> None:
        self.reloads = 0
        self.kernels: List[str] = []

    def reload(self) -> None:
        self.reloads += 1

    def select_kernel(self, name: str) -> None:
        self.kernels.append(name)


def screen_text(renderer: TextRenderer) -> str:
    """Everything written since the last screen clear."""
    return renderer.stream.getvalue().rsplit("\x1b[2J", 1)[-1]


@pytest.fixture(autouse=True)
def reset_loguru():
    yield
    logger.remove()


@pytest.fixture
def log_records():
    records: list = []
    handler_id = logger.add(lambda message: records.append(message.record), level="TRACE")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def renderer() -> TextRenderer:
    return TextRenderer(io.StringIO())


@pytest.fixture
def carousels() -> CarouselStore:
    return CarouselStore()


@pytest.fixture
def env() -> Environment:
    return Environment()


@pytest.fixture
def boot() -> RecordingBootControl:
    return RecordingBootControl()


@pytest.fixture
def config() -> RecordingConfig:
    return RecordingConfig()
