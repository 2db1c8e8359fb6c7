"""Loader environment variables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from loader_menu.logging import LoggerFactory

log = LoggerFactory.for_boot()


@dataclass
class Environment:
    values: Dict[str, str] = field(default_factory=dict)

    def getenv(self, name: str) -> Optional[str]:
        return self.values.get(name)

    def setenv(self, name: str, value: str) -> None:
        log.debug(f"setenv {name}={value}")
        self.values[name] = str(value)

    def unsetenv(self, name: str) -> None:
        if self.values.pop(name, None) is not None:
            log.debug(f"unsetenv {name}")

    def snapshot(self) -> Dict[str, str]:
        return dict(self.values)

    @classmethod
    def from_assignments(cls, assignments: Iterable[str]) -> Environment:
        """Build from ``NAME=VALUE`` strings, as given on the command line."""
        env = cls()
        for assignment in assignments:
            name, sep, value = assignment.partition("=")
            if not sep or not name:
                raise ValueError(f"Expected NAME=VALUE, got {assignment!r}")
            env.values[name.strip()] = value.strip()
        return env
