"""Collaborators the menu engine drives but does not implement."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, Optional, Protocol, Sequence

from loader_menu.logging import LoggerFactory

if TYPE_CHECKING:
    from loader_menu.menu.aliases import AliasTable, VisibleEntry


class InputSource(Protocol):
    def has_pending_key(self) -> bool: ...

    def read_key(self) -> str:
        """Block until a key is available and return it."""
        ...


class RenderService(Protocol):
    def render(self, visible: Sequence[VisibleEntry], title: str = "") -> AliasTable: ...

    def clear_screen(self) -> None: ...

    def set_cursor(self, x: int, y: int) -> None: ...

    def reset_cursor(self) -> None: ...

    def write(self, text: str) -> None: ...


class BootControl(Protocol):
    def boot(self) -> NoReturn:
        """Hand control to the kernel. Never returns when booting succeeds."""
        ...

    def reboot(self) -> NoReturn: ...

    def set_single_user(self, value: Optional[bool] = None) -> None: ...

    def set_safe_mode(self, value: Optional[bool] = None) -> None: ...

    def set_verbose(self, value: Optional[bool] = None) -> None: ...

    def set_acpi(self, value: Optional[bool] = None) -> None: ...

    def set_defaults(self) -> None: ...

    def is_single_user(self) -> bool: ...

    def is_safe_mode(self) -> bool: ...

    def is_verbose(self) -> bool: ...

    def is_acpi(self) -> bool: ...

    def is_single_user_boot(self) -> bool: ...

    def is_system_386(self) -> bool: ...

    def is_zfs_boot(self) -> bool: ...

    def bootenv_list(self) -> Sequence[str]: ...

    def kernel_list(self) -> Sequence[str]: ...

    def bootenv_default(self) -> str: ...


class ConfigStore(Protocol):
    def reload(self) -> None: ...

    def select_kernel(self, name: str) -> None: ...


class EnvironmentAccessor(Protocol):
    def getenv(self, name: str) -> Optional[str]: ...

    def setenv(self, name: str, value: str) -> None: ...


def request_boot(boot: BootControl, reason: str) -> None:
    """Invoke ``boot.boot()``; if it comes back, log it and let the caller carry on."""
    log = LoggerFactory.for_boot()
    log.info(f"Booting ({reason})")
    boot.boot()
    log.warning(f"Boot returned control ({reason}); back to the menu")
