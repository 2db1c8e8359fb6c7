"""Boot control backed by loader environment variables.

Each boot flag is a set of environment variables the kernel reads;
toggling a flag sets or clears them.
"""

from __future__ import annotations

from typing import Dict, List, NoReturn, Optional, Sequence

from loader_menu.loader.environment import Environment
from loader_menu.logging import LoggerFactory

log = LoggerFactory.for_boot()

SINGLE_USER_VAR = "boot_single"
VERBOSE_VAR = "boot_verbose"
KERNEL_VAR = "kernel"
ROOT_MOUNT_VAR = "vfs.root.mountfrom"
CURRDEV_VAR = "currdev"

SAFE_MODE_VARS = {
    "kern.smp.disabled": "1",
    "hw.ata.ata_dma": "0",
    "hw.ata.atapi_dma": "0",
    "hw.ata.wc": "0",
    "hw.eisa_slots": "0",
    "kern.eventtimer.periodic": "1",
    "kern.geom.part.check_integrity": "0",
}

ACPI_LOAD_VAR = "acpi_load"
ACPI_DISABLED_HINT = "hint.acpi.0.disabled"


class BootHandoff(SystemExit):
    """Raised instead of returning once control passes to the kernel."""

    def __init__(self, action: str, environment: Dict[str, str]):
        self.action = action
        self.environment = environment
        super().__init__(0)


def _toggled(value: Optional[bool], current: bool) -> bool:
    return (not current) if value is None else bool(value)


class LoaderBootControl:
    def __init__(
        self,
        env: Environment,
        kernels: Sequence[str] = ("kernel",),
        bootenvs: Sequence[str] = (),
        *,
        system_386: bool = False,
    ) -> None:
        self.env = env
        self.kernels = list(kernels)
        self.bootenvs = list(bootenvs)
        self.system_386 = system_386
        self.single_user = env.getenv(SINGLE_USER_VAR) is not None
        self.verbose = env.getenv(VERBOSE_VAR) is not None
        self.safe_mode = False
        self.acpi = system_386 and env.getenv(ACPI_DISABLED_HINT) is None

    def boot(self) -> NoReturn:
        log.info("Handing off to kernel")
        raise BootHandoff("boot", self.env.snapshot())

    def reboot(self) -> NoReturn:
        log.info("Rebooting")
        raise BootHandoff("reboot", self.env.snapshot())

    def set_single_user(self, value: Optional[bool] = None) -> None:
        self.single_user = _toggled(value, self.single_user)
        if self.single_user:
            self.env.setenv(SINGLE_USER_VAR, "YES")
        else:
            self.env.unsetenv(SINGLE_USER_VAR)

    def set_verbose(self, value: Optional[bool] = None) -> None:
        self.verbose = _toggled(value, self.verbose)
        if self.verbose:
            self.env.setenv(VERBOSE_VAR, "YES")
        else:
            self.env.unsetenv(VERBOSE_VAR)

    def set_safe_mode(self, value: Optional[bool] = None) -> None:
        self.safe_mode = _toggled(value, self.safe_mode)
        for name, setting in SAFE_MODE_VARS.items():
            if self.safe_mode:
                self.env.setenv(name, setting)
            else:
                self.env.unsetenv(name)

    def set_acpi(self, value: Optional[bool] = None) -> None:
        self.acpi = _toggled(value, self.acpi)
        if self.acpi:
            self.env.setenv(ACPI_LOAD_VAR, "YES")
            self.env.unsetenv(ACPI_DISABLED_HINT)
        else:
            self.env.unsetenv(ACPI_LOAD_VAR)
            self.env.setenv(ACPI_DISABLED_HINT, "1")

    def set_defaults(self) -> None:
        log.info("Loading system defaults")
        self.set_single_user(False)
        self.set_verbose(False)
        self.set_safe_mode(False)
        if self.system_386:
            self.set_acpi(True)

    def is_single_user(self) -> bool:
        return self.single_user

    def is_verbose(self) -> bool:
        return self.verbose

    def is_safe_mode(self) -> bool:
        return self.safe_mode

    def is_acpi(self) -> bool:
        return self.acpi

    def is_single_user_boot(self) -> bool:
        value = self.env.getenv(SINGLE_USER_VAR)
        return value is not None and value.lower() in ("yes", "1", "true")

    def is_system_386(self) -> bool:
        return self.system_386

    def is_zfs_boot(self) -> bool:
        return bool(self.bootenvs)

    def bootenv_list(self) -> List[str]:
        return list(self.bootenvs)

    def kernel_list(self) -> List[str]:
        return list(self.kernels)

    def bootenv_default(self) -> str:
        return self.bootenvs[0] if self.bootenvs else ""


class SessionConfig:
    """Choices made from the menu, kept for this boot session only."""

    def __init__(self, env: Environment) -> None:
        self.env = env
        self.selected_kernel = env.getenv(KERNEL_VAR)
        self.reload_count = 0

    def reload(self) -> None:
        self.reload_count += 1
        log.info(f"Configuration reloaded from {self.env.getenv(CURRDEV_VAR) or 'default device'}")

    def select_kernel(self, name: str) -> None:
        self.selected_kernel = name
        self.env.setenv(KERNEL_VAR, name)
        log.info(f"Kernel selected: {name}")
