"""The loader menu tree.

Menus are rooted at the welcome menu. Edit this module to adjust menu
labels or structure.
"""

from __future__ import annotations

from typing import Any, Sequence

from loader_menu.config import settings
from loader_menu.keys import KEY_ESCAPE
from loader_menu.menu.autoboot import AUTOBOOT_DELAY_VAR
from loader_menu.menu.carousel import CarouselStore, carousel_store
from loader_menu.menu.interfaces import BootControl, ConfigStore, EnvironmentAccessor
from loader_menu.menu.model import (
    MenuDefinition,
    MenuModel,
    RootMenuDefinition,
    action_entry,
    carousel_entry,
    return_entry,
    separator,
    submenu_entry,
)
from loader_menu.ui.toggle import format_toggle_label

KERNEL_CAROUSEL = "kernel"
BOOTENV_CAROUSEL = "be_active"

BACK_LABEL = "Back to main menu [Backspace]"


def _carousel_label(title: str, default_prefix: str = ""):
    def label(index: int, choice: Any, choices: Sequence[Any]) -> str:
        if not choices or choice is None:
            return f"{title}: "
        prefix = default_prefix if index == 1 else ""
        return f"{title}: {prefix}{choice} ({index} of {len(choices)})"

    return label


def _select_bootenv(env: EnvironmentAccessor, config: ConfigStore, name: str) -> None:
    env.setenv("vfs.root.mountfrom", name)
    env.setenv("currdev", f"{name}:")
    config.reload()


def build_boot_environments_menu(
    boot: BootControl,
    config: ConfigStore,
    env: EnvironmentAccessor,
    carousels: CarouselStore,
) -> MenuDefinition:
    def reset_to_default() -> None:
        carousels.set(BOOTENV_CAROUSEL, 1)
        _select_bootenv(env, config, boot.bootenv_default())

    return MenuDefinition(
        menu_id="boot_environments",
        title="Boot Environments",
        source=[
            return_entry(BACK_LABEL),
            carousel_entry(
                BOOTENV_CAROUSEL,
                boot.bootenv_list,
                label=_carousel_label("Active"),
                func=lambda _index, choice, _choices: _select_bootenv(env, config, choice),
                aliases=("a", "A"),
            ),
            action_entry(
                lambda: f"bootfs: {boot.bootenv_default()}",
                reset_to_default,
                aliases=("b", "B"),
            ),
        ],
    )


def build_boot_options_menu(boot: BootControl) -> MenuDefinition:
    return MenuDefinition(
        menu_id="boot_options",
        title="Boot Options",
        source=[
            return_entry(BACK_LABEL),
            action_entry(
                "Load System Defaults", boot.set_defaults, aliases=("d", "D")
            ),
            separator(),
            separator("Boot Options:"),
            action_entry(
                lambda: format_toggle_label("ACPI       :", boot.is_acpi()),
                boot.set_acpi,
                aliases=("a", "A"),
                visible=boot.is_system_386,
            ),
            action_entry(
                lambda: format_toggle_label("Safe Mode  :", boot.is_safe_mode()),
                boot.set_safe_mode,
                aliases=("m", "M"),
            ),
            action_entry(
                lambda: format_toggle_label("Single user:", boot.is_single_user()),
                boot.set_single_user,
                aliases=("s", "S"),
            ),
            action_entry(
                lambda: format_toggle_label("Verbose    :", boot.is_verbose()),
                boot.set_verbose,
                aliases=("v", "V"),
            ),
        ],
    )


def build_welcome_menu(
    boot: BootControl,
    config: ConfigStore,
    env: EnvironmentAccessor,
    carousels: CarouselStore,
) -> RootMenuDefinition:
    def boot_multi_user() -> None:
        boot.set_single_user(False)
        boot.boot()

    def boot_single_user() -> None:
        boot.set_single_user(True)
        boot.boot()

    boot_options = build_boot_options_menu(boot)
    boot_environments = build_boot_environments_menu(boot, config, env, carousels)

    return RootMenuDefinition(
        menu_id="welcome",
        title=str(settings.get_setting("menu_title", "Boot Menu")),
        all_entries=[
            action_entry(
                "Boot Multi user [Enter]",
                boot_multi_user,
                aliases=("b", "B"),
                alternate_label="Boot Multi user",
            ),
            action_entry(
                "Boot Single user",
                boot_single_user,
                aliases=("s", "S"),
                alternate_label="Boot Single user [Enter]",
            ),
            return_entry(
                "Escape to loader prompt",
                lambda: env.setenv(AUTOBOOT_DELAY_VAR, "NO"),
                aliases=(KEY_ESCAPE,),
            ),
            action_entry("Reboot", boot.reboot, aliases=("r", "R")),
            separator(),
            separator("Options:"),
            carousel_entry(
                KERNEL_CAROUSEL,
                boot.kernel_list,
                label=_carousel_label("Kernel", default_prefix="default/"),
                func=lambda _index, choice, _choices: config.select_kernel(choice),
                aliases=("k", "K"),
            ),
            submenu_entry("Boot Options", boot_options, aliases=("o", "O")),
            submenu_entry(
                "Boot Environments",
                boot_environments,
                aliases=("e", "E"),
                visible=lambda: boot.is_zfs_boot() and len(boot.bootenv_list()) > 1,
            ),
        ],
        swap_when=boot.is_single_user_boot,
    )


def build_menu_model(
    boot: BootControl,
    config: ConfigStore,
    env: EnvironmentAccessor,
    carousels: CarouselStore = carousel_store,
) -> MenuModel:
    return MenuModel(build_welcome_menu(boot, config, env, carousels))
