from loader_menu.menu.aliases import AliasTable, VisibleEntry, resolve_visible
from loader_menu.menu.autoboot import AutobootResult, AutobootState, AutobootTimer
from loader_menu.menu.carousel import CarouselStore, carousel_store
from loader_menu.menu.dispatch import EntryDispatcher
from loader_menu.menu.engine import MenuEngine
from loader_menu.menu.model import (
    EntryType,
    MenuDefinition,
    MenuEntry,
    MenuModel,
    RootMenuDefinition,
    action_entry,
    carousel_entry,
    return_entry,
    separator,
    submenu_entry,
)

__all__ = [
    "AliasTable",
    "AutobootResult",
    "AutobootState",
    "AutobootTimer",
    "CarouselStore",
    "EntryDispatcher",
    "EntryType",
    "MenuDefinition",
    "MenuEngine",
    "MenuEntry",
    "MenuModel",
    "RootMenuDefinition",
    "VisibleEntry",
    "action_entry",
    "carousel_entry",
    "carousel_store",
    "resolve_visible",
    "return_entry",
    "separator",
    "submenu_entry",
]
