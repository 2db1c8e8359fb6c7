"""Entry handlers, one per entry type.

Handlers take the menu being processed and the selected entry. They
return ``False`` to close that menu level; any other result (usually
``None``) means keep going and redraw.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from loader_menu.logging import LoggerFactory
from loader_menu.menu.aliases import carousel_choices
from loader_menu.menu.carousel import CarouselStore
from loader_menu.menu.model import EntryType, MenuDefinition, MenuEntry

Handler = Callable[[MenuDefinition, MenuEntry], Optional[bool]]

log = LoggerFactory.for_menu()


class EntryDispatcher:
    def __init__(
        self,
        process_submenu: Callable[[MenuDefinition], None],
        carousels: CarouselStore,
    ) -> None:
        self._process_submenu = process_submenu
        self._carousels = carousels
        self._handlers: Dict[EntryType, Handler] = {
            EntryType.ACTION: self._handle_action,
            EntryType.CAROUSEL: self._handle_carousel,
            EntryType.SUBMENU: self._handle_submenu,
            EntryType.RETURN: self._handle_return,
            EntryType.SEPARATOR: self._handle_separator,
        }

    def register(self, entry_type: EntryType, handler: Handler) -> None:
        self._handlers[entry_type] = handler

    def handler_for(self, entry_type: EntryType) -> Handler:
        handler = self._handlers.get(entry_type)
        assert handler is not None, f"No handler for {entry_type!r} entries"
        return handler

    def dispatch(self, menu: MenuDefinition, entry: MenuEntry) -> Optional[bool]:
        return self.handler_for(entry.entry_type)(menu, entry)

    def _handle_action(self, menu: MenuDefinition, entry: MenuEntry) -> Optional[bool]:
        # An effect may close its menu by returning False.
        if entry.func() is False:
            return False
        return None

    def _handle_carousel(self, menu: MenuDefinition, entry: MenuEntry) -> Optional[bool]:
        choices = carousel_choices(entry)
        if not choices:
            log.debug(f"Carousel {entry.carousel_id} has no choices")
            return None
        index = self._carousels.advance(entry.carousel_id, len(choices))
        log.debug(f"Carousel {entry.carousel_id} -> {index} of {len(choices)}")
        entry.func(index, choices[index - 1], choices)
        return None

    def _handle_submenu(self, menu: MenuDefinition, entry: MenuEntry) -> Optional[bool]:
        log.debug(f"Entering {entry.submenu.menu_id} from {menu.menu_id}")
        self._process_submenu(entry.submenu)
        log.debug(f"Back in {menu.menu_id}")
        return None

    def _handle_return(self, menu: MenuDefinition, entry: MenuEntry) -> Optional[bool]:
        if entry.func is not None:
            entry.func()
        return False

    def _handle_separator(self, menu: MenuDefinition, entry: MenuEntry) -> Optional[bool]:
        return None
