from __future__ import annotations

from typing import Optional

from loader_menu.keys import KEY_ENTER, describe_key, is_back_key, normalize_key
from loader_menu.logging import LoggerFactory
from loader_menu.menu.aliases import AliasTable, resolve_visible
from loader_menu.menu.autoboot import AutobootResult, AutobootState, AutobootTimer
from loader_menu.menu.carousel import CarouselStore, carousel_store
from loader_menu.menu.dispatch import EntryDispatcher
from loader_menu.menu.interfaces import (
    BootControl,
    EnvironmentAccessor,
    InputSource,
    RenderService,
    request_boot,
)
from loader_menu.menu.model import MenuDefinition, MenuModel

log = LoggerFactory.for_menu()
key_log = LoggerFactory.for_keys()


class MenuEngine:
    """Draws menus, reads keys and dispatches the selected entries.

    ``process`` runs one menu level and returns when that level closes:
    Backspace/Delete outside the root menu, or a handler returning
    False. Submenus are processed by recursive calls, so nesting depth
    follows the menu tree.
    """

    def __init__(
        self,
        model: MenuModel,
        renderer: RenderService,
        keyboard: InputSource,
        boot: BootControl,
        env: EnvironmentAccessor,
        *,
        carousels: Optional[CarouselStore] = None,
        timer: Optional[AutobootTimer] = None,
    ) -> None:
        self.model = model
        self.renderer = renderer
        self.keyboard = keyboard
        self.boot = boot
        self.env = env
        self.carousels = carousels if carousels is not None else carousel_store
        self.timer = timer or AutobootTimer(keyboard, renderer, boot, env)
        self.dispatcher = EntryDispatcher(self.process, self.carousels)
        self.alias_table = AliasTable()
        self.drawn_menu: Optional[MenuDefinition] = None

    @property
    def default(self) -> MenuDefinition:
        return self.model.root

    def draw(self, definition: MenuDefinition) -> None:
        self.renderer.clear_screen()
        self.renderer.reset_cursor()
        visible = resolve_visible(definition, self.carousels)
        self.alias_table = self.renderer.render(visible, definition.title)
        self.drawn_menu = definition
        log.trace(f"Redraw {definition.menu_id}: {len(visible)} entries")

    def process(self, definition: MenuDefinition, key: Optional[str] = None) -> None:
        """Handle keys for ``definition`` until that menu level closes.

        ``key`` is treated as the first keypress instead of reading one.
        """
        assert definition is not None

        if self.drawn_menu is not definition:
            self.draw(definition)

        pending = normalize_key(key)
        while True:
            if pending is not None:
                current, pending = pending, None
            else:
                current = normalize_key(self.keyboard.read_key())
            if current is None:
                continue
            key_log.trace(f"Key {describe_key(current)} in {definition.menu_id}")

            if is_back_key(current) and not self.model.is_root(definition):
                log.debug(f"Leaving {definition.menu_id}")
                return
            if current == KEY_ENTER:
                request_boot(self.boot, "enter")
                # Boot came back; its output may have replaced the menu.
                self.draw(definition)
                continue

            entry = self.alias_table.resolve(current)
            if entry is None:
                key_log.trace(f"Key {describe_key(current)} is not bound")
                continue

            if self.dispatcher.dispatch(definition, entry) is False:
                log.debug(f"Closing {definition.menu_id}")
                return
            # Labels and visibility may have changed.
            self.draw(definition)

    def run(self) -> AutobootResult:
        self.draw(self.default)
        result = self.timer.run()
        log.info(f"Autoboot finished: {result.state.value}")
        if result.state is AutobootState.EXPIRED:
            # The countdown line is still on screen.
            self.drawn_menu = None

        self.process(self.default, result.key)
        self.drawn_menu = None

        self.renderer.reset_cursor()
        self.renderer.write("Exiting menu!\n")
        log.info("Exiting menu")
        return result
