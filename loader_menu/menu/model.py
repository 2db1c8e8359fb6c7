"""Menu tree data model.

Entries are one dataclass tagged by ``EntryType``; the factory helpers
below check that each entry carries the fields its tag needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple

from loader_menu.menu.exceptions import MenuCycleError, MenuDefinitionError
from loader_menu.menu.values import Dynamic, Producer, Static, dynamic


class EntryType(str, Enum):
    ACTION = "action"
    CAROUSEL = "carousel"
    SUBMENU = "submenu"
    RETURN = "return"
    SEPARATOR = "separator"


@dataclass(eq=False)
class MenuEntry:
    entry_type: EntryType
    label: Dynamic = Static("")
    aliases: Tuple[str, ...] = ()
    visible: Optional[Callable[[], bool]] = None
    func: Optional[Callable[..., Any]] = None
    carousel_id: Optional[str] = None
    items: Optional[Dynamic] = None
    submenu: Optional[MenuDefinition] = None
    # Label shown instead of ``label`` when the root menu is swapped.
    alternate_label: Optional[Dynamic] = None

    @property
    def selectable(self) -> bool:
        return self.entry_type is not EntryType.SEPARATOR

    def is_visible(self) -> bool:
        if self.visible is None:
            return True
        return bool(self.visible())


def _aliases(entry_type: EntryType, aliases: Iterable[str]) -> Tuple[str, ...]:
    result = tuple(aliases)
    for alias in result:
        if not isinstance(alias, str) or len(alias) != 1:
            raise MenuDefinitionError(
                entry_type.value, f"alias {alias!r} is not a single character"
            )
    return result


def action_entry(
    label,
    func: Callable[[], Any],
    *,
    aliases: Iterable[str] = (),
    visible: Optional[Callable[[], bool]] = None,
    alternate_label=None,
) -> MenuEntry:
    if func is None:
        raise MenuDefinitionError(EntryType.ACTION.value, "an effect is required")
    return MenuEntry(
        entry_type=EntryType.ACTION,
        label=dynamic(label),
        aliases=_aliases(EntryType.ACTION, aliases),
        visible=visible,
        func=func,
        alternate_label=dynamic(alternate_label) if alternate_label is not None else None,
    )


def carousel_entry(
    carousel_id: str,
    items,
    label: Callable[[int, Any, Sequence[Any]], str],
    func: Callable[[int, Any, Sequence[Any]], Any],
    *,
    aliases: Iterable[str] = (),
    visible: Optional[Callable[[], bool]] = None,
) -> MenuEntry:
    if not carousel_id:
        raise MenuDefinitionError(EntryType.CAROUSEL.value, "a carousel id is required")
    if items is None:
        raise MenuDefinitionError(EntryType.CAROUSEL.value, "a choice list is required")
    if not callable(label):
        raise MenuDefinitionError(
            EntryType.CAROUSEL.value, "the label must be computed from the choice"
        )
    return MenuEntry(
        entry_type=EntryType.CAROUSEL,
        label=Producer(label),
        aliases=_aliases(EntryType.CAROUSEL, aliases),
        visible=visible,
        func=func,
        carousel_id=carousel_id,
        items=dynamic(items),
    )


def submenu_entry(
    label,
    submenu: MenuDefinition,
    *,
    aliases: Iterable[str] = (),
    visible: Optional[Callable[[], bool]] = None,
) -> MenuEntry:
    if submenu is None:
        raise MenuDefinitionError(EntryType.SUBMENU.value, "a child menu is required")
    return MenuEntry(
        entry_type=EntryType.SUBMENU,
        label=dynamic(label),
        aliases=_aliases(EntryType.SUBMENU, aliases),
        visible=visible,
        submenu=submenu,
    )


def return_entry(
    label,
    func: Optional[Callable[[], Any]] = None,
    *,
    aliases: Iterable[str] = (),
    visible: Optional[Callable[[], bool]] = None,
) -> MenuEntry:
    return MenuEntry(
        entry_type=EntryType.RETURN,
        label=dynamic(label),
        aliases=_aliases(EntryType.RETURN, aliases),
        visible=visible,
        func=func,
    )


def separator(label="", *, visible: Optional[Callable[[], bool]] = None) -> MenuEntry:
    return MenuEntry(
        entry_type=EntryType.SEPARATOR,
        label=dynamic(label),
        visible=visible,
    )


@dataclass(eq=False)
class MenuDefinition:
    menu_id: str
    title: str = ""
    source: Dynamic = field(default_factory=lambda: Static(()))

    def __post_init__(self) -> None:
        self.source = dynamic(self.source)

    def entries(self) -> Sequence[MenuEntry]:
        return self.source.resolve()

    def static_entries(self) -> Sequence[MenuEntry]:
        """Entries known without calling a producer, used for tree checks."""
        if isinstance(self.source, Static):
            return self.source.value
        return ()


class RootMenuDefinition(MenuDefinition):
    """Root menu whose first two entries trade places under a condition.

    The swapped sequence is built once and handed out again on every
    later request until ``invalidate`` is called.
    """

    def __init__(
        self,
        menu_id: str,
        title: str,
        all_entries: Sequence[MenuEntry],
        swap_when: Callable[[], bool],
    ) -> None:
        self.all_entries = tuple(all_entries)
        self._swap_when = swap_when
        self._swapped: Optional[Tuple[MenuEntry, ...]] = None
        super().__init__(menu_id=menu_id, title=title, source=Producer(self._current))

    def _current(self) -> Sequence[MenuEntry]:
        if not self._swap_when():
            return self.all_entries
        if self._swapped is None:
            self._swapped = self._build_swapped()
        return self._swapped

    def _build_swapped(self) -> Tuple[MenuEntry, ...]:
        if len(self.all_entries) < 2:
            return self.all_entries
        first, second = (
            replace(entry, label=entry.alternate_label or entry.label)
            for entry in self.all_entries[:2]
        )
        return (second, first) + self.all_entries[2:]

    def invalidate(self) -> None:
        self._swapped = None

    def static_entries(self) -> Sequence[MenuEntry]:
        return self.all_entries


def collect_definitions(root: MenuDefinition) -> dict[str, MenuDefinition]:
    """Walk every statically reachable menu, rejecting submenu cycles.

    Menus are told apart by identity. Two different menus sharing a
    ``menu_id`` are rejected, since ``MenuModel.get`` could only return
    one of them.
    """
    definitions: dict[str, MenuDefinition] = {}
    path: list[MenuDefinition] = []

    def walk(definition: MenuDefinition) -> None:
        if any(step is definition for step in path):
            names = [step.menu_id for step in path] + [definition.menu_id]
            raise MenuCycleError(names)
        known = definitions.get(definition.menu_id)
        if known is definition:
            return
        if known is not None:
            raise MenuDefinitionError(
                EntryType.SUBMENU.value,
                f"menu id {definition.menu_id!r} is used by two different menus",
            )
        definitions[definition.menu_id] = definition
        path.append(definition)
        for entry in definition.static_entries():
            if entry.submenu is not None:
                walk(entry.submenu)
        path.pop()

    walk(root)
    return definitions


class MenuModel:
    """A menu tree rooted at the default menu."""

    def __init__(self, root: MenuDefinition) -> None:
        self.root = root
        self.definitions = collect_definitions(root)

    def is_root(self, definition: MenuDefinition) -> bool:
        return definition is self.root

    def get(self, menu_id: str) -> MenuDefinition:
        try:
            return self.definitions[menu_id]
        except KeyError:
            raise ValueError(f"Unknown menu: {menu_id}") from None
