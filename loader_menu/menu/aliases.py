"""Visible entries of a drawn menu and the keys that select them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence

from loader_menu.logging import LoggerFactory
from loader_menu.menu.carousel import CarouselStore
from loader_menu.menu.model import EntryType, MenuDefinition, MenuEntry

log = LoggerFactory.for_menu()

# Keys are read one at a time, so only single-digit numbers can be typed.
MAX_NUMBERED_ENTRIES = 9


@dataclass(frozen=True)
class VisibleEntry:
    entry: MenuEntry
    label: str
    # Position among selectable entries; None for separators and for
    # selectable entries past MAX_NUMBERED_ENTRIES.
    number: Optional[int] = None


def carousel_choices(entry: MenuEntry) -> List[Any]:
    return list(entry.items.resolve())


def _label_for(entry: MenuEntry, carousels: CarouselStore) -> str:
    if entry.entry_type is EntryType.CAROUSEL:
        choices = carousel_choices(entry)
        index = carousels.get(entry.carousel_id)
        choice = choices[index - 1] if 0 < index <= len(choices) else None
        return entry.label.resolve(index, choice, choices)
    return entry.label.resolve()


def resolve_visible(
    definition: MenuDefinition, carousels: CarouselStore
) -> List[VisibleEntry]:
    """Evaluate visibility and labels for one draw of ``definition``."""
    visible: List[VisibleEntry] = []
    number = 0
    for entry in definition.entries():
        if not entry.is_visible():
            continue
        if entry.selectable and number < MAX_NUMBERED_ENTRIES:
            number += 1
            visible.append(VisibleEntry(entry, _label_for(entry, carousels), number))
        else:
            visible.append(VisibleEntry(entry, _label_for(entry, carousels)))
    return visible


class AliasTable:
    """Key -> entry bindings for the menu currently on screen.

    Each selectable entry is bound to its number and then to its own
    aliases, in render order. When two entries claim the same key the
    first one keeps it.
    """

    def __init__(self, bindings: Optional[Dict[str, MenuEntry]] = None) -> None:
        self._bindings: Dict[str, MenuEntry] = dict(bindings or {})

    @classmethod
    def build(cls, visible: Sequence[VisibleEntry]) -> AliasTable:
        bindings: Dict[str, MenuEntry] = {}
        for item in visible:
            if not item.entry.selectable:
                continue
            keys = [str(item.number)] if item.number is not None else []
            keys.extend(item.entry.aliases)
            for key in keys:
                holder = bindings.get(key)
                if holder is None:
                    bindings[key] = item.entry
                elif holder is not item.entry:
                    log.warning(
                        f"Duplicate alias {key!r} on {item.label!r}; keeping earlier entry"
                    )
        return cls(bindings)

    def resolve(self, key: Optional[str]) -> Optional[MenuEntry]:
        if key is None:
            return None
        return self._bindings.get(key)

    def keys(self) -> List[str]:
        return list(self._bindings)

    def __contains__(self, key: object) -> bool:
        return key in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)
