"""Current selection of every carousel entry."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CarouselStore:
    """Carousel id -> 1-based index into that carousel's choices.

    Indices are kept in range by ``advance``; ``set`` trusts its caller.
    """

    indices: dict[str, int] = field(default_factory=dict)

    def get(self, carousel_id: str) -> int:
        return self.indices.get(carousel_id, 1)

    def set(self, carousel_id: str, index: int) -> None:
        self.indices[carousel_id] = index

    def advance(self, carousel_id: str, count: int) -> int:
        """Move to the next of ``count`` choices, wrapping after the last."""
        index = (self.get(carousel_id) % count) + 1
        self.set(carousel_id, index)
        return index


carousel_store = CarouselStore()
