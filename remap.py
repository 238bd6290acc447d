# Record of the key swaps that turned one layout into another.
# Swaps are applied in order, and undone in reverse order.

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from layout import Layout

def swap(i: int, j: int):
    return Remap([(i, j)])

class Remap(list):
    """Remap stored as [(source index, target index) for each swap]"""

    def apply(self, layout_: Layout):
        for i, j in self:
            layout_.swap(i, j)

    def undo(self, layout_: Layout):
        for i, j in reversed(self):
            layout_.swap(i, j)

    def describe(self, layout_: Layout) -> str:
        """Names the keys involved, as they are labeled on layout_."""
        if not self:
            return "no-op"
        return ", ".join(
            f"{layout_.label(i)} <-> {layout_.label(j)}" for i, j in self)

    def __str__(self) -> str:
        if not self:
            return "no-op"
        return ", ".join(f"{i} <-> {j}" for i, j in self)

    def __repr__(self) -> str:
        if not self:
            return "Remap()"
        return " + ".join(f"swap({i}, {j})" for i, j in self)

    def __add__(self, other: Remap):
        if not isinstance(other, Remap):
            return NotImplemented
        return Remap(list(self) + list(other))

    def __neg__(self):
        return Remap(reversed(self))
