import os
from typing import Iterable, Sequence

CONSTRAINTMAP_DIR = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "constraintmaps")

class Constraintmap:
    """Marks which keys of a board keep their assignment during optimization.
    A swap is only legal when neither of its keys is pinned."""

    loaded = {}

    def __init__(self, name: str, pinned: Sequence[bool] = None) -> None:
        self.name = name
        self.pinned = [] # type: list[bool], parallel to Board.keys
        if pinned is not None:
            self.pinned = [bool(item) for item in pinned]
        else:
            with open(os.path.join(CONSTRAINTMAP_DIR, name),
                      encoding="utf-8") as file:
                self.build_from_string(file.read())

    def build_from_string(self, s: str):
        for row in s.splitlines():
            # allow comments at end with "//"
            tokens = row.split("//", 1)[0].split()
            self.pinned.extend(token != "0" for token in tokens)

    def is_pinned(self, index: int) -> bool:
        return self.pinned[index]

    def is_swap_legal(self, i: int, j: int) -> bool:
        return not (self.pinned[i] or self.pinned[j])

    def free_keys(self) -> list[int]:
        return [i for i, pinned in enumerate(self.pinned) if not pinned]

    def __len__(self) -> int:
        return len(self.pinned)

    def __str__(self) -> str:
        return self.name

def pin_all_except(free: Iterable[int], size: int,
                   name: str = "custom") -> Constraintmap:
    free = set(free)
    return Constraintmap(name, [i not in free for i in range(size)])

def get_constraintmap(name: str) -> Constraintmap:
    if name not in Constraintmap.loaded:
        Constraintmap.loaded[name] = Constraintmap(name)
    return Constraintmap.loaded[name]

def list_constraintmaps() -> list[str]:
    return sorted(os.listdir(CONSTRAINTMAP_DIR))
