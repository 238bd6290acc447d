import enum
import math
import os
from typing import NamedTuple

BOARD_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "boards")

class Row(enum.IntEnum):
    FUNCTION = 0
    NUMBER = 1
    TOP = 2
    HOME = 3
    BOTTOM = 4
    MODIFIER = 5

row_display_names = {
    Row.FUNCTION: "F-keys",
    Row.NUMBER: "Number",
    Row.TOP: "Top",
    Row.HOME: "Middle",
    Row.BOTTOM: "Bottom",
    Row.MODIFIER: "Modifiers/Space",
}

class Coord(NamedTuple):
    x: float
    y: float

class Key(NamedTuple):
    id: int # not unique, use the index in Board.keys instead
    row: int
    col: int
    name: str
    coord: Coord

class DegenerateNormalization(ValueError):
    """Attempted to normalize within a range of zero width."""

def distance(a: Key, b: Key) -> float:
    """Euclidean distance between the centers of two keys."""
    return math.hypot(a.coord.x - b.coord.x, a.coord.y - b.coord.y)

def normalize(value: float, minimum: float, maximum: float) -> float:
    """Rescales value from [minimum, maximum] to [0, 1].

    Raises DegenerateNormalization if minimum == maximum, since a NaN here
    would poison every score it is multiplied into."""
    if maximum == minimum:
        raise DegenerateNormalization(
            f"Cannot normalize {value} within [{minimum}, {maximum}]")
    return (value - minimum) / (maximum - minimum)

class Board:

    loaded = {} # dict of boards

    def __init__(self, name: str, repr_: str = "") -> None:
        """Pass in repr_ to build the board directly from it. Otherwise,
        the board will be built from the file at boards/<name>."""
        self.name = name
        self.keys = [] # type: list[Key]
        if repr_:
            self.build_from_string(repr_)
        else:
            with open(os.path.join(BOARD_DIR, name), encoding="utf-8") as file:
                self.build_from_string(file.read())

    def build_from_string(self, s: str):
        for row in s.splitlines():
            # allow comments at end with "//"
            tokens = row.split("//", 1)[0].split()
            if not tokens:
                continue
            id_, r, c = (int(token) for token in tokens[:3])
            x = float(tokens[3])
            y = float(tokens[4])
            name = " ".join(tokens[5:])
            self.keys.append(Key(id_, r, c, name, Coord(x, y)))

    def __len__(self) -> int:
        return len(self.keys)

    def __str__(self) -> str:
        return self.name

def get_board(name: str) -> Board:
    if name not in Board.loaded:
        Board.loaded[name] = Board(name)
    return Board.loaded[name]
