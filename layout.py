import json
import os
from typing import Dict, Sequence, Tuple, Union

import board
import fingermap
from nstroke import Nstroke

LAYOUT_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "layouts")

DEFAULT_BOARD = "macbook"
DEFAULT_FINGERMAP = "unorthodox"

# A slot holds a single key name or an (unshifted, shifted) pair
Slot = Union[str, Tuple[str, str]]

class DuplicateKeyError(ValueError):
    """A character was assigned to more than one slot of a layout."""

def slot_chars(slot: Slot) -> Tuple[Tuple[str, bool], ...]:
    """Returns ((char, needs_shift), ...) for everything typed by a slot."""
    if isinstance(slot, str):
        return ((slot, False),)
    return ((slot[0], False), (slot[1], True))

def build_lookup(slots: Sequence[Slot]) -> Dict[str, Tuple[int, bool]]:
    """Maps each character to (key index, needs_shift).

    Raises DuplicateKeyError if a character appears in two slots, since the
    lookup would then depend on slot order."""
    lookup = {}
    for index, slot in enumerate(slots):
        for char, shift in slot_chars(slot):
            if char in lookup:
                raise DuplicateKeyError(
                    f"{char!r} is assigned to both key {lookup[char][0]} "
                    f"and key {index}")
            lookup[char] = (index, shift)
    return lookup

def parse_slot(item) -> Slot:
    if isinstance(item, str):
        return item
    if len(item) != 2:
        raise ValueError(f"Shifted keys need exactly two characters: {item}")
    return (item[0], item[1])

class Layout:

    loaded = {} # type: Dict[str, Layout]

    def __init__(
            self, name: str, slots: Sequence = (), repr_: str = "",
            board_name: str = DEFAULT_BOARD,
            fingermap_name: str = DEFAULT_FINGERMAP) -> None:
        """Pass in slots to build the layout directly from them, or repr_ to
        build it from the JSON text of a layout file. Otherwise, the layout
        will be built from the file at layouts/<name>.json. Raises
        FileNotFoundError if nothing is provided and no file is found.

        Raises ValueError if the slots do not cover the board exactly, and
        DuplicateKeyError if a character appears more than once."""
        self.name = name
        self.board = board.get_board(board_name)
        self.fingermap = fingermap.get_fingermap(fingermap_name)
        self.slots = [] # type: list[Slot]
        self.nstroke_cache = {} # type: Dict[str, Nstroke]
        if slots:
            self.slots = [parse_slot(item) for item in slots]
        elif repr_:
            self.build_from_string(repr_)
        else:
            with open(layout_path(name), encoding="utf-8") as file:
                self.build_from_string(file.read())
        if len(self.slots) != len(self.board.keys):
            raise ValueError(
                f"Layout {self.name} has {len(self.slots)} keys but board "
                f"{self.board.name} has {len(self.board.keys)}")
        self.lookup = build_lookup(self.slots)

    def build_from_string(self, s: str):
        data = json.loads(s)
        self.name = data.get("name", self.name)
        if "board" in data:
            self.board = board.get_board(data["board"])
        if "fingermap" in data:
            self.fingermap = fingermap.get_fingermap(data["fingermap"])
        self.slots = [parse_slot(item) for item in data["keys"]]

    @property
    def measurements(self) -> fingermap.Measurements:
        return fingermap.measure(self.board, self.fingermap)

    def position(self, char: str) -> Tuple[int, bool]:
        """Returns (key index, needs_shift). Raises KeyError if the character
        is not on this layout."""
        try:
            return self.lookup[char]
        except KeyError:
            raise KeyError(
                f"{char!r} is not on layout {self.name}") from None

    def to_nstroke(self, ngram: str) -> Nstroke:
        """Converts an ngram into an nstroke. Raises KeyError if a character
        is not found in the layout."""
        try:
            return self.nstroke_cache[ngram]
        except KeyError:
            pass
        indices = tuple(self.position(char)[0] for char in ngram)
        result = Nstroke(
            indices,
            tuple(self.fingermap.fingers[i] for i in indices),
            tuple(self.board.keys[i] for i in indices))
        self.nstroke_cache[ngram] = result
        return result

    def swap(self, i: int, j: int):
        """Exchanges two slots in place. Indices are not checked."""
        self.slots[i], self.slots[j] = self.slots[j], self.slots[i]
        for index in (i, j):
            for char, shift in slot_chars(self.slots[index]):
                self.lookup[char] = (index, shift)
        self.nstroke_cache.clear()

    def fingerprint(self) -> str:
        """Identifies the full assignment of characters to keys. Shifted
        pairs render differently from any single key name, so structurally
        different layouts never share a fingerprint."""
        return "\t".join(repr(slot) for slot in self.slots)

    def copy(self, name: str = "") -> "Layout":
        return Layout(name or self.name, self.slots, board_name=self.board.name,
                      fingermap_name=self.fingermap.name)

    def label(self, index: int) -> str:
        slot = self.slots[index]
        return slot if isinstance(slot, str) else slot[0]

    def diagram(self) -> str:
        """One line per board row, showing the unshifted character of every
        key. Function keys keep their number, which makes that row long."""
        rows = []
        last_row = None
        for index, key in enumerate(self.board.keys):
            label = self.label(index)
            label = label[:3] if (label.startswith("F") and
                label[1:].isdigit()) else label[:1]
            if key.row != last_row:
                rows.append([])
                last_row = key.row
            rows[-1].append(label)
        return "\n".join("  ".join(row) for row in rows)

    def __str__(self) -> str:
        return (self.name + " (" + self.fingermap.name + ", "
            + self.board.name + ")")

    def __repr__(self) -> str:
        data = {
            "name": self.name,
            "board": self.board.name,
            "fingermap": self.fingermap.name,
            "keys": [slot if isinstance(slot, str) else list(slot)
                     for slot in self.slots],
        }
        return json.dumps(data, ensure_ascii=False, indent=4)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Layout):
            return NotImplemented
        return (self.slots == other.slots and self.board is other.board
            and self.fingermap is other.fingermap)

    __hash__ = None

def layout_path(name: str) -> str:
    return os.path.join(LAYOUT_DIR, name.lower() + ".json")

def get_layout(name: str) -> Layout:
    """Layouts returned here are shared; copy() before swapping keys."""
    name = name.lower()
    if name not in Layout.loaded:
        Layout.loaded[name] = Layout(name)
    return Layout.loaded[name]

def list_layouts() -> list[str]:
    return sorted(filename[:-5] for filename in os.listdir(LAYOUT_DIR)
        if filename.endswith(".json"))
