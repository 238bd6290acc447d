import enum
import functools
import itertools
import os
from typing import NamedTuple

import board

FINGERMAP_DIR = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "fingermaps")

class Finger(enum.IntEnum):
    LP = 0
    LR = 1
    LM = 2
    LI = 3
    LT = 4
    RT = 5
    RI = 6
    RM = 7
    RR = 8
    RP = 9

    @property
    def is_left(self) -> bool:
        return self <= Finger.LT

    @property
    def is_thumb(self) -> bool:
        return self in (Finger.LT, Finger.RT)

finger_display_names = {
    Finger.LP: "Left Pinkie",
    Finger.LR: "Left Ring Finger",
    Finger.LM: "Left Middle Finger",
    Finger.LI: "Left Index Finger",
    Finger.LT: "Left Thumb",
    Finger.RT: "Right Thumb",
    Finger.RI: "Right Index Finger",
    Finger.RM: "Right Middle Finger",
    Finger.RR: "Right Ring Finger",
    Finger.RP: "Right Pinkie",
}

def same_hand(a: Finger, b: Finger) -> bool:
    return a.is_left == b.is_left

class Measurements(NamedTuple):
    """Normalization ceilings derived from a board and a fingermap."""
    from_home: float # farthest any key is from its finger's home key
    same_finger: float # farthest apart two keys on one finger are
    any_two_keys: float # first to last key, roughly the board diagonal

class Fingermap:

    loaded = {} # dict of fingermaps

    def __init__(self, name: str, repr_: str = "") -> None:
        self.name = name
        self.fingers = [] # type: list[Finger], parallel to Board.keys
        self.home_keys = {} # type: dict[Finger, int]
        self.strengths = {} # type: dict[Finger, float]
        if repr_:
            self.build_from_string(repr_)
        else:
            with open(os.path.join(FINGERMAP_DIR, name),
                      encoding="utf-8") as file:
                self.build_from_string(file.read())

    def build_from_string(self, s: str):
        for row in s.splitlines():
            tokens = row.split("//", 1)[0].split()
            if not tokens:
                continue
            if tokens[0] == "home:" and len(tokens) >= 3:
                self.home_keys[parse_finger(tokens[1])] = int(tokens[2])
            elif tokens[0] == "strength:" and len(tokens) >= 3:
                strength = float(tokens[2])
                if not 0 < strength <= 1:
                    raise ValueError(
                        f"Strength of {tokens[1]} must be in (0, 1], "
                        f"got {strength}")
                self.strengths[parse_finger(tokens[1])] = strength
            else:
                for token in tokens:
                    finger = parse_finger(token)
                    self.fingers.append(finger)
        for finger in Finger:
            if finger not in self.home_keys:
                raise ValueError(f"Fingermap {self.name} has no home key "
                                 f"for {finger.name}")
            self.strengths.setdefault(finger, 1.0)

    def home_key(self, index: int) -> int:
        """Index of the home key of the finger responsible for index."""
        return self.home_keys[self.fingers[index]]

    def __str__(self) -> str:
        return self.name

def parse_finger(token: str) -> Finger:
    try:
        return Finger(int(token))
    except ValueError:
        return Finger[token]

@functools.cache
def measure(board_: board.Board, fingermap_: Fingermap) -> Measurements:
    """The three ceilings are computed and cached together, so a different
    board or fingermap always gets a fresh set."""
    keys = board_.keys
    if len(fingermap_.fingers) != len(keys):
        raise ValueError(
            f"Fingermap {fingermap_.name} assigns {len(fingermap_.fingers)} "
            f"fingers but board {board_.name} has {len(keys)} keys")
    from_home = max(
        board.distance(key, keys[fingermap_.home_key(i)])
        for i, key in enumerate(keys))
    # yes, quadratic, but there are less than a hundred keys
    same_finger = 0.0
    for i, j in itertools.combinations(range(len(keys)), 2):
        if fingermap_.fingers[i] == fingermap_.fingers[j]:
            same_finger = max(same_finger, board.distance(keys[i], keys[j]))
    any_two_keys = board.distance(keys[0], keys[-1])
    return Measurements(from_home, same_finger, any_two_keys)

def get_fingermap(name: str) -> Fingermap:
    if name not in Fingermap.loaded:
        Fingermap.loaded[name] = Fingermap(name)
    return Fingermap.loaded[name]
