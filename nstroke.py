import itertools
from typing import Sequence, NamedTuple, Tuple

from board import Key
from fingermap import Finger, same_hand

class Tristroke(NamedTuple):
    indices: Tuple[int, ...] # into Board.keys
    fingers: Tuple[Finger, ...]
    keys: Tuple[Key, ...]
Nstroke = Tristroke

def bistroke(tristroke: Tristroke, index0: int, index1: int):
    return Nstroke(
        (tristroke.indices[index0], tristroke.indices[index1]),
        (tristroke.fingers[index0], tristroke.fingers[index1]),
        (tristroke.keys[index0], tristroke.keys[index1]))

def bistrokes(nstroke: Nstroke):
    """Each pair of consecutive keystrokes, in order."""
    return (bistroke(nstroke, i, i + 1) for i in range(len(nstroke.keys) - 1))

def bifinger_category(fingers: Sequence[Finger], keys: Sequence[Key]):
    """Rolls go inward when the column moves toward the middle of the
    keyboard: rightward on the left hand, leftward on the right hand."""
    if fingers[0] == fingers[1]:
        return "sfr" if keys[0] == keys[1] else "sfb"
    elif not same_hand(fingers[0], fingers[1]):
        return "alt"
    elif keys[0].col == keys[1].col:
        return "column"
    rightward = keys[0].col < keys[1].col
    return "roll.in" if rightward == fingers[0].is_left else "roll.out"

def bistroke_category(nstroke: Nstroke, index0: int = 0, index1: int = 1):
    return bifinger_category(
        (nstroke.fingers[index0], nstroke.fingers[index1]),
        (nstroke.keys[index0], nstroke.keys[index1]))

def tristroke_categories(tristroke: Tristroke):
    """(first, second) bistroke categories of a tristroke."""
    first, second = map(
        bifinger_category,
        itertools.pairwise(tristroke.fingers),
        itertools.pairwise(tristroke.keys))
    return first, second
