# Ergonomic cost model. Each trigram starts with a score of 1, which is
# multiplied by a series of independent factors. Lower is better.

import functools
from typing import Callable, Iterable, Sequence

from board import distance, normalize
from layout import Layout
from nstroke import bistroke_category, bistrokes

# Number of most frequent trigrams used to judge a layout
OPTIMIZATION_PRECISION = 100
REPORT_PRECISION = 50

ALTERNATION_WEIGHT = -0.2
OUTWARD_ROLL_WEIGHT = 0.2
INWARD_ROLL_WEIGHT = -0.5

MAXIMUM_ROW_JUMP = 10 # row 0 -> row 5 -> row 0
ROW_JUMP_DAMPENER = 0.5 # keeps row jumps from overwhelming rolls

def roll_multiplier(trigram: str, layout_: Layout) -> float:
    """Inward rolls are boosted strongly, outward rolls penalized weakly.
    Tighter rolls count for more. Hand alternation also lowers the score."""
    ceiling = layout_.measurements.any_two_keys
    alternations = 0
    inward = 0.0
    outward = 0.0
    for bs in bistrokes(layout_.to_nstroke(trigram)):
        category = bistroke_category(bs)
        if category == "alt":
            alternations += 1
        elif category.startswith("roll"):
            tightness = 1 - normalize(distance(*bs.keys), 0, ceiling)
            if category == "roll.in":
                inward += tightness
            else:
                outward += tightness
    return (1
        + alternations * ALTERNATION_WEIGHT
        + outward * OUTWARD_ROLL_WEIGHT
        + inward * INWARD_ROLL_WEIGHT)

def row_jump_multiplier(trigram: str, layout_: Layout) -> float:
    keys = layout_.to_nstroke(trigram).keys
    rows_jumped = sum(abs(b.row - a.row) for a, b in zip(keys, keys[1:]))
    return 1 + normalize(rows_jumped, 0, MAXIMUM_ROW_JUMP) * ROW_JUMP_DAMPENER

def same_finger_multiplier(trigram: str, layout_: Layout) -> float:
    """The farther apart consecutive presses of one finger are, the
    greater the penalty."""
    ceiling = layout_.measurements.same_finger
    multiplier = 1.0
    for bs in bistrokes(layout_.to_nstroke(trigram)):
        if bs.fingers[0] == bs.fingers[1]:
            multiplier *= 1 + normalize(distance(*bs.keys), 0, ceiling)
    return multiplier

def position_multiplier(trigram: str, layout_: Layout) -> float:
    """Keys are penalized by how far they are from the home key of the
    finger that presses them. This is deliberately weak."""
    ceiling = layout_.measurements.from_home
    keys = layout_.board.keys
    multiplier = 1.0
    for index in layout_.to_nstroke(trigram).indices:
        home = keys[layout_.fingermap.home_key(index)]
        multiplier *= 1 + normalize(distance(keys[index], home), 0, ceiling)
    return multiplier

def finger_multiplier(trigram: str, layout_: Layout) -> float:
    strengths = layout_.fingermap.strengths
    return functools.reduce(
        lambda multiplier, finger: multiplier * strengths[finger],
        layout_.to_nstroke(trigram).fingers, 1.0)

score_multipliers = (
    roll_multiplier,
    row_jump_multiplier,
    same_finger_multiplier,
    position_multiplier,
    finger_multiplier,
) # type: tuple[Callable[[str, Layout], float], ...]

multiplier_display_names = {
    roll_multiplier: "roll",
    row_jump_multiplier: "row jump",
    same_finger_multiplier: "same finger",
    position_multiplier: "position",
    finger_multiplier: "finger strength",
}

def score_trigram(
        trigram: str, layout_: Layout,
        multipliers: Iterable[Callable] = score_multipliers) -> float:
    """Raises KeyError (a LookupError) if a character is not on the layout;
    skipping it would quietly understate the effort."""
    if len(trigram) != 3:
        raise ValueError(f"Trigrams have three characters, got {trigram!r}")
    return functools.reduce(
        lambda score, multiplier: score * multiplier(trigram, layout_),
        multipliers, 1.0)

def fitness(layout_: Layout, sorted_trigrams: Sequence[tuple[str, int]],
            precision: int | None = OPTIMIZATION_PRECISION) -> float:
    """Total effort of typing the `precision` most frequent trigrams.
    sorted_trigrams must already be ordered by corpus.sort_ngrams(); the
    cutoff is by position, not by count. None uses every trigram."""
    return sum((score_trigram(trigram, layout_) * count
        for trigram, count in sorted_trigrams[:precision]), 0.0)

def multiplier_averages(
        layout_: Layout, sorted_trigrams: Sequence[tuple[str, int]],
        precision: int | None = REPORT_PRECISION) -> dict[Callable, float]:
    """Frequency-weighted mean of each multiplier over the top trigrams."""
    top = sorted_trigrams[:precision]
    total_count = sum(count for _, count in top)
    averages = {}
    for multiplier in score_multipliers:
        if not total_count:
            averages[multiplier] = 0.0
            continue
        averages[multiplier] = sum(
            multiplier(trigram, layout_) * count
            for trigram, count in top) / total_count
    return averages
