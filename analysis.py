# Contains analysis functionality accessed by commands.
# See command.py for those commands.

from collections import Counter
import os
from typing import NamedTuple, Sequence

from board import Row
import corpus
import effort
import layout
import nstroke

class TrigramEffort(NamedTuple):
    trigram: str
    count: int
    score: float # effort of typing the trigram once
    total: float # score * count

class LayoutStats(NamedTuple):
    fingers: Counter # Counter[Finger]
    hands: dict[str, int]
    rows: Counter # Counter[Row]
    keystrokes: int
    trigrams: list[TrigramEffort]
    total_effort: float
    multipliers: dict # {multiplier function: weighted average}
    categories: Counter # Counter[bistroke category]

class NgramSection(NamedTuple):
    label: str
    ngrams: list[tuple[str, int]] # most frequent first
    distinct: int
    total: int

class CorpusStats(NamedTuple):
    sections: list[NgramSection]
    overview: str

def keystroke_indices(layout_: layout.Layout, corpus_: corpus.Corpus):
    """Yields (key index, count) for every character typed in the corpus,
    spaces included. Shift is not counted as a separate keystroke.
    Raises KeyError if the corpus uses a character missing from the
    layout."""
    for char, count in corpus_.keystroke_counts.items():
        yield layout_.position(corpus.display_name(char))[0], count

def finger_usage(layout_: layout.Layout, corpus_: corpus.Corpus) -> Counter:
    """Returns Counter[Finger] of keystrokes. Fingers that never type
    anything are left out."""
    fingers = layout_.fingermap.fingers
    counts = Counter()
    for index, count in keystroke_indices(layout_, corpus_):
        counts[fingers[index]] += count
    return counts

def hand_usage(finger_counts: dict) -> dict[str, int]:
    """Keystrokes per hand. Thumbs are left out so that the space bar does
    not drown out the balance between the hands."""
    hands = {"left": 0, "right": 0}
    for finger, count in finger_counts.items():
        if finger.is_thumb:
            continue
        hands["left" if finger.is_left else "right"] += count
    return hands

def row_usage(layout_: layout.Layout, corpus_: corpus.Corpus) -> Counter:
    keys = layout_.board.keys
    counts = Counter()
    for index, count in keystroke_indices(layout_, corpus_):
        counts[Row(keys[index].row)] += count
    return counts

def trigram_effort(
        layout_: layout.Layout, sorted_trigrams: Sequence[tuple[str, int]],
        precision: int | None = effort.REPORT_PRECISION
        ) -> list[TrigramEffort]:
    result = []
    for trigram, count in sorted_trigrams[:precision]:
        score = effort.score_trigram(trigram, layout_)
        result.append(TrigramEffort(trigram, count, score, score * count))
    return result

def category_counts(
        layout_: layout.Layout, sorted_trigrams: Sequence[tuple[str, int]],
        precision: int | None = effort.REPORT_PRECISION) -> Counter:
    """How often each bistroke category occurs inside the top trigrams,
    weighted by trigram frequency."""
    counts = Counter()
    for trigram, count in sorted_trigrams[:precision]:
        for category in nstroke.tristroke_categories(
                layout_.to_nstroke(trigram)):
            counts[category] += count
    return counts

def layout_stats(layout_: layout.Layout, corpus_: corpus.Corpus,
                 precision: int | None = effort.REPORT_PRECISION
                 ) -> LayoutStats:
    fingers = finger_usage(layout_, corpus_)
    trigrams = trigram_effort(layout_, corpus_.sorted_trigrams, precision)
    return LayoutStats(
        fingers,
        hand_usage(fingers),
        row_usage(layout_, corpus_),
        fingers.total(),
        trigrams,
        sum((row.total for row in trigrams), 0.0),
        effort.multiplier_averages(
            layout_, corpus_.sorted_trigrams, precision),
        category_counts(layout_, corpus_.sorted_trigrams, precision),
    )

def corpus_stats(corpus_: corpus.Corpus, unigram_precision: int = 100,
                 ngram_precision: int = 50) -> CorpusStats:
    """The most frequent unigrams, bigrams and trigrams of a corpus, plus
    the unigrams joined into a single line from most to least frequent."""
    sorted_keys = corpus_.sorted_keys()
    sections = [
        NgramSection("Unigrams", sorted_keys[:unigram_precision],
            len(corpus_.key_counts), corpus_.key_total),
        NgramSection("Bigrams", corpus_.sorted_bigrams()[:ngram_precision],
            len(corpus_.bigram_counts), corpus_.bigram_total),
        NgramSection("Trigrams", corpus_.sorted_trigrams[:ngram_precision],
            len(corpus_.trigram_counts), corpus_.trigram_total),
    ]
    overview = "".join(key for key, _ in sorted_keys)
    return CorpusStats(sections, overview)

def find_free_filename(before_number: str, after_number: str = "",
                       prefix = ""):
    """Returns the filename {before_number}{after_number} if not already taken,
    or else returns the filename {before_number}-{i}{after_number} with the
    smallest i that results in a filename not already taken.

    prefix is used to specify a prefix that is applied to the filename
    but is not part of the returned value, used for directory things."""
    incl_number = before_number
    i = 1
    while os.path.exists(prefix + incl_number + after_number):
        incl_number = f"{before_number}-{i}"
        i += 1
    return incl_number + after_number
