# Load and process a corpus into n-gram frequencies
# Members of Corpus:
    # text: trimmed, lowercased corpus
    # key_counts, bigram_counts, trigram_counts: Counter[str]
    # keystroke_counts: Counter[str], like key_counts but counting spaces
    # key_total, bigram_total, trigram_total: number of valid n-grams
    # sorted_trigrams: list[(trigram, count)], see sort_ngrams()
    # precision: int
    # top_trigrams: the first `precision` entries of sorted_trigrams
    # trigram_completeness: float

from collections import Counter
import os

CORPUS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "corpus")

# 0x7f is admitted along with the printable range
ngram_chars = frozenset(chr(i) for i in range(0x20, 0x80))
whitespace = frozenset(" \t\n")

display_names = {" ": "␣", "\n": "↩", "\t": "⇥"}

def display_name(key: str):
    return display_names.get(key, key)

def display_str(ngram: str):
    return "".join(display_name(key) for key in ngram)

def is_valid_ngram(ngram: str) -> bool:
    return (bool(ngram)
        and whitespace.isdisjoint(ngram)
        and ngram_chars.issuperset(ngram))

def ngram_frequencies(corpus: str, n: int) -> tuple[Counter, int]:
    """Returns (counts, total) for every valid n-gram in the corpus.
    Windows containing whitespace or non-ASCII characters are skipped
    entirely."""
    if n < 1:
        raise ValueError(f"n-grams must have a length of at least 1, got {n}")
    counts = Counter(
        ngram for ngram in (corpus[i:i+n] for i in range(len(corpus) - n + 1))
        if is_valid_ngram(ngram))
    return counts, counts.total()

def sort_ngrams(counts: dict[str, int]) -> list[tuple[str, int]]:
    """Most frequent first. Ties are broken alphabetically so that slicing
    off the top n gives the same result every time."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))

class Corpus:

    def __init__(self, filename: str = "", text: str = None,
                 precision: int = 100) -> None:
        """Pass in text to build the corpus directly from it. Otherwise,
        the corpus will be read from corpus/<filename>. Raises
        FileNotFoundError if no text is provided and no file is found.

        `precision` is the number of most frequent trigrams to keep in
        `top_trigrams`; 0 or less keeps them all.
        """
        self.filename = filename
        if text is None:
            with open(os.path.join(CORPUS_DIR, filename),
                      encoding="utf-8", errors="ignore") as file:
                text = file.read()
        self.text = text.strip().lower()

        self.key_counts, self.key_total = ngram_frequencies(self.text, 1)
        self.bigram_counts, self.bigram_total = ngram_frequencies(self.text, 2)
        self.trigram_counts, self.trigram_total = ngram_frequencies(
            self.text, 3)
        self.keystroke_counts = Counter(
            char for char in self.text if char in ngram_chars)
        self.sorted_trigrams = sort_ngrams(self.trigram_counts)

        self.precision = precision
        self.top_trigrams = ()
        self.trigram_precision_total = 0
        self.trigram_completeness = 0.0
        self.set_precision(precision)

    def set_precision(self, precision: int):
        if precision <= 0:
            self.precision = 0
            self.top_trigrams = tuple(self.sorted_trigrams)
        else:
            self.precision = precision
            self.top_trigrams = tuple(self.sorted_trigrams[:precision])
        self.trigram_precision_total = sum(
            count for _, count in self.top_trigrams)
        if self.trigram_total:
            self.trigram_completeness = (self.trigram_precision_total /
                self.trigram_total)
        else:
            self.trigram_completeness = 0.0

    def sorted_keys(self):
        return sort_ngrams(self.key_counts)

    def sorted_bigrams(self):
        return sort_ngrams(self.bigram_counts)

loaded = {} # type: dict[str, Corpus]

def get_corpus(filename: str, precision: int = 100) -> Corpus:
    if filename not in loaded:
        loaded[filename] = Corpus(filename, precision=precision)
    corpus_ = loaded[filename]
    corpus_.set_precision(precision)
    return corpus_

def list_corpora() -> list[str]:
    return sorted(name for name in os.listdir(CORPUS_DIR)
        if not name.startswith("."))
