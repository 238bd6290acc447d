import os

import pytest

import analysis
from board import Row
import corpus
import effort
from fingermap import Finger

def test_finger_usage(qwerty, tiny_corpus):
    counts = analysis.finger_usage(qwerty, tiny_corpus)
    assert counts == {
        Finger.LP: 2, # a
        Finger.LM: 5, # e, d
        Finger.LI: 4, # t
        Finger.RT: 5, # spaces
        Finger.RI: 7, # h, n, b, u
    }

def test_hand_usage_leaves_out_thumbs(qwerty, tiny_corpus):
    hands = analysis.hand_usage(analysis.finger_usage(qwerty, tiny_corpus))
    assert hands == {"left": 11, "right": 7}

def test_row_usage(qwerty, tiny_corpus):
    rows = analysis.row_usage(qwerty, tiny_corpus)
    assert rows == {Row.TOP: 8, Row.HOME: 7, Row.BOTTOM: 3, Row.MODIFIER: 5}

def test_missing_character(qwerty):
    # delete is a valid character but not on any key
    with pytest.raises(LookupError):
        analysis.finger_usage(qwerty, corpus.Corpus(text="a\x7fb"))

def test_trigram_effort(qwerty, tiny_corpus):
    rows = analysis.trigram_effort(qwerty, tiny_corpus.sorted_trigrams, 2)
    assert [row.trigram for row in rows] == ["the", "and"]
    assert rows[0].score == pytest.approx(effort.score_trigram("the", qwerty))
    assert rows[0].total == pytest.approx(rows[0].score * 3)

def test_category_counts(qwerty, tiny_corpus):
    counts = analysis.category_counts(qwerty, tiny_corpus.sorted_trigrams)
    assert counts.total() == 12

def test_layout_stats(qwerty, tiny_corpus):
    stats = analysis.layout_stats(qwerty, tiny_corpus)
    assert stats.keystrokes == 23
    assert len(stats.trigrams) == 3
    assert stats.total_effort == pytest.approx(
        effort.fitness(qwerty, tiny_corpus.sorted_trigrams))
    assert set(stats.multipliers) == set(effort.score_multipliers)

def test_corpus_stats(tiny_corpus):
    stats = analysis.corpus_stats(tiny_corpus)
    assert [section.label for section in stats.sections] == [
        "Unigrams", "Bigrams", "Trigrams"]
    assert stats.sections[0].ngrams[0] == ("t", 4)
    assert stats.sections[2].distinct == 3
    assert stats.overview == "tehadnbu"

def test_corpus_stats_limits(tiny_corpus):
    stats = analysis.corpus_stats(tiny_corpus, 2, 1)
    assert [len(section.ngrams) for section in stats.sections] == [2, 1, 1]

def test_find_free_filename(tmp_path):
    prefix = str(tmp_path) + os.sep
    assert analysis.find_free_filename("a", ".json", prefix) == "a.json"
    (tmp_path / "a.json").touch()
    assert analysis.find_free_filename("a", ".json", prefix) == "a-1.json"
    (tmp_path / "a-1.json").touch()
    assert analysis.find_free_filename("a", ".json", prefix) == "a-2.json"
