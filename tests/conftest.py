import random

import matplotlib
import pytest

matplotlib.use("Agg")

import constraintmap
import corpus
import layout

# index of each letter of qwerty in the macbook board
E, T = 31, 33
F, J, D = 46, 49, 45

@pytest.fixture
def qwerty():
    """A private copy; swapping keys on it does not leak into other tests."""
    return layout.Layout("qwerty")

@pytest.fixture
def rng():
    return random.Random(1234)

@pytest.fixture
def letters():
    return constraintmap.get_constraintmap("letters")

@pytest.fixture
def tiny_corpus():
    return corpus.Corpus(text="the the the and and but")
