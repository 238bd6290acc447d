import pytest

import effort
from conftest import D, F, J

def test_inward_roll_is_rewarded(qwerty):
    assert effort.roll_multiplier("sdf", qwerty) == pytest.approx(0.0688, abs=1e-3)
    assert effort.roll_multiplier("sdf", qwerty) < 1

def test_outward_roll_is_penalized(qwerty):
    assert effort.roll_multiplier("fds", qwerty) == pytest.approx(1.3725, abs=1e-3)
    assert effort.roll_multiplier("fds", qwerty) > 1

def test_alternation(qwerty):
    assert effort.roll_multiplier("fjf", qwerty) == pytest.approx(0.6)

def test_row_jump(qwerty):
    assert effort.row_jump_multiplier("qaz", qwerty) == pytest.approx(1.1)
    assert effort.row_jump_multiplier("asd", qwerty) == 1

def test_same_finger(qwerty):
    assert effort.same_finger_multiplier("fjd", qwerty) == 1
    assert effort.same_finger_multiplier("frf", qwerty) > 1
    assert effort.same_finger_multiplier("fff", qwerty) == 1 # repeats

def test_position(qwerty):
    assert effort.position_multiplier("asd", qwerty) == 1
    assert effort.position_multiplier("qwe", qwerty) > 1

def test_finger_strength(qwerty):
    assert effort.finger_multiplier("asd", qwerty) == pytest.approx(0.042)

def test_home_row_trigram(qwerty):
    assert effort.score_trigram("fjd", qwerty) == pytest.approx(0.378)

def test_awkward_trigram_scores_higher(qwerty):
    comfortable = effort.score_trigram("fjd", qwerty)
    # move all three letters onto the left ring finger, far from its home key
    qwerty.swap(F, 2)
    qwerty.swap(J, 57)
    qwerty.swap(D, 16)
    awkward = effort.score_trigram("fjd", qwerty)
    assert awkward == pytest.approx(1.94, abs=0.01)
    assert awkward > comfortable

def test_score_is_product_of_multipliers(qwerty):
    product = 1.0
    for multiplier in effort.score_multipliers:
        product *= multiplier("the", qwerty)
    assert effort.score_trigram("the", qwerty) == pytest.approx(product)
    assert effort.score_trigram(
        "the", qwerty, [effort.finger_multiplier]) == pytest.approx(
        effort.finger_multiplier("the", qwerty))

def test_score_needs_trigram(qwerty):
    with pytest.raises(ValueError):
        effort.score_trigram("th", qwerty)

def test_score_missing_character(qwerty):
    with pytest.raises(LookupError):
        effort.score_trigram("thé", qwerty)

def test_fitness(qwerty, tiny_corpus):
    expected = (effort.score_trigram("the", qwerty) * 3
        + effort.score_trigram("and", qwerty) * 2
        + effort.score_trigram("but", qwerty))
    assert effort.fitness(
        qwerty, tiny_corpus.sorted_trigrams) == pytest.approx(expected)
    assert effort.fitness(
        qwerty, tiny_corpus.sorted_trigrams, 1) == pytest.approx(
        effort.score_trigram("the", qwerty) * 3)

def test_fitness_of_nothing(qwerty):
    assert effort.fitness(qwerty, []) == 0.0

def test_multiplier_averages(qwerty, tiny_corpus):
    averages = effort.multiplier_averages(qwerty, tiny_corpus.sorted_trigrams)
    assert set(averages) == set(effort.score_multipliers)
    assert averages[effort.finger_multiplier] == pytest.approx((
        effort.finger_multiplier("the", qwerty) * 3
        + effort.finger_multiplier("and", qwerty) * 2
        + effort.finger_multiplier("but", qwerty)) / 6)
    assert all(value == 0.0 for value in
               effort.multiplier_averages(qwerty, []).values())
