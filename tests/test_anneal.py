import math
import random

import pytest

import anneal
import constraintmap
import corpus
import effort
from conftest import E, T

@pytest.fixture
def sample_trigrams():
    return corpus.get_corpus("sample.txt").sorted_trigrams

def test_temperature():
    assert anneal.temperature(0, 100) == anneal.T0
    assert anneal.temperature(100, 100) == pytest.approx(
        anneal.T0 * math.exp(-10))
    assert anneal.temperature(10, 100) > anneal.temperature(20, 100)

def test_improvements_are_always_accepted(rng):
    assert all(anneal.accept(-1e-9, 1e-9, rng) for _ in range(100))

def test_regressions_get_rarer_as_it_cools():
    hot = sum(anneal.accept(100, 1000, random.Random(i)) for i in range(500))
    cold = sum(anneal.accept(100, 10, random.Random(i)) for i in range(500))
    assert hot > cold

def test_swap_count(rng):
    counts = [anneal.swap_count(rng) for _ in range(2000)]
    assert set(counts) <= {1, 2, 3}
    assert counts.count(1) > counts.count(2) > counts.count(3)

def test_mutate_respects_pins(qwerty, letters, rng):
    seen = {qwerty.fingerprint()}
    for _ in range(50):
        evolved, edit = anneal.mutate(qwerty, seen, letters, rng)
        assert 1 <= len(edit) <= 3
        for i, j in edit:
            assert i != j
            assert letters.is_swap_legal(i, j)
        for index in range(len(qwerty.slots)):
            if letters.is_pinned(index):
                assert evolved.slots[index] == qwerty.slots[index]
        assert evolved.fingerprint() in seen
    assert len(seen) == 51

def test_mutate_leaves_input_alone(qwerty, letters, rng):
    before = qwerty.fingerprint()
    anneal.mutate(qwerty, {before}, letters, rng)
    assert qwerty.fingerprint() == before

def test_mutate_checks_constraintmap_size(qwerty, rng):
    with pytest.raises(ValueError):
        anneal.mutate(qwerty, set(), constraintmap.pin_all_except([], 10), rng)

def test_evolve_gives_up_when_nothing_moves(qwerty, rng):
    frozen = constraintmap.get_constraintmap("frozen")
    assert anneal.evolve(qwerty, {qwerty.fingerprint()}, frozen, rng) is None

def test_evolve_gives_up_when_everything_was_seen(qwerty, rng):
    cm = constraintmap.pin_all_except([E, T], len(qwerty.slots))
    seen = {qwerty.fingerprint()}
    swapped = qwerty.copy()
    swapped.swap(E, T)
    seen.add(swapped.fingerprint())
    assert anneal.evolve(qwerty, seen, cm, rng) is None

def test_optimize_with_nothing_to_move(qwerty, tiny_corpus, rng):
    frozen = constraintmap.get_constraintmap("frozen")
    result = anneal.optimize(
        qwerty, tiny_corpus.sorted_trigrams, 3, rng, frozen)
    assert result.best_layout is qwerty
    assert result.final_layout is qwerty
    assert result.best_fitness == result.final_fitness == effort.fitness(
        qwerty, tiny_corpus.sorted_trigrams)
    assert len(result.history) == 3

def test_steps_are_reported(qwerty, tiny_corpus, rng):
    cm = constraintmap.pin_all_except([E, T], len(qwerty.slots))
    steps = list(anneal.anneal(
        qwerty, tiny_corpus.sorted_trigrams, 10, rng, cm))
    assert [step.i for step in steps] == list(range(10))
    # only one swap is possible, after which every move leads somewhere seen
    moved = [step for step in steps
             if step.outcome is not anneal.Outcome.STALLED]
    assert len(moved) <= 1
    assert all(step.remap is None and step.candidate_fitness is None
               for step in steps if step.outcome is anneal.Outcome.STALLED)
    assert all(step.best_fitness <= step.fitness for step in steps)

def test_two_free_keys(qwerty, tiny_corpus, rng):
    cm = constraintmap.pin_all_except([E, T], len(qwerty.slots))
    start = effort.fitness(qwerty, tiny_corpus.sorted_trigrams)
    result = anneal.optimize(
        qwerty, tiny_corpus.sorted_trigrams, 10, rng, cm)
    assert result.best_fitness <= start
    assert result.best_fitness == pytest.approx(
        effort.fitness(result.best_layout, tiny_corpus.sorted_trigrams))

def test_optimize_improves(qwerty, letters, sample_trigrams):
    start = effort.fitness(qwerty, sample_trigrams)
    result = anneal.optimize(
        qwerty, sample_trigrams, 500, random.Random(5), letters)
    assert result.best_fitness < start
    assert result.best_layout.name == "Qwerty-annealed"
    assert sorted(map(repr, result.best_layout.slots)) == sorted(
        map(repr, qwerty.slots))
    assert all(a >= b for a, b in zip(result.history, result.history[1:]))
    assert result.history[-1] == result.best_fitness

def test_seeded_runs_repeat(qwerty, letters, sample_trigrams):
    first = anneal.optimize(
        qwerty, sample_trigrams, 100, random.Random(42), letters)
    second = anneal.optimize(
        qwerty, sample_trigrams, 100, random.Random(42), letters)
    assert first.best_layout.fingerprint() == second.best_layout.fingerprint()
    assert first.history == second.history

def test_random_layout(qwerty, letters, rng):
    scrambled = anneal.random_layout(qwerty, rng, letters, 50)
    assert scrambled.name == "random"
    assert scrambled.fingerprint() != qwerty.fingerprint()
    for index in range(len(qwerty.slots)):
        if letters.is_pinned(index):
            assert scrambled.slots[index] == qwerty.slots[index]

def test_step_outcomes(qwerty, letters, sample_trigrams):
    steps = list(anneal.anneal(
        qwerty, sample_trigrams, 300, random.Random(5), letters))
    outcomes = {step.outcome for step in steps}
    assert {anneal.Outcome.BETTER, anneal.Outcome.ACCEPTED,
            anneal.Outcome.REJECTED} <= outcomes
    # a worse layout can become current without replacing the best one
    assert any(step.fitness > step.best_fitness for step in steps
               if step.outcome is anneal.Outcome.ACCEPTED)
    previous = effort.fitness(qwerty, sample_trigrams)
    for step in steps:
        if step.outcome in (anneal.Outcome.BETTER, anneal.Outcome.ACCEPTED):
            assert step.candidate_fitness == step.fitness
        else:
            assert step.fitness == previous
        if step.outcome is anneal.Outcome.BETTER:
            assert step.fitness < previous
        previous = step.fitness
