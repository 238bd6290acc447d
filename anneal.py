# Simulated annealing over key swaps.
# Every random decision is drawn from one random.Random passed in by the
# caller, so a run can be repeated exactly by reusing the seed.

import enum
import math
import random
from typing import NamedTuple, Sequence

import constraintmap
import effort
from constraintmap import Constraintmap
from layout import Layout
from remap import Remap

DEFAULT_CONSTRAINTMAP = "letters"

T0 = 250000
COOLING_RATE = 10
ATTEMPT_LIMIT = 1000

class MutationExhausted(RuntimeError):
    """No legal swap leading to an unseen layout was found within the
    attempt budget. Usually means every reachable layout has been seen."""

class Outcome(enum.Enum):
    BETTER = enum.auto()
    ACCEPTED = enum.auto() # worse, but accepted anyway
    REJECTED = enum.auto()
    STALLED = enum.auto() # no mutation could be made

class Step(NamedTuple):
    i: int
    outcome: Outcome
    temperature: float
    candidate_fitness: float | None
    fitness: float
    best_fitness: float
    layout: Layout
    best_layout: Layout
    remap: Remap | None

class OptimizationResult(NamedTuple):
    best_layout: Layout
    best_fitness: float
    final_layout: Layout
    final_fitness: float
    history: tuple[float, ...] # best fitness so far, after each iteration

def swap_count(rng: random.Random) -> int:
    """Usually one swap, occasionally two or three."""
    r = rng.random()
    if r < 0.9:
        return 1
    elif r < 0.99:
        return 2
    else:
        return 3

def random_index(rng: random.Random, size: int) -> int:
    return int(rng.random() * size)

# Validators take (layout, seen, constraintmap, i, j) and return whether
# swapping keys i and j of layout is allowed. Cheapest first.

def check_no_op(layout_: Layout, seen: set[str], cm: Constraintmap,
                i: int, j: int) -> bool:
    return i != j

def check_pins(layout_: Layout, seen: set[str], cm: Constraintmap,
               i: int, j: int) -> bool:
    return cm.is_swap_legal(i, j)

def check_duplicate(layout_: Layout, seen: set[str], cm: Constraintmap,
                    i: int, j: int) -> bool:
    layout_.swap(i, j)
    try:
        return layout_.fingerprint() not in seen
    finally:
        layout_.swap(i, j)

validators = (check_no_op, check_pins, check_duplicate)

def mutate(layout_: Layout, seen: set[str], constraintmap_: Constraintmap,
           rng: random.Random, name: str = "") -> tuple[Layout, Remap]:
    """Returns a mutated copy of layout_ and the swaps that produced it, and
    records the copy in seen. The attempt budget covers all swaps of one
    call. Raises MutationExhausted when it runs out."""
    if len(constraintmap_) != len(layout_.slots):
        raise ValueError(
            f"Constraintmap {constraintmap_.name} covers "
            f"{len(constraintmap_)} keys but layout {layout_.name} has "
            f"{len(layout_.slots)}")
    evolved = layout_.copy(name)
    size = len(evolved.slots)
    remaining = swap_count(rng)
    attempts = 0
    remap_ = Remap()
    while remaining:
        attempts += 1
        i = random_index(rng, size)
        j = random_index(rng, size)
        if all(validator(evolved, seen, constraintmap_, i, j)
               for validator in validators):
            evolved.swap(i, j)
            remap_.append((i, j))
            remaining -= 1
        elif attempts > ATTEMPT_LIMIT:
            raise MutationExhausted(
                f"No legal unseen swap of {layout_.name} found in "
                f"{ATTEMPT_LIMIT} attempts")
    seen.add(evolved.fingerprint())
    return evolved, remap_

def evolve(layout_: Layout, seen: set[str],
           constraintmap_: Constraintmap = None,
           rng: random.Random = None, name: str = "") -> Layout | None:
    """Returns a mutated copy of layout_, or None if no mutation could be
    made. The caller should treat None as a skipped step."""
    if constraintmap_ is None:
        constraintmap_ = constraintmap.get_constraintmap(DEFAULT_CONSTRAINTMAP)
    if rng is None:
        rng = random.Random()
    try:
        return mutate(layout_, seen, constraintmap_, rng, name)[0]
    except MutationExhausted:
        return None

def temperature(i: int, iterations: int, t0: float = T0) -> float:
    """Exponential cooling: large regressions are tolerated early on, and
    the search turns into plain hill climbing by the end."""
    return t0 * math.exp(-i * COOLING_RATE / iterations)

def accept(delta: float, temperature_: float, rng: random.Random) -> bool:
    """Metropolis criterion for a change in fitness of delta."""
    if delta < 0:
        return True
    return rng.random() < math.exp(-delta / temperature_)

def anneal(layout_: Layout, sorted_trigrams: Sequence[tuple[str, int]],
           iterations: int = 10000, rng: random.Random = None,
           constraintmap_: Constraintmap = None,
           precision: int | None = effort.OPTIMIZATION_PRECISION,
           suffix: str = "-annealed"):
    """Yields a Step after every iteration, including iterations where no
    mutation could be made. layout_ itself is never modified.

    sorted_trigrams must be ordered by corpus.sort_ngrams() and must not
    change during the run."""
    if constraintmap_ is None:
        constraintmap_ = constraintmap.get_constraintmap(DEFAULT_CONSTRAINTMAP)
    if rng is None:
        rng = random.Random()
    name = layout_.name
    if not name.endswith(suffix):
        name += suffix

    current = layout_
    fitness = effort.fitness(current, sorted_trigrams, precision)
    best, best_fitness = current, fitness
    seen = {layout_.fingerprint()}

    for i in range(iterations):
        temperature_ = temperature(i, iterations)
        try:
            candidate, remap_ = mutate(
                current, seen, constraintmap_, rng, name)
        except MutationExhausted:
            yield Step(i, Outcome.STALLED, temperature_, None, fitness,
                       best_fitness, current, best, None)
            continue

        candidate_fitness = effort.fitness(
            candidate, sorted_trigrams, precision)
        if candidate_fitness < fitness:
            outcome = Outcome.BETTER
        elif accept(candidate_fitness - fitness, temperature_, rng):
            outcome = Outcome.ACCEPTED
        else:
            outcome = Outcome.REJECTED

        if outcome is not Outcome.REJECTED:
            current, fitness = candidate, candidate_fitness
            if fitness < best_fitness:
                best, best_fitness = current, fitness
        yield Step(i, outcome, temperature_, candidate_fitness, fitness,
                   best_fitness, current, best, remap_)

def optimize(layout_: Layout, sorted_trigrams: Sequence[tuple[str, int]],
             iterations: int = 10000, rng: random.Random = None,
             constraintmap_: Constraintmap = None,
             precision: int | None = effort.OPTIMIZATION_PRECISION
             ) -> OptimizationResult:
    """Runs anneal() to completion. If no mutation is ever made, layout_ is
    returned as both the best and the final layout."""
    best = final = layout_
    best_fitness = final_fitness = effort.fitness(
        layout_, sorted_trigrams, precision)
    history = []
    for step in anneal(layout_, sorted_trigrams, iterations, rng,
                       constraintmap_, precision):
        best, best_fitness = step.best_layout, step.best_fitness
        final, final_fitness = step.layout, step.fitness
        history.append(best_fitness)
    return OptimizationResult(
        best, best_fitness, final, final_fitness, tuple(history))

def random_layout(layout_: Layout, rng: random.Random = None,
                  constraintmap_: Constraintmap = None,
                  iterations: int = 1000, name: str = "random") -> Layout:
    """Scrambles the movable keys of layout_ with a long chain of
    mutations. Returns a copy even if nothing could be moved."""
    if rng is None:
        rng = random.Random()
    seen = {layout_.fingerprint()}
    result = layout_.copy(name)
    for _ in range(iterations):
        evolved = evolve(result, seen, constraintmap_, rng, name)
        if evolved is not None:
            result = evolved
    return result
